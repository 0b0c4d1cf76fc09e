"""
Table definitions.

Four top-level tables carry a required, indexed owner_id. Required skills
hang off job_targets through job_target_id and have no owner column of
their own.
"""

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, MetaData, String, Table, Text
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(32), primary_key=True),
    # stored lower-cased, so the unique index is case-insensitive
    Column("email", String(320), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("display_name", String(200)),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

skills = Table(
    "skills",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(32), ForeignKey("users.id"), nullable=False, index=True),
    Column("name", String(200), nullable=False),
    Column("level", Integer, nullable=False),
    Column("category", String(100)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("level BETWEEN 1 AND 5", name="ck_skills_level"),
)

job_targets = Table(
    "job_targets",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(32), ForeignKey("users.id"), nullable=False, index=True),
    Column("title", String(200), nullable=False),
    Column("company", String(200)),
    Column("description", Text, nullable=False),
    Column("seniority", String(100)),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

job_required_skills = Table(
    "job_required_skills",
    metadata,
    Column("id", String(32), primary_key=True),
    Column(
        "job_target_id", String(32),
        ForeignKey("job_targets.id", ondelete="CASCADE"),
        nullable=False, index=True,
    ),
    Column("name", String(200), nullable=False),
    Column("importance", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("importance BETWEEN 1 AND 5", name="ck_job_required_skills_importance"),
)

learning_goals = Table(
    "learning_goals",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(32), ForeignKey("users.id"), nullable=False, index=True),
    Column("title", String(200), nullable=False),
    Column("description", Text),
    Column("status", String(20), nullable=False, default="PLANNED"),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

job_applications = Table(
    "job_applications",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(32), ForeignKey("users.id"), nullable=False, index=True),
    Column("company", String(200), nullable=False),
    Column("role", String(200), nullable=False),
    Column("status", String(30), nullable=False, default="APPLIED"),
    Column("applied_at", DateTime(timezone=True), nullable=False),
    Column("link", String(2048)),
    Column("notes", Text),
)
