"""
Repositories - one per resource kind.

Every query on an owned table is filtered by owner_id inside the SQL
statement itself, so a row belonging to another identity is
indistinguishable from a missing row. Rows are returned as plain dicts.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import Table, delete, func, insert, literal, select, update
from sqlalchemy.exc import IntegrityError

from careertrack.core.exceptions import Conflict
from careertrack.db.database import Database
from careertrack.db.tables import (
    job_applications, job_required_skills, job_targets, learning_goals, skills, users
)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_dict(row) -> Optional[dict]:
    return dict(row._mapping) if row is not None else None


# ============================================================
# IDENTITIES
# ============================================================

class UserRepository:
    """Identity rows. Emails are stored and looked up lower-cased."""

    def __init__(self, database: Database):
        self.database = database

    def find_by_email(self, email: str) -> Optional[dict]:
        with self.database.session() as db:
            row = db.execute(select(users).where(users.c.email == email.strip().lower())).first()
        return _as_dict(row)

    def find_by_id(self, user_id: str) -> Optional[dict]:
        with self.database.session() as db:
            row = db.execute(select(users).where(users.c.id == user_id)).first()
        return _as_dict(row)

    def create(self, email: str, password_hash: str, display_name: Optional[str] = None) -> dict:
        record = {
            "id": new_id(),
            "email": email.strip().lower(),
            "password_hash": password_hash,
            "display_name": display_name,
            "created_at": utcnow(),
        }
        try:
            with self.database.session() as db:
                db.execute(insert(users).values(**record))
        except IntegrityError:
            # lost a race against a concurrent registration
            raise Conflict("Email already registered")
        return record


# ============================================================
# OWNED RESOURCES
# ============================================================

class OwnedRepository:
    """
    Base repository for tables with a direct owner_id column.

    Subclasses set:
        table          - the SQLAlchemy table
        creatable      - columns a caller may supply on create
        mutable_fields - columns a caller may change after create
        defaults       - values filled in when the caller omits them
        timestamp      - column stamped with the creation time
        order_by       - list ordering
    """

    table: Table
    creatable: Sequence[str] = ()
    mutable_fields: Sequence[str] = ()
    defaults: Dict[str, object] = {}
    timestamp: str = "created_at"
    order_by: Sequence = ()

    def __init__(self, database: Database):
        self.database = database

    def _owned(self, resource_id: str, owner_id: str):
        c = self.table.c
        return (c.id == resource_id) & (c.owner_id == owner_id)

    def find(self, resource_id: str, owner_id: str) -> Optional[dict]:
        with self.database.session() as db:
            row = db.execute(select(self.table).where(self._owned(resource_id, owner_id))).first()
        return _as_dict(row)

    def list(self, owner_id: str, limit: Optional[int] = None) -> List[dict]:
        stmt = select(self.table).where(self.table.c.owner_id == owner_id).order_by(*self.order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.database.session() as db:
            return [_as_dict(row) for row in db.execute(stmt)]

    def count(self, owner_id: str, *criteria) -> int:
        stmt = select(func.count()).select_from(self.table).where(self.table.c.owner_id == owner_id, *criteria)
        with self.database.session() as db:
            return db.execute(stmt).scalar_one()

    def create(self, owner_id: str, values: dict) -> dict:
        record = dict(self.defaults)
        record.update({k: v for k, v in values.items() if k in self.creatable and v is not None})
        # owner and identity are always ours to set
        record.update({"id": new_id(), "owner_id": owner_id, self.timestamp: utcnow()})
        with self.database.session() as db:
            db.execute(insert(self.table).values(**record))
        return record

    def update(self, resource_id: str, owner_id: str, values: dict) -> Optional[dict]:
        changes = {k: v for k, v in values.items() if k in self.mutable_fields}
        with self.database.session() as db:
            if changes:
                result = db.execute(update(self.table).where(self._owned(resource_id, owner_id)).values(**changes))
                if result.rowcount == 0:
                    return None
            row = db.execute(select(self.table).where(self._owned(resource_id, owner_id))).first()
        return _as_dict(row)

    def delete(self, resource_id: str, owner_id: str) -> bool:
        with self.database.session() as db:
            result = db.execute(delete(self.table).where(self._owned(resource_id, owner_id)))
        return result.rowcount > 0


class SkillRepository(OwnedRepository):
    table = skills
    creatable = ("name", "level", "category")
    order_by = (skills.c.name.asc(),)


class JobTargetRepository(OwnedRepository):
    table = job_targets
    creatable = ("title", "company", "description", "seniority")
    order_by = (job_targets.c.created_at.desc(),)

    def delete(self, resource_id: str, owner_id: str) -> bool:
        """Delete a job target and all of its required skills in one transaction."""
        with self.database.session() as db:
            # row lock on PostgreSQL; concurrent child inserts wait, then fail their FK check
            owned = db.execute(
                select(job_targets.c.id).where(self._owned(resource_id, owner_id)).with_for_update()
            ).first()
            if owned is None:
                return False
            db.execute(delete(job_required_skills).where(job_required_skills.c.job_target_id == resource_id))
            db.execute(delete(job_targets).where(self._owned(resource_id, owner_id)))
        return True


class LearningGoalRepository(OwnedRepository):
    table = learning_goals
    creatable = ("title", "description", "status")
    mutable_fields = ("status",)
    defaults = {"status": "PLANNED"}
    order_by = (learning_goals.c.created_at.desc(),)


class JobApplicationRepository(OwnedRepository):
    table = job_applications
    creatable = ("company", "role", "status", "link", "notes")
    mutable_fields = ("status",)
    defaults = {"status": "APPLIED"}
    timestamp = "applied_at"
    order_by = (job_applications.c.applied_at.desc(),)


# ============================================================
# REQUIRED SKILLS (owned through job_targets)
# ============================================================

class RequiredSkillRepository:
    """
    Child rows of job_targets. Ownership is resolved by joining to the
    parent, including on insert.
    """

    table = job_required_skills
    creatable = ("name", "importance")

    def __init__(self, database: Database):
        self.database = database

    def find(self, required_skill_id: str, owner_id: str) -> Optional[dict]:
        stmt = (
            select(job_required_skills)
            .join(job_targets, job_targets.c.id == job_required_skills.c.job_target_id)
            .where(job_required_skills.c.id == required_skill_id, job_targets.c.owner_id == owner_id)
        )
        with self.database.session() as db:
            row = db.execute(stmt).first()
        return _as_dict(row)

    def list_for_job(self, job_target_id: str) -> List[dict]:
        stmt = (
            select(job_required_skills)
            .where(job_required_skills.c.job_target_id == job_target_id)
            .order_by(job_required_skills.c.created_at.asc())
        )
        with self.database.session() as db:
            return [_as_dict(row) for row in db.execute(stmt)]

    def count_for_job(self, job_target_id: str) -> int:
        stmt = select(func.count()).select_from(job_required_skills).where(
            job_required_skills.c.job_target_id == job_target_id
        )
        with self.database.session() as db:
            return db.execute(stmt).scalar_one()

    def create(self, job_target_id: str, owner_id: str, values: dict) -> Optional[dict]:
        """
        Insert a required skill under a job target owned by `owner_id`.

        The ownership check and the insert are a single INSERT ... SELECT,
        so a job target deleted concurrently can never gain a child.
        Returns None when no owned job target matched.
        """
        record = {k: v for k, v in values.items() if k in self.creatable}
        record.update({"id": new_id(), "job_target_id": job_target_id, "created_at": utcnow()})
        columns = list(record)
        source = (
            select(*[literal(record[name], job_required_skills.c[name].type) for name in columns])
            .select_from(job_targets)
            .where(job_targets.c.id == job_target_id, job_targets.c.owner_id == owner_id)
        )
        try:
            with self.database.session() as db:
                result = db.execute(insert(job_required_skills).from_select(columns, source))
        except IntegrityError:
            # parent removed between the SELECT and the foreign key check
            return None
        return record if result.rowcount > 0 else None

    def delete(self, required_skill_id: str) -> bool:
        with self.database.session() as db:
            result = db.execute(delete(job_required_skills).where(job_required_skills.c.id == required_skill_id))
        return result.rowcount > 0
