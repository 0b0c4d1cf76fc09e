"""
Database module - engine, table definitions and per-resource repositories.
"""
from careertrack.db.database import Database
from careertrack.db.repositories import (
    UserRepository,
    SkillRepository,
    JobTargetRepository,
    RequiredSkillRepository,
    LearningGoalRepository,
    JobApplicationRepository,
)

__all__ = [
    "Database",
    "UserRepository",
    "SkillRepository",
    "JobTargetRepository",
    "RequiredSkillRepository",
    "LearningGoalRepository",
    "JobApplicationRepository",
]
