"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Request schemas are checked once at the boundary, before any ownership
or persistence logic runs. None of them accepts an owner field.
"""

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class GoalStatus(str, Enum):
    planned = "PLANNED"
    in_progress = "IN_PROGRESS"
    done = "DONE"


class ApplicationStatus(str, Enum):
    applied = "APPLIED"
    online_assessment = "ONLINE_ASSESSMENT"
    interview = "INTERVIEW"
    offer = "OFFER"
    rejected = "REJECTED"


class GapClassification(str, Enum):
    meets = "meets"
    slight_gap = "slight gap"
    big_gap = "big gap"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6)

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class IdentityResponse(BaseModel):
    """Identity summary. Never carries the password hash."""
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: datetime

class SessionClaim(BaseModel):
    subject: str
    issued_at: datetime
    expires_at: datetime

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


# ============================================================
# SKILL SCHEMAS
# ============================================================

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    level: int = Field(..., ge=1, le=5)
    category: Optional[str] = Field(None, max_length=100)

class SkillResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    level: int
    category: Optional[str] = None


# ============================================================
# JOB TARGET SCHEMAS
# ============================================================

class JobTargetCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: Optional[str] = Field(None, max_length=200)
    description: str = Field(..., min_length=1)
    seniority: Optional[str] = Field(None, max_length=100)

class JobTargetResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    company: Optional[str] = None
    description: str
    seniority: Optional[str] = None
    created_at: datetime

class RequiredSkillCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., min_length=1, alias="jobId")
    name: str = Field(..., min_length=1, max_length=200)
    importance: int = Field(..., ge=1, le=5)

class RequiredSkillResponse(BaseModel):
    id: str
    job_target_id: str
    name: str
    importance: int

class GapResult(BaseModel):
    required_skill_id: str
    name: str
    importance: int
    observed_level: int
    gap: int
    classification: GapClassification
    label: str

class JobTargetDetailResponse(JobTargetResponse):
    required_skills: List[RequiredSkillResponse] = []
    gaps: List[GapResult] = []


# ============================================================
# LEARNING GOAL SCHEMAS
# ============================================================

class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    status: GoalStatus = GoalStatus.planned

class GoalStatusUpdate(BaseModel):
    """Only status may change; any other field is rejected."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    status: GoalStatus

class GoalResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    status: GoalStatus
    created_at: datetime


# ============================================================
# JOB APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    status: ApplicationStatus = ApplicationStatus.applied
    link: Optional[AnyHttpUrl] = None
    notes: Optional[str] = None

    @field_validator("link", mode="before")
    @classmethod
    def blank_link_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

class ApplicationStatusUpdate(BaseModel):
    """Only status may change; any other field is rejected."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    owner_id: str
    company: str
    role: str
    status: ApplicationStatus
    applied_at: datetime
    link: Optional[str] = None
    notes: Optional[str] = None


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class DashboardCounts(BaseModel):
    skills: int
    jobs: int
    open_goals: int
    applications: int

class DashboardResponse(BaseModel):
    counts: DashboardCounts
    recent_jobs: List[JobTargetResponse] = []
    recent_goals: List[GoalResponse] = []
    recent_applications: List[ApplicationResponse] = []


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class DeleteRequest(BaseModel):
    id: str = Field(..., min_length=1)

class OkResponse(BaseModel):
    ok: bool = True

class ErrorResponse(BaseModel):
    detail: str
