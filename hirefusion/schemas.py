from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from . import validators


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses the snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageOut(BaseModel):
    success: bool = True
    message: Any


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


# Accounts
class SignupIn(BaseModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        errors = validators.validate_username(v)
        if errors:
            raise ValueError("; ".join(errors))
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        # EmailStr keeps the local part as typed; accounts are keyed on the lowercased form
        return validators.normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        errors = validators.validate_password(v)
        if errors:
            raise ValueError("; ".join(errors))
        return v


class VerifyCodeIn(BaseModel):
    username: str
    code: str


class LoginIn(BaseModel):
    email: str
    password: str


class SessionUser(CamelModel):
    """Identity carried inside the session token."""

    id: str = Field(alias="_id")
    username: str | None = None
    email: str
    is_verified: bool = False


class LoginOut(Token):
    user: SessionUser


class SessionOut(BaseModel):
    user: SessionUser


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    is_verified: bool
    created_at: datetime


# Profile
class Experience(CamelModel):
    company: str
    position: str
    description: str = ""
    start_date: str
    end_date: str | None = None
    current: bool = False


class Education(CamelModel):
    institution: str
    degree: str
    field: str
    start_date: str
    end_date: str | None = None
    current: bool = False


class ProfileIn(CamelModel):
    email: str | None = None
    skills: list[str] | None = None
    experience: list[Experience] | None = None
    preferences: str | None = None
    saved_jobs: list[str] | None = None
    education: list[Education] | None = None


class UpdateUserIn(CamelModel):
    email: str | None = None
    username: str | None = None
    preferences: str | None = None
    skills: list[str] | None = None
    education: list[Education] | None = None
    experience: list[Experience] | None = None


class ProfileOut(CamelModel):
    id: str = Field(alias="_id")
    username: str
    email: str
    is_verified: bool
    skills: list[str] = []
    experience: list[Experience] = []
    education: list[Education] = []
    preferences: str | None = None
    saved_jobs: list[str] = Field(default_factory=list, validation_alias=AliasChoices("saved_job_ids", "savedJobs"))
    created_at: datetime
    updated_at: datetime


class ProfileUpdatedOut(BaseModel):
    message: str
    user: ProfileOut


class ProfileEnvelope(BaseModel):
    profile: ProfileOut


class UsersOut(BaseModel):
    success: bool = True
    message: list[UserOut]


# Jobs
class JobOut(CamelModel):
    id: str = Field(alias="_id")
    title: str
    company: str | None = None
    location: str | None = None
    job_type: str | None = None
    salary: str | None = None
    skills_required: list[str] = []
    description: str | None = None
    apply_link: str | None = None
    created_at: datetime


class JobFilterIn(CamelModel):
    job_types: list[str] = []
    experience_levels: list[str] = []
    salary_range: tuple[float, float] | None = None
    skills: list[str] = []
    companies: list[str] = []
    industries: list[str] = []
    date_posted: str | None = None
    remote_options: list[str] = []


# Saved jobs
class SavedJobIn(CamelModel):
    email: str | None = None
    job_id: Any = None


class SavedJobsOut(CamelModel):
    message: str
    saved_jobs: list[str]


class SavedJobListOut(CamelModel):
    jobs: list[JobOut]
    saved_job_ids: list[str]


# Recommendations
class RecommendationIn(BaseModel):
    job_id: str | None = Field(None, validation_alias=AliasChoices("jobID", "jobId", "job_id"))
    match_percentage: float | None = Field(
        None, validation_alias=AliasChoices("matchPercentage", "match_percentage")
    )


class AddRecommendationsIn(CamelModel):
    email: str | None = None
    job_recommendations: list[RecommendationIn] = []


class GenerateRecommendationsIn(BaseModel):
    email: str | None = None


class RecommendationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(alias="userID")
    job_id: str = Field(alias="jobID")
    match_percentage: float = Field(alias="matchPercentage")


class RecommendationsOut(BaseModel):
    message: str
    recommendations: list[RecommendationOut]


# Notifications
class NotificationIn(BaseModel):
    email: str | None = None
    message: str | None = None
    type: str | None = None


class NotificationDeleteIn(BaseModel):
    email: str | None = None
    id: str | None = None


class NotificationOut(CamelModel):
    id: str
    message: str
    type: str
    created_at: datetime
    user_email: str


class NotificationEnvelope(BaseModel):
    notification: NotificationOut


class NotificationsOut(BaseModel):
    notifications: list[NotificationOut]


# Alerts
class JobAlertIn(BaseModel):
    to: str | None = None
    subject: str | None = None
    message: str | None = None
