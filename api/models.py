"""
API request and response models for the Quora REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
qa/models.py, which own the internal domain representation. Route handlers
map between the two.

Internal database ids never appear here -- every "id" field is a public uuid.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.models import SignupDraft, User
from qa.models import Answer, Question

# Loose shape check only; deliverability is not our concern.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

PASSWORD_MAX_BYTES = 72

# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload. code is a stable contract (e.g. ATHR-002)."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class SignupUserRequest(BaseModel):
    """Request body for POST /api/v1/user/signup.

    user_name and password are taken exactly as sent: signin compares the
    Basic credentials byte for byte, so trimming either here would make the
    account unreachable.
    """

    first_name: str = Field(default="", max_length=30)
    last_name: str = Field(default="", max_length=30)
    user_name: str = Field(min_length=1, max_length=30)
    email_address: str = Field(max_length=50, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)
    country: Optional[str] = Field(default=None, max_length=30)
    about_me: Optional[str] = Field(default=None, max_length=50)
    dob: Optional[str] = Field(default=None, max_length=30)
    contact_number: Optional[str] = Field(default=None, max_length=30)

    @field_validator("first_name", "last_name", "email_address", mode="before")
    @classmethod
    def strip_profile_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        """bcrypt reads at most 72 bytes; anything past that would be ignored."""
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded")
        return value

    def to_draft(self) -> SignupDraft:
        return SignupDraft(
            username=self.user_name,
            email=self.email_address,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            country=self.country,
            about_me=self.about_me,
            dob=self.dob,
            contact_number=self.contact_number,
        )


class SignupUserResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    status: str


class SigninResponse(BaseModel):
    """Body of a successful signin. The token itself travels in the access-token header."""

    model_config = ConfigDict(frozen=True)

    id: str
    message: str


class SignoutResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    message: str


class UserDetailsResponse(BaseModel):
    """Public profile for GET /api/v1/userprofile/{user_id}. No credentials, no role."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    user_name: str
    email_address: str
    country: Optional[str] = None
    about_me: Optional[str] = None
    dob: Optional[str] = None
    contact_number: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserDetailsResponse":
        return cls(
            first_name=user.first_name,
            last_name=user.last_name,
            user_name=user.username,
            email_address=user.email,
            country=user.country,
            about_me=user.about_me,
            dob=user.dob,
            contact_number=user.contact_number,
        )


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------


class QuestionRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=500)


class QuestionEditRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=500)


class QuestionResponse(BaseModel):
    """Status envelope shared by create / edit / delete question."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: str


class QuestionDetailsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: str

    @classmethod
    def from_question(cls, question: Question) -> "QuestionDetailsResponse":
        return cls(id=question.uuid, content=question.content)


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


class AnswerRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    answer: str = Field(min_length=1, max_length=255)


class AnswerEditRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=255)


class AnswerResponse(BaseModel):
    """Status envelope shared by create / edit / delete answer."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: str


class AnswerDetailsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    answer_content: str
    question_content: str

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerDetailsResponse":
        return cls(id=answer.uuid, answer_content=answer.content, question_content=answer.question_content)
