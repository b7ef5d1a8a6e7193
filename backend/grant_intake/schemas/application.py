"""Pydantic Schemas for API Request/Response Validation.

These schemas handle validation and serialization for the API. JSON field
names are camelCase; Python attributes are snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..core.constants import ValidationLimits
from ..utils import sanitize_string

# Free-text answers; everything else is a short single-line value
LONG_TEXT_FIELDS = frozenset({
    'project_description',
    'target_audience',
    'funding_use',
    'expected_impact',
    'previous_experience',
    'why_deserving',
})

OPTIONAL_FIELDS = frozenset({'previous_experience'})


class ApplicationBase(BaseModel):
    """Fields shared by the submission payload and stored records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Personal information
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: str
    country: str
    city: str

    # Project information
    project_title: str
    project_description: str
    project_field: str
    target_audience: str

    # Grant details
    requested_amount: str
    project_duration: str
    funding_use: str
    expected_impact: str

    # Additional information
    previous_experience: str = ""
    why_deserving: str


class ApplicationCreate(ApplicationBase):
    """Schema for a new grant application submission.

    Clients never choose the identifier or the status: unknown keys such as
    ``applicationId`` and ``status`` are dropped during parsing.
    Numbers are accepted for text fields (e.g. ``requestedAmount: 5000``) and
    stored in their string form. ``previousExperience`` may be omitted or null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @field_validator('*', mode='before')
    @classmethod
    def strip_whitespace(cls, v, info: ValidationInfo):
        if v is None and info.field_name in OPTIONAL_FIELDS:
            return ""
        if isinstance(v, str):
            return sanitize_string(v)
        return v

    @field_validator('*', mode='after')
    @classmethod
    def validate_length(cls, v: str, info: ValidationInfo) -> str:
        """Require non-blank values and cap their length."""
        if not v and info.field_name not in OPTIONAL_FIELDS:
            raise ValueError("Field cannot be empty")

        limit = (
            ValidationLimits.MAX_TEXT_FIELD_LENGTH
            if info.field_name in LONG_TEXT_FIELDS
            else ValidationLimits.MAX_SHORT_FIELD_LENGTH
        )
        if len(v) > limit:
            raise ValueError(f"Field exceeds maximum length of {limit} characters")

        return v


class ApplicationRecord(ApplicationBase):
    """Schema for a stored application as returned by the listing."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    application_id: str
    status: str
    submitted_at: datetime
    updated_at: datetime | None = None


class SubmissionResponse(BaseModel):
    """Successful submission acknowledgement."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    application_id: str


class ApplicationListResponse(BaseModel):
    """Listing result."""

    success: bool = True
    applications: list[ApplicationRecord]


class ErrorResponse(BaseModel):
    """Uniform failure body."""

    success: bool = False
    error: str


class DatabaseHealthResponse(BaseModel):
    """Result of the store reachability check."""

    success: bool
    message: str | None = None
    error: str | None = None
    timestamp: str
