"""SQLAlchemy Model for Grant Applications.

One row per submission. Columns use portable types so the same model works
on PostgreSQL and on the SQLite store used in tests.
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from ..core.constants import ApplicationStatus, DatabaseLimits
from ..db.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Application(Base):
    """Grant application model."""

    __tablename__ = "applications"

    __table_args__ = (
        Index('idx_applications_status_submitted_at', 'status', 'submitted_at'),
        Index('idx_applications_submitted_at', 'submitted_at'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(DatabaseLimits.APPLICATION_ID_MAX_LENGTH),
        nullable=False,
        unique=True
    )

    # Applicant
    first_name = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    last_name = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    email = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    phone = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    date_of_birth = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    country = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    city = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)

    # Project
    project_title = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    project_description = Column(Text, nullable=False)
    project_field = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    target_audience = Column(Text, nullable=False)

    # Grant (amount kept as submitted, no arithmetic is done on it)
    requested_amount = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    project_duration = Column(String(DatabaseLimits.SHORT_TEXT_MAX_LENGTH), nullable=False)
    funding_use = Column(Text, nullable=False)
    expected_impact = Column(Text, nullable=False)

    # Supplementary
    previous_experience = Column(Text, nullable=False, default="")
    why_deserving = Column(Text, nullable=False)

    status = Column(
        String(DatabaseLimits.STATUS_MAX_LENGTH),
        nullable=False,
        default=ApplicationStatus.DEFAULT_STATUS
    )
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return (
            f"<Application(application_id={self.application_id}, "
            f"status={self.status}, submitted_at={self.submitted_at})>"
        )
