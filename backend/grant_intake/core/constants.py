"""Application Constants.

Centralized constants used throughout the application.
This file contains all hardcoded values that should be maintained in one place.
"""

# ============================================================================
# APPLICATION STATUS CONSTANTS
# ============================================================================

class ApplicationStatus:
    """Application status values.

    Only PENDING is ever written by this service; the others are set by
    administrative tooling and are listed here for filtering.
    """
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"

    ALL_STATUSES = [
        PENDING,
        UNDER_REVIEW,
        APPROVED,
        REJECTED,
    ]

    DEFAULT_STATUS = PENDING


# ============================================================================
# APPLICATION ID CONSTANTS
# ============================================================================

class ApplicationId:
    """Application identifier format: APP-<epoch millis>-<suffix>."""
    PREFIX = "APP"
    SUFFIX_LENGTH = 6
    SUFFIX_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    PATTERN = r"^APP-\d+-[A-Z0-9]{6}$"


# ============================================================================
# LISTING CONSTANTS
# ============================================================================

class Listing:
    """Listing limit defaults."""
    DEFAULT_LIMIT = 50
    MAX_LIMIT = 500


# ============================================================================
# DATABASE CONSTANTS
# ============================================================================

class DatabaseLimits:
    """Database field length limits and pool settings."""
    APPLICATION_ID_MAX_LENGTH = 40
    SHORT_TEXT_MAX_LENGTH = 255
    STATUS_MAX_LENGTH = 32

    # Connection pool settings
    POOL_SIZE = 10
    MAX_OVERFLOW = 20


# ============================================================================
# VALIDATION CONSTANTS
# ============================================================================

class ValidationLimits:
    """Validation limits for submitted fields."""
    MAX_SHORT_FIELD_LENGTH = 255
    MAX_TEXT_FIELD_LENGTH = 10_000


# ============================================================================
# NOTIFICATION CONSTANTS
# ============================================================================

class Notification:
    """Notification message constants."""
    DESCRIPTION_EXCERPT_LENGTH = 200
    AUDIENCE_EXCERPT_LENGTH = 150
    IMPACT_EXCERPT_LENGTH = 200
    EXCERPT_SUFFIX = "..."

    PARSE_MODE = "Markdown"
    SEND_MESSAGE_METHOD = "sendMessage"

    DEFAULT_PRODUCTION_BASE_URL = "https://your-domain.com"
    DEVELOPMENT_BASE_URL = "http://localhost:3000"
    ADMIN_LIST_PATH = "/admin/applications"

    OUTCOME_SENT = "sent"
    OUTCOME_SKIPPED = "skipped"
    OUTCOME_FAILED = "failed"


# ============================================================================
# SECURITY & MASKING CONSTANTS
# ============================================================================

class Security:
    """Security-related constants."""
    MASK_CHAR = "*"
    VISIBLE_CHARS = 4
    MASK_FULL = "****"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Standard error messages."""
    INTERNAL_SERVER_ERROR = "Internal server error"
    SUBMISSION_FAILED = "Failed to submit application. Please try again."
    LISTING_FAILED = "Failed to fetch applications"
    DATABASE_UNREACHABLE = "Database is unreachable: {error}"
    UNKNOWN_ERROR = "Unknown error"


# ============================================================================
# SUCCESS MESSAGES
# ============================================================================

class SuccessMessages:
    """Standard success messages."""
    APPLICATION_SUBMITTED = "Application submitted successfully"
    DATABASE_CONNECTED = "Database connection successful"


# ============================================================================
# HTTP CONSTANTS
# ============================================================================

class HttpHeaders:
    """HTTP header names."""
    REQUEST_ID = "X-Request-ID"
    PROCESS_TIME = "X-Process-Time"


class HttpStatusCodes:
    """HTTP status code constants."""
    INTERNAL_SERVER_ERROR = 500


# ============================================================================
# API ENDPOINTS
# ============================================================================

class ApiEndpoints:
    """API endpoint paths."""
    ROOT = "/"
    HEALTH = "/health"
    DOCS = "/docs"
    REDOC = "/redoc"
    OPENAPI = "/openapi.json"


# ============================================================================
# METRICS CONSTANTS
# ============================================================================

class Metrics:
    """Metrics-related constants."""
    ENDPOINT_PATH = "/metrics"
