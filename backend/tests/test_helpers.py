"""
Tests for utility helpers

Covers ID generation, limit parsing, string masking and Markdown helpers.
"""

import json
import logging
import re

import pytest

from grant_intake.core.config import Settings
from grant_intake.core.constants import ApplicationId
from grant_intake.core.logging import GrantIntakeJsonFormatter, get_request_id, set_request_id
from grant_intake.utils import (
    escape_markdown,
    excerpt,
    generate_application_id,
    generate_request_id,
    mask_email,
    mask_value,
    normalize_path,
    parse_limit,
    sanitize_log_data,
    sanitize_string,
)


class TestGenerateApplicationId:
    """Test suite for generate_application_id()"""

    def test_format(self):
        """Test the identifier matches APP-<millis>-<6 chars>"""
        application_id = generate_application_id()

        assert re.match(ApplicationId.PATTERN, application_id)

    def test_embeds_given_timestamp(self):
        """Test the timestamp segment is the supplied epoch millis"""
        application_id = generate_application_id(1700000000000)

        assert application_id.startswith("APP-1700000000000-")
        assert len(application_id.rsplit("-", 1)[1]) == 6

    def test_suffix_alphabet(self):
        """Test the suffix only uses uppercase letters and digits"""
        for _ in range(50):
            suffix = generate_application_id(1).rsplit("-", 1)[1]
            assert set(suffix) <= set(ApplicationId.SUFFIX_ALPHABET)

    def test_same_millisecond_ids_differ(self):
        """Test two IDs in the same millisecond are distinct"""
        ids = {generate_application_id(1700000000000) for _ in range(100)}

        assert len(ids) == 100


class TestGenerateRequestId:
    """Test suite for generate_request_id()"""

    def test_plain(self):
        assert len(generate_request_id()) == 36

    def test_prefix(self):
        assert generate_request_id("API").startswith("API-")


class TestParseLimit:
    """Test suite for parse_limit()"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 50),
            ("", 50),
            ("abc", 50),
            ("0", 50),
            ("-5", 50),
            ("2.5", 50),
            ("2", 2),
            (" 7 ", 7),
            ("500", 500),
            ("501", 500),
            ("100000", 500),
        ]
    )
    def test_parse_limit(self, raw, expected):
        assert parse_limit(raw) == expected

    def test_custom_bounds(self):
        assert parse_limit(None, default=10, maximum=20) == 10
        assert parse_limit("30", default=10, maximum=20) == 20


class TestStringHelpers:
    """Test suite for string helpers"""

    def test_excerpt_truncates_with_suffix(self):
        assert excerpt("Hello world", 5) == "Hello..."

    def test_excerpt_keeps_short_text(self):
        assert excerpt("Hi", 5) == "Hi"

    def test_excerpt_exact_length(self):
        assert excerpt("Hello", 5) == "Hello"

    def test_excerpt_empty(self):
        assert excerpt("", 5) == ""
        assert excerpt(None, 5) == ""

    def test_escape_markdown(self):
        assert escape_markdown("a_b*c`d[e]") == "a\\_b\\*c\\`d\\[e]"

    def test_escape_markdown_plain_text(self):
        assert escape_markdown("Porto, Portugal") == "Porto, Portugal"

    def test_sanitize_string(self):
        assert sanitize_string("  hello world  ") == "hello world"
        assert sanitize_string("hello world", max_length=5) == "hello"
        assert sanitize_string("") == ""

    def test_mask_value(self):
        assert mask_value("+34600111222") == "********1222"
        assert mask_value("abc") == "****"
        assert mask_value("") == "****"

    def test_mask_email(self):
        assert mask_email("jane.doe@example.com") == "j****@example.com"
        assert mask_email("not-an-email") == "****"


class TestSanitizeLogData:
    """Test suite for sanitize_log_data()"""

    def test_masks_contact_details(self):
        data = {
            'email': 'ana.silva@example.com',
            'phone': '+351912345678',
            'date_of_birth': '1990-04-12',
            'country': 'Portugal',
        }

        sanitized = sanitize_log_data(data)

        assert sanitized['email'] == 'a****@example.com'
        assert sanitized['phone'].endswith('5678')
        assert '912' not in sanitized['phone']
        assert sanitized['date_of_birth'] == '****'
        assert sanitized['country'] == 'Portugal'

    def test_does_not_mutate_input(self):
        data = {'email': 'ana.silva@example.com'}

        sanitize_log_data(data)

        assert data['email'] == 'ana.silva@example.com'

    def test_nested_dicts(self):
        sanitized = sanitize_log_data({'applicant': {'dateOfBirth': '1990-04-12'}})

        assert sanitized['applicant']['dateOfBirth'] == '****'

    def test_non_dict_passthrough(self):
        assert sanitize_log_data(None) is None


class TestNormalizePath:
    """Test suite for normalize_path()"""

    def test_application_id(self):
        assert normalize_path("/applications/APP-1700000000000-K3Z9QD") == "/applications/{id}"

    def test_numeric_id(self):
        assert normalize_path("/applications/123") == "/applications/{id}"

    def test_static_path(self):
        assert normalize_path("/health/db") == "/health/db"


class TestSettings:
    """Test suite for Settings helpers"""

    def test_blank_credentials_are_unset(self):
        config = Settings(TELEGRAM_BOT_TOKEN="  ", TELEGRAM_SUPPORT_CHAT_ID="")

        assert config.TELEGRAM_BOT_TOKEN is None
        assert config.TELEGRAM_SUPPORT_CHAT_ID is None
        assert config.telegram_configured is False

    def test_configured_credentials(self):
        config = Settings(TELEGRAM_BOT_TOKEN="123:abc", TELEGRAM_SUPPORT_CHAT_ID="-100")

        assert config.telegram_configured is True

    def test_async_database_url(self):
        config = Settings(DATABASE_URL="postgresql://u:p@db:5432/grants")

        assert config.async_database_url == "postgresql+asyncpg://u:p@db:5432/grants"

    def test_postgres_scheme_uses_asyncpg(self):
        config = Settings(DATABASE_URL="postgres://u:p@db:5432/grants")

        assert config.async_database_url == "postgresql+asyncpg://u:p@db:5432/grants"

    def test_sqlite_url_unchanged(self):
        config = Settings(DATABASE_URL="sqlite+aiosqlite:///grants.db")

        assert config.async_database_url == "sqlite+aiosqlite:///grants.db"

    def test_log_level_is_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(LOG_LEVEL="chatty")

    def test_is_production(self):
        assert Settings(ENVIRONMENT="production").is_production is True
        assert Settings(ENVIRONMENT="test").is_production is False


class TestJsonLogging:
    """Test suite for the JSON log formatter"""

    def _format(self, **extra) -> dict:
        record = logging.LogRecord(
            name="grant_intake.test", level=logging.INFO, pathname=__file__,
            lineno=10, msg="Application submitted", args=(), exc_info=None
        )
        record.__dict__.update(extra)
        return json.loads(GrantIntakeJsonFormatter('%(message)s').format(record))

    def test_includes_request_id(self):
        request_id = set_request_id("req-log-1")

        output = self._format()

        assert get_request_id() == request_id
        assert output["request_id"] == "req-log-1"
        assert output["message"] == "Application submitted"
        assert output["level"] == "INFO"

    def test_masks_contact_details_in_extra(self):
        output = self._format(email="ana.silva@example.com", phone="+351912345678")

        assert output["email"] == "a****@example.com"
        assert output["phone"].endswith("5678")
        assert "912" not in output["phone"]

    def test_generates_request_id_when_missing(self):
        request_id = set_request_id()

        assert len(request_id) == 36
        assert get_request_id() == request_id
