"""Notification message rendering.

Turns a stored application into the Markdown text sent to the support chat.
"""

from datetime import UTC, datetime

from ...core.config import Settings, settings as default_settings
from ...core.constants import Notification
from ...models.application import Application
from ...utils import escape_markdown, excerpt


def admin_base_url(config: Settings = default_settings) -> str:
    """Base URL for links back to the admin area.

    Production uses PUBLIC_BASE_URL (or a placeholder domain when unset);
    every other environment points at the local frontend.
    """
    if config.is_production:
        return (config.PUBLIC_BASE_URL or Notification.DEFAULT_PRODUCTION_BASE_URL).rstrip('/')
    return Notification.DEVELOPMENT_BASE_URL


def _submitted_label(application: Application) -> str:
    submitted_at = application.submitted_at or datetime.now(UTC)
    if submitted_at.tzinfo is None:
        submitted_at = submitted_at.replace(tzinfo=UTC)
    return submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z")


def render_application_message(
    application: Application,
    config: Settings = default_settings
) -> str:
    """Render the new-application summary.

    Long free-text answers are cut to short excerpts; every user-supplied
    value is Markdown-escaped.
    """
    e = escape_markdown
    description = excerpt(application.project_description, Notification.DESCRIPTION_EXCERPT_LENGTH)
    audience = excerpt(application.target_audience, Notification.AUDIENCE_EXCERPT_LENGTH)
    impact = excerpt(application.expected_impact, Notification.IMPACT_EXCERPT_LENGTH)
    admin_url = f"{admin_base_url(config)}{Notification.ADMIN_LIST_PATH}"

    return (
        "🆕 *NEW GRANT APPLICATION SUBMITTED*\n"
        "\n"
        f"👤 *Applicant:* {e(application.full_name)}\n"
        f"📧 *Email:* {e(application.email)}\n"
        f"📞 *Phone:* {e(application.phone)}\n"
        f"🌍 *Location:* {e(application.city)}, {e(application.country)}\n"
        "\n"
        f"🎯 *Project:* {e(application.project_title)}\n"
        f"💰 *Amount Requested:* ${e(application.requested_amount)}\n"
        f"⏱️ *Duration:* {e(application.project_duration)}\n"
        f"🏷️ *Field:* {e(application.project_field)}\n"
        "\n"
        "📝 *Project Description:*\n"
        f"{e(description)}\n"
        "\n"
        "🎯 *Target Audience:*\n"
        f"{e(audience)}\n"
        "\n"
        "💡 *Expected Impact:*\n"
        f"{e(impact)}\n"
        "\n"
        f"🆔 *Application ID:* `{application.application_id}`\n"
        f"🕐 *Submitted:* {_submitted_label(application)}\n"
        "\n"
        "---\n"
        f"[View All Applications]({admin_url})\n"
    )
