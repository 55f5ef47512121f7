"""Centralised configuration for event_brief.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance.
"""

from __future__ import annotations

import os
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
TAVILY_API_KEY: str | None = os.getenv("TAVILY_API_KEY")
MONGODB_URI: str | None = os.getenv("MONGODB_URI")
TWILIO_ACCOUNT_SID: str | None = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN: str | None = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_WHATSAPP_FROM: str | None = os.getenv("TWILIO_WHATSAPP_FROM")
RESEND_API_KEY: str | None = os.getenv("RESEND_API_KEY")

# ---------------------------------------------------------------------------
# Cross-cutting service settings
# (referenced in more than one component)
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "event_brief")
BRIEFS_COLLECTION: str = "briefs"
OPENAI_EXTRACTION_MODEL: str = os.getenv("OPENAI_EXTRACTION_MODEL", "gpt-4.1")
RESEND_FROM_EMAIL: str = os.getenv("RESEND_FROM_EMAIL", "Brief AI <onboarding@resend.dev>")

# ---------------------------------------------------------------------------
# Scheduling
# Briefs are scheduled in local civil time; the cron runs every 10 minutes.
# ---------------------------------------------------------------------------
SCHEDULE_TIMEZONE: str = os.getenv("SCHEDULE_TIMEZONE", "Asia/Jerusalem")
SCHEDULE_TOLERANCE_MINUTES: int = 10

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "OPENAI_API_KEY",
    "TAVILY_API_KEY",
    "MONGODB_URI",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_WHATSAPP_FROM",
    "RESEND_API_KEY",
    # shared
    "MONGODB_DATABASE",
    "BRIEFS_COLLECTION",
    "OPENAI_EXTRACTION_MODEL",
    "RESEND_FROM_EMAIL",
    # scheduling
    "SCHEDULE_TIMEZONE",
    "SCHEDULE_TOLERANCE_MINUTES",
]
