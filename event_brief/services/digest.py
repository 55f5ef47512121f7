"""Digest formatting for the WhatsApp and email channels.

The composer trusts its input completely and renders whatever it is given,
up to a per-channel display cap.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Sequence

from ..models import ValidatedEvent

WHATSAPP: str = "whatsapp"
EMAIL: str = "email"

WHATSAPP_DISPLAY_CAP: int = 10
EMAIL_DISPLAY_CAP: int = 15

NO_EVENTS_TEXT: str = "No matching events found for your preferences this time. We'll keep looking!"


@dataclass(frozen=True, slots=True)
class Digest:
    channel: str
    subject: str | None
    body: str


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def format_whatsapp_message(brief_name: str, events: Sequence[ValidatedEvent]) -> str:
    if not events:
        return f"📭 *{brief_name}*\n\n{NO_EVENTS_TEXT}"

    lines = [
        f"🎵 *{brief_name}*",
        "",
        f"Found {len(events)} event{_plural(len(events))} matching your preferences:",
        "",
    ]
    for index, event in enumerate(events[:WHATSAPP_DISPLAY_CAP], start=1):
        lines.append(f"{index}. *{event.event_name}*")
        lines.append(f"   📍 {event.venue}")
        lines.append(f"   📅 {event.date}")
        if event.genres:
            lines.append(f"   🎸 {', '.join(event.genres)}")
        if event.event_url:
            lines.append(f"   🔗 {event.event_url}")
        lines.append("")

    if len(events) > WHATSAPP_DISPLAY_CAP:
        lines.append(f"... and {len(events) - WHATSAPP_DISPLAY_CAP} more events!")

    return "\n".join(lines).rstrip() + "\n"


def _email_card(event: ValidatedEvent) -> str:
    parts = [
        '<div style="background: #f8fafc; border-radius: 8px; padding: 16px; margin-bottom: 12px;">',
        f'  <h3 style="margin: 0 0 8px; color: #1e293b;">{escape(event.event_name)}</h3>',
        f'  <p style="margin: 4px 0; color: #64748b;">📍 {escape(event.venue)}</p>',
        f'  <p style="margin: 4px 0; color: #64748b;">📅 {escape(event.date)}</p>',
    ]
    if event.genres:
        parts.append(f'  <p style="margin: 4px 0; color: #f97316;">🎸 {escape(", ".join(event.genres))}</p>')
    if event.event_url:
        parts.append(
            f'  <a href="{escape(event.event_url, quote=True)}" '
            'style="color: #f97316; text-decoration: none;">View Details →</a>'
        )
    parts.append("</div>")
    return "\n".join(parts)


def format_email_html(brief_name: str, events: Sequence[ValidatedEvent]) -> str:
    name = escape(brief_name)
    if not events:
        return (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">\n'
            f'  <h1 style="color: #f97316;">📭 {name}</h1>\n'
            f"  <p>{escape(NO_EVENTS_TEXT)}</p>\n"
            "</div>"
        )

    cards = "\n".join(_email_card(e) for e in events[:EMAIL_DISPLAY_CAP])
    more = (
        f'<p style="color: #64748b; text-align: center;">... and {len(events) - EMAIL_DISPLAY_CAP} more events!</p>'
        if len(events) > EMAIL_DISPLAY_CAP
        else ""
    )
    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #f97316; margin-bottom: 4px;">🎵 {name}</h1>
  <p style="color: #64748b; margin-top: 0;">Found {len(events)} event{_plural(len(events))} matching your preferences</p>
{cards}
{more}
  <hr style="border: none; border-top: 1px solid #e2e8f0; margin: 24px 0;">
  <p style="color: #94a3b8; font-size: 12px; text-align: center;">
    You're receiving this because you subscribed to Brief AI digests.<br>
    Manage your preferences in the app.
  </p>
</div>"""


def compose_digest(channel: str, brief_name: str, events: Sequence[ValidatedEvent]) -> Digest:
    """Render *events* for *channel*; anything other than WhatsApp is sent as email."""
    if channel == WHATSAPP:
        return Digest(channel=WHATSAPP, subject=None, body=format_whatsapp_message(brief_name, events))

    subject = f"🎵 {brief_name}: {len(events)} new event{_plural(len(events))}"
    return Digest(channel=EMAIL, subject=subject, body=format_email_html(brief_name, events))

__all__ = [
    "Digest",
    "compose_digest",
    "format_whatsapp_message",
    "format_email_html",
    "WHATSAPP",
    "EMAIL",
]
