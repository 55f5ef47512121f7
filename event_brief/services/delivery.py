"""Digest delivery over WhatsApp (Twilio) and email (Resend)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import requests

from ..clients.http_client import get_session
from ..config import (
    RESEND_API_KEY,
    RESEND_FROM_EMAIL,
    TWILIO_ACCOUNT_SID,
    TWILIO_AUTH_TOKEN,
    TWILIO_WHATSAPP_FROM,
)
from ..logging_config import get_trace_logger
from .digest import WHATSAPP, Digest

TWILIO_MESSAGES_URL: str = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
RESEND_EMAILS_URL: str = "https://api.resend.com/emails"
REQUEST_TIMEOUT: int = 30


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Result of a send attempt."""

    success: bool
    error: str | None = None


def _trace_headers(trace_id: str | None) -> Dict[str, str]:
    return {"X-Trace-Id": trace_id} if trace_id else {}


def _json_field(response: requests.Response, key: str) -> Any:
    """``response.json()[key]``, or ``None`` when the body is not a JSON object."""
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload.get(key) if isinstance(payload, dict) else None


def _whatsapp_address(number: str) -> str:
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


def send_whatsapp(to: str, body: str, *, trace_id: str | None = None) -> DeliveryResult:
    """Send *body* to *to* through the Twilio Messages API."""
    log = get_trace_logger(__name__, trace_id)
    if not (TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN and TWILIO_WHATSAPP_FROM):
        return DeliveryResult(success=False, error="Twilio credentials not configured")

    try:
        response = get_session().post(
            TWILIO_MESSAGES_URL.format(sid=TWILIO_ACCOUNT_SID),
            auth=(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN),
            data={
                "From": _whatsapp_address(TWILIO_WHATSAPP_FROM),
                "To": _whatsapp_address(to),
                "Body": body,
            },
            headers=_trace_headers(trace_id),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        log.error("Error sending WhatsApp: %s", exc)
        return DeliveryResult(success=False, error=str(exc))

    if not response.ok:
        log.error("Twilio API error: %s - %s", response.status_code, response.text[:500])
        message = _json_field(response, "message")
        return DeliveryResult(success=False, error=message or "Failed to send WhatsApp message")

    # accepted by Twilio at this point; the sid is informational only
    log.info("WhatsApp message sent: %s", _json_field(response, "sid"))
    return DeliveryResult(success=True)


def send_email(to: str, subject: str, html: str, *, trace_id: str | None = None) -> DeliveryResult:
    """Send an HTML email through the Resend API."""
    log = get_trace_logger(__name__, trace_id)
    if not RESEND_API_KEY:
        return DeliveryResult(success=False, error="Resend API key not configured")

    try:
        response = get_session().post(
            RESEND_EMAILS_URL,
            headers={
                "Authorization": f"Bearer {RESEND_API_KEY}",
                "Content-Type": "application/json",
                **_trace_headers(trace_id),
            },
            json={"from": RESEND_FROM_EMAIL, "to": [to], "subject": subject, "html": html},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        log.error("Error sending email: %s", exc)
        return DeliveryResult(success=False, error=str(exc))

    if not response.ok:
        log.error("Resend API error: %s - %s", response.status_code, response.text[:500])
        return DeliveryResult(success=False, error=f"Resend API error: {response.status_code}")

    log.info("Email sent successfully to: %s", to)
    return DeliveryResult(success=True)


def deliver_digest(contact: str, digest: Digest, *, trace_id: str | None = None) -> DeliveryResult:
    """Dispatch *digest* to the sender matching its channel."""
    if digest.channel == WHATSAPP:
        return send_whatsapp(contact, digest.body, trace_id=trace_id)
    return send_email(contact, digest.subject or "", digest.body, trace_id=trace_id)

__all__ = ["DeliveryResult", "send_whatsapp", "send_email", "deliver_digest"]
