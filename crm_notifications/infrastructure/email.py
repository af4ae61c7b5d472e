"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from crm_notifications.config import get_settings

logger = logging.getLogger(__name__)

TEMPLATE_NOTIFICATION = "notification"
TEMPLATE_DEADLINE_REMINDER = "deadline-reminder"
TEMPLATE_APPOINTMENT_REMINDER = "appointment-reminder"

_BRAND = "Real Estate CRM"


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{message} (field: {field})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_exception(exc: Exception, recipient: str) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid request for %s failed with status %s: %s",
            recipient,
            status_code,
            details,
        )
    elif status_code:
        logger.error("SendGrid request for %s failed with status %s", recipient, status_code)
    elif details:
        logger.error("SendGrid request for %s failed: %s", recipient, details)
    else:
        logger.exception("Error sending email to %s via SendGrid: %s", recipient, exc)


def _log_unsuccessful_response(response: Any, recipient: str) -> None:
    """Log details from an unsuccessful SendGrid response object."""

    status_code = getattr(response, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(response, "body", None))

    if details:
        logger.error(
            "SendGrid responded with status %s for %s: %s",
            status_code,
            recipient,
            details,
        )
    else:
        logger.error("SendGrid responded with status %s for %s", status_code, recipient)


def send_email(
    subject: str,
    html_content: str,
    recipient: str,
    *,
    text_content: str | None = None,
) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``True`` only when SendGrid accepted the message; every failure is
    logged and reported as ``False``.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        _log_sendgrid_exception(exc, recipient)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(response, recipient)
        return False

    return True


_NOTIFICATION_LABELS = {
    "info": "Info",
    "success": "Success",
    "warning": "Warning",
    "error": "Error",
}


def notification_subject(notification_type: str, title: str) -> str:
    """Prefix ``title`` with the label of ``notification_type``."""

    label = _NOTIFICATION_LABELS.get(notification_type, _NOTIFICATION_LABELS["info"])
    return f"[{label}] {title}"


def _render_notification(data: Mapping[str, Any]) -> tuple[str, str]:
    user = data.get("userName") or "there"
    title = data.get("title") or ""
    message = data.get("message") or ""
    action_url = data.get("actionUrl")
    label = _NOTIFICATION_LABELS.get(data.get("notificationType"), _NOTIFICATION_LABELS["info"])

    parts = [
        f"<h2>{escape(label)}: {escape(str(title))}</h2>",
        f"<p>Hello {escape(str(user))},</p>",
        f"<p>{escape(str(message))}</p>",
    ]
    if action_url:
        parts.append(f'<p><a href="{escape(str(action_url))}">View Details</a></p>')
    parts.append(f"<p>{_BRAND}</p>")

    lines = [f"{label}: {title}", "", f"Hello {user},", "", str(message)]
    if action_url:
        lines.extend(["", f"View details: {action_url}"])
    lines.extend(["", "---", f"{_BRAND} Team"])
    return "".join(parts), "\n".join(lines)


def _render_appointment_reminder(data: Mapping[str, Any]) -> tuple[str, str]:
    user = data.get("userName") or "there"
    title = data.get("appointmentTitle") or "Appointment"
    when = data.get("appointmentTime") or "Not specified"
    client = data.get("clientName")
    location = data.get("location")
    action_url = data.get("actionUrl")

    details = [("Title", title), ("Date & Time", when)]
    if client:
        details.append(("Client", client))
    if location:
        details.append(("Location", location))

    parts = [
        "<h2>Appointment Reminder</h2>",
        f"<p>Hello {escape(str(user))},</p>",
        "<p>This is a reminder about your upcoming appointment.</p>",
        "<div>",
    ]
    parts.extend(
        f"<p><strong>{escape(name)}:</strong> {escape(str(value))}</p>"
        for name, value in details
    )
    parts.append("</div>")
    if action_url:
        parts.append(f'<p><a href="{escape(str(action_url))}">View Appointment</a></p>')
    parts.append(f"<p>{_BRAND}</p>")

    lines = [
        "Appointment Reminder",
        "",
        f"Hello {user},",
        "",
        "This is a reminder about your upcoming appointment.",
        "",
    ]
    lines.extend(f"- {name}: {value}" for name, value in details)
    if action_url:
        lines.extend(["", f"View appointment: {action_url}"])
    lines.extend(["", "---", f"{_BRAND} Team"])
    return "".join(parts), "\n".join(lines)


def _render_deadline_reminder(data: Mapping[str, Any]) -> tuple[str, str]:
    agent = data.get("agentName") or "there"
    client = data.get("clientName") or "your client"
    title = data.get("deadlineTitle") or "Deadline"
    due_date = data.get("deadlineDate") or "Not specified"
    due_time = data.get("deadlineTime") or ""
    description = data.get("description")
    client_url = data.get("clientUrl")

    due = f"{due_date} {due_time}".strip()
    parts = [
        "<h2>Deadline Reminder</h2>",
        f"<p>Hello {escape(str(agent))},</p>",
        "<p>This is a reminder about an upcoming deadline for your client "
        f"<strong>{escape(str(client))}</strong>.</p>",
        "<div>",
        f"<p><strong>Deadline:</strong> {escape(str(title))}</p>",
        f"<p><strong>Client:</strong> {escape(str(client))}</p>",
        f"<p><strong>Due:</strong> {escape(due)}</p>",
    ]
    if description:
        parts.append(f"<p><strong>Description:</strong> {escape(str(description))}</p>")
    parts.append("</div>")
    if client_url:
        parts.append(f'<p><a href="{escape(str(client_url))}">View Client Details</a></p>')
    parts.append(f"<p>{_BRAND}</p>")

    lines = [
        "Deadline Reminder",
        "",
        f"Hello {agent},",
        "",
        f"This is a reminder about an upcoming deadline for your client {client}.",
        "",
        f"- Deadline: {title}",
        f"- Client: {client}",
        f"- Due: {due}",
    ]
    if description:
        lines.append(f"- Description: {description}")
    if client_url:
        lines.extend(["", f"View client details: {client_url}"])
    lines.extend(["", "---", f"{_BRAND} Team"])
    return "".join(parts), "\n".join(lines)


_TEMPLATES: dict[str, Callable[[Mapping[str, Any]], tuple[str, str]]] = {
    TEMPLATE_NOTIFICATION: _render_notification,
    TEMPLATE_DEADLINE_REMINDER: _render_deadline_reminder,
    TEMPLATE_APPOINTMENT_REMINDER: _render_appointment_reminder,
}


def render_template(template: str, data: Mapping[str, Any]) -> tuple[str, str]:
    """Return the ``(html, text)`` bodies for ``template`` filled with ``data``."""

    try:
        renderer = _TEMPLATES[template]
    except KeyError as exc:
        raise ValueError(f"Unknown email template: {template}") from exc
    return renderer(data)


def send_template_email(
    recipient: str,
    subject: str,
    template: str,
    data: Mapping[str, Any],
) -> bool:
    """Render ``template`` with ``data`` and deliver it to ``recipient``."""

    html_content, text_content = render_template(template, data)
    return send_email(subject, html_content, recipient, text_content=text_content)


__all__ = [
    "TEMPLATE_APPOINTMENT_REMINDER",
    "TEMPLATE_DEADLINE_REMINDER",
    "TEMPLATE_NOTIFICATION",
    "notification_subject",
    "render_template",
    "send_email",
    "send_template_email",
]
