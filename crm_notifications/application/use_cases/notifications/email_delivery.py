"""Send ad-hoc notification emails to a list of recipients."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from crm_notifications.application.use_cases.reminders.dispatch import EmailSender
from crm_notifications.domain.entities import (
    EMAIL_TYPE_APPOINTMENT,
    EMAIL_TYPE_DEADLINE,
    EMAIL_TYPE_NOTIFICATION,
    NOTIFICATION_TYPE_INFO,
    EmailDeliveryReport,
    EmailDeliveryResult,
    EmailRecipient,
)
from crm_notifications.domain.errors import NotificationAccessError
from crm_notifications.infrastructure import email as email_service
from crm_notifications.infrastructure.repositories import ProfileRepository

logger = logging.getLogger(__name__)

TRANSPORT_FAILURE_MESSAGE = "Email transport reported a failed delivery"


def _notification_email(
    recipient: EmailRecipient, title: str, message: str, action_url: str | None
) -> tuple[str, str, Mapping[str, Any]]:
    notification_type = recipient.notification_type or NOTIFICATION_TYPE_INFO
    return (
        email_service.notification_subject(notification_type, title),
        email_service.TEMPLATE_NOTIFICATION,
        {
            "userName": recipient.name or recipient.email,
            "title": title,
            "message": message,
            "actionUrl": action_url,
            "notificationType": notification_type,
        },
    )


def _deadline_email(
    recipient: EmailRecipient, title: str, message: str, action_url: str | None
) -> tuple[str, str, Mapping[str, Any]]:
    client_name = recipient.client_name or "Unknown Client"
    return (
        f"Deadline Reminder: {client_name}",
        email_service.TEMPLATE_DEADLINE_REMINDER,
        {
            "agentName": recipient.name or recipient.email,
            "clientName": client_name,
            "deadlineTitle": title,
            "deadlineDate": recipient.deadline or "Not specified",
            "description": message,
            "clientUrl": action_url,
        },
    )


def _appointment_email(
    recipient: EmailRecipient, title: str, message: str, action_url: str | None
) -> tuple[str, str, Mapping[str, Any]]:
    return (
        f"Appointment Reminder: {title}",
        email_service.TEMPLATE_APPOINTMENT_REMINDER,
        {
            "userName": recipient.name or recipient.email,
            "appointmentTitle": title,
            "appointmentTime": recipient.appointment_time or "Not specified",
            "clientName": recipient.client_name,
            "location": recipient.location,
            "actionUrl": action_url,
        },
    )


_BUILDERS = {
    EMAIL_TYPE_NOTIFICATION: _notification_email,
    EMAIL_TYPE_DEADLINE: _deadline_email,
    EMAIL_TYPE_APPOINTMENT: _appointment_email,
}


def _ensure_may_email(
    session: Session,
    *,
    user_id: int,
    is_admin: bool,
    recipients: list[EmailRecipient],
) -> None:
    if is_admin:
        return
    profile = ProfileRepository(session).get(user_id)
    own_email = profile.email if profile is not None else None
    if own_email is None or any(item.email != own_email for item in recipients):
        raise NotificationAccessError(
            "Insufficient permissions to send emails to other users"
        )


def send_notification_emails(
    session: Session,
    *,
    user_id: int,
    is_admin: bool,
    email_type: str,
    recipients: Iterable[EmailRecipient],
    title: str,
    message: str,
    action_url: str | None = None,
    send_email: EmailSender | None = None,
) -> EmailDeliveryReport:
    """Email every recipient and report the outcome for each one.

    Non-administrators may only address their own profile email; any other
    recipient rejects the whole batch with :class:`NotificationAccessError`.
    """

    try:
        builder = _BUILDERS[email_type]
    except KeyError as exc:
        raise ValueError(f"Unsupported email type: {email_type}") from exc

    recipient_list = list(recipients)
    _ensure_may_email(
        session, user_id=user_id, is_admin=is_admin, recipients=recipient_list
    )

    sender = send_email or email_service.send_template_email
    report = EmailDeliveryReport()
    for recipient in recipient_list:
        subject, template, data = builder(recipient, title, message, action_url)
        try:
            delivered = sender(recipient.email, subject, template, data)
        except Exception as exc:
            logger.exception("Failed to send %s email to %s", email_type, recipient.email)
            report.results.append(
                EmailDeliveryResult(email=recipient.email, success=False, error=str(exc))
            )
            continue
        report.results.append(
            EmailDeliveryResult(
                email=recipient.email,
                success=delivered,
                error=None if delivered else TRANSPORT_FAILURE_MESSAGE,
            )
        )

    logger.info(
        "Notification email batch finished: sent=%s failed=%s", report.sent, report.failed
    )
    return report


__all__ = ["TRANSPORT_FAILURE_MESSAGE", "send_notification_emails"]
