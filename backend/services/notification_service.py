import logging
import smtplib
from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from backend.core.config import AppSettings, get_settings
from backend.services.email_templates import NotificationTemplate, render

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10


@dataclass
class Notification:
    address: str
    template: NotificationTemplate
    params: dict = field(default_factory=dict)


class NotificationGateway(Protocol):
    def send(self, address: str, template: NotificationTemplate, params: dict) -> bool:
        ...


class EmailService:
    """
    Sends templated notifications over SMTP.

    ``send`` reports delivery as a boolean instead of raising, so callers that
    have already committed a state change can log the gap and move on.
    """

    def __init__(self, settings: AppSettings):
        self.settings = settings

    def send(self, address: str, template: NotificationTemplate, params: dict) -> bool:
        try:
            subject, html_content = render(template, params)
        except (KeyError, TypeError):
            logger.exception("Could not render %s email for %s", template.value, address)
            return False

        if not self.settings.smtp_host:
            logger.warning("SMTP not configured, %s email to %s was not sent", template.value, address)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.settings.mail_sender
        msg["To"] = address
        msg.attach(MIMEText(html_content, "html"))

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send %s email to %s: %s", template.value, address, e)
            return False

        logger.info("Sent %s email to %s", template.value, address)
        return True


def dispatch(gateway: NotificationGateway, notification: Notification | None) -> bool:
    """Deliver a notification queued during an already committed unit of work."""
    if notification is None:
        return True

    delivered = gateway.send(notification.address, notification.template, notification.params)
    if not delivered:
        logger.warning(
            "Notification %s to %s failed after commit; needs manual follow-up",
            notification.template.value,
            notification.address,
        )
    return delivered


def get_notifier() -> NotificationGateway:
    return EmailService(get_settings())
