"""Transactional email: welcome and password-reset messages.

Two gateways share one interface. LoggingNotificationGateway writes the message
to the application log (development); BrevoNotificationGateway sends it through
the Brevo REST API. build_notification_gateway picks one from settings once at
startup; callers never branch on the provider.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to Abacus!"
PASSWORD_RESET_SUBJECT = "Password Reset Request"

WELCOME_TEXT = """Hello {username},

Welcome to Abacus! Your account has been created and you can sign in right away.

-- Abacus
"""

WELCOME_HTML = """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2>Welcome to Abacus!</h2>
        <p>Hello <strong>{username}</strong>,</p>
        <p>Your account has been created and you can sign in right away.</p>
        <p style="margin-top: 30px; color: #666; font-size: 12px;">-- Abacus</p>
    </div>
</body>
</html>
"""

PASSWORD_RESET_TEXT = """Hello {username},

We received a request to reset your password. If you didn't make this request,
you can safely ignore this email.

Open the link below to reset your password (valid for 1 hour):
{reset_url}

-- Abacus
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2>Password Reset Request</h2>
        <p>Hello <strong>{username}</strong>,</p>
        <p>We received a request to reset your password. If you didn't make this request, you can safely ignore this email.</p>
        <p style="margin: 30px 0;">
            <a href="{reset_url}" style="padding: 12px 24px; background: #007bff; color: white; text-decoration: none; border-radius: 5px;">Reset Password</a>
        </p>
        <p>Or copy and paste this link into your browser (valid for 1 hour):</p>
        <p style="word-break: break-all; color: #666;">{reset_url}</p>
    </div>
</body>
</html>
"""


class NotificationGateway(ABC):
    """Sends transactional email. Returns False on failure instead of raising."""

    def __init__(self, sender_address: str, sender_name: str) -> None:
        self.sender_address = sender_address
        self.sender_name = sender_name

    @abstractmethod
    def send_welcome_email(self, email: str, username: str) -> bool: ...

    @abstractmethod
    def send_password_reset_email(
        self,
        email: str,
        username: str,
        token: str,
        url: str,
    ) -> bool: ...


class LoggingNotificationGateway(NotificationGateway):
    """Development gateway: logs each message instead of delivering it."""

    def send_welcome_email(self, email: str, username: str) -> bool:
        logger.info(
            "Welcome email (not delivered): to=%s from=%s <%s> subject=%r username=%s",
            email,
            self.sender_name,
            self.sender_address,
            WELCOME_SUBJECT,
            username,
        )
        return True

    def send_password_reset_email(
        self,
        email: str,
        username: str,
        token: str,
        url: str,
    ) -> bool:
        # The link is logged so a developer can complete the reset without a mailbox.
        logger.info(
            "Password reset email (not delivered): to=%s from=%s <%s> subject=%r username=%s url=%s",
            email,
            self.sender_name,
            self.sender_address,
            PASSWORD_RESET_SUBJECT,
            username,
            url,
        )
        return True


class BrevoNotificationGateway(NotificationGateway):
    """Production gateway: POSTs each message to the Brevo transactional email API."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        sender_address: str,
        sender_name: str,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(sender_address, sender_name)
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout

    def send_welcome_email(self, email: str, username: str) -> bool:
        return self._send(
            to_email=email,
            subject=WELCOME_SUBJECT,
            text_content=WELCOME_TEXT.format(username=username),
            html_content=WELCOME_HTML.format(username=username),
        )

    def send_password_reset_email(
        self,
        email: str,
        username: str,
        token: str,
        url: str,
    ) -> bool:
        return self._send(
            to_email=email,
            subject=PASSWORD_RESET_SUBJECT,
            text_content=PASSWORD_RESET_TEXT.format(username=username, reset_url=url),
            html_content=PASSWORD_RESET_HTML.format(username=username, reset_url=url),
        )

    def _build_payload(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        html_content: str,
    ) -> dict[str, Any]:
        return {
            "sender": {"email": self.sender_address, "name": self.sender_name},
            "to": [{"email": to_email}],
            "subject": subject,
            "htmlContent": html_content,
            "textContent": text_content,
        }

    def _send(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        html_content: str,
    ) -> bool:
        payload = self._build_payload(to_email, subject, text_content, html_content)
        headers = {
            "api-key": self._api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }
        try:
            with httpx.Client(timeout=httpx.Timeout(self._timeout)) as client:
                resp = client.post(self._api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error("Email to %s timed out after %ss: %s", to_email, self._timeout, e)
            return False
        except httpx.HTTPError as e:
            logger.error("Email to %s failed: Brevo unreachable: %s", to_email, e)
            return False

        if resp.status_code >= 400:
            detail = resp.text[:500] if resp.text else "Unknown error"
            logger.error(
                "Email to %s rejected by Brevo",
                to_email,
                extra={"status_code": resp.status_code, "reason": detail},
            )
            return False

        logger.info("Email sent to %s (subject=%r)", to_email, subject)
        return True


def build_notification_gateway(settings: Settings) -> NotificationGateway:
    """Return the gateway selected by EMAIL_PROVIDER."""
    if settings.EMAIL_PROVIDER == "brevo":
        if settings.BREVO_API_KEY is None:
            raise ValueError("BREVO_API_KEY must be set when EMAIL_PROVIDER=brevo")
        return BrevoNotificationGateway(
            api_key=settings.BREVO_API_KEY.get_secret_value(),
            api_url=settings.BREVO_API_URL,
            sender_address=settings.EMAIL_SENDER_ADDRESS,
            sender_name=settings.EMAIL_SENDER_NAME,
            timeout=settings.EMAIL_REQUEST_TIMEOUT_SEC,
        )
    return LoggingNotificationGateway(
        sender_address=settings.EMAIL_SENDER_ADDRESS,
        sender_name=settings.EMAIL_SENDER_NAME,
    )
