"""Verification e-mail delivery over SMTP."""

import logging
from email.message import EmailMessage

import aiosmtplib

from app.core.config import settings
from app.core.exception import DeliveryError

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify Your Email - CivicConnect"


def verification_link(token: str) -> str:
    return f"{settings.PUBLIC_BASE_URL}/api/auth/verify/{token}"


def render_verification_email(token: str) -> str:
    link = verification_link(token)
    return f"""
    <html>
        <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2>Welcome to CivicConnect!</h2>
            <p>Thank you for registering. Please verify your email address:</p>
            <p><a href="{link}">Verify Email Address</a></p>
            <p>Or copy and paste this link in your browser:</p>
            <p>{link}</p>
            <p>If you didn't create an account with CivicConnect, please ignore this email.</p>
        </body>
    </html>
    """


class EmailSender:
    """send(to, token): delivers a verification link or raises DeliveryError."""

    def __init__(self, host=None, port=None, username=None, password=None, sender=None, use_tls=None):
        self.host = host if host is not None else settings.MAIL_HOST
        self.port = port if port is not None else settings.MAIL_PORT
        self.username = username if username is not None else settings.MAIL_USERNAME
        self.password = password if password is not None else settings.MAIL_PASSWORD
        self.sender = sender if sender is not None else settings.MAIL_FROM
        self.use_tls = use_tls if use_tls is not None else settings.MAIL_USE_TLS

    @property
    def configured(self) -> bool:
        return bool(self.host)

    def build_message(self, to_address: str, token: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to_address
        msg["Subject"] = VERIFICATION_SUBJECT
        msg.set_content(render_verification_email(token), subtype="html")
        return msg

    async def send(self, to_address: str, token: str) -> None:
        if not self.configured:
            logger.warning(f"SMTP not configured, verification link for {to_address}: {verification_link(token)}")
            return

        # STARTTLS on 587, implicit TLS on 465
        start_tls = self.use_tls and int(self.port) != 465
        use_tls = self.use_tls and int(self.port) == 465
        try:
            await aiosmtplib.send(
                self.build_message(to_address, token),
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=start_tls,
                use_tls=use_tls,
            )
        except aiosmtplib.SMTPException as e:
            raise DeliveryError(f"Failed to send verification email to {to_address}") from e
        except OSError as e:
            raise DeliveryError(f"Mail server unreachable for {to_address}") from e

        logger.info(f"Verification email sent to {to_address}")


def get_email_sender() -> EmailSender:
    return EmailSender()


async def deliver_verification_email(sender: EmailSender, to_address: str, token: str) -> bool:
    """Background task wrapper: delivery failures are logged, never raised."""
    try:
        await sender.send(to_address, token)
    except DeliveryError as e:
        logger.error(f"{e}: {e.__cause__}")
        return False
    return True
