"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers multipart (plain text + HTML) messages through aiosmtplib.
With implicit_tls the session is TLS from the first byte; otherwise it
connects in plain text and upgrades with STARTTLS when the server offers it.
"""

import logging
from email.message import EmailMessage

import aiosmtplib

from src.domain.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via SMTP.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Holds only immutable connection settings; each send opens its own
    SMTP session.
    """

    def __init__(
        self,
        hostname: str,
        port: int,
        from_address: str,
        username: str | None = None,
        password: str | None = None,
        implicit_tls: bool = False,
    ) -> None:
        self.hostname = hostname
        self.port = port
        self.from_address = from_address
        self.username = username
        self.password = password
        self.implicit_tls = implicit_tls

    def build_message(self, to_address: str, subject: str, text_body: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, to_address: str, subject: str, text_body: str, html_body: str) -> None:
        """
        Send a message to a single recipient.

        Raises:
            DeliveryError: If the SMTP session fails at any step
        """
        message = self.build_message(to_address, subject, text_body, html_body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=self.implicit_tls,
                # None lets aiosmtplib upgrade only if the server advertises STARTTLS
                start_tls=False if self.implicit_tls else None,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s via %s:%s: %s", to_address, self.hostname, self.port, e)
            raise DeliveryError(str(e)) from e

        logger.info("Email sent to %s", to_address)
