"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging messages instead of delivering them.
Selected when no mail host is configured.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For local development - the plain-text body carries the code.
    """

    async def send(self, to_address: str, subject: str, text_body: str, html_body: str) -> None:
        """
        Log the message to console (simulates email delivery).

        The HTML alternative is not logged; the plain-text body has the
        same content.
        """
        logger.info("[EMAIL] To: %s Subject: %s Body: %s", to_address, subject, text_body)
