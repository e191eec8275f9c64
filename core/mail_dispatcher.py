# core/mail_dispatcher.py
"""
Contact form email dispatch over an implicit-TLS SMTP relay

Each submission is sent once: there is no retry and no queue. The
outcome is returned as a DispatchResult rather than raised, so the
caller only has to pick a status page.
"""

import asyncio
import logging
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from enum import Enum
from typing import Optional

import aiosmtplib

from core.exceptions import MailConfigurationError, MailTransportError
from core.validator import Submission

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Result of handling one submission"""
    INVALID_INPUT = "invalid_input"
    CONFIG_MISSING = "config_missing"
    SENT = "sent"
    FAILED = "failed"


@dataclass
class DispatchResult:
    """Result of a dispatch attempt"""
    outcome: Outcome
    reason: Optional[str] = None
    smtp_code: Optional[int] = None
    smtp_response: Optional[str] = None

    @property
    def sent(self) -> bool:
        return self.outcome is Outcome.SENT


@dataclass(frozen=True)
class MailConfig:
    """Relay credentials and addresses, read once from the app config"""
    sender_address: Optional[str]
    sender_credential: Optional[str]
    recipient_address: Optional[str]
    host: str = 'smtp.mail.yahoo.com'
    port: int = 465
    timeout: float = 30
    subject: str = 'Contact Us Form Submission'

    @classmethod
    def from_config(cls, config) -> 'MailConfig':
        return cls(
            sender_address=config.get('MAIL_SENDER_ADDRESS'),
            sender_credential=config.get('MAIL_SENDER_CREDENTIAL'),
            recipient_address=config.get('MAIL_RECIPIENT_ADDRESS'),
            host=config.get('SMTP_HOST', cls.host),
            port=config.get('SMTP_PORT', cls.port),
            timeout=config.get('MAIL_TIMEOUT', cls.timeout),
            subject=config.get('MAIL_SUBJECT', cls.subject),
        )

    def require(self) -> 'MailConfig':
        """Raise MailConfigurationError unless all mail settings are present"""
        missing = [
            env_name for env_name, value in (
                ('YAHOO_EMAIL', self.sender_address),
                ('YAHOO_PASSWORD', self.sender_credential),
                ('RECIPIENT_EMAIL', self.recipient_address),
            ) if not value
        ]
        if missing:
            raise MailConfigurationError(missing)
        return self


def format_body(submission: Submission) -> str:
    """Plain-text body: one labeled line per field"""
    return (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone}\n"
        f"Message: {submission.message}"
    )


def build_message(submission: Submission, mail_config: MailConfig) -> MIMEText:
    """Create the outbound message with the relay's required headers"""
    msg = MIMEText(format_body(submission), 'plain', 'utf-8')
    msg['Subject'] = mail_config.subject
    msg['From'] = mail_config.sender_address
    msg['To'] = mail_config.recipient_address
    msg['Date'] = formatdate(localtime=True)
    msg['Message-ID'] = make_msgid(domain=mail_config.sender_address.rsplit('@', 1)[-1])
    return msg


class MailDispatcher:
    """
    Sends contact submissions through the configured SMTP relay

    Args:
        mail_config: relay settings; validated on every dispatch
        smtp_factory: SMTP client class, ``aiosmtplib.SMTP`` by default
    """

    def __init__(self, mail_config: MailConfig, smtp_factory=aiosmtplib.SMTP):
        self.mail_config = mail_config
        self.smtp_factory = smtp_factory

    def dispatch(self, submission: Submission) -> DispatchResult:
        """
        Send one validated submission

        Returns:
            DispatchResult with outcome SENT, FAILED or CONFIG_MISSING
        """
        try:
            mail_config = self.mail_config.require()
        except MailConfigurationError as e:
            logger.error(f"Email dispatch aborted: {e}")
            return DispatchResult(Outcome.CONFIG_MISSING, reason=str(e))

        msg = build_message(submission, mail_config)

        try:
            asyncio.run(self._send(msg, mail_config))
        except MailTransportError as e:
            logger.error(f"Error occurred: {e}")
            if e.response:
                logger.error(f"Response received: {e.code} {e.response}")
            return DispatchResult(
                Outcome.FAILED,
                reason=str(e),
                smtp_code=e.code,
                smtp_response=e.response,
            )

        logger.info(f"Contact email {msg['Message-ID']} relayed to {mail_config.recipient_address}")
        return DispatchResult(Outcome.SENT)

    async def _send(self, msg: MIMEText, mail_config: MailConfig) -> None:
        """Connect with implicit TLS, authenticate and submit the message"""
        smtp = self.smtp_factory(
            hostname=mail_config.host,
            port=mail_config.port,
            timeout=mail_config.timeout,
            use_tls=True,
        )

        try:
            # Exiting the context sends QUIT, or just closes a broken connection
            async with smtp:
                await smtp.login(mail_config.sender_address, mail_config.sender_credential)
                await smtp.send_message(msg)
        except aiosmtplib.SMTPResponseException as e:
            raise MailTransportError(f"{e.code} {e.message}", code=e.code, response=e.message) from e
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            raise MailTransportError(str(e) or e.__class__.__name__) from e
