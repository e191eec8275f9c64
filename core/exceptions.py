"""
Exception hierarchy for the contact relay
"""

from typing import Optional


class ContactRelayError(Exception):
    """Base exception for contact relay operations"""
    pass


class MailConfigurationError(ContactRelayError):
    """Mail settings are missing or incomplete"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing mail configuration: {', '.join(self.missing)}")


class MailTransportError(ContactRelayError):
    """The mail relay rejected the message or could not be reached"""

    def __init__(self, message: str, code: Optional[int] = None, response: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.response = response
