# core/validator.py
"""
Contact form input validation

The email check is intentionally loose: it only asserts a single ``@``,
no whitespace and a dotted domain. It is not an RFC 5322 validator.
"""

import re
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Optional

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

# E.164-like: optional +, 2-15 digits, no leading zero
PHONE_PATTERN = re.compile(r'^\+?[1-9]\d{1,14}$', re.ASCII)

FIELDS = ('name', 'email', 'phone', 'message')


@dataclass(frozen=True)
class Submission:
    """A single contact form submission, exactly as received"""
    name: Any
    email: Any
    phone: Any
    message: Any

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'Submission':
        # A JSON body may be a list or scalar
        if not isinstance(data, Mapping):
            data = {}
        return cls(**{field: data.get(field) for field in FIELDS})

    def is_valid(self) -> bool:
        return validate(self.name, self.email, self.phone, self.message)


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ''


def _matches(pattern: re.Pattern, value: Any) -> bool:
    # re.match with $ would accept a trailing newline
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate(name: Any, email: Any, phone: Any, message: Any) -> bool:
    """
    Validate all four contact form fields

    Values are not normalized; surrounding whitespace is only ignored
    when checking ``name`` and ``message`` for emptiness.

    Returns:
        True only if every field passes its check
    """
    return (
        _non_blank(name)
        and _matches(EMAIL_PATTERN, email)
        and _matches(PHONE_PATTERN, phone)
        and _non_blank(message)
    )
