"""validator.py
Regex checks for user-entered contact fields.

    • e-mail   : ≥ 6 chars, short local part, short domain + 1-5 char TLD
    • phone    : Ukrainian number, optional +38, dashes/spaces allowed anywhere
    • password : ≥ 8 word chars with a lower-case letter, upper-case letter & digit

Every check matches the whole string and returns a bool; non-string input is
simply invalid.
"""
from __future__ import annotations

import re
from typing import Any

EMAIL_MIN_LENGTH = 6
PHONE_MIN_LENGTH = 10
PASSWORD_MIN_LENGTH = 8

# \w is ASCII-only here so Cyrillic letters do not count as word characters.
EMAIL_RE = re.compile(
    r"[\w|\d][-a-z\d.+]{1,19}@[-_?=/+*'&%$!.\w\d]{1,15}\.\w{1,5}",
    re.IGNORECASE | re.ASCII,
)
# \s also matches Unicode spaces such as NBSP; digits stay ASCII.
PHONE_RE = re.compile(r"(-|\s)*(\+38)?(-|\s)*\(?((-|\s)*[0-9]){3}\)?((-|\s)*[0-9]){7}(-|\s)*")
PASSWORD_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[\w\d]+", re.ASCII)


def _matches(pattern: re.Pattern, value: Any, min_length: int) -> bool:
    if not isinstance(value, str) or len(value) < min_length:
        return False
    return pattern.fullmatch(value) is not None


def validate_email(email: Any) -> bool:
    return _matches(EMAIL_RE, email, EMAIL_MIN_LENGTH)


def validate_phone(phone: Any) -> bool:
    """Accepts e.g. ``+38 (099) 567 8901`` or ``099-567-89-01``."""
    return _matches(PHONE_RE, phone, PHONE_MIN_LENGTH)


def validate_password(password: Any) -> bool:
    return _matches(PASSWORD_RE, password, PASSWORD_MIN_LENGTH)
