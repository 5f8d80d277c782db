"""Format of provider subject ids.

Shared by the Google identity verifier, which parses ids off the wire, and
the IAM ``ExternalId`` value object, which holds them.
"""

import re

MAX_EXTERNAL_ID = 2**64 - 1

_DECIMAL_DIGITS = re.compile(r"[0-9]+")


def is_decimal_string(value: object) -> bool:
    """True for a non-empty string of ASCII digits, with no sign or spaces."""
    return isinstance(value, str) and _DECIMAL_DIGITS.fullmatch(value) is not None
