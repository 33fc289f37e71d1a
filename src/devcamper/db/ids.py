"""Resource identifiers.

Identifiers are 24 lowercase hex characters: a 4-byte big-endian creation
timestamp followed by 8 random bytes.
"""

import re
import secrets
import time

from devcamper.exceptions import BadIdentifierError

ID_LENGTH = 24

_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_id() -> str:
    timestamp = int(time.time()).to_bytes(4, "big")
    return (timestamp + secrets.token_bytes(8)).hex()


def is_valid_id(value: str) -> bool:
    return bool(_ID_PATTERN.match(value))


def parse_id(value: str) -> str:
    """Normalize a path identifier or raise BadIdentifierError."""
    if not is_valid_id(value):
        raise BadIdentifierError(value)
    return value.lower()
