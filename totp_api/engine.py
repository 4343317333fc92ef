"""TOTP code generation (RFC 6238 over RFC 4226 HOTP).

Codes are 6-digit HMAC-SHA1 values over a 30 second time step, which is what
standard authenticator apps produce for a base32 shared secret.

The functions here are pure: the caller supplies the timestamp, nothing is
logged and nothing is cached, so they can be called concurrently without
any locking.
"""

from __future__ import annotations

import base64
import hmac
import math
import struct
import time
from dataclasses import dataclass
from datetime import datetime
from hashlib import sha1
from typing import Callable, Union

from .errors import EmptySecret, InvalidSecret

PERIOD = 30
DIGITS = 6

Timestamp = Union[int, float, datetime]


@dataclass(frozen=True)
class TotpResult:
    """A generated code and how long it stays valid.

    Attributes:
        code: Zero-padded 6-digit code.
        remaining: Seconds until the code rotates, in [1, PERIOD].
        counter: Time step the code was derived from.
    """

    code: str
    remaining: int
    counter: int


def normalize_secret(secret_text: str) -> str:
    """Strip separator spaces and uppercase the secret."""
    return secret_text.replace(" ", "").upper()


def decode_secret(secret_text: str) -> bytes:
    """Decode a base32 secret written without padding.

    Args:
        secret_text: Secret as entered by a user; spaces and case are ignored.

    Returns:
        The raw key bytes.

    Raises:
        InvalidSecret: The text is not unpadded base32.
        EmptySecret: Nothing is left after normalization.
    """
    stripped = secret_text.replace(" ", "")
    if not stripped.isascii():
        offset, char = next((i, c) for i, c in enumerate(stripped) if not c.isascii())
        raise InvalidSecret(f"illegal base32 data at input byte {offset} ({char!r})")
    value = normalize_secret(stripped).replace("\r", "").replace("\n", "")
    if not value:
        raise EmptySecret()
    if "=" in value:
        raise InvalidSecret(f"illegal padding character at offset {value.index('=')}")
    try:
        return base64.b32decode(value + "=" * (-len(value) % 8))
    except ValueError as exc:
        raise InvalidSecret(str(exc)) from exc


def _unix_seconds(at_time: Timestamp) -> int:
    if isinstance(at_time, datetime):
        at_time = at_time.timestamp()
    seconds = math.floor(at_time)
    if seconds < 0:
        raise ValueError(f"timestamp before the Unix epoch: {at_time}")
    return seconds


def time_counter(at_time: Timestamp) -> int:
    """Return the time step containing ``at_time``."""
    return _unix_seconds(at_time) // PERIOD


def remaining_seconds(at_time: Timestamp) -> int:
    """Return seconds left in the step containing ``at_time`` (1 to PERIOD)."""
    return PERIOD - _unix_seconds(at_time) % PERIOD


def hotp(key: bytes, counter: int) -> str:
    """Generate a 6-digit HOTP value with HMAC-SHA1.

    Args:
        key: Raw shared secret bytes.
        counter: Moving factor, packed as an unsigned 64-bit big-endian int.
    """
    digest = hmac.new(key, struct.pack(">Q", counter), sha1).digest()
    offset = digest[-1] & 0x0F
    truncated = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF
    return str(truncated % 10**DIGITS).zfill(DIGITS)


def compute(secret_text: str, at_time: Timestamp) -> TotpResult:
    """Compute the TOTP code for ``secret_text`` at ``at_time``.

    Args:
        secret_text: Base32 secret, case-insensitive, may contain spaces.
        at_time: Unix timestamp in seconds or a ``datetime``.

    Raises:
        InvalidSecret: The secret is not valid unpadded base32 or is empty.
    """
    key = decode_secret(secret_text)
    seconds = _unix_seconds(at_time)
    counter = seconds // PERIOD
    return TotpResult(
        code=hotp(key, counter),
        remaining=PERIOD - seconds % PERIOD,
        counter=counter,
    )


def compute_now(
    secret_text: str, clock: Callable[[], float] = time.time
) -> TotpResult:
    """Compute the code for the current second as reported by ``clock``."""
    return compute(secret_text, clock())
