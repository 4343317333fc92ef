"""Error types for the TOTP API.

Every failure is a client input problem and maps to a 400 response.
"""

from __future__ import annotations


class TotpApiError(Exception):
    """Base error rendered as a failure envelope by the HTTP layer."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidSecret(TotpApiError):
    """The secret could not be decoded as unpadded base32."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid secret key: {detail}")
        self.detail = detail


class EmptySecret(InvalidSecret):
    """The secret normalized to nothing, so there is no key to hash with."""

    def __init__(self) -> None:
        super().__init__("secret is empty")


class MissingInput(TotpApiError):
    def __init__(self) -> None:
        super().__init__("missing secret parameter")


class MalformedRequest(TotpApiError):
    def __init__(self) -> None:
        super().__init__("invalid JSON body")
