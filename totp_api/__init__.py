"""TOTP API package.

Computes RFC 6238 time-based one-time passwords from base32 secrets and
serves them over a small HTTP API.
"""

__version__ = "0.1.0"

__all__ = [
    "api",
    "cli",
    "config",
    "engine",
    "errors",
    "models",
]
