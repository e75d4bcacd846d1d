"""
hostmap_sdk.tier0_core.errors
──────────────────────────────
Error taxonomy for the resolution-override subsystem. Registration and
initialization failures raise one of these; lookups and quorum rewrites
never raise.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class HostMapError(Exception):
    """
    Base class for all hostmap errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to operators
    - detail: internal context (the offending value, the missing hook...)
    """

    code: str = "hostmap_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Host mapping failed.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class InvalidAddressError(HostMapError):
    """Malformed IPv4 literal or wrong byte length passed to set()."""
    code = "invalid_address"

    def __init__(
        self,
        address: Any = None,
        user_message: str | None = None,
        **metadata: Any,
    ) -> None:
        self.address = address
        super().__init__(
            None,
            user_message or f"Invalid IPv4 address: {address!r}",
            **metadata,
        )


class InvalidHostnameError(HostMapError):
    """Hostname is empty or not a string."""
    code = "invalid_hostname"


class ResolverAccessError(HostMapError):
    """The resolution hooks of the runtime cannot be reached. Fatal."""
    code = "resolver_access_error"


class ConfigurationError(HostMapError):
    """Misconfiguration detected at startup."""
    code = "configuration_error"


__all__ = [
    "HostMapError",
    "InvalidAddressError",
    "InvalidHostnameError",
    "ResolverAccessError",
    "ConfigurationError",
]
