"""
hostmap_sdk.tier0_core.address
───────────────────────────────
HostEntry (a hostname paired with a literal IPv4 address) and the
parsing rules registration goes through. Only strict dotted-quad strings
(four decimal octets in [0, 255], no leading zeros) and 4-byte values are
accepted; anything else raises InvalidAddressError.
"""
from __future__ import annotations

import ipaddress
from collections.abc import Sequence
from dataclasses import dataclass

from hostmap_sdk.tier0_core.errors import InvalidAddressError, InvalidHostnameError

AddressLike = str | bytes | bytearray | Sequence[int] | ipaddress.IPv4Address


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HostEntry:
    """One committed hostname → IPv4 mapping."""
    hostname: str
    address: ipaddress.IPv4Address

    @property
    def ip(self) -> str:
        return str(self.address)

    @property
    def packed(self) -> bytes:
        return self.address.packed

    @classmethod
    def create(cls, hostname: str, address: AddressLike) -> "HostEntry":
        return cls(hostname=normalize_hostname(hostname), address=parse_address(address))


# ── Parsing ──────────────────────────────────────────────────────────────────

def normalize_hostname(hostname: str) -> str:
    """Strip and lower-case a hostname. Raises InvalidHostnameError if empty."""
    if not isinstance(hostname, str) or not hostname.strip():
        raise InvalidHostnameError(
            user_message=f"Hostname must be a non-empty string, got {hostname!r}",
        )
    return hostname.strip().lower()


def parse_address(address: AddressLike) -> ipaddress.IPv4Address:
    """
    Parse a dotted-quad string or a 4-byte value into an IPv4Address.

        parse_address("192.168.1.10")
        parse_address(b"\\xc0\\xa8\\x01\\x0a")
        parse_address([192, 168, 1, 10])
    """
    if isinstance(address, ipaddress.IPv4Address):
        return address
    if isinstance(address, str):
        raw: str | bytes = address.strip()
    elif isinstance(address, (bytes, bytearray)):
        raw = bytes(address)
    elif isinstance(address, Sequence):
        try:
            raw = bytes(address)
        except (TypeError, ValueError) as exc:
            raise InvalidAddressError(address) from exc
    else:
        raise InvalidAddressError(address)

    if isinstance(raw, bytes) and len(raw) != 4:
        raise InvalidAddressError(
            address, f"IPv4 address must be exactly 4 bytes, got {len(raw)}"
        )
    try:
        return ipaddress.IPv4Address(raw)
    except ipaddress.AddressValueError as exc:
        raise InvalidAddressError(address) from exc


__all__ = ["HostEntry", "AddressLike", "normalize_hostname", "parse_address"]
