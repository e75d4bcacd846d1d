"""
hostmap_sdk.tier1_runtime.hostmap
──────────────────────────────────
Process-wide hostname → IPv4 table. Every committed registration also
seeds the resolution cache, so later "connect by hostname" calls anywhere
in the process reach the configured address without DNS or /etc/hosts.

Usage:
    set_host("zookeeper1.bigdata", "192.168.1.10")
    set_host("zookeeper2.bigdata", b"\\xc0\\xa8\\x01\\x0b")

    resolve("zookeeper1.bigdata")   # "192.168.1.10"
    resolve("unknown.bigdata")      # "unknown.bigdata" (passthrough)

Registrations are first-writer-wins: a hostname that is already cached is
left untouched and set() returns False.
"""
from __future__ import annotations

import threading

from hostmap_sdk.tier0_core.address import AddressLike, HostEntry
from hostmap_sdk.tier0_core.config import HostMapConfig, get_config
from hostmap_sdk.tier0_core.logging import get_logger
from hostmap_sdk.tier0_core.metrics import registrations
from hostmap_sdk.tier1_runtime.resolver import ResolutionOverride, get_injector, mutation_lock

log = get_logger(__name__)


class HostMap:
    """
    Hostname → HostEntry table bound to one resolution cache.

    set() is a fallible command (InvalidAddressError, InvalidHostnameError);
    get() is a total query that never raises.
    """

    def __init__(self, injector: ResolutionOverride | None = None) -> None:
        self._injector = injector if injector is not None else get_injector()
        self._entries: dict[str, HostEntry] = {}

    @property
    def injector(self) -> ResolutionOverride:
        return self._injector

    def set(self, hostname: str, address: AddressLike) -> bool:
        """
        Register hostname → address and seed the resolution cache.

        Args:
            hostname: Non-empty hostname, compared case-insensitively.
            address:  Dotted-quad string or a 4-byte value.

        Returns:
            True if committed, False if the hostname was already cached.
        """
        # Validate before touching any state
        entry = HostEntry.create(hostname, address)
        with mutation_lock:
            if entry.hostname in self._entries or not self._injector.seed(
                entry.hostname, [entry.address]
            ):
                registrations(outcome="ignored").inc()
                log.info("hostmap.ignored", hostname=entry.hostname, ip=entry.ip)
                return False
            self._entries[entry.hostname] = entry
        registrations(outcome="committed").inc()
        log.info("hostmap.committed", hostname=entry.hostname, ip=entry.ip)
        return True

    def get(self, hostname: str) -> str:
        """Mapped address for hostname, or hostname itself when unmapped."""
        if not isinstance(hostname, str):
            return hostname
        key = hostname.strip().lower()
        entry = self._entries.get(key)
        if entry is not None:
            return entry.ip
        cached = self._injector.lookup(key)
        if cached:
            return cached[0]
        return hostname

    def entries(self) -> list[HostEntry]:
        return sorted(self._entries.values(), key=lambda e: e.hostname)

    def __contains__(self, hostname: object) -> bool:
        return isinstance(hostname, str) and hostname.strip().lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# ── Singleton registry ────────────────────────────────────────────────────────

_host_map: HostMap | None = None
_init_lock = threading.Lock()


def get_host_map() -> HostMap:
    global _host_map
    if _host_map is None:
        with _init_lock:
            if _host_map is None:
                _host_map = HostMap()
    return _host_map


def _reset_host_map() -> None:
    global _host_map
    _host_map = None


# ── Public API ────────────────────────────────────────────────────────────────

def set_host(hostname: str, ip: AddressLike) -> bool:
    """Register hostname → ip. Call before any connection attempt."""
    return get_host_map().set(hostname, ip)


def resolve(hostname: str) -> str:
    """Return the mapped IP for hostname, or hostname unchanged."""
    return get_host_map().get(hostname)


def load_static_hosts(config: HostMapConfig | None = None) -> int:
    """
    Register every HOSTMAP_HOSTS pair. Explicit opt-in; nothing is loaded
    automatically. Returns the number of newly committed hostnames.
    """
    config = config or get_config()
    committed = 0
    for hostname, ip in config.static_hosts:
        if set_host(hostname, ip):
            committed += 1
    log.info("hostmap.static_hosts_loaded", committed=committed)
    return committed


__all__ = [
    "HostMap",
    "get_host_map",
    "set_host",
    "resolve",
    "load_static_hosts",
]
