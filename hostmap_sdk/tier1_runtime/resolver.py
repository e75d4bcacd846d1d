"""
hostmap_sdk.tier1_runtime.resolver
───────────────────────────────────
Name-resolution cache injection. Seeds a process-wide positive/negative
cache that hostname resolution consults before any real lookup, so code
the subsystem does not control connects to the configured addresses.

Backends:
  - socket:   wraps socket.getaddrinfo / gethostbyname / gethostbyname_ex
              so every resolution in the process goes through the cache
  - explicit: no patching; collaborators resolve through the injector

Select via: HOSTMAP_RESOLVER_BACKEND=socket|explicit
"""
from __future__ import annotations

import socket
import threading
from collections.abc import Iterable
from typing import Any, Callable, Protocol, runtime_checkable

from hostmap_sdk.tier0_core.address import normalize_hostname, parse_address
from hostmap_sdk.tier0_core.errors import ResolverAccessError
from hostmap_sdk.tier0_core.logging import get_logger
from hostmap_sdk.tier0_core.metrics import resolver_lookups

log = get_logger(__name__)

# Resolution functions the socket backend takes over
_HOOKS = ("getaddrinfo", "gethostbyname", "gethostbyname_ex")

# Process-wide: one registration or seed completes before another begins
mutation_lock = threading.RLock()


# ── Provider protocol ─────────────────────────────────────────────────────────

@runtime_checkable
class ResolutionOverride(Protocol):
    def seed(self, hostname: str, addresses: Iterable[Any], positive: bool = True) -> bool: ...
    def lookup(self, hostname: str) -> tuple[str, ...] | None: ...


# ── Explicit resolver (fallback, no patching) ─────────────────────────────────

class ExplicitResolver:
    """
    Owns its own resolution cache. Nothing outside the subsystem is changed,
    so collaborators must call getaddrinfo()/gethostbyname() on this object
    instead of the socket module for overrides to apply.
    """

    def __init__(self) -> None:
        # hostname → addresses; an empty tuple marks a negative entry
        self._cache: dict[str, tuple[str, ...]] = {}
        self._getaddrinfo: Callable[..., list] = socket.getaddrinfo
        self._gethostbyname: Callable[[str], str] = socket.gethostbyname
        self._gethostbyname_ex: Callable[[str], tuple] = socket.gethostbyname_ex

    def seed(self, hostname: str, addresses: Iterable[Any], positive: bool = True) -> bool:
        """
        Cache addresses for hostname. A negative entry (positive=False) makes
        resolution fail without a lookup. Returns False if hostname is already
        cached; the first entry is kept.
        """
        key = normalize_hostname(hostname)
        values = tuple(str(parse_address(a)) for a in addresses) if positive else ()
        if positive and not values:
            raise ValueError("A positive cache entry needs at least one address.")
        with mutation_lock:
            if key in self._cache:
                log.debug("resolver.already_cached", hostname=key)
                return False
            self._cache[key] = values
        log.info("resolver.seeded", hostname=key, addresses=list(values), positive=positive)
        return True

    def lookup(self, hostname: str) -> tuple[str, ...] | None:
        """Cached addresses, () for a negative entry, None if not cached."""
        if not isinstance(hostname, str):
            return None
        return self._cache.get(hostname.strip().lower())

    def cached_hostnames(self) -> list[str]:
        return sorted(self._cache)

    # ── Resolution ────────────────────────────────────────────────────────────

    def getaddrinfo(
        self,
        host: Any,
        port: Any,
        family: int = 0,
        type: int = 0,
        proto: int = 0,
        flags: int = 0,
    ) -> list:
        addresses = self._cached_for(host)
        if addresses is None:
            return self._getaddrinfo(host, port, family, type, proto, flags)
        results: list = []
        for ip in addresses:
            results.extend(
                self._getaddrinfo(ip, port, family, type, proto, flags | socket.AI_NUMERICHOST)
            )
        return results

    def gethostbyname(self, hostname: Any) -> str:
        addresses = self._cached_for(hostname)
        if addresses is None:
            return self._gethostbyname(hostname)
        return addresses[0]

    def gethostbyname_ex(self, hostname: Any) -> tuple[str, list[str], list[str]]:
        addresses = self._cached_for(hostname)
        if addresses is None:
            return self._gethostbyname_ex(hostname)
        return hostname, [], list(addresses)

    def _cached_for(self, host: Any) -> tuple[str, ...] | None:
        if isinstance(host, (bytes, bytearray)):
            host = bytes(host).decode("ascii", errors="replace")
        addresses = self.lookup(host)
        if addresses is None:
            resolver_lookups(outcome="miss").inc()
            return None
        if not addresses:
            resolver_lookups(outcome="negative").inc()
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        resolver_lookups(outcome="hit").inc()
        return addresses


# ── Socket injector (native shim) ─────────────────────────────────────────────

class SocketCacheInjector(ExplicitResolver):
    """
    Takes over the socket module's resolution functions so every hostname
    lookup in the process (create_connection, asyncio, HTTP clients)
    sees the cache first. Raises ResolverAccessError at construction if the
    hooks are unavailable.
    """

    def __init__(self, module: Any = socket, install: bool = True) -> None:
        super().__init__()
        self._module = module
        self._originals: dict[str, Callable] = {}
        self._wrappers: dict[str, Callable] = {}
        missing = [name for name in _HOOKS if not callable(getattr(module, name, None))]
        if missing:
            raise ResolverAccessError(
                "resolver_hooks_unavailable",
                "Hostname overrides cannot be installed in this runtime.",
                detail=f"{getattr(module, '__name__', module)!r} lacks {', '.join(missing)}",
            )
        self._getaddrinfo = module.getaddrinfo
        self._gethostbyname = module.gethostbyname
        self._gethostbyname_ex = module.gethostbyname_ex
        if install:
            self.install()

    @property
    def installed(self) -> bool:
        return bool(self._wrappers) and all(
            getattr(self._module, name) is wrapper for name, wrapper in self._wrappers.items()
        )

    def install(self) -> None:
        with mutation_lock:
            if self._wrappers:
                return
            for name in _HOOKS:
                self._originals[name] = getattr(self._module, name)
            self._getaddrinfo = self._originals["getaddrinfo"]
            self._gethostbyname = self._originals["gethostbyname"]
            self._gethostbyname_ex = self._originals["gethostbyname_ex"]
            self._wrappers = {
                "getaddrinfo": self.getaddrinfo,
                "gethostbyname": self.gethostbyname,
                "gethostbyname_ex": self.gethostbyname_ex,
            }
            for name, wrapper in self._wrappers.items():
                setattr(self._module, name, wrapper)
        log.info("resolver.installed", hooks=list(_HOOKS))

    def uninstall(self) -> None:
        """Restore the original resolution functions. Intended for tests."""
        with mutation_lock:
            for name, wrapper in self._wrappers.items():
                if getattr(self._module, name) is not wrapper:
                    log.warning("resolver.hook_replaced", hook=name)
                    continue
                setattr(self._module, name, self._originals[name])
            self._wrappers = {}
        log.info("resolver.uninstalled")


# ── Provider registry ─────────────────────────────────────────────────────────

_injector: ResolutionOverride | None = None


def _build_injector() -> ResolutionOverride:
    from hostmap_sdk.tier0_core.config import get_config

    name = get_config().resolver_backend
    if name == "explicit":
        return ExplicitResolver()
    return SocketCacheInjector()


def get_injector() -> ResolutionOverride:
    global _injector
    if _injector is None:
        with mutation_lock:
            if _injector is None:
                _injector = _build_injector()
    return _injector


def _reset_injector() -> None:
    global _injector
    with mutation_lock:
        if isinstance(_injector, SocketCacheInjector):
            _injector.uninstall()
        _injector = None


# ── Public API ────────────────────────────────────────────────────────────────

def cached_addresses(hostname: str) -> tuple[str, ...] | None:
    """Return what the resolution cache holds for hostname, or None."""
    return get_injector().lookup(hostname)


__all__ = [
    "ResolutionOverride",
    "ExplicitResolver",
    "SocketCacheInjector",
    "get_injector",
    "cached_addresses",
]
