"""
hostmap_sdk test configuration.

Tests never touch real DNS: every hostname used below ends in .invalid or
is answered from the resolution cache.
"""
from __future__ import annotations

import os
import socket

import pytest

# ── Force test configuration ──────────────────────────────────────────────
# These must be set before any hostmap_sdk modules are imported.

os.environ.setdefault("HOSTMAP_RESOLVER_BACKEND", "socket")
os.environ.setdefault("HOSTMAP_LOG_LEVEL", "DEBUG")
os.environ.setdefault("HOSTMAP_LOG_FORMAT", "console")
os.environ.setdefault("HOSTMAP_SERVICE_NAME", "test-service")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """
    Reset all cached singletons between tests and put the socket module's
    resolution functions back, so each test starts from a clean process state.
    """
    import hostmap_sdk.tier0_core.config as _config
    import hostmap_sdk.tier1_runtime.hostmap as _hostmap
    import hostmap_sdk.tier1_runtime.quorum as _quorum
    import hostmap_sdk.tier1_runtime.resolver as _resolver

    originals = {
        name: getattr(socket, name)
        for name in ("getaddrinfo", "gethostbyname", "gethostbyname_ex")
    }

    yield

    _quorum._reset_rewriter()
    _hostmap._reset_host_map()
    _resolver._reset_injector()
    _config._reset_config()
    for name, fn in originals.items():
        setattr(socket, name, fn)


@pytest.fixture
def explicit_resolver():
    """Return a fresh ExplicitResolver (no socket patching)."""
    from hostmap_sdk.tier1_runtime.resolver import ExplicitResolver
    return ExplicitResolver()


@pytest.fixture
def host_map(explicit_resolver):
    """Return an isolated HostMap over its own resolver."""
    from hostmap_sdk.tier1_runtime.hostmap import HostMap
    return HostMap(explicit_resolver)


@pytest.fixture
def socket_injector():
    """Install a SocketCacheInjector on the real socket module for one test."""
    from hostmap_sdk.tier1_runtime.resolver import SocketCacheInjector
    injector = SocketCacheInjector()
    yield injector
    injector.uninstall()
