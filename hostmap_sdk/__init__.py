"""
hostmap_sdk
───────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.

Typical startup:

    from hostmap_sdk import set_host, rewrite_config

    set_host("zookeeper1.bigdata", "192.168.1.10")
    set_host("regionserver1.bigdata", "192.168.1.22")
    conf = rewrite_config({"hbase.zookeeper.quorum": "zookeeper1.bigdata"})
    # hand conf to the cluster client; plain hostname connects now resolve
"""
from hostmap_sdk.tier0_core.logging import get_logger
from hostmap_sdk.tier0_core.errors import (
    HostMapError,
    InvalidAddressError,
    InvalidHostnameError,
    ResolverAccessError,
    ConfigurationError,
)
from hostmap_sdk.tier0_core.config import get_config, HostMapConfig
from hostmap_sdk.tier0_core.address import HostEntry
from hostmap_sdk.tier0_core.metrics import start_metrics_server

from hostmap_sdk.tier1_runtime.resolver import (
    ResolutionOverride,
    ExplicitResolver,
    SocketCacheInjector,
    get_injector,
    cached_addresses,
)
from hostmap_sdk.tier1_runtime.hostmap import (
    HostMap,
    get_host_map,
    set_host,
    resolve,
    load_static_hosts,
)
from hostmap_sdk.tier1_runtime.quorum import (
    QuorumRewriter,
    get_rewriter,
    resolve_quorum,
    rewrite_config,
)

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "HostMapError", "InvalidAddressError", "InvalidHostnameError",
    "ResolverAccessError", "ConfigurationError",
    # config
    "get_config", "HostMapConfig",
    # address
    "HostEntry",
    # metrics
    "start_metrics_server",
    # resolver
    "ResolutionOverride", "ExplicitResolver", "SocketCacheInjector",
    "get_injector", "cached_addresses",
    # hostmap
    "HostMap", "get_host_map", "set_host", "resolve", "load_static_hosts",
    # quorum
    "QuorumRewriter", "get_rewriter", "resolve_quorum", "rewrite_config",
]
