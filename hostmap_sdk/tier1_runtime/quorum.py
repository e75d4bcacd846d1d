"""
hostmap_sdk.tier1_runtime.quorum
─────────────────────────────────
Rewrites coordination-service member lists ("zk1,zk2:2181,zk3") so each
hostname is replaced by its mapped address. Ports, order and token count
are preserved; a token that cannot be parsed is passed through as-is.

Usage:
    resolve_quorum("zookeeper1.bigdata:2181,zookeeper2.bigdata:2181")
    # "192.168.1.10:2181,192.168.1.11:2181"

    conf = rewrite_config({"hbase.zookeeper.quorum": "zookeeper1.bigdata,zookeeper2.bigdata"})
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from hostmap_sdk.tier0_core.logging import get_logger
from hostmap_sdk.tier1_runtime.hostmap import HostMap, get_host_map

log = get_logger(__name__)

# Connection-config keys holding a member list
DEFAULT_QUORUM_KEYS: tuple[str, ...] = (
    "hbase.zookeeper.quorum",
    "zookeeper.connect",
)


class QuorumRewriter:
    def __init__(self, host_map: HostMap | None = None) -> None:
        self._host_map = host_map

    @property
    def host_map(self) -> HostMap:
        return self._host_map if self._host_map is not None else get_host_map()

    def rewrite(self, members: str) -> str:
        """Return members with every mapped host replaced. Never raises."""
        return ",".join(self._rewrite_token(token) for token in members.split(","))

    def rewrite_config(
        self,
        config: Mapping[str, str],
        keys: Iterable[str] = DEFAULT_QUORUM_KEYS,
    ) -> dict[str, str]:
        """Copy of config with each member-list key in keys rewritten."""
        rewritten = dict(config)
        for key in keys:
            value = rewritten.get(key)
            if isinstance(value, str):
                rewritten[key] = self.rewrite(value)
        return rewritten

    def _rewrite_token(self, token: str) -> str:
        parts = token.split(":")
        if len(parts) > 2:
            log.debug("quorum.malformed_token", token=token)
            return token
        host = parts[0]
        resolved = self.host_map.get(host.strip())
        if resolved == host.strip():
            resolved = host
        if len(parts) == 2:
            return f"{resolved}:{parts[1]}"
        return resolved


# ── Singleton registry ────────────────────────────────────────────────────────

_rewriter: QuorumRewriter | None = None


def get_rewriter() -> QuorumRewriter:
    global _rewriter
    if _rewriter is None:
        _rewriter = QuorumRewriter()
    return _rewriter


def _reset_rewriter() -> None:
    global _rewriter
    _rewriter = None


# ── Public API ────────────────────────────────────────────────────────────────

def resolve_quorum(members: str) -> str:
    """Rewrite a comma-separated host[:port] list with mapped addresses."""
    return get_rewriter().rewrite(members)


def rewrite_config(
    config: Mapping[str, str],
    keys: Iterable[str] = DEFAULT_QUORUM_KEYS,
) -> dict[str, str]:
    """
    Return a copy of a flat connection config with its quorum keys rewritten.
    Call before handing the config to the cluster client.
    """
    return get_rewriter().rewrite_config(config, keys)


__all__ = [
    "QuorumRewriter",
    "DEFAULT_QUORUM_KEYS",
    "get_rewriter",
    "resolve_quorum",
    "rewrite_config",
]
