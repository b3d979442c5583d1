# ============================================================================
# RESOURCE NAMING
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core - Deterministic remote resource names
# PURPOSE: Map backend node ports to health check resource names
# CREATED: 19 OCT 2026
# ============================================================================
"""
Resource Naming

Derives stable remote names from node ports:

    k8s-be-<port>--<cluster_name>

The cluster suffix is omitted when no cluster name is configured. Names are
truncated to the remote API's 63 character limit; the port always sits in
the prefix so truncation never collapses two ports onto one name.

Legacy HTTP/HTTPS health checks were created with the same backend name as
the unified resource, so legacy_name_for_port() returns the same value. It
is kept separate so the two schemes can diverge without touching callers.
"""

import re
from typing import Optional

from core.config import NamingDefaults, get_defaults
from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.NAMER)

_NAME_PATTERN = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])?$")


class Namer:
    """Port -> resource name mapping for a single cluster identity."""

    def __init__(self, cluster_name: Optional[str] = None, config: Optional[NamingDefaults] = None):
        self.config = config or get_defaults().naming
        self.cluster_name = self.config.cluster_name if cluster_name is None else cluster_name

    def _decorate(self, name: str) -> str:
        if self.cluster_name:
            name = f"{name}--{self.cluster_name}"
        return self._truncate(name)

    def _truncate(self, name: str) -> str:
        limit = self.config.max_name_length
        if len(name) <= limit:
            return name
        # Trailing hyphens are not valid in resource names
        truncated = name[:limit].rstrip("-")
        logger.debug(f"Truncated resource name {name} to {truncated}")
        return truncated

    def name_for_port(self, port: int) -> str:
        """Name of the unified health check for a node port."""
        if port < 0:
            raise ValueError(f"port must be non-negative, got {port}")
        return self._decorate(f"{self.config.prefix}-{self.config.backend_prefix}-{port}")

    def legacy_name_for_port(self, port: int) -> str:
        """Name of the legacy HTTP/HTTPS health checks for a node port."""
        return self.name_for_port(port)

    @staticmethod
    def is_valid_name(name: str) -> bool:
        """Check a name against the remote API's naming rules."""
        return len(name) <= 63 and bool(_NAME_PATTERN.match(name))


__all__ = ["Namer"]
