# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for probe cadence and resource naming
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the defaults applied to newly built health checks and the
settings used to derive remote resource names.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class HealthCheckDefaults:
    """
    Defaults for new health checks.

    Cadence values are what the load balancer uses until a caller
    overrides them on a value read back with get().
    """
    # Probe target
    request_path: str = "/"
    description: str = "Default kubernetes L7 Loadbalancing health check."

    # Cadence (seconds)
    check_interval_sec: int = 60
    timeout_sec: int = 60  # must not exceed check_interval_sec

    # Thresholds (consecutive probes)
    healthy_threshold: int = 1
    unhealthy_threshold: int = 10

    def __post_init__(self):
        if self.timeout_sec > self.check_interval_sec:
            raise ValueError(
                f"timeout_sec ({self.timeout_sec}) must not exceed "
                f"check_interval_sec ({self.check_interval_sec})"
            )

    @classmethod
    def from_env(cls) -> "HealthCheckDefaults":
        """Create from environment variables."""
        return cls(
            request_path=os.getenv("HEALTH_CHECK_DEFAULT_PATH", "/"),
            description=os.getenv("HEALTH_CHECK_DESCRIPTION", cls.description),
            check_interval_sec=int(os.getenv("HEALTH_CHECK_INTERVAL_SEC", 60)),
            timeout_sec=int(os.getenv("HEALTH_CHECK_TIMEOUT_SEC", 60)),
            healthy_threshold=int(os.getenv("HEALTH_CHECK_HEALTHY_THRESHOLD", 1)),
            unhealthy_threshold=int(os.getenv("HEALTH_CHECK_UNHEALTHY_THRESHOLD", 10)),
        )


@dataclass(frozen=True)
class NamingDefaults:
    """
    Defaults for remote resource naming.

    Controls the backend name prefix and cluster suffix.
    max_name_length is the remote API limit and is not read from the
    environment.
    """
    prefix: str = "k8s"
    backend_prefix: str = "be"
    cluster_name: str = ""

    # Remote API limit (RFC1035 label)
    max_name_length: int = 63

    @classmethod
    def from_env(cls) -> "NamingDefaults":
        """Create from environment variables."""
        return cls(
            prefix=os.getenv("RESOURCE_NAME_PREFIX", "k8s"),
            backend_prefix=os.getenv("RESOURCE_BACKEND_PREFIX", "be"),
            cluster_name=os.getenv("CLUSTER_NAME", ""),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    health_check: HealthCheckDefaults = field(default_factory=HealthCheckDefaults)
    naming: NamingDefaults = field(default_factory=NamingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            health_check=HealthCheckDefaults.from_env(),
            naming=NamingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckDefaults",
    "NamingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
