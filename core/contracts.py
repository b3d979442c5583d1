# ============================================================================
# HEALTH CHECK CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Foundation - Core enums shared by domain and wire models
# PURPOSE: Define probe protocols and port binding modes
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Protocol, PortSpecification
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the health check reconciler.

These enums cross every boundary:
- Domain (HealthCheck value)
- Wire (remote compute API JSON)
- Naming (legacy vs unified resources)

Values match the remote API's string constants exactly.
"""

from enum import Enum
from typing import Optional


# ============================================================================
# PROTOCOL
# ============================================================================

class Protocol(str, Enum):
    """
    Probe protocols supported by the unified health check resource.

    The protocol is the discriminator of the wire union: it selects which
    of httpHealthCheck / httpsHealthCheck / http2HealthCheck is populated.
    """
    HTTP = "HTTP"
    HTTPS = "HTTPS"
    HTTP2 = "HTTP2"

    @property
    def wire_field(self) -> str:
        """Name of the wire sub-object carrying this protocol's settings."""
        return {
            Protocol.HTTP: "http_health_check",
            Protocol.HTTPS: "https_health_check",
            Protocol.HTTP2: "http2_health_check",
        }[self]

    @classmethod
    def parse(cls, value: str) -> Optional["Protocol"]:
        """Return the member for a wire string, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


# ============================================================================
# PORT SPECIFICATION
# ============================================================================

class PortSpecification(str, Enum):
    """
    Port binding modes.

    Only defined on the advanced (alpha) API surface. An unset
    specification (None) means the check probes a fixed port number.
    """
    USE_SERVING_PORT = "USE_SERVING_PORT"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Protocol",
    "PortSpecification",
]
