# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Model exports
# PURPOSE: Central export point for all wire models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the remote compute API's health check resources.
The domain value (healthchecks.value.HealthCheck) converts to and from these.
"""

from core.models.health_check import (
    ProbeSpec,
    AlphaProbeSpec,
    ComputeHealthCheck,
    AlphaComputeHealthCheck,
    LegacyHealthCheckBase,
    LegacyHTTPHealthCheck,
    LegacyHTTPSHealthCheck,
)

__all__ = [
    # Probe sub-objects
    "ProbeSpec",
    "AlphaProbeSpec",
    # Unified resource
    "ComputeHealthCheck",
    "AlphaComputeHealthCheck",
    # Legacy resources
    "LegacyHealthCheckBase",
    "LegacyHTTPHealthCheck",
    "LegacyHTTPSHealthCheck",
]
