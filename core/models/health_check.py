# ============================================================================
# HEALTH CHECK WIRE MODELS
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core - Remote compute API health check resources
# PURPOSE: Pydantic models for the unified, alpha and legacy wire formats
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Wire Models

Mirror the remote compute API's JSON resources:

- ComputeHealthCheck: unified resource on the stable surface
- AlphaComputeHealthCheck: unified resource on the advanced surface
  (adds portSpecification to the probe sub-objects)
- LegacyHTTPHealthCheck / LegacyHTTPSHealthCheck: the two protocol-specific
  kinds that predate the unified resource

The unified resource is a discriminated union keyed by `type`: only the
probe sub-object matching `type` may be populated. These models describe the
shape only; HealthCheck.to_wire() is what enforces the union.

Field names are snake_case in Python and camelCase on the wire:
    ComputeHealthCheck.model_validate(api_json)
    hc.to_api_dict()
"""

from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field


_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


# ============================================================================
# PROBE SUB-OBJECTS
# ============================================================================

class ProbeSpec(BaseModel):
    """HTTP-family probe settings (httpHealthCheck / httpsHealthCheck / http2HealthCheck)."""

    model_config = _WIRE_CONFIG

    port: Optional[int] = Field(default=None, ge=0, le=65535)
    port_name: Optional[str] = Field(default=None, alias="portName")
    request_path: Optional[str] = Field(default=None, alias="requestPath")
    host: Optional[str] = None
    proxy_header: Optional[str] = Field(default=None, alias="proxyHeader")
    response: Optional[str] = None


class AlphaProbeSpec(ProbeSpec):
    """Probe settings on the advanced surface."""

    port_specification: Optional[str] = Field(default=None, alias="portSpecification")


# ============================================================================
# UNIFIED RESOURCE
# ============================================================================

class ComputeHealthCheck(BaseModel):
    """
    Unified health check resource (stable surface).

    `fingerprint` is issued by the remote API on every read and must be
    echoed back on update; a stale value is rejected.
    """

    model_config = _WIRE_CONFIG

    PROBE_FIELDS: ClassVar[List[str]] = [
        "http_health_check",
        "https_health_check",
        "http2_health_check",
    ]

    kind: str = "compute#healthCheck"
    id: Optional[str] = None
    name: str = Field(default="", max_length=63)
    description: Optional[str] = None
    creation_timestamp: Optional[str] = Field(default=None, alias="creationTimestamp")
    self_link: Optional[str] = Field(default=None, alias="selfLink")
    fingerprint: Optional[str] = None

    type: Optional[str] = None
    check_interval_sec: Optional[int] = Field(default=None, alias="checkIntervalSec")
    timeout_sec: Optional[int] = Field(default=None, alias="timeoutSec")
    healthy_threshold: Optional[int] = Field(default=None, alias="healthyThreshold")
    unhealthy_threshold: Optional[int] = Field(default=None, alias="unhealthyThreshold")

    http_health_check: Optional[ProbeSpec] = Field(default=None, alias="httpHealthCheck")
    https_health_check: Optional[ProbeSpec] = Field(default=None, alias="httpsHealthCheck")
    http2_health_check: Optional[ProbeSpec] = Field(default=None, alias="http2HealthCheck")

    def populated_probes(self) -> List[str]:
        """Names of the probe sub-objects that are set."""
        return [f for f in self.PROBE_FIELDS if getattr(self, f) is not None]

    def to_api_dict(self) -> dict:
        """Serialize to the remote API's JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AlphaComputeHealthCheck(ComputeHealthCheck):
    """Unified health check resource (advanced surface)."""

    http_health_check: Optional[AlphaProbeSpec] = Field(default=None, alias="httpHealthCheck")
    https_health_check: Optional[AlphaProbeSpec] = Field(default=None, alias="httpsHealthCheck")
    http2_health_check: Optional[AlphaProbeSpec] = Field(default=None, alias="http2HealthCheck")


# ============================================================================
# LEGACY RESOURCES
# ============================================================================

class LegacyHealthCheckBase(BaseModel):
    """Flat fields shared by the legacy HTTP and HTTPS kinds."""

    model_config = _WIRE_CONFIG

    kind: str = ""
    id: Optional[str] = None
    name: str = Field(default="", max_length=63)
    description: Optional[str] = None
    creation_timestamp: Optional[str] = Field(default=None, alias="creationTimestamp")
    self_link: Optional[str] = Field(default=None, alias="selfLink")

    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=0, le=65535)
    request_path: Optional[str] = Field(default=None, alias="requestPath")
    check_interval_sec: Optional[int] = Field(default=None, alias="checkIntervalSec")
    timeout_sec: Optional[int] = Field(default=None, alias="timeoutSec")
    healthy_threshold: Optional[int] = Field(default=None, alias="healthyThreshold")
    unhealthy_threshold: Optional[int] = Field(default=None, alias="unhealthyThreshold")

    def to_api_dict(self) -> dict:
        """Serialize to the remote API's JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LegacyHTTPHealthCheck(LegacyHealthCheckBase):
    """Legacy HTTP-kind health check."""

    kind: str = "compute#httpHealthCheck"


class LegacyHTTPSHealthCheck(LegacyHealthCheckBase):
    """Legacy HTTPS-kind health check."""

    kind: str = "compute#httpsHealthCheck"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeSpec",
    "AlphaProbeSpec",
    "ComputeHealthCheck",
    "AlphaComputeHealthCheck",
    "LegacyHealthCheckBase",
    "LegacyHTTPHealthCheck",
    "LegacyHTTPSHealthCheck",
]
