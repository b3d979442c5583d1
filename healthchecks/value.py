# ============================================================================
# HEALTH CHECK VALUE
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Health check working copy and wire conversion
# PURPOSE: Tagged-variant health check plus to/from remote wire format
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Value

The reconciler's unit of work. A HealthCheck is a transient working copy of
one remote health check: built by HealthChecker.new() or .get(), mutated by
the caller, pushed by HealthChecker.sync(). Remote state is authoritative.

Internally the value is a tagged variant: `protocol` plus one flat set of
probe fields. The wire format is a union of protocol sub-objects, and the
conversion methods are the only place the two meet:

    to_wire()        -> ComputeHealthCheck       (stable surface)
    to_alpha_wire()  -> AlphaComputeHealthCheck  (advanced surface)
    from_wire(wire)  -> HealthCheck              (either surface)

to_wire() populates only the sub-object matching `protocol`. from_wire()
reads only the sub-object matching the wire `type`. A missing sub-object, or
a `type` outside the Protocol set, yields zero-valued probe fields rather
than an error; an unrecognized `type` is kept verbatim on the value.
to_wire() and protocol_of() are the only places that reject it.

Remote metadata (fingerprint, self_link, creation_timestamp) is carried
through unmodified and never fabricated.
"""

from typing import Optional, Type, Union

from pydantic import BaseModel, Field

from core.config import HealthCheckDefaults, get_defaults
from core.contracts import PortSpecification, Protocol
from core.models import (
    AlphaComputeHealthCheck,
    AlphaProbeSpec,
    ComputeHealthCheck,
    ProbeSpec,
)
from healthchecks.errors import ConversionError

WireHealthCheck = Union[ComputeHealthCheck, AlphaComputeHealthCheck]


class HealthCheck(BaseModel):
    """
    In-memory representation of one unified health check.

    `port` is meaningful only while `port_specification` is unset. With
    USE_SERVING_PORT the probe follows the backend's serving port and
    `port` stays 0.
    """

    name: str = ""
    # Unrecognized wire types are kept verbatim so a drifted check can be read
    # and repaired; only to_wire()/protocol_of() reject them
    protocol: Union[Protocol, str] = Protocol.HTTP
    port: int = Field(default=0, ge=0, le=65535)
    port_specification: Optional[PortSpecification] = None
    request_path: str = ""
    host: str = ""
    description: str = ""

    check_interval_sec: int = 0
    timeout_sec: int = 0
    healthy_threshold: int = 0
    unhealthy_threshold: int = 0

    # Remote metadata, read-only from the reconciler's point of view
    fingerprint: Optional[str] = None
    self_link: Optional[str] = None
    creation_timestamp: Optional[str] = None

    @property
    def uses_serving_port(self) -> bool:
        """True when the probe follows the backend's serving port."""
        return self.port_specification == PortSpecification.USE_SERVING_PORT

    # ------------------------------------------------------------------
    # VALIDATION
    # ------------------------------------------------------------------

    def _resolved_protocol(self) -> Protocol:
        protocol = Protocol.parse(self.protocol)
        if protocol is None:
            raise ConversionError(
                f"Unsupported health check protocol: {self.protocol!r}",
                name=self.name,
                operation="to_wire",
            )
        return protocol

    def _check_invariants(self) -> None:
        if self.timeout_sec > self.check_interval_sec:
            raise ConversionError(
                f"timeout_sec ({self.timeout_sec}) exceeds "
                f"check_interval_sec ({self.check_interval_sec})",
                name=self.name,
                operation="to_wire",
            )
        if self.uses_serving_port and self.port:
            raise ConversionError(
                f"port must be 0 with {PortSpecification.USE_SERVING_PORT.value}, got {self.port}",
                name=self.name,
                port=self.port,
                operation="to_wire",
            )

    # ------------------------------------------------------------------
    # WIRE CONVERSION
    # ------------------------------------------------------------------

    def _build_wire(
        self,
        wire_cls: Type[ComputeHealthCheck],
        probe_cls: Type[ProbeSpec],
        **probe_extra,
    ) -> ComputeHealthCheck:
        protocol = self._resolved_protocol()
        self._check_invariants()

        probe = probe_cls(
            port=self.port or None,
            request_path=self.request_path,
            host=self.host or None,
            **probe_extra,
        )

        # Every other probe field stays unset
        return wire_cls(
            **{protocol.wire_field: probe},
            name=self.name,
            description=self.description or None,
            type=protocol.value,
            check_interval_sec=self.check_interval_sec,
            timeout_sec=self.timeout_sec,
            healthy_threshold=self.healthy_threshold,
            unhealthy_threshold=self.unhealthy_threshold,
            fingerprint=self.fingerprint,
            self_link=self.self_link,
            creation_timestamp=self.creation_timestamp,
        )

    def to_wire(self) -> ComputeHealthCheck:
        """
        Build the stable-surface resource.

        Raises:
            ConversionError: Unknown protocol, violated invariant, or a port
                specification (only the advanced surface can carry one).
        """
        if self.port_specification is not None:
            raise ConversionError(
                "port specification requires the advanced API surface",
                name=self.name,
                operation="to_wire",
            )
        return self._build_wire(ComputeHealthCheck, ProbeSpec)

    def to_alpha_wire(self) -> AlphaComputeHealthCheck:
        """
        Build the advanced-surface resource.

        Raises:
            ConversionError: Unknown protocol or violated invariant.
        """
        spec = self.port_specification.value if self.port_specification else None
        return self._build_wire(AlphaComputeHealthCheck, AlphaProbeSpec, port_specification=spec)

    @classmethod
    def from_wire(cls, wire: WireHealthCheck) -> "HealthCheck":
        """
        Build a value from either surface's resource.

        Never fails: an unrecognized `type` is carried as a plain string
        with zero-valued probe fields.
        """
        protocol = Protocol.parse(wire.type) if wire.type else None
        if protocol is None:
            probe = ProbeSpec()
        else:
            probe = getattr(wire, protocol.wire_field) or ProbeSpec()

        spec = getattr(probe, "port_specification", None)
        port_specification = (
            PortSpecification.USE_SERVING_PORT
            if spec == PortSpecification.USE_SERVING_PORT.value
            else None
        )

        return cls(
            name=wire.name,
            protocol=protocol or wire.type or "",
            port=probe.port or 0,
            port_specification=port_specification,
            request_path=probe.request_path or "",
            host=probe.host or "",
            description=wire.description or "",
            check_interval_sec=wire.check_interval_sec or 0,
            timeout_sec=wire.timeout_sec or 0,
            healthy_threshold=wire.healthy_threshold or 0,
            unhealthy_threshold=wire.unhealthy_threshold or 0,
            fingerprint=wire.fingerprint,
            self_link=wire.self_link,
            creation_timestamp=wire.creation_timestamp,
        )


# ============================================================================
# CONSTRUCTION HELPERS
# ============================================================================

def default_health_check(
    port: int,
    protocol: Protocol,
    defaults: Optional[HealthCheckDefaults] = None,
) -> HealthCheck:
    """
    Build an unnamed health check with the configured defaults.

    Args:
        port: Node port to probe
        protocol: Probe protocol
        defaults: Cadence/path defaults (global defaults if omitted)
    """
    defaults = defaults or get_defaults().health_check
    return HealthCheck(
        port=port,
        protocol=protocol,
        request_path=defaults.request_path,
        description=defaults.description,
        check_interval_sec=defaults.check_interval_sec,
        timeout_sec=defaults.timeout_sec,
        healthy_threshold=defaults.healthy_threshold,
        unhealthy_threshold=defaults.unhealthy_threshold,
    )


def protocol_of(hc: HealthCheck) -> Protocol:
    """Protocol of a health check value."""
    return hc._resolved_protocol()


__all__ = [
    "HealthCheck",
    "WireHealthCheck",
    "default_health_check",
    "protocol_of",
]
