# ============================================================================
# API SURFACES
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Stable vs advanced remote API strategies
# PURPOSE: One operation set, two implementations chosen by capability flag
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Surfaces

The unified health check resource is reachable through two API surfaces:

- stable: the generally available API
- alpha: the advanced API, the only one that defines portSpecification

HealthChecker's control flow is written once against HealthCheckSurface;
select_surface() picks the implementation from the serving-port flag.
"""

from abc import ABC, abstractmethod

from healthchecks.provider import HealthCheckProvider
from healthchecks.value import HealthCheck, WireHealthCheck


class HealthCheckSurface(ABC):
    """Read/write strategy for one API surface."""

    name: str = ""

    def __init__(self, provider: HealthCheckProvider):
        self.provider = provider

    @abstractmethod
    def to_wire(self, hc: HealthCheck) -> WireHealthCheck:
        """Convert a value to this surface's resource."""

    @abstractmethod
    def get(self, name: str) -> WireHealthCheck:
        ...

    @abstractmethod
    def create(self, wire: WireHealthCheck) -> None:
        ...

    @abstractmethod
    def update(self, wire: WireHealthCheck) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} surface={self.name}>"


class StableSurface(HealthCheckSurface):
    """Generally available API."""

    name = "stable"

    def to_wire(self, hc: HealthCheck) -> WireHealthCheck:
        return hc.to_wire()

    def get(self, name: str) -> WireHealthCheck:
        return self.provider.get_health_check(name)

    def create(self, wire: WireHealthCheck) -> None:
        self.provider.create_health_check(wire)

    def update(self, wire: WireHealthCheck) -> None:
        self.provider.update_health_check(wire)


class AlphaSurface(HealthCheckSurface):
    """Advanced API; required for the serving-port specification."""

    name = "alpha"

    def to_wire(self, hc: HealthCheck) -> WireHealthCheck:
        return hc.to_alpha_wire()

    def get(self, name: str) -> WireHealthCheck:
        return self.provider.get_alpha_health_check(name)

    def create(self, wire: WireHealthCheck) -> None:
        self.provider.create_alpha_health_check(wire)

    def update(self, wire: WireHealthCheck) -> None:
        self.provider.update_alpha_health_check(wire)


def select_surface(provider: HealthCheckProvider, use_serving_port: bool) -> HealthCheckSurface:
    """Advanced surface when the serving-port specification is in play."""
    if use_serving_port:
        return AlphaSurface(provider)
    return StableSurface(provider)


__all__ = [
    "HealthCheckSurface",
    "StableSurface",
    "AlphaSurface",
    "select_surface",
]
