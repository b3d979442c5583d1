# ============================================================================
# HEALTH CHECK PROVIDER CONTRACT
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Remote API abstraction consumed by the reconciler
# PURPOSE: Get/Create/Update/Delete for unified and legacy health checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Provider

Abstract boundary over the remote compute API. The reconciler only talks to
this interface; the concrete transport lives elsewhere.

Error contract (azure.core.exceptions):
- ResourceNotFoundError: the named resource does not exist
- ResourceExistsError: create of a name that already exists
- ResourceModifiedError: update with a stale fingerprint
- HttpResponseError: any other remote failure

All calls are synchronous and blocking; timeouts are the transport's concern.
"""

from abc import ABC, abstractmethod

from core.models import (
    AlphaComputeHealthCheck,
    ComputeHealthCheck,
    LegacyHTTPHealthCheck,
    LegacyHTTPSHealthCheck,
)


class HealthCheckProvider(ABC):
    """Remote health check API."""

    # ========================================================================
    # UNIFIED RESOURCE - STABLE SURFACE
    # ========================================================================

    @abstractmethod
    def get_health_check(self, name: str) -> ComputeHealthCheck:
        ...

    @abstractmethod
    def create_health_check(self, hc: ComputeHealthCheck) -> None:
        ...

    @abstractmethod
    def update_health_check(self, hc: ComputeHealthCheck) -> None:
        """Replace the named resource. hc.fingerprint must be current."""

    @abstractmethod
    def delete_health_check(self, name: str) -> None:
        ...

    # ========================================================================
    # UNIFIED RESOURCE - ADVANCED SURFACE
    # ========================================================================

    @abstractmethod
    def get_alpha_health_check(self, name: str) -> AlphaComputeHealthCheck:
        ...

    @abstractmethod
    def create_alpha_health_check(self, hc: AlphaComputeHealthCheck) -> None:
        ...

    @abstractmethod
    def update_alpha_health_check(self, hc: AlphaComputeHealthCheck) -> None:
        """Replace the named resource. hc.fingerprint must be current."""

    # ========================================================================
    # LEGACY RESOURCES
    # ========================================================================

    @abstractmethod
    def get_legacy_http_health_check(self, name: str) -> LegacyHTTPHealthCheck:
        ...

    @abstractmethod
    def create_legacy_http_health_check(self, hc: LegacyHTTPHealthCheck) -> None:
        ...

    @abstractmethod
    def delete_legacy_http_health_check(self, name: str) -> None:
        ...

    @abstractmethod
    def get_legacy_https_health_check(self, name: str) -> LegacyHTTPSHealthCheck:
        ...

    @abstractmethod
    def create_legacy_https_health_check(self, hc: LegacyHTTPSHealthCheck) -> None:
        ...

    @abstractmethod
    def delete_legacy_https_health_check(self, name: str) -> None:
        ...


__all__ = ["HealthCheckProvider"]
