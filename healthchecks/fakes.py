# ============================================================================
# IN-MEMORY HEALTH CHECK PROVIDER
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Test double for the remote compute API
# PURPOSE: Thread-safe in-memory HealthCheckProvider with fingerprints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Fake Health Check Provider

In-memory HealthCheckProvider that behaves like the remote API where the
reconciler depends on it:

- One store for the unified resource, visible through both surfaces.
  Stable reads drop the advanced-only fields.
- Create of an existing name raises ResourceExistsError.
- Update requires the current fingerprint, else ResourceModifiedError.
- Missing names raise ResourceNotFoundError.
- Server-managed metadata (id, selfLink, creationTimestamp, fingerprint)
  is assigned here, never taken from the caller.

Usage:
    provider = FakeHealthCheckProvider()
    checker = HealthChecker(provider, Namer(cluster_name="uid1"))
"""

import hashlib
import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, Optional, Type, TypeVar

from azure.core.exceptions import (
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)
from pydantic import BaseModel

from core.logging import ComponentType, get_logger
from core.models import (
    AlphaComputeHealthCheck,
    ComputeHealthCheck,
    LegacyHealthCheckBase,
    LegacyHTTPHealthCheck,
    LegacyHTTPSHealthCheck,
)
from healthchecks.provider import HealthCheckProvider

logger = get_logger(__name__, ComponentType.PROVIDER)

M = TypeVar("M", bound=BaseModel)

DEFAULT_PROJECT_URL = "https://compute.example.com/v1/projects/fake-project"


def _convert(model: BaseModel, target: Type[M]) -> M:
    """Deep copy a wire model into another wire model class."""
    return target.model_validate(model.model_dump())


class FakeHealthCheckProvider(HealthCheckProvider):
    """
    In-memory remote API.

    All state lives behind one lock, so concurrent reconcilers see the same
    create/update races they would see remotely.
    """

    def __init__(self, project_url: str = DEFAULT_PROJECT_URL):
        self.project_url = project_url.rstrip("/")
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._health_checks: Dict[str, AlphaComputeHealthCheck] = {}
        self._revisions: Dict[str, int] = {}
        self._legacy_http: Dict[str, LegacyHTTPHealthCheck] = {}
        self._legacy_https: Dict[str, LegacyHTTPSHealthCheck] = {}

    # ========================================================================
    # HELPERS
    # ========================================================================

    @staticmethod
    def _fingerprint(resource_id: str, revision: int) -> str:
        payload = f"{resource_id}:{revision}"
        return hashlib.sha256(payload.encode()).hexdigest()[:16]

    @staticmethod
    def _not_found(collection: str, name: str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            message=f"The resource '{collection}/{name}' was not found"
        )

    def _stamp(self, hc: BaseModel, collection: str) -> None:
        """Assign server-managed metadata to a newly created resource."""
        hc.id = str(next(self._ids))
        hc.self_link = f"{self.project_url}/global/{collection}/{hc.name}"
        hc.creation_timestamp = datetime.now(timezone.utc).isoformat()

    # ========================================================================
    # UNIFIED RESOURCE
    # ========================================================================

    def _get(self, name: str) -> AlphaComputeHealthCheck:
        with self._lock:
            stored = self._health_checks.get(name)
            if stored is None:
                raise self._not_found("healthChecks", name)
            return stored.model_copy(deep=True)

    def _create(self, hc: ComputeHealthCheck) -> None:
        with self._lock:
            if hc.name in self._health_checks:
                raise ResourceExistsError(
                    message=f"The resource 'healthChecks/{hc.name}' already exists"
                )
            stored = _convert(hc, AlphaComputeHealthCheck)
            self._stamp(stored, "healthChecks")
            self._revisions[hc.name] = 0
            stored.fingerprint = self._fingerprint(stored.id, 0)
            self._health_checks[hc.name] = stored
        logger.debug(f"Created health check {hc.name} (type={hc.type})")

    def _update(self, hc: ComputeHealthCheck) -> None:
        with self._lock:
            existing = self._health_checks.get(hc.name)
            if existing is None:
                raise self._not_found("healthChecks", hc.name)
            if hc.fingerprint != existing.fingerprint:
                raise ResourceModifiedError(
                    message=(
                        f"Fingerprint mismatch for healthChecks/{hc.name}: "
                        f"got {hc.fingerprint!r}, resource has {existing.fingerprint!r}"
                    )
                )

            replacement = _convert(hc, AlphaComputeHealthCheck)
            replacement.id = existing.id
            replacement.self_link = existing.self_link
            replacement.creation_timestamp = existing.creation_timestamp
            self._revisions[hc.name] += 1
            replacement.fingerprint = self._fingerprint(existing.id, self._revisions[hc.name])
            self._health_checks[hc.name] = replacement
        logger.debug(f"Updated health check {hc.name} (type={hc.type})")

    def get_health_check(self, name: str) -> ComputeHealthCheck:
        return _convert(self._get(name), ComputeHealthCheck)

    def create_health_check(self, hc: ComputeHealthCheck) -> None:
        self._create(hc)

    def update_health_check(self, hc: ComputeHealthCheck) -> None:
        self._update(hc)

    def delete_health_check(self, name: str) -> None:
        with self._lock:
            if self._health_checks.pop(name, None) is None:
                raise self._not_found("healthChecks", name)
            self._revisions.pop(name, None)
        logger.debug(f"Deleted health check {name}")

    def get_alpha_health_check(self, name: str) -> AlphaComputeHealthCheck:
        return self._get(name)

    def create_alpha_health_check(self, hc: AlphaComputeHealthCheck) -> None:
        self._create(hc)

    def update_alpha_health_check(self, hc: AlphaComputeHealthCheck) -> None:
        self._update(hc)

    # ========================================================================
    # LEGACY RESOURCES
    # ========================================================================

    def _legacy_get(self, store: Dict[str, LegacyHealthCheckBase], collection: str, name: str):
        with self._lock:
            stored = store.get(name)
            if stored is None:
                raise self._not_found(collection, name)
            return stored.model_copy(deep=True)

    def _legacy_create(self, store: Dict[str, LegacyHealthCheckBase], collection: str, hc) -> None:
        with self._lock:
            if hc.name in store:
                raise ResourceExistsError(
                    message=f"The resource '{collection}/{hc.name}' already exists"
                )
            stored = hc.model_copy(deep=True)
            self._stamp(stored, collection)
            store[hc.name] = stored
        logger.debug(f"Created legacy {collection} {hc.name}")

    def _legacy_delete(self, store: Dict[str, LegacyHealthCheckBase], collection: str, name: str) -> None:
        with self._lock:
            if store.pop(name, None) is None:
                raise self._not_found(collection, name)
        logger.debug(f"Deleted legacy {collection} {name}")

    def get_legacy_http_health_check(self, name: str) -> LegacyHTTPHealthCheck:
        return self._legacy_get(self._legacy_http, "httpHealthChecks", name)

    def create_legacy_http_health_check(self, hc: LegacyHTTPHealthCheck) -> None:
        self._legacy_create(self._legacy_http, "httpHealthChecks", hc)

    def delete_legacy_http_health_check(self, name: str) -> None:
        self._legacy_delete(self._legacy_http, "httpHealthChecks", name)

    def get_legacy_https_health_check(self, name: str) -> LegacyHTTPSHealthCheck:
        return self._legacy_get(self._legacy_https, "httpsHealthChecks", name)

    def create_legacy_https_health_check(self, hc: LegacyHTTPSHealthCheck) -> None:
        self._legacy_create(self._legacy_https, "httpsHealthChecks", hc)

    def delete_legacy_https_health_check(self, name: str) -> None:
        self._legacy_delete(self._legacy_https, "httpsHealthChecks", name)

    # ========================================================================
    # INSPECTION
    # ========================================================================

    def health_check_names(self) -> list:
        """Names of all unified health checks, sorted."""
        with self._lock:
            return sorted(self._health_checks)

    def raw_health_check(self, name: str) -> Optional[AlphaComputeHealthCheck]:
        """Stored resource as the advanced surface sees it, or None."""
        with self._lock:
            stored = self._health_checks.get(name)
            return stored.model_copy(deep=True) if stored else None


__all__ = ["FakeHealthCheckProvider", "DEFAULT_PROJECT_URL"]
