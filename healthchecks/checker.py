# ============================================================================
# HEALTH CHECKER
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Health check reconciliation operations
# PURPOSE: New/Get/Sync/Delete/DeleteLegacy against the remote API
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Checker

Makes remote health check state match desired state for backend node ports.

Operations:
- new: build the default desired value for a port (no remote calls)
- get: read and translate the current remote value
- sync: idempotent create-or-replace of a desired value
- delete: remove the unified health check for a port
- delete_legacy: remove both legacy HTTP/HTTPS kinds for a port

Callers mutate values between get() and sync(); sync() performs a full
replace, so anything the caller wants to keep must be on the value it passes.

The checker holds no lock and never retries. Concurrency is coordinated by
the remote API: a losing create surfaces as ProviderError, as does an update
with a stale fingerprint. Retry/backoff belongs to the caller's control loop.

Usage:
    checker = HealthChecker(provider, Namer(cluster_name="uid1"))

    hc = checker.new(80, Protocol.HTTP)
    created = checker.sync(hc)

    hc = checker.get(80)
    hc.protocol = Protocol.HTTPS
    checker.sync(hc)
"""

import dataclasses
from contextlib import contextmanager
from typing import Dict, Optional

from core.config import HealthCheckDefaults, get_defaults
from core.contracts import PortSpecification, Protocol
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.naming import Namer
from healthchecks.errors import (
    ConversionError,
    HealthCheckError,
    NotFoundError,
    ProviderError,
    describe,
    is_not_found,
)
from healthchecks.provider import HealthCheckProvider
from healthchecks.surfaces import select_surface
from healthchecks.value import HealthCheck, default_health_check

logger = get_logger(__name__, ComponentType.CHECKER)


class HealthChecker:
    """
    Reconciles unified health checks for backend node ports.

    Args:
        provider: Remote API
        namer: Port -> resource name mapping
        default_path: Probe path for new checks (overrides defaults)
        defaults: Cadence/path defaults (global defaults if omitted)
    """

    def __init__(
        self,
        provider: HealthCheckProvider,
        namer: Namer,
        default_path: Optional[str] = None,
        defaults: Optional[HealthCheckDefaults] = None,
    ):
        self.provider = provider
        self.namer = namer
        defaults = defaults or get_defaults().health_check
        if default_path is not None:
            defaults = dataclasses.replace(defaults, request_path=default_path)
        self.defaults = defaults

    # ========================================================================
    # ERROR TRANSLATION
    # ========================================================================

    @contextmanager
    def _provider_call(
        self,
        name: str,
        operation: str,
        port: Optional[int] = None,
        absent_is_not_found: bool = True,
    ):
        """
        Translate provider exceptions into reconciler errors.

        Args:
            name: Resource name for error context
            operation: Remote operation attempted
            port: Node port for error context
            absent_is_not_found: Map "not found" to NotFoundError. When
                False (create/update), absence is just another failure.
        """
        try:
            yield
        except HealthCheckError:
            raise
        except Exception as e:
            if absent_is_not_found and is_not_found(e):
                logger.debug(f"{operation}: health check {name} does not exist")
                raise NotFoundError(name, port=port, operation=operation) from e
            logger.error(f"{operation} failed for health check {name}: {describe(e)}")
            raise ProviderError(name, operation, cause=e, port=port) from e

    # ========================================================================
    # NEW
    # ========================================================================

    def new(self, port: int, protocol: Protocol, use_serving_port_spec: bool = False) -> HealthCheck:
        """
        Build the default desired health check for a node port.

        With use_serving_port_spec the check follows the backend's serving
        port: port_specification is USE_SERVING_PORT and port is 0.
        """
        hc = default_health_check(port, protocol, self.defaults)
        hc.name = self.namer.name_for_port(port)
        if use_serving_port_spec:
            hc.port_specification = PortSpecification.USE_SERVING_PORT
            hc.port = 0
        return hc

    # ========================================================================
    # GET
    # ========================================================================

    def get(self, port: int, use_serving_port_spec: bool = False) -> HealthCheck:
        """
        Read the health check for a node port.

        Args:
            port: Node port
            use_serving_port_spec: Read through the advanced surface, which
                is the only one that reports the port specification

        Raises:
            NotFoundError: No health check exists for the port
            ProviderError: Any other remote failure
        """
        name = self.namer.name_for_port(port)
        surface = select_surface(self.provider, use_serving_port_spec)

        with log_context(health_check=name, port=port, operation="get", surface=surface.name):
            with self._provider_call(name, "get", port=port):
                wire = surface.get(name)
            return HealthCheck.from_wire(wire)

    # ========================================================================
    # SYNC
    # ========================================================================

    def sync(self, desired: HealthCheck) -> bool:
        """
        Create or replace the remote health check to match `desired`.

        Returns:
            True if the health check was created, False if replaced

        Raises:
            ConversionError: desired cannot be written (no name, bad protocol)
            ProviderError: The read, create or update failed
        """
        if not desired.name:
            raise ConversionError("Cannot sync a health check without a name", operation="sync")

        port = desired.port or None
        surface = select_surface(self.provider, desired.uses_serving_port)

        with log_context(health_check=desired.name, port=port, operation="sync", surface=surface.name):
            # Convert before touching the remote API so a bad value changes nothing
            wire = surface.to_wire(desired)

            try:
                with self._provider_call(desired.name, "get", port=port):
                    existing = surface.get(desired.name)
            except NotFoundError:
                logger.info(f"Creating health check {desired.name} ({wire.type})")
                with self._provider_call(desired.name, "create", port=port, absent_is_not_found=False):
                    surface.create(wire)
                log_checkpoint("health_check_created", {"protocol": wire.type, "surface": surface.name})
                return True

            # The API rejects a replace without the fingerprint it just issued
            wire.fingerprint = existing.fingerprint
            logger.info(
                f"Updating health check {desired.name} ({existing.type} -> {wire.type})"
            )
            with self._provider_call(desired.name, "update", port=port, absent_is_not_found=False):
                surface.update(wire)
            log_checkpoint(
                "health_check_updated",
                {"from_protocol": existing.type, "protocol": wire.type, "surface": surface.name},
            )
            return False

    # ========================================================================
    # DELETE
    # ========================================================================

    def delete(self, port: int) -> None:
        """
        Delete the health check for a node port.

        Not idempotent: callers that tolerate absence must catch NotFoundError.

        Raises:
            NotFoundError: No health check exists for the port
            ProviderError: Any other remote failure
        """
        name = self.namer.name_for_port(port)

        with log_context(health_check=name, port=port, operation="delete"):
            logger.info(f"Deleting health check {name}")
            with self._provider_call(name, "delete", port=port):
                self.provider.delete_health_check(name)
            log_checkpoint("health_check_deleted")

    def delete_legacy(self, port: int) -> None:
        """
        Delete the legacy HTTP and HTTPS health checks for a node port.

        Both deletions are always attempted. Succeeds when at least one kind
        was removed and the other was removed or absent.

        Raises:
            ProviderError: Either deletion failed for a reason other than
                absence (the HTTP failure wins if both failed)
            NotFoundError: Neither legacy kind exists
        """
        name = self.namer.legacy_name_for_port(port)
        deleters = (
            ("http", self.provider.delete_legacy_http_health_check),
            ("https", self.provider.delete_legacy_https_health_check),
        )

        with log_context(health_check=name, port=port, operation="delete_legacy"):
            outcomes: Dict[str, Optional[HealthCheckError]] = {}
            for kind, delete in deleters:
                try:
                    with self._provider_call(name, f"delete_legacy_{kind}", port=port):
                        delete(name)
                    outcomes[kind] = None
                except HealthCheckError as e:
                    outcomes[kind] = e

            removed = [kind for kind, error in outcomes.items() if error is None]
            failures = [error for error in outcomes.values() if isinstance(error, ProviderError)]

            if failures:
                logger.warning(
                    f"Legacy health check cleanup for {name} incomplete: "
                    f"removed={removed}, failed={[f.operation for f in failures]}"
                )
                raise failures[0]
            if not removed:
                raise NotFoundError(name, port=port, operation="delete_legacy")

            log_checkpoint("legacy_health_check_deleted", {"kinds": removed})


__all__ = ["HealthChecker"]
