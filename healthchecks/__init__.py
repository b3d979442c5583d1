# ============================================================================
# HEALTH CHECKS MODULE
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Health check reconciler
# PURPOSE: Export the reconciler, its value type and error kinds
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health check reconciler for load balancer backends.

Provides:
- HealthChecker: New/Get/Sync/Delete/DeleteLegacy for node ports
- HealthCheck: domain value with wire conversion
- HealthCheckProvider: remote API contract
- FakeHealthCheckProvider: in-memory provider for tests and dry runs

Usage:
    from core.contracts import Protocol
    from core.naming import Namer
    from healthchecks import HealthChecker, FakeHealthCheckProvider

    checker = HealthChecker(FakeHealthCheckProvider(), Namer(cluster_name="uid1"))
    checker.sync(checker.new(80, Protocol.HTTP))
"""

from healthchecks.errors import (
    HealthCheckError,
    NotFoundError,
    ConversionError,
    ProviderError,
    is_not_found,
    is_conflict,
)
from healthchecks.value import (
    HealthCheck,
    default_health_check,
    protocol_of,
)
from healthchecks.provider import HealthCheckProvider
from healthchecks.surfaces import (
    HealthCheckSurface,
    StableSurface,
    AlphaSurface,
    select_surface,
)
from healthchecks.fakes import FakeHealthCheckProvider
from healthchecks.checker import HealthChecker

__all__ = [
    # Errors
    'HealthCheckError',
    'NotFoundError',
    'ConversionError',
    'ProviderError',
    'is_not_found',
    'is_conflict',
    # Value
    'HealthCheck',
    'default_health_check',
    'protocol_of',
    # Provider
    'HealthCheckProvider',
    'FakeHealthCheckProvider',
    # Surfaces
    'HealthCheckSurface',
    'StableSurface',
    'AlphaSurface',
    'select_surface',
    # Checker
    'HealthChecker',
]
