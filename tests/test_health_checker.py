# ============================================================================
# HEALTH CHECKER TESTS
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Tests - Reconciler operations
# PURPOSE: Verify New/Get/Sync/Delete/DeleteLegacy against the fake provider
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Checker Tests

Covers:
1. new(): naming, defaults, serving-port specification
2. sync(): create, replace, idempotency, fingerprint carry-forward
3. get(): translation, NotFoundError vs ProviderError
4. delete() / delete_legacy(): absence semantics, both kinds attempted
5. Surface selection (stable vs alpha)
6. Concurrent syncs against one provider

Providers are the in-memory FakeHealthCheckProvider, wrapped in
MagicMock(wraps=...) where a test needs call assertions or injected failures.

Run with:
    pytest tests/test_health_checker.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)

from core.config import HealthCheckDefaults, NamingDefaults
from core.contracts import PortSpecification, Protocol
from core.models import ComputeHealthCheck, LegacyHTTPHealthCheck, LegacyHTTPSHealthCheck
from core.naming import Namer
from healthchecks.checker import HealthChecker
from healthchecks.errors import ConversionError, NotFoundError, ProviderError, is_conflict
from healthchecks.fakes import FakeHealthCheckProvider
from healthchecks.provider import HealthCheckProvider
from healthchecks.value import HealthCheck, default_health_check, protocol_of


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def namer():
    return Namer(cluster_name="uid1", config=NamingDefaults())


@pytest.fixture
def provider():
    return FakeHealthCheckProvider()


@pytest.fixture
def checker(provider, namer):
    return HealthChecker(provider, namer, default_path="/", defaults=HealthCheckDefaults())


def _wrapped_checker(provider, namer):
    """Checker over a MagicMock that delegates to the fake provider."""
    mock = MagicMock(wraps=provider)
    return HealthChecker(mock, namer, defaults=HealthCheckDefaults()), mock


def _seed(provider, namer, port, protocol=Protocol.HTTP, request_path="/my-probes-health"):
    """Manually insert a health check, bypassing the checker."""
    hc = default_health_check(port, protocol, HealthCheckDefaults())
    hc.name = namer.name_for_port(port)
    hc.request_path = request_path
    provider.create_health_check(hc.to_wire())
    return hc


def _observable(provider, name):
    """Remote state without server-rotated metadata."""
    return HealthCheck.from_wire(provider.get_health_check(name)).model_dump(exclude={"fingerprint"})


# ============================================================================
# NEW
# ============================================================================

class TestNew:
    def test_fixed_port(self, checker):
        hc = checker.new(80, Protocol.HTTP)
        assert hc.name == "k8s-be-80--uid1"
        assert hc.port == 80
        assert hc.port_specification is None
        assert hc.request_path == "/"
        assert hc.timeout_sec <= hc.check_interval_sec

    def test_serving_port(self, checker):
        hc = checker.new(80, Protocol.HTTP, True)
        assert hc.port_specification == PortSpecification.USE_SERVING_PORT
        assert hc.port == 0
        assert hc.name == "k8s-be-80--uid1"

    def test_default_path_override(self, provider, namer):
        checker = HealthChecker(provider, namer, default_path="/healthz", defaults=HealthCheckDefaults())
        assert checker.new(80, Protocol.HTTP).request_path == "/healthz"

    def test_no_remote_calls(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        checker.new(80, Protocol.HTTPS, True)
        assert mock.method_calls == []


# ============================================================================
# SYNC
# ============================================================================

class TestSync:
    def test_add(self, checker, provider, namer):
        assert checker.sync(checker.new(80, Protocol.HTTP)) is True
        provider.get_health_check(namer.name_for_port(80))

        assert checker.sync(checker.new(443, Protocol.HTTPS)) is True
        provider.get_health_check(namer.name_for_port(443))

    def test_idempotent(self, checker, provider):
        hc = checker.new(80, Protocol.HTTP)

        assert checker.sync(hc) is True
        after_create = _observable(provider, hc.name)

        assert checker.sync(hc) is False
        assert _observable(provider, hc.name) == after_create

    def test_get_after_sync(self, checker):
        checker.sync(checker.new(443, Protocol.HTTPS))
        assert protocol_of(checker.get(443)) == Protocol.HTTPS

    def test_add_existing_replaces(self, checker, provider, namer):
        _seed(provider, namer, 3000, Protocol.HTTP)

        assert checker.sync(checker.new(3000, Protocol.HTTP)) is False
        # Full replace: the new value's path wins
        assert checker.get(3000).request_path == "/"

    def test_add_existing_https(self, checker, provider, namer):
        _seed(provider, namer, 4000, Protocol.HTTPS)

        assert checker.sync(checker.new(4000, Protocol.HTTPS)) is False
        assert protocol_of(checker.get(4000)) == Protocol.HTTPS

    def test_update_protocol_keeps_caller_fields(self, checker, provider, namer):
        _seed(provider, namer, 3000, Protocol.HTTP, request_path="/my-probes-health")

        hc = checker.get(3000)
        hc.protocol = Protocol.HTTPS
        assert checker.sync(hc) is False

        current = checker.get(3000)
        assert current.protocol == Protocol.HTTPS
        assert current.request_path == "/my-probes-health"
        assert current.port == 3000
        raw = provider.get_health_check(hc.name)
        assert raw.populated_probes() == ["https_health_check"]

    def test_update_protocol_without_probe(self, checker, provider, namer):
        name = namer.name_for_port(80)
        provider.create_health_check(
            ComputeHealthCheck(name=name, type="HTTP", check_interval_sec=60, timeout_sec=60)
        )

        hc = checker.get(80)
        assert hc.port == 0
        hc.protocol = Protocol.HTTPS
        assert checker.sync(hc) is False

        current = checker.get(80)
        assert current.protocol == Protocol.HTTPS
        assert current.port == 0
        assert provider.get_health_check(name).populated_probes() == ["https_health_check"]

    def test_repairs_unknown_remote_type(self, checker, provider, namer):
        provider.create_health_check(ComputeHealthCheck(name=namer.name_for_port(80), type="TCP"))

        hc = checker.get(80)
        hc.protocol = Protocol.HTTP
        hc.port = 80
        hc.request_path = "/healthz"
        assert checker.sync(hc) is False

        current = checker.get(80)
        assert current.protocol == Protocol.HTTP
        assert current.port == 80
        assert current.request_path == "/healthz"

    def test_update_carries_fingerprint(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        hc = checker.new(80, Protocol.HTTP)
        checker.sync(hc)
        fingerprint = provider.get_health_check(hc.name).fingerprint

        hc.fingerprint = "made-up"
        checker.sync(hc)

        sent = mock.update_health_check.call_args[0][0]
        assert sent.fingerprint == fingerprint
        assert provider.get_health_check(hc.name).fingerprint != fingerprint

    def test_stale_fingerprint_is_provider_error(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        hc = checker.new(80, Protocol.HTTP)
        checker.sync(hc)
        stale = provider.get_health_check(hc.name)

        # Someone else updates between our read and our write
        HealthChecker(provider, namer, defaults=HealthCheckDefaults()).sync(hc)
        mock.get_health_check.return_value = stale

        with pytest.raises(ProviderError) as exc_info:
            checker.sync(hc)
        assert exc_info.value.operation == "update"
        assert isinstance(exc_info.value.__cause__, ResourceModifiedError)
        assert is_conflict(exc_info.value.cause)

    def test_lost_create_race_is_provider_error(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        _seed(provider, namer, 80)
        mock.get_health_check.side_effect = ResourceNotFoundError(message="not yet visible")

        with pytest.raises(ProviderError) as exc_info:
            checker.sync(checker.new(80, Protocol.HTTP))
        assert exc_info.value.operation == "create"
        assert isinstance(exc_info.value.cause, ResourceExistsError)
        # The existing resource is untouched
        existing = HealthCheck.from_wire(provider.get_health_check(namer.name_for_port(80)))
        assert existing.request_path == "/my-probes-health"

    def test_read_failure_skips_writes(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        mock.get_health_check.side_effect = HttpResponseError(message="backend unavailable")

        with pytest.raises(ProviderError) as exc_info:
            checker.sync(checker.new(80, Protocol.HTTP))
        assert exc_info.value.operation == "get"
        mock.create_health_check.assert_not_called()
        mock.update_health_check.assert_not_called()

    def test_unnamed_value_fails(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        with pytest.raises(ConversionError):
            checker.sync(default_health_check(80, Protocol.HTTP, HealthCheckDefaults()))
        assert mock.method_calls == []

    def test_bad_protocol_changes_nothing(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        hc = checker.new(80, Protocol.HTTP)
        hc.protocol = "TCP"
        with pytest.raises(ConversionError):
            checker.sync(hc)
        assert mock.method_calls == []
        assert provider.health_check_names() == []


# ============================================================================
# GET
# ============================================================================

class TestGet:
    def test_missing_is_not_found(self, checker):
        with pytest.raises(NotFoundError) as exc_info:
            checker.get(80)
        assert exc_info.value.name == "k8s-be-80--uid1"
        assert exc_info.value.port == 80

    def test_other_failure_is_provider_error(self, namer):
        provider = MagicMock(spec=HealthCheckProvider)
        cause = HttpResponseError(message="quota exceeded")
        provider.get_health_check.side_effect = cause
        checker = HealthChecker(provider, namer, defaults=HealthCheckDefaults())

        with pytest.raises(ProviderError) as exc_info:
            checker.get(80)
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.name == "k8s-be-80--uid1"
        assert "quota exceeded" in str(exc_info.value)

    def test_status_code_404_is_not_found(self, namer):
        class TransportError(Exception):
            status_code = 404

        provider = MagicMock(spec=HealthCheckProvider)
        provider.get_health_check.side_effect = TransportError("gone")
        checker = HealthChecker(provider, namer, defaults=HealthCheckDefaults())

        with pytest.raises(NotFoundError):
            checker.get(80)

    def test_unknown_remote_type_is_readable(self, checker, provider, namer):
        provider.create_health_check(ComputeHealthCheck(name=namer.name_for_port(80), type="TCP"))

        hc = checker.get(80)
        assert hc.protocol == "TCP"
        assert hc.port == 0
        assert hc.fingerprint

    def test_returns_remote_metadata(self, checker):
        checker.sync(checker.new(80, Protocol.HTTP))
        hc = checker.get(80)
        assert hc.fingerprint
        assert hc.self_link.endswith("/healthChecks/k8s-be-80--uid1")


# ============================================================================
# DELETE
# ============================================================================

class TestDelete:
    def test_delete(self, checker, provider, namer):
        _seed(provider, namer, 1234)

        checker.delete(1234)

        with pytest.raises(ResourceNotFoundError):
            provider.get_health_check(namer.name_for_port(1234))

    def test_delete_twice(self, checker, provider, namer):
        _seed(provider, namer, 1234)
        checker.delete(1234)

        with pytest.raises(NotFoundError) as exc_info:
            checker.delete(1234)
        assert exc_info.value.operation == "delete"

    def test_delete_missing(self, checker):
        with pytest.raises(NotFoundError):
            checker.delete(80)

    def test_delete_failure(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        mock.delete_health_check.side_effect = HttpResponseError(message="in use by backend service")

        with pytest.raises(ProviderError, match="in use by backend service"):
            checker.delete(80)


class TestDeleteLegacy:
    def _legacy(self, namer, port, cls=LegacyHTTPHealthCheck):
        return cls(name=namer.legacy_name_for_port(port), port=port, request_path="/")

    def test_http_only(self, checker, provider, namer):
        provider.create_legacy_http_health_check(self._legacy(namer, 80))

        checker.delete_legacy(80)

        with pytest.raises(ResourceNotFoundError):
            provider.get_legacy_http_health_check(namer.legacy_name_for_port(80))

    def test_both_kinds(self, checker, provider, namer):
        provider.create_legacy_http_health_check(self._legacy(namer, 80))
        provider.create_legacy_https_health_check(self._legacy(namer, 80, LegacyHTTPSHealthCheck))

        checker.delete_legacy(80)

        name = namer.legacy_name_for_port(80)
        with pytest.raises(ResourceNotFoundError):
            provider.get_legacy_http_health_check(name)
        with pytest.raises(ResourceNotFoundError):
            provider.get_legacy_https_health_check(name)

    def test_https_only(self, checker, provider, namer):
        provider.create_legacy_https_health_check(self._legacy(namer, 443, LegacyHTTPSHealthCheck))
        checker.delete_legacy(443)

    def test_neither_kind(self, checker):
        with pytest.raises(NotFoundError) as exc_info:
            checker.delete_legacy(80)
        assert exc_info.value.operation == "delete_legacy"

    def test_both_attempted_after_failure(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        provider.create_legacy_https_health_check(self._legacy(namer, 80, LegacyHTTPSHealthCheck))
        mock.delete_legacy_http_health_check.side_effect = HttpResponseError(message="internal error")

        with pytest.raises(ProviderError) as exc_info:
            checker.delete_legacy(80)

        assert exc_info.value.operation == "delete_legacy_http"
        mock.delete_legacy_https_health_check.assert_called_once_with(namer.legacy_name_for_port(80))
        with pytest.raises(ResourceNotFoundError):
            provider.get_legacy_https_health_check(namer.legacy_name_for_port(80))

    def test_unified_check_untouched(self, checker, provider, namer):
        _seed(provider, namer, 80)
        provider.create_legacy_http_health_check(self._legacy(namer, 80))

        checker.delete_legacy(80)

        assert checker.get(80).name == namer.name_for_port(80)


# ============================================================================
# SURFACES
# ============================================================================

class TestServingPortSpecification:
    def test_alpha_round_trip(self, checker):
        assert checker.sync(checker.new(8000, Protocol.HTTP, True)) is True

        hc = checker.get(8000, True)
        assert hc.port == 0
        assert hc.port_specification == PortSpecification.USE_SERVING_PORT

    def test_stable_read_drops_specification(self, checker):
        checker.sync(checker.new(8000, Protocol.HTTP, True))

        hc = checker.get(8000, False)
        assert hc.port_specification is None
        assert hc.port == 0

    def test_alpha_surface_selected(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        hc = checker.new(8000, Protocol.HTTP, True)

        checker.sync(hc)
        checker.sync(hc)

        mock.get_alpha_health_check.assert_called_with(hc.name)
        mock.create_alpha_health_check.assert_called_once()
        mock.update_alpha_health_check.assert_called_once()
        mock.get_health_check.assert_not_called()
        mock.create_health_check.assert_not_called()

    def test_stable_surface_selected(self, provider, namer):
        checker, mock = _wrapped_checker(provider, namer)
        checker.sync(checker.new(80, Protocol.HTTP))
        checker.get(80)

        mock.create_health_check.assert_called_once()
        mock.get_alpha_health_check.assert_not_called()
        mock.create_alpha_health_check.assert_not_called()

    def test_switch_to_serving_port(self, checker):
        checker.sync(checker.new(8000, Protocol.HTTP))

        assert checker.sync(checker.new(8000, Protocol.HTTP, True)) is False
        assert checker.get(8000, True).uses_serving_port


# ============================================================================
# SCENARIOS
# ============================================================================

class TestScenarios:
    def test_create_switch_protocol_delete(self, checker):
        checker.sync(checker.new(80, Protocol.HTTP))
        assert checker.get(80, False).protocol == Protocol.HTTP

        hc = checker.get(80)
        hc.protocol = Protocol.HTTPS
        checker.sync(hc)
        assert checker.get(80).protocol == Protocol.HTTPS

        checker.delete(80)
        with pytest.raises(NotFoundError):
            checker.delete(80)

    def test_parallel_ports(self, checker, provider):
        ports = list(range(30000, 30016))
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(lambda p: checker.sync(checker.new(p, Protocol.HTTP)), ports))

        assert all(created)
        assert len(provider.health_check_names()) == len(ports)

    def test_parallel_same_port(self, checker, provider):
        hc = checker.new(80, Protocol.HTTP)

        def attempt(_):
            try:
                return checker.sync(hc.model_copy())
            except ProviderError as e:
                return e

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(8)))

        assert sum(1 for r in results if r is True) == 1
        for result in results:
            if isinstance(result, ProviderError):
                assert is_conflict(result.cause)
        assert provider.health_check_names() == [hc.name]
