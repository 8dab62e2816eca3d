"""Unit tests for the add_scoped_dynamic registration API."""

from __future__ import annotations

from typing import Protocol

import pytest

from tenancy.application.candidate_registry import CandidateRegistryBuilder
from tenancy.application.registration import (
    add_scoped_candidate,
    add_scoped_dynamic,
)
from tenancy.application.tenant_resolver import TenantResolver
from tenancy.ports.exceptions import DuplicateCapabilityRegistrationError


class Invoicer(Protocol):
    def invoice_prefix(self) -> str: ...


class AcmeInvoicer:
    def invoice_prefix(self) -> str:
        return "ACM"


class GlobexInvoicer:
    def invoice_prefix(self) -> str:
        return "GLX"


class Helper:
    pass


class TestAddScopedDynamic:
    """Tests for add_scoped_dynamic."""

    def test_registers_candidates_as_scoped_services(
        self, container, mock_registry_probe
    ):
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)

        descriptors = add_scoped_dynamic(
            container, builder, Invoicer, [AcmeInvoicer, Helper, GlobexInvoicer]
        )

        assert [d.concrete_type for d in descriptors] == [AcmeInvoicer, GlobexInvoicer]
        assert container.is_registered(AcmeInvoicer)
        assert container.is_registered(GlobexInvoicer)
        assert not container.is_registered(Helper)
        assert container.registration_for(AcmeInvoicer).lifetime.value == "scoped"

    def test_keeps_existing_registration(self, container, mock_registry_probe):
        """A candidate already registered (e.g. as singleton) is left alone."""
        container.add_singleton(AcmeInvoicer)
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)

        add_scoped_dynamic(container, builder, Invoicer, [AcmeInvoicer])

        assert container.registration_for(AcmeInvoicer).lifetime.value == "singleton"

    def test_second_registration_for_capability_raises(
        self, container, mock_registry_probe
    ):
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)
        add_scoped_dynamic(container, builder, Invoicer, [AcmeInvoicer])

        with pytest.raises(DuplicateCapabilityRegistrationError):
            add_scoped_dynamic(container, builder, Invoicer, [GlobexInvoicer])

    def test_registered_capability_resolves_per_scope(
        self, container, mock_registry_probe
    ):
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)
        add_scoped_dynamic(container, builder, Invoicer, [AcmeInvoicer, GlobexInvoicer])
        registry = builder.build()

        with container.create_scope() as scope:
            resolver = TenantResolver(registry=registry, provider=scope)
            invoicer = resolver.resolve(Invoicer, "Globex")

            assert invoicer.invoice_prefix() == "GLX"
            assert scope.get_service(GlobexInvoicer) is invoicer


class TestAddScopedCandidate:
    """Tests for add_scoped_candidate."""

    def test_explicit_candidate_resolves_through_scope(
        self, container, mock_registry_probe
    ):
        """A table entry is resolvable, not only recorded in the registry."""
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)
        add_scoped_dynamic(container, builder, Invoicer, [])
        add_scoped_candidate(
            container, builder, Invoicer, AcmeInvoicer, display_name="AcmeHQ"
        )
        registry = builder.build()

        with container.create_scope() as scope:
            invoicer = TenantResolver(registry=registry, provider=scope).resolve(
                Invoicer, "AcmeHQ"
            )

            assert isinstance(invoicer, AcmeInvoicer)
            assert scope.get_service(AcmeInvoicer) is invoicer

        assert container.registration_for(AcmeInvoicer).lifetime.value == "scoped"

    def test_appends_after_scanned_candidates(self, container, mock_registry_probe):
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)
        add_scoped_dynamic(container, builder, Invoicer, [GlobexInvoicer])

        descriptor = add_scoped_candidate(container, builder, Invoicer, AcmeInvoicer)

        assert descriptor.display_name == "AcmeInvoicer"
        assert [d.concrete_type for d in builder.build().candidates_for(Invoicer)] == [
            GlobexInvoicer,
            AcmeInvoicer,
        ]

    def test_keeps_existing_registration(self, container, mock_registry_probe):
        container.add_singleton(AcmeInvoicer)
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)

        add_scoped_candidate(container, builder, Invoicer, AcmeInvoicer)

        assert container.registration_for(AcmeInvoicer).lifetime.value == "singleton"

    def test_rejected_candidate_is_not_registered(
        self, container, mock_registry_probe
    ):
        builder = CandidateRegistryBuilder(probe=mock_registry_probe)

        with pytest.raises(TypeError):
            add_scoped_candidate(container, builder, Invoicer, Helper)

        assert not container.is_registered(Helper)
