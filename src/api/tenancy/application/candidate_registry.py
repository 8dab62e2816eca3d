"""Candidate registry for tenant-scoped service resolution.

The registry maps each capability (a Protocol or base class) to the
ordered candidate implementations that satisfy it. It is assembled once
at startup through CandidateRegistryBuilder and is read-only afterwards,
so concurrent resolvers can read it without locking.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Generic, Protocol, Sequence

from tenancy.application.observability import (
    CandidateRegistryProbe,
    DefaultCandidateRegistryProbe,
)
from tenancy.domain.value_objects import CandidateDescriptor
from tenancy.ports.exceptions import DuplicateCapabilityRegistrationError

_PROTOCOL_ROOTS: tuple[type, ...] = (Protocol, Generic, object)  # type: ignore[arg-type]


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _declared_names(cls: type, include_attributes: bool) -> set[str]:
    """Public names declared across cls's MRO, annotations included."""
    names: set[str] = set()
    for base in cls.__mro__:
        if base in _PROTOCOL_ROOTS:
            continue
        if include_attributes:
            names.update(vars(base))
        names.update(inspect.get_annotations(base))
    return {name for name in names if not name.startswith("_")}


def _protocol_members(capability: type) -> set[str]:
    """Public members declared by a protocol and its protocol bases.

    Data members declared only as annotations (``name: str``) count.
    """
    return _declared_names(capability, include_attributes=True)


def satisfies_capability(candidate: object, capability: type) -> bool:
    """Check whether candidate is a concrete class implementing capability.

    Nominal subclasses (including ABC virtual subclasses) always qualify.
    For Protocol capabilities, a class also qualifies structurally when it
    defines every public protocol member, with callables where the
    protocol declares callables. A data member declared by annotation is
    satisfied by a class attribute or by a matching annotation.

    Args:
        candidate: Any pool entry; non-classes never qualify.
        capability: The capability class.

    Returns:
        True if candidate can be handed out as the capability.
    """
    if not inspect.isclass(candidate) or candidate is capability:
        return False
    if inspect.isabstract(candidate) or _is_protocol(candidate):
        return False

    if capability in candidate.__mro__:
        return True

    if not _is_protocol(capability):
        return issubclass(candidate, capability)

    annotated = _declared_names(candidate, include_attributes=False)
    for name in _protocol_members(capability):
        if not hasattr(candidate, name):
            if name not in annotated:
                return False
            continue
        if callable(getattr(capability, name, None)) and not callable(
            getattr(candidate, name)
        ):
            return False
    return True


def build_candidates(
    capability: type,
    pool: Iterable[object],
    probe: CandidateRegistryProbe | None = None,
) -> tuple[CandidateDescriptor, ...]:
    """Filter a pool of types down to the candidates for one capability.

    Order follows the pool's enumeration order; a type appearing twice is
    kept at its first position. An empty result is valid: it only means
    no tenant can be resolved for this capability later on.

    Args:
        capability: The capability class.
        pool: Candidate types, pre-filtered by the caller (e.g. one package).
        probe: Optional observability probe.

    Returns:
        Descriptors for the satisfying types, in pool order.
    """
    probe = probe or DefaultCandidateRegistryProbe()
    capability_name = capability.__qualname__
    seen: set[type] = set()
    descriptors: list[CandidateDescriptor] = []

    for entry in pool:
        if not satisfies_capability(entry, capability):
            probe.candidate_skipped(
                capability=capability_name,
                type_name=getattr(entry, "__qualname__", repr(entry)),
            )
            continue
        concrete_type = entry  # narrowed by satisfies_capability
        if concrete_type in seen:
            continue
        seen.add(concrete_type)
        descriptor = CandidateDescriptor.for_type(concrete_type)
        descriptors.append(descriptor)
        probe.candidate_registered(
            capability=capability_name,
            implementation=concrete_type.__qualname__,
            display_name=descriptor.display_name,
        )

    return tuple(descriptors)


class CandidateRegistry:
    """Frozen capability -> candidates mapping.

    Lookups for a capability that was never registered return an empty
    tuple, which resolvers report as "not found".
    """

    def __init__(self, entries: Mapping[type, Sequence[CandidateDescriptor]]):
        self._entries: Mapping[type, tuple[CandidateDescriptor, ...]] = (
            MappingProxyType(
                {capability: tuple(found) for capability, found in entries.items()}
            )
        )

    def candidates_for(self, capability: type) -> tuple[CandidateDescriptor, ...]:
        """Get the ordered candidates registered for a capability."""
        return self._entries.get(capability, ())

    @property
    def capabilities(self) -> tuple[type, ...]:
        """Registered capabilities, in registration order."""
        return tuple(self._entries)

    @property
    def candidate_count(self) -> int:
        """Total number of candidates across all capabilities."""
        return sum(len(found) for found in self._entries.values())

    def __contains__(self, capability: object) -> bool:
        return capability in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class CandidateRegistryBuilder:
    """Collects candidate registrations and produces a CandidateRegistry.

    Example:
        builder = CandidateRegistryBuilder()
        builder.register(TenantProfileService, scan_candidate_types("tenants"))
        registry = builder.build()
    """

    def __init__(self, probe: CandidateRegistryProbe | None = None):
        self._probe = probe or DefaultCandidateRegistryProbe()
        self._entries: dict[type, list[CandidateDescriptor]] = {}
        self._registered: set[type] = set()

    def register(
        self, capability: type, pool: Iterable[object]
    ) -> tuple[CandidateDescriptor, ...]:
        """Register every type in pool that satisfies capability.

        Args:
            capability: The capability class.
            pool: Candidate types in discovery order.

        Returns:
            The descriptors that were registered.

        Raises:
            DuplicateCapabilityRegistrationError: If the capability's pool
                was already registered.
        """
        if capability in self._registered:
            raise DuplicateCapabilityRegistrationError(capability)
        self._registered.add(capability)

        descriptors = build_candidates(capability, pool, probe=self._probe)
        entries = self._entries.setdefault(capability, [])
        known = {existing.concrete_type for existing in entries}
        added = tuple(d for d in descriptors if d.concrete_type not in known)
        entries.extend(added)

        if not entries:
            self._probe.capability_without_candidates(
                capability=capability.__qualname__
            )
        return added

    def add_candidate(
        self,
        capability: type,
        implementation: type,
        display_name: str | None = None,
    ) -> CandidateDescriptor:
        """Add one explicit table entry for a capability.

        Raises:
            TypeError: If implementation does not satisfy capability.
            ValueError: If implementation is already registered for it.
        """
        if not satisfies_capability(implementation, capability):
            raise TypeError(
                f"{getattr(implementation, '__qualname__', implementation)!r} "
                f"does not implement {capability.__qualname__}"
            )
        entries = self._entries.setdefault(capability, [])
        if any(existing.concrete_type is implementation for existing in entries):
            raise ValueError(
                f"{implementation.__qualname__} is already a candidate "
                f"for {capability.__qualname__}"
            )

        descriptor = CandidateDescriptor.for_type(implementation, display_name)
        entries.append(descriptor)
        self._probe.candidate_registered(
            capability=capability.__qualname__,
            implementation=implementation.__qualname__,
            display_name=descriptor.display_name,
        )
        return descriptor

    def build(self) -> CandidateRegistry:
        """Freeze the collected registrations."""
        registry = CandidateRegistry(self._entries)
        self._probe.registry_built(
            capability_count=len(registry),
            candidate_count=registry.candidate_count,
        )
        return registry
