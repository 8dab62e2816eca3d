"""Scoped service container.

The container is the application's object-lifecycle manager. It owns
service registrations and hands out instances under three lifetimes:

- singleton: one instance per container
- scoped: one instance per ServiceScope (one scope per request)
- transient: a new instance on every request for the service

A scope owns every scoped and transient instance it created, and closes
them in reverse creation order when the scope ends.
"""

from __future__ import annotations

import inspect
import itertools
import threading
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Any, Callable, TypeVar, cast, get_type_hints

from infrastructure.observability.probes import (
    DefaultServiceScopeProbe,
    ServiceScopeProbe,
)
from infrastructure.services.exceptions import (
    ServiceConstructionError,
    ServiceNotRegisteredError,
)

T = TypeVar("T")

ServiceFactory = Callable[["ServiceScope"], Any]


class ServiceLifetime(str, Enum):
    """Enum for service lifetimes."""

    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceRegistration:
    """How the container builds one service type.

    Attributes:
        service_type: The type callers ask for.
        implementation: The concrete class built when no factory is given.
        lifetime: The lifetime governing instance reuse.
        factory: Optional callable receiving the active scope.
    """

    service_type: type
    implementation: type
    lifetime: ServiceLifetime
    factory: ServiceFactory | None = None

    def create(self, scope: ServiceScope) -> Any:
        """Build a new instance inside the given scope."""
        if self.factory is not None:
            return self.factory(scope)
        return _autowire(self.implementation, scope)


def _autowire(implementation: type, scope: ServiceScope) -> Any:
    """Construct implementation, resolving annotated __init__ parameters.

    Parameters that declare a default are left to the default. Every other
    parameter must carry a type hint the scope can resolve.
    """
    init = implementation.__init__
    if init is object.__init__:
        return implementation()

    try:
        hints = get_type_hints(init)
    except NameError as e:
        raise ServiceConstructionError(
            f"Cannot evaluate constructor annotations of "
            f"{implementation.__qualname__}: {e}",
            implementation=implementation,
        ) from e

    kwargs: dict[str, Any] = {}
    for name, parameter in inspect.signature(implementation).parameters.items():
        if parameter.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        if parameter.default is not inspect.Parameter.empty:
            continue
        if name not in hints:
            raise ServiceConstructionError(
                f"Parameter '{name}' of {implementation.__qualname__} "
                f"has no type hint to resolve",
                implementation=implementation,
            )
        kwargs[name] = scope.get_service(hints[name])
    return implementation(**kwargs)


class ServiceContainer:
    """Registry of services and owner of singleton instances.

    Registration is expected to finish before the first scope is created.
    Re-registering a service type replaces the earlier registration.
    """

    def __init__(self, probe: ServiceScopeProbe | None = None):
        self._probe = probe or DefaultServiceScopeProbe()
        self._registrations: dict[type, ServiceRegistration] = {}
        self._singletons: dict[type, Any] = {}
        self._singleton_lock = threading.RLock()
        self._scope_ids = itertools.count(1)

    def add_singleton(
        self,
        service_type: type[T],
        implementation: type[T] | None = None,
        factory: Callable[[ServiceScope], T] | None = None,
    ) -> ServiceContainer:
        """Register a service with one instance for the container's lifetime."""
        return self._add(service_type, implementation, factory, ServiceLifetime.SINGLETON)

    def add_scoped(
        self,
        service_type: type[T],
        implementation: type[T] | None = None,
        factory: Callable[[ServiceScope], T] | None = None,
    ) -> ServiceContainer:
        """Register a service with one instance per scope."""
        return self._add(service_type, implementation, factory, ServiceLifetime.SCOPED)

    def add_transient(
        self,
        service_type: type[T],
        implementation: type[T] | None = None,
        factory: Callable[[ServiceScope], T] | None = None,
    ) -> ServiceContainer:
        """Register a service built anew on every request for it."""
        return self._add(
            service_type, implementation, factory, ServiceLifetime.TRANSIENT
        )

    def _add(
        self,
        service_type: type,
        implementation: type | None,
        factory: ServiceFactory | None,
        lifetime: ServiceLifetime,
    ) -> ServiceContainer:
        self._registrations[service_type] = ServiceRegistration(
            service_type=service_type,
            implementation=implementation or service_type,
            lifetime=lifetime,
            factory=factory,
        )
        self._probe.service_registered(
            service_type=service_type.__qualname__,
            lifetime=lifetime.value,
        )
        return self

    def is_registered(self, service_type: type) -> bool:
        """Check whether a service type has a registration."""
        return service_type in self._registrations

    def registration_for(self, service_type: type) -> ServiceRegistration:
        """Get the registration for a service type.

        Raises:
            ServiceNotRegisteredError: If the type was never registered.
        """
        try:
            return self._registrations[service_type]
        except KeyError:
            raise ServiceNotRegisteredError(service_type) from None

    def create_scope(self) -> ServiceScope:
        """Open a new scope; use it as a context manager to close it."""
        scope = ServiceScope(container=self, scope_id=next(self._scope_ids))
        self._probe.scope_opened(scope_id=scope.scope_id)
        return scope

    def _get_singleton(self, registration: ServiceRegistration, scope: ServiceScope) -> Any:
        if registration.service_type in self._singletons:
            return self._singletons[registration.service_type]

        with self._singleton_lock:
            if registration.service_type not in self._singletons:
                self._singletons[registration.service_type] = self._construct(
                    registration, scope
                )
        return self._singletons[registration.service_type]

    def _construct(self, registration: ServiceRegistration, scope: ServiceScope) -> Any:
        instance = registration.create(scope)
        self._probe.service_constructed(
            service_type=registration.service_type.__qualname__,
            implementation=type(instance).__qualname__,
            lifetime=registration.lifetime.value,
        )
        return instance


class ServiceScope:
    """One logical request's view of the container.

    Implements the ServiceProvider port: get_service() builds or reuses an
    instance according to its registered lifetime.
    """

    def __init__(self, container: ServiceContainer, scope_id: int):
        self._container = container
        self.scope_id = scope_id
        self._instances: dict[type, Any] = {}
        self._owned: list[Any] = []
        self._lock = threading.RLock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_service(self, service_type: type[T]) -> T:
        """Get an instance of service_type within this scope.

        Raises:
            ServiceNotRegisteredError: If the type was never registered.
            ServiceConstructionError: If the instance cannot be autowired.
            RuntimeError: If the scope has already been closed.
        """
        if self._closed:
            raise RuntimeError(f"Service scope {self.scope_id} is closed")

        registration = self._container.registration_for(service_type)

        if registration.lifetime is ServiceLifetime.SINGLETON:
            return cast(T, self._container._get_singleton(registration, self))

        with self._lock:
            if self._closed:
                raise RuntimeError(f"Service scope {self.scope_id} is closed")
            if registration.lifetime is ServiceLifetime.SCOPED:
                if service_type not in self._instances:
                    self._instances[service_type] = self._create_owned(registration)
                return cast(T, self._instances[service_type])
            return cast(T, self._create_owned(registration))

    def _create_owned(self, registration: ServiceRegistration) -> Any:
        instance = self._container._construct(registration, self)
        self._owned.append(instance)
        return instance

    def close(self) -> None:
        """Close every owned instance that exposes close(), newest first.

        All instances are attempted; the first failure is re-raised
        afterwards.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            owned, self._owned = self._owned, []
            self._instances.clear()

        first_error: Exception | None = None
        disposed = 0
        for instance in reversed(owned):
            close = getattr(instance, "close", None)
            if not callable(close):
                continue
            try:
                close()
                disposed += 1
            except Exception as e:
                self._container._probe.service_disposal_failed(
                    implementation=type(instance).__qualname__,
                    error=e,
                )
                if first_error is None:
                    first_error = e

        self._container._probe.scope_closed(
            scope_id=self.scope_id, disposed_count=disposed
        )
        if first_error is not None:
            raise first_error

    def __enter__(self) -> ServiceScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
