"""Discovery of tenant candidate classes from a package.

Tenant implementations are grouped in one package (``tenants`` by
default). Scanning imports that package and all of its submodules and
returns the classes they define, producing the pool that the candidate
registry filters per capability.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from types import ModuleType


def _iter_package_modules(package: ModuleType) -> list[ModuleType]:
    modules = [package]
    search_path = getattr(package, "__path__", None)
    if search_path is None:
        return modules

    names = sorted(
        info.name
        for info in pkgutil.walk_packages(search_path, prefix=f"{package.__name__}.")
    )
    modules.extend(importlib.import_module(name) for name in names)
    return modules


def scan_candidate_types(package_name: str) -> list[type]:
    """Collect the classes defined in a package and its submodules.

    Modules are visited in sorted name order (the package itself first)
    and classes in definition order, so the pool order - and with it the
    tenant tie-break - is deterministic. Classes merely imported into a
    module are not collected there.

    Args:
        package_name: Importable dotted name, e.g. "tenants".

    Returns:
        Classes in discovery order, without duplicates.

    Raises:
        ModuleNotFoundError: If the package cannot be imported.
    """
    package = importlib.import_module(package_name)

    discovered: list[type] = []
    for module in _iter_package_modules(package):
        for value in vars(module).values():
            if inspect.isclass(value) and value.__module__ == module.__name__:
                discovered.append(value)
    return discovered
