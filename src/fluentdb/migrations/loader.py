"""Load classes out of migration and seeder files by path."""

from __future__ import annotations

import importlib.util
import inspect
from pathlib import Path
from types import ModuleType

from fluentdb.core.errors import MigrationError


def load_module(path: Path) -> ModuleType:
    """Import ``path`` as a standalone module (not added to ``sys.modules``)."""
    module_name = f"fluentdb_loaded_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise MigrationError(f"Cannot import {path.name}", migration=path.name)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise MigrationError(
            f"Failed to import {path.name}: {exc}",
            migration=path.name,
            cause=exc,
        ) from exc
    return module


def find_subclass(module: ModuleType, base: type, path: Path) -> type:
    """The single ``base`` subclass defined in ``module`` itself."""
    candidates = [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj)
        and issubclass(obj, base)
        and obj is not base
        and obj.__module__ == module.__name__
    ]
    if len(candidates) != 1:
        raise MigrationError(
            f"{path.name} must define exactly one {base.__name__} subclass, found {len(candidates)}",
            migration=path.name,
        )
    return candidates[0]


def load_class(path: Path, base: type) -> type:
    """Load the single ``base`` subclass that ``path`` defines."""
    return find_subclass(load_module(path), base, path)


__all__ = [
    "find_subclass",
    "load_class",
    "load_module",
]
