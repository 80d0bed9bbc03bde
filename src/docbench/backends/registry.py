"""Backend registry and plugin discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import re
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from pydantic import ValidationError

from docbench.backends.base import ConversionBackend
from docbench.backends.builtins import builtin_backends
from docbench.errors import PluginError
from docbench.schemas import BackendSelectionConfig, BackendSettings

# Names become part of artifact filenames.
BACKEND_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class BackendRegistry:
    """Registry for conversion backends, keyed by unique name."""

    def __init__(self) -> None:
        self._backends: dict[str, ConversionBackend] = {}

    def register(self, backend: ConversionBackend) -> None:
        """Register a backend instance.

        Registering a name twice replaces the earlier backend but keeps its
        position in the run order.

        Raises
        ------
        PluginError
            If the name is empty or invalid, or the backend does not satisfy
            ``ConversionBackend``.
        """
        name = str(getattr(backend, "name", "") or "").strip()
        if not name:
            raise PluginError("Backend must define a non-empty 'name'.")
        if not BACKEND_NAME_RE.match(name):
            raise PluginError(
                f"Invalid backend name '{name}'. Use letters, digits, '.', '_' or '-'."
            )
        if not isinstance(backend, ConversionBackend):
            raise PluginError(
                f"Backend '{name}' must provide probe(), convert() and "
                "supported_formats."
            )
        self._backends[name] = backend

    def names(self) -> list[str]:
        """Return registered backend names in registration order."""
        return list(self._backends)

    def get(self, name: str) -> ConversionBackend:
        """Get a backend by name.

        Raises
        ------
        PluginError
            If no backend is registered under ``name``.
        """
        try:
            return self._backends[name]
        except KeyError as exc:
            raise PluginError(
                f"Unknown backend '{name}'. Available backends: {', '.join(self.names())}"
            ) from exc

    def select(self, names: Iterable[str] | None = None) -> list[ConversionBackend]:
        """Return the requested backends, or all of them when ``names`` is empty.

        Parameters
        ----------
        names : Iterable[str] | None, optional
            Backend names; duplicates are ignored.

        Returns
        -------
        list[ConversionBackend]
            Backends in the requested order.
        """
        try:
            payload = BackendSelectionConfig(names=list(names or []))
        except ValidationError as exc:
            raise PluginError(f"Invalid backend selection: {exc}") from exc
        if not payload.names:
            return list(self._backends.values())
        return [self.get(name) for name in payload.names]

    def load_module(self, module_or_path: str) -> None:
        """Load backend providers from a module name or file path.

        .. warning::
            This executes code from the given module. Only load plugins from
            trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Raises
    ------
    PluginError
        If the module cannot be imported.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load backend module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginError(
                f"Unable to execute backend module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import backend module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: BackendRegistry) -> None:
    """Register backend definitions exposed by a plugin module."""
    if hasattr(module, "register_backends"):
        module.register_backends(registry)
        return

    backends_obj = getattr(module, "BACKENDS", None)
    if backends_obj is not None:
        for backend in backends_obj:
            registry.register(backend)
        return

    backend_obj = getattr(module, "BACKEND", None)
    if backend_obj is not None:
        registry.register(backend_obj)
        return

    raise PluginError(
        "Backend module must expose register_backends(registry), BACKENDS, or BACKEND."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
    settings: BackendSettings | None = None,
) -> BackendRegistry:
    """Create a registry holding the built-in backends plus plugin modules.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional backend modules to load.
    settings : BackendSettings | None, optional
        Settings for the subprocess-driven built-in backends.

    Returns
    -------
    BackendRegistry
        Registry with built-in and external backends.
    """
    registry = BackendRegistry()
    for backend in builtin_backends(settings):
        registry.register(backend)
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
