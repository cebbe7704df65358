"""Resolve a ``module:attribute`` import path into a :class:`ToolRegistry`."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from agents_mcp.protocols.errors import RegistryLoadError
from agents_mcp.registry.models import ToolDescriptor
from agents_mcp.registry.registry import ToolRegistry

logger = logging.getLogger(__name__)


def load_registry(path: str | None) -> ToolRegistry:
    """Import *path* and coerce the target into a :class:`ToolRegistry`.

    The target may be a ``ToolRegistry``, a mapping of name to descriptor, an
    iterable of descriptors, or a zero-argument callable returning any of
    those. ``None`` yields an empty registry.

    Raises:
        RegistryLoadError: If the path is malformed, the import fails, or the
            target has an unsupported shape.
    """
    if not path:
        logger.warning("No tool registry configured; serving an empty catalog")
        return ToolRegistry()

    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise RegistryLoadError(f"Registry path must look like 'package.module:attribute', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise RegistryLoadError(f"Cannot import {module_name!r}: {exc}") from exc

    try:
        target: Any = getattr(module, attr)
    except AttributeError as exc:
        raise RegistryLoadError(f"Module {module_name!r} has no attribute {attr!r}") from exc

    if callable(target):
        target = target()

    registry = coerce_registry(target)
    logger.info("Loaded %d tool(s) from %s", len(registry), path)
    return registry


def coerce_registry(target: Any) -> ToolRegistry:
    """Turn a registry-like object into a :class:`ToolRegistry`."""
    if isinstance(target, ToolRegistry):
        return target
    if isinstance(target, Mapping):
        tools = list(target.values())
    elif isinstance(target, Iterable) and not isinstance(target, (str, bytes)):
        tools = list(target)
    else:
        raise RegistryLoadError(f"Unsupported registry object: {type(target).__name__}")

    bad = [t for t in tools if not isinstance(t, ToolDescriptor)]
    if bad:
        raise RegistryLoadError(f"Registry entries must be ToolDescriptor, got {type(bad[0]).__name__}")
    return ToolRegistry(tools)
