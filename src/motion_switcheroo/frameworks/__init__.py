"""
Framework Adapters Package.

Automatically discovers and registers framework adapters by scanning this
directory for modules. Importing a module triggers its `@register_framework`
decorator, populating the internal `_ADAPTER_REGISTRY`.

This module exposes the registry helpers (`get_adapter`, `resolve_adapter`,
`available_frameworks`).
"""

import importlib
import logging
import pkgutil
from pathlib import Path

from motion_switcheroo.frameworks.base import (
  FrameworkAdapter,
  ImportTraits,
  InteractionTraits,
  LayoutHint,
  MarkupDialect,
  ParseHints,
  _ADAPTER_REGISTRY,
  available_frameworks,
  get_adapter,
  register_framework,
  resolve_adapter,
)

# Infrastructure modules, not adapters.
_EXCLUDED_MODULES = {"base", "__init__", "common"}


def _auto_register_adapters() -> None:
  """
  Scans the current directory for .py files and imports them.
  """
  pkg_path = str(Path(__file__).parent)

  for _, module_name, _ in pkgutil.iter_modules([pkg_path]):
    if module_name in _EXCLUDED_MODULES:
      continue
    importlib.import_module(f".{module_name}", package=__name__)
    logging.debug(f"Loaded framework module '{module_name}'")


_auto_register_adapters()

__all__ = [
  "FrameworkAdapter",
  "ImportTraits",
  "InteractionTraits",
  "LayoutHint",
  "MarkupDialect",
  "ParseHints",
  "_ADAPTER_REGISTRY",
  "available_frameworks",
  "get_adapter",
  "register_framework",
  "resolve_adapter",
]
