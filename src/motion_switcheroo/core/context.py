"""
Generation Context.

Per-request mutable state threaded through the transform and emit stages.
`imports` and `dependencies` only ever grow during a run and are discarded
with the context when the request ends.
"""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from motion_switcheroo.config import GenerationOptions, OptimizationFlags, RuntimeConfig
from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.enums import Framework


def source_hash(source: str) -> str:
  """
  Returns:
      str: SHA-256 hex digest of the source text.
  """
  return hashlib.sha256(source.encode("utf-8")).hexdigest()


@dataclass
class GenerationContext:
  """
  Attributes:
      framework (Framework): Emission target.
      typescript (bool): Emit TypeScript.
      component_name (str): Name of the component being generated.
      imports (Set[str]): Module specifiers imported by the output.
      dependencies (Set[str]): Packages the output depends on.
      optimization (OptimizationFlags): Enabled enhancement passes.
  """

  framework: Framework
  typescript: bool = False
  component_name: str = "UnnamedComponent"
  imports: Set[str] = field(default_factory=set)
  dependencies: Set[str] = field(default_factory=set)
  optimization: OptimizationFlags = field(default_factory=OptimizationFlags)

  def __post_init__(self) -> None:
    self.framework = Framework.resolve(self.framework)

  @classmethod
  def for_component(
    cls,
    ast: ComponentAST,
    framework: Optional[Framework] = None,
    optimization: Optional[OptimizationFlags] = None,
    typescript: Optional[bool] = None,
  ) -> "GenerationContext":
    """
    Creates a context seeded from a parsed component.

    Args:
        ast (ComponentAST): The parsed component.
        framework (Optional[Framework]): Target framework; defaults to the source framework.
        optimization (Optional[OptimizationFlags]): Enhancement flags.
        typescript (Optional[bool]): Output mode; defaults to the source mode.

    Returns:
        GenerationContext: A fresh context.
    """
    return cls(
      framework=framework or ast.framework,
      typescript=ast.typescript if typescript is None else typescript,
      component_name=ast.component_name,
      optimization=optimization or OptimizationFlags(),
    )

  @classmethod
  def from_config(cls, config: RuntimeConfig, component_name: str) -> "GenerationContext":
    return cls(
      framework=config.target_framework,
      typescript=config.typescript,
      component_name=component_name,
      optimization=config.optimization.model_copy(),
    )

  def record_import(self, source: str) -> None:
    self.imports.add(source)

  def record_dependency(self, package: str) -> None:
    self.dependencies.add(package)

  def to_dict(self) -> Dict[str, Any]:
    """
    Returns:
        Dict[str, Any]: JSON-compatible view with sorted sets.
    """
    return {
      "framework": self.framework.value,
      "typescript": self.typescript,
      "component_name": self.component_name,
      "imports": sorted(self.imports),
      "dependencies": sorted(self.dependencies),
      "optimization": self.optimization.model_dump(),
    }

  def cache_key(self, source: Optional[str] = None, options: Optional[GenerationOptions] = None) -> str:
    """
    Builds a stable memoization key for ``(source_hash, context, options)``.

    Only the request inputs take part; `imports` and `dependencies` are
    outputs of the run and are excluded.

    Args:
        source (Optional[str]): Source text of the request.
        options (Optional[GenerationOptions]): Emitter options.

    Returns:
        str: SHA-256 hex digest.
    """
    payload = {
      "source": source_hash(source) if source is not None else None,
      "framework": self.framework.value,
      "typescript": self.typescript,
      "component_name": self.component_name,
      "optimization": self.optimization.model_dump(),
      "options": options.model_dump() if options is not None else None,
    }
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()
