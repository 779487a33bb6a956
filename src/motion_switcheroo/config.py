"""
Runtime Configuration Store.

Holds the per-invocation settings of the generation pipeline: source and
target frameworks, TypeScript mode, optimization flags, emitter options and
formatter settings. Values are read from the ``[tool.motion_switcheroo]``
table of the nearest ``pyproject.toml`` and overridden by explicit arguments.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from motion_switcheroo.enums import Framework

TOOL_SECTION = "motion_switcheroo"


class OptimizationFlags(BaseModel):
  """
  Per-request switches selecting enhancement passes and analyzers.
  """

  performance: bool = Field(True, description="Add layout-isolation hints and run the performance analyzer.")
  accessibility: bool = Field(True, description="Add default labels and run the accessibility analyzer.")
  bundle_size: bool = Field(True, description="Run the bundle-size analyzer.")

  @classmethod
  def from_focus(cls, focus: Optional[List[str]]) -> "OptimizationFlags":
    """
    Builds flags from a list of focus areas (``performance``, ``accessibility``,
    ``bundle-size``). An empty or missing list enables everything.

    Args:
        focus (Optional[List[str]]): Selected areas.

    Returns:
        OptimizationFlags: The flags.
    """
    if not focus:
      return cls()
    keys = {f.replace("-", "_").lower() for f in focus}
    return cls(
      performance="performance" in keys,
      accessibility="accessibility" in keys,
      bundle_size="bundle_size" in keys,
    )


class GenerationOptions(BaseModel):
  """
  Emitter switches.
  """

  format: bool = Field(True, description="Apply output formatting.")
  use_formatter: bool = Field(True, description="Pipe output through the external pretty-printer.")
  comments: bool = Field(True, description="Keep source comments.")
  source_map: bool = Field(False, description="Produce a line-level source map.")
  minify: bool = Field(False, description="Drop blank lines and indentation.")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the generation engine.
  """

  framework: str = Field("react", description="Framework the source is written for.")
  target: Optional[str] = Field(None, description="Framework to emit; defaults to `framework`.")
  typescript: bool = Field(False, description="Source and output use TypeScript.")
  plugins: List[str] = Field(default_factory=list, description="Extra parser syntax plugins.")
  optimization: OptimizationFlags = Field(default_factory=OptimizationFlags)
  generation: GenerationOptions = Field(default_factory=GenerationOptions)
  optimize_output: bool = Field(False, description="Rewrite the generated code with the optimizer suite.")
  formatter_command: List[str] = Field(
    default_factory=lambda: ["prettier"],
    description="Command used to invoke the pretty-printer.",
  )
  formatter_timeout: float = Field(10.0, description="Seconds before the pretty-printer is abandoned.")

  @field_validator("framework", "target")
  @classmethod
  def validate_framework(cls, v: Optional[str]) -> Optional[str]:
    """
    Ensures the framework is registered in the system.

    Args:
        v (Optional[str]): The framework key to validate.

    Returns:
        Optional[str]: The normalized (lowercase) framework key.

    Raises:
        ValueError: If the framework is not found in the registry.
    """
    if v is None:
      return None
    v_clean = str(v).lower().strip()
    # Adapters import the rewriter, which imports this module.
    from motion_switcheroo.frameworks.base import available_frameworks

    known = available_frameworks()
    if v_clean not in known:
      raise ValueError(f"Unknown framework: '{v_clean}'. Supported frameworks: {known}")
    return v_clean

  @property
  def source_framework(self) -> Framework:
    return Framework.resolve(self.framework)

  @property
  def target_framework(self) -> Framework:
    return Framework.resolve(self.target or self.framework)

  @classmethod
  def load(
    cls,
    framework: Optional[str] = None,
    target: Optional[str] = None,
    typescript: Optional[bool] = None,
    optimization: Optional[OptimizationFlags] = None,
    generation: Optional[Dict[str, Any]] = None,
    optimize_output: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Args:
        framework (Optional[str]): Override for the source framework.
        target (Optional[str]): Override for the target framework.
        typescript (Optional[bool]): Override for TypeScript mode.
        optimization (Optional[OptimizationFlags]): Override for optimization flags.
        generation (Optional[Dict[str, Any]]): Emitter options merged over the TOML values.
        optimize_output (Optional[bool]): Override for output optimization.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        UnsupportedFrameworkError: If a framework key is not registered.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    final_framework = framework or toml_config.get("framework", "react")
    final_target = target or toml_config.get("target")
    final_typescript = typescript if typescript is not None else toml_config.get("typescript", False)

    # Reject unknown frameworks before any other work.
    Framework.resolve(final_framework)
    if final_target is not None:
      Framework.resolve(final_target)

    if optimization is None:
      optimization = OptimizationFlags.model_validate(toml_config.get("optimization", {}))

    generation_settings = {**toml_config.get("generation", {}), **(generation or {})}

    if optimize_output is None:
      optimize_output = toml_config.get("optimize_output", False)

    extras: Dict[str, Any] = {}
    if "formatter_command" in toml_config:
      command = toml_config["formatter_command"]
      extras["formatter_command"] = command.split() if isinstance(command, str) else list(command)
    if "formatter_timeout" in toml_config:
      extras["formatter_timeout"] = float(toml_config["formatter_timeout"])
    if "plugins" in toml_config:
      extras["plugins"] = list(toml_config["plugins"])

    return cls(
      framework=final_framework,
      target=final_target,
      typescript=final_typescript,
      optimization=optimization,
      generation=GenerationOptions.model_validate(generation_settings),
      optimize_output=optimize_output,
      **extras,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logging.warning(f"Ignoring unreadable config {toml_path}: {e}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      logging.warning(f"Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str.lower():
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
