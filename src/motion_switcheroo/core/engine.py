"""
Orchestration Engine.

`MotionEngine` drives one generation request end to end:

1.  **Parse**: source text into a `ComponentAST` for the source framework.
2.  **Transform**: rewrite rules and the target framework's pass.
3.  **Generate**: serialize, normalize and (optionally) format.
4.  **Optimize**: with ``optimize_output``, rewrite the emitted text with the
    enabled analyzers; suggestions and a bundle cost estimate are always
    collected for the enabled flags.

Pipeline failures surface as a failed `GenerationResult` carrying the error
message and its stable code; callers never see a partial result.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from motion_switcheroo.config import RuntimeConfig
from motion_switcheroo.core.component import ComponentAST, ParseOptions
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.generator import generate
from motion_switcheroo.core.parser import parse
from motion_switcheroo.core.rewriter import RuleRegistry, Transformer
from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import MotionSwitcherooError
from motion_switcheroo.optimizers import BundleCostEstimate, OptimizerSuite, Suggestion, estimate_cost
from motion_switcheroo.utils.console import log_error

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
  """
  Structured result of a single generation request.
  """

  success: bool = Field(True, description="True if the pipeline produced output.")
  code: str = Field("", description="The generated (and possibly optimized) source.")
  imports: List[str] = Field(default_factory=list, description="Module specifiers imported by the output.")
  exports: List[str] = Field(default_factory=list)
  dependencies: List[str] = Field(default_factory=list, description="Packages the output depends on.")
  component_name: str = ""
  framework: Optional[Framework] = None
  typescript: bool = False
  suggestions: List[Suggestion] = Field(default_factory=list)
  error: Optional[str] = None
  error_type: Optional[str] = Field(None, description="Stable error code, e.g. 'PARSE_ERROR'.")
  cost: Optional[BundleCostEstimate] = None


class MotionEngine:
  """
  The main generation unit.

  Holds the resolved configuration and a shared, read-only rule registry.
  Each `run` owns its tree and context.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, registry: Optional[RuleRegistry] = None):
    """
    Args:
        config (Optional[RuntimeConfig]): Runtime settings. Defaults are loaded
            from ``pyproject.toml`` when omitted.
        registry (Optional[RuleRegistry]): Rule registry override.
    """
    self.config = config or RuntimeConfig.load()
    self.transformer = Transformer(registry)

  @property
  def source(self) -> Framework:
    return self.config.source_framework

  @property
  def target(self) -> Framework:
    return self.config.target_framework

  def parse(self, code: str) -> ComponentAST:
    options = ParseOptions(
      framework=self.source,
      typescript=self.config.typescript,
      plugins=list(self.config.plugins),
    )
    return parse(code, options)

  def run(self, code: str, component_name: Optional[str] = None) -> GenerationResult:
    """
    Executes the full pipeline.

    Args:
        code (str): Component source text.
        component_name (Optional[str]): Overrides the name resolved by the parser.

    Returns:
        GenerationResult: The generated code, or the structured failure.
    """
    logger.debug(f"Starting run: {self.source.value} -> {self.target.value}")
    try:
      ast = self.parse(code)
      context = GenerationContext.from_config(self.config, component_name or ast.component_name)
      transformed = self.transformer.transform(ast, context)
      generated = generate(transformed, context, self.config.generation, self.config)

      suite = OptimizerSuite(context.optimization)
      output = generated.code
      if self.config.optimize_output:
        output = suite.optimize(output, context.framework)

      return GenerationResult(
        success=True,
        code=output,
        imports=generated.imports,
        exports=generated.exports,
        dependencies=sorted(context.dependencies),
        component_name=context.component_name,
        framework=context.framework,
        typescript=context.typescript,
        suggestions=suite.analyze(output, context.framework),
        cost=estimate_cost(output, context.framework) if context.optimization.bundle_size else None,
      )
    except MotionSwitcherooError as e:
      log_error(f"Generation failed [{e.code}]: {e.message}")
      return GenerationResult(
        success=False,
        component_name=component_name or "",
        framework=self.target,
        typescript=self.config.typescript,
        error=e.message,
        error_type=e.code,
      )


def generate_component(code: str, config: Optional[RuntimeConfig] = None) -> GenerationResult:
  """
  One-shot helper around `MotionEngine.run`.
  """
  return MotionEngine(config).run(code)
