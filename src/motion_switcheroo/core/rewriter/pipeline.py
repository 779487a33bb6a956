"""
Orchestration logic for executing sequential rewriter passes.

This module provides the ``RewriterPipeline``, which manages the sequential
execution of multiple ``RewriterPass`` instances over a shared context.
"""

from typing import List

from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.rewriter.interface import RewriterPass
from motion_switcheroo.errors import MotionSwitcherooError, TransformRuleError


class RewriterPipeline:
  """
  Manages a sequence of rewriting passes and executes them in order.
  """

  def __init__(self, passes: List[RewriterPass]) -> None:
    """
    Initializes the pipeline with a list of passes.

    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  def run(self, ast: ComponentAST, context: GenerationContext) -> ComponentAST:
    """
    Executes all registered passes sequentially on the working tree.

    Args:
        ast: The working copy to transform in place.
        context: Per-request state.

    Returns:
        The transformed working copy.

    Raises:
        TransformRuleError: If a pass fails; the pass name is attached.
    """
    for pass_instance in self.passes:
      try:
        pass_instance.apply(ast, context)
      except MotionSwitcherooError:
        raise
      except Exception as exc:
        raise TransformRuleError(pass_instance.name, exc) from exc
    return ast
