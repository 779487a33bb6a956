"""
Interface definition for Rewriter Passes.

This module defines the abstract base class that all transformation passes
must implement to be compatible with the ``RewriterPipeline``.
"""

from abc import ABC, abstractmethod

from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext


class RewriterPass(ABC):
  """
  Abstract contract for a pass over a working copy of the component tree.

  Passes mutate the working arena in place and record the imports and
  dependencies they introduce on the context.
  """

  name: str = "pass"

  @abstractmethod
  def apply(self, ast: ComponentAST, context: GenerationContext) -> None:
    """
    Executes the pass.

    Args:
        ast: The working copy of the component.
        context: Per-request state.
    """
