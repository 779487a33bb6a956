"""
Component Transformer.

Runs the two rewrite stages over a private copy of the component tree:

1.  **Generic rules**: the `RuleRegistry`, in registration order.
2.  **Framework pass**: import injection, accessibility and performance
    enhancement, configured from the target framework's adapter.

The caller's `ComponentAST` is never touched. The working copy and a scratch
context absorb every edit; only a run that completes without error hands back
the new tree and merges the recorded imports and dependencies into the
caller's context.
"""

import dataclasses
import logging
from typing import List, Optional

from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.rewriter.interface import RewriterPass
from motion_switcheroo.core.rewriter.passes import (
  AccessibilityPass,
  ImportInjectionPass,
  PerformancePass,
  RuleApplicationPass,
  package_name,
)
from motion_switcheroo.core.rewriter.pipeline import RewriterPipeline
from motion_switcheroo.core.rewriter.rules import RuleRegistry, build_rule_registry
from motion_switcheroo.enums import Framework
from motion_switcheroo.frameworks.base import available_frameworks, resolve_adapter

logger = logging.getLogger(__name__)


def interaction_props() -> List[str]:
  """
  Returns:
      List[str]: Interaction trigger props of every registered dialect.
  """
  props: List[str] = []
  for key in available_frameworks():
    props.extend(resolve_adapter(key).interaction.triggers)
  return list(dict.fromkeys(props))


class Transformer:
  """
  Applies rewrite rules and the framework pass to a component.

  Attributes:
      registry (RuleRegistry): Generic rules, shared read-only across requests.
  """

  def __init__(self, registry: Optional[RuleRegistry] = None):
    self.registry = registry if registry is not None else build_rule_registry()

  def framework_passes(self, framework: Framework) -> List[RewriterPass]:
    adapter = resolve_adapter(framework)
    return [
      ImportInjectionPass(adapter.import_traits),
      AccessibilityPass(interaction_props()),
      PerformancePass(adapter.layout_hint),
    ]

  def transform(self, ast: ComponentAST, context: GenerationContext) -> ComponentAST:
    """
    Produces the rewritten component.

    Args:
        ast (ComponentAST): Parsed input. Not modified.
        context (GenerationContext): Request state. Its `imports` and
            `dependencies` grow only when the transform succeeds.

    Returns:
        ComponentAST: A new tree with all rewrites applied.

    Raises:
        TransformRuleError: If a rule or pass fails.
    """
    working = ast.copy()
    scratch = dataclasses.replace(
      context,
      imports=set(context.imports),
      dependencies=set(context.dependencies),
    )

    pipeline = RewriterPipeline(
      [
        RuleApplicationPass(self.registry.for_framework(context.framework)),
        *self.framework_passes(context.framework),
      ]
    )
    pipeline.run(working, scratch)

    for decl in working.imports:
      scratch.record_import(decl.source)
      package = package_name(decl.source)
      if package:
        scratch.record_dependency(package)

    context.imports.update(scratch.imports)
    context.dependencies.update(scratch.dependencies)
    logger.debug(f"Transformed '{working.component_name}' for {context.framework.value}")
    return working


def transform(ast: ComponentAST, context: GenerationContext) -> ComponentAST:
  """
  Transforms `ast` with the default rule registry.

  Args:
      ast (ComponentAST): Parsed input.
      context (GenerationContext): Request state.

  Returns:
      ComponentAST: The rewritten copy.
  """
  return Transformer().transform(ast, context)
