"""
Generic Rule Pass.

Applies the registry rules in order. Each rule sees every node of the working
tree in pre-order; the node list is snapshotted per rule so splices made by a
rule never shift the traversal, and nodes detached by an earlier edit are
skipped.
"""

import logging
from typing import List

from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.nodes import NodeArena, StructuralNode
from motion_switcheroo.core.rewriter.interface import RewriterPass
from motion_switcheroo.core.rewriter.rules import RuleResult, TransformationRule
from motion_switcheroo.errors import TransformRuleError

logger = logging.getLogger(__name__)


class RuleApplicationPass(RewriterPass):
  """
  Runs a list of `TransformationRule` objects over the working tree.
  """

  name = "rules"

  def __init__(self, rules: List[TransformationRule]):
    self.rules = rules

  def apply(self, ast: ComponentAST, context: GenerationContext) -> None:
    """
    Raises:
        TransformRuleError: If a rule's condition or transform raises.
    """
    arena = ast.arena
    for rule in self.rules:
      if not rule.applies_to(context.framework):
        continue
      applied = 0
      for idx in [n.id for n in arena.walk(ast.root_id)]:
        if not arena.is_attached(idx, ast.root_id):
          continue
        node = arena.get(idx)
        try:
          if not rule.condition(node, context):
            continue
          _commit(arena, node, rule.transform(node, context))
        except Exception as exc:
          raise TransformRuleError(rule.name, exc) from exc
        applied += 1
      if applied:
        logger.debug(f"Rule '{rule.name}' rewrote {applied} node(s)")


def _commit(arena: NodeArena, node: StructuralNode, result: RuleResult) -> None:
  if result is None or result is node:
    return
  arena.replace(node.id, result)
