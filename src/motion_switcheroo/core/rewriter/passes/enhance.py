"""
Enhancement Passes.

Attribute-level improvements applied to animated elements after the generic
rules have run:

- `AccessibilityPass`: interactive animated elements without an accessible
  name receive a default ``aria-label``.
- `PerformancePass`: animated elements carrying transform-affecting props
  receive the target framework's layout-isolation hint.

Both passes only add attributes that are absent, so applying them twice
leaves the tree unchanged.
"""

import logging
from typing import Iterable, List, Optional

from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.extraction import ANIMATION_NAMESPACE, is_animated_element
from motion_switcheroo.core.nodes import NodeArena, Prop, StructuralNode
from motion_switcheroo.core.rewriter.interface import RewriterPass
from motion_switcheroo.enums import NodeType
from motion_switcheroo.frameworks.base import LayoutHint

logger = logging.getLogger(__name__)

INTERACTIVE_TAGS = frozenset({"button", "a", "input", "select", "textarea"})
DEFAULT_LABEL = "Interactive element"
LABEL_PROPS = ("aria-label", "aria-labelledby", ":aria-label", ":aria-labelledby", "v-bind:aria-label")


def host_tag(node: StructuralNode) -> str:
  """
  Returns the DOM tag an animated element renders (``motion.button`` -> ``button``).
  """
  tag = node.attributes.get("tag", "")
  prefix = ANIMATION_NAMESPACE + "."
  if tag.startswith(prefix):
    return tag[len(prefix) :]
  return tag.lower()


def matches_any(name: str, patterns: Iterable[str]) -> bool:
  """
  Checks a prop name against exact names and ``prefix*`` patterns.
  """
  for pattern in patterns:
    if pattern.endswith("*"):
      if name.startswith(pattern[:-1]):
        return True
    elif name == pattern:
      return True
  return False


def append_prop(arena: NodeArena, node: StructuralNode, name: str, value: str) -> Prop:
  """
  Adds an attribute after the existing ones, matching their spacing.

  A braced `value` becomes an expression container holding the inner code.

  Args:
      arena (NodeArena): Node storage.
      node (StructuralNode): The element.
      name (str): Attribute name.
      value (str): Raw value, quoted (``"x"``) or braced (``{true}``).

  Returns:
      Prop: The new attribute.
  """
  props = node.attributes.setdefault("props", [])
  leading = props[-1].leading if props else " "
  if value.startswith("{") and value.endswith("}"):
    code = arena.add(StructuralNode(NodeType.TEXT, {"value": value[1:-1], "start": None}))
    expression = arena.add(StructuralNode(NodeType.EXPRESSION, {"start": None}, children=[code]))
    arena.parents[expression] = node.id
    prop = Prop(name=name, leading=leading, expression=expression)
  else:
    prop = Prop(name=name, value=value, leading=leading)
  props.append(prop)
  return prop


def animated_elements(ast: ComponentAST) -> List[StructuralNode]:
  return [n for n in ast.arena.walk(ast.root_id) if is_animated_element(n)]


class AccessibilityPass(RewriterPass):
  """
  Labels interactive animated elements.

  An element is interactive when it renders an interactive DOM tag or carries
  any interaction trigger prop (hover, tap, focus or click handlers).
  """

  name = "accessibility"

  def __init__(self, trigger_props: Iterable[str]):
    self.trigger_props = list(trigger_props)

  def apply(self, ast: ComponentAST, context: GenerationContext) -> None:
    if not context.optimization.accessibility:
      return
    labelled = 0
    for node in animated_elements(ast):
      if node.has_prop(*LABEL_PROPS):
        continue
      interactive = host_tag(node) in INTERACTIVE_TAGS or any(
        matches_any(p.name, self.trigger_props) for p in node.props
      )
      if interactive:
        append_prop(ast.arena, node, "aria-label", f'"{DEFAULT_LABEL}"')
        labelled += 1
    if labelled:
      logger.debug(f"Added default labels to {labelled} element(s)")


class PerformancePass(RewriterPass):
  """
  Adds the layout-isolation hint to transform-affecting animated elements.
  """

  name = "performance"

  def __init__(self, hint: Optional[LayoutHint]):
    self.hint = hint

  def apply(self, ast: ComponentAST, context: GenerationContext) -> None:
    if not context.optimization.performance or self.hint is None:
      return
    hint = self.hint
    hinted = 0
    for node in animated_elements(ast):
      if node.has_prop(hint.prop) or any(matches_any(p.name, hint.conflicts) for p in node.props):
        continue
      if any(matches_any(p.name, hint.triggers) for p in node.props):
        append_prop(ast.arena, node, hint.prop, hint.value)
        hinted += 1
    if hinted:
      logger.debug(f"Added '{hint.prop}' to {hinted} element(s)")
