"""
Transformation Rules.

A rule pairs a predicate with a rewrite over a single structural node. Rules
are immutable and held in a `RuleRegistry` whose insertion order is the
application order. Framework adapters contribute their dialect rules through
`FrameworkAdapter.rules()`; `build_rule_registry` collects them.
"""

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Union

from motion_switcheroo.core.nodes import StructuralNode
from motion_switcheroo.enums import Framework, NodeType

RuleResult = Union[None, StructuralNode, Sequence[StructuralNode]]
Condition = Callable[[StructuralNode, Any], bool]
Transform = Callable[[StructuralNode, Any], RuleResult]


@dataclass(frozen=True)
class TransformationRule:
  """
  A conditional rewrite.

  Attributes:
      name (str): Unique rule identifier, reported on failure.
      description (str): Human readable summary.
      condition (Condition): ``(node, context) -> bool``.
      transform (Transform): ``(node, context) -> node | [nodes] | None``.
          Returning the node itself (or None) keeps an in-place edit;
          another node replaces it; a list splices into the parent.
      framework_scope (Optional[FrozenSet[Framework]]): Target frameworks the
          rule applies to. ``None`` applies everywhere.
  """

  name: str
  description: str
  condition: Condition
  transform: Transform
  framework_scope: Optional[FrozenSet[Framework]] = None

  def __post_init__(self) -> None:
    if self.framework_scope is not None:
      scope = frozenset(Framework.resolve(f) for f in self.framework_scope)
      object.__setattr__(self, "framework_scope", scope)

  def applies_to(self, framework: Framework) -> bool:
    return self.framework_scope is None or framework in self.framework_scope


class RuleRegistry:
  """
  Ordered collection of uniquely named rules.
  """

  def __init__(self, rules: Optional[Iterable[TransformationRule]] = None):
    self._rules: List[TransformationRule] = []
    for rule in rules or []:
      self.register(rule)

  def register(self, rule: TransformationRule) -> None:
    """
    Appends a rule.

    Args:
        rule (TransformationRule): The rule to add.

    Raises:
        ValueError: If a rule with the same name is already registered.
    """
    if any(r.name == rule.name for r in self._rules):
      raise ValueError(f"Rule '{rule.name}' is already registered")
    self._rules.append(rule)

  def get(self, name: str) -> Optional[TransformationRule]:
    return next((r for r in self._rules if r.name == name), None)

  def for_framework(self, framework: Framework) -> List[TransformationRule]:
    return [r for r in self._rules if r.applies_to(framework)]

  def names(self) -> List[str]:
    return [r.name for r in self._rules]

  def __iter__(self) -> Iterator[TransformationRule]:
    return iter(self._rules)

  def __len__(self) -> int:
    return len(self._rules)


def rename_attribute_rule(
  name: str,
  description: str,
  source_attr: str,
  target_attr: str,
  scope: Iterable[Any],
) -> TransformationRule:
  """
  Builds a rule renaming a markup attribute in place.

  The rule only fires while the element carries `source_attr` and not
  `target_attr`, so a second application finds nothing to do.

  Args:
      name (str): Rule name.
      description (str): Rule description.
      source_attr (str): Attribute to rename.
      target_attr (str): New attribute name.
      scope (Iterable[Any]): Frameworks the rule is limited to.

  Returns:
      TransformationRule: The rule.
  """

  def condition(node: StructuralNode, _context: Any) -> bool:
    return node.type == NodeType.ELEMENT and node.has_prop(source_attr) and not node.has_prop(target_attr)

  def transform(node: StructuralNode, _context: Any) -> StructuralNode:
    prop = node.get_prop(source_attr)
    prop.name = target_attr
    return node

  return TransformationRule(
    name=name,
    description=description,
    condition=condition,
    transform=transform,
    framework_scope=frozenset(scope),
  )


def build_rule_registry(frameworks: Optional[Iterable[Any]] = None) -> RuleRegistry:
  """
  Collects the dialect rules of registered framework adapters.

  Args:
      frameworks (Optional[Iterable[Any]]): Adapters to include; all
          registered adapters when omitted.

  Returns:
      RuleRegistry: Rules in framework declaration order.
  """
  from motion_switcheroo.frameworks.base import available_frameworks, resolve_adapter

  registry = RuleRegistry()
  for key in frameworks if frameworks is not None else available_frameworks():
    for rule in resolve_adapter(key).rules():
      registry.register(rule)
  return registry
