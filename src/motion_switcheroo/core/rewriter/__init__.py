"""
Rewriter Package.

The rewrite engine of the pipeline:
- Rules: immutable conditional rewrites held in an ordered registry.
- Passes: generic rule application, import injection and enhancements.
- Transformer: runs both stages over a private copy of the tree.
"""

from motion_switcheroo.core.rewriter.rules import (
  RuleRegistry,
  TransformationRule,
  build_rule_registry,
  rename_attribute_rule,
)
from motion_switcheroo.core.rewriter.transformer import Transformer, transform

__all__ = [
  "RuleRegistry",
  "TransformationRule",
  "Transformer",
  "build_rule_registry",
  "rename_attribute_rule",
  "transform",
]
