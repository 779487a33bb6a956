"""
Starter Templates and Animation Patterns.
"""

from motion_switcheroo.templates.patterns import (
  AnimationPattern,
  PatternLibrary,
  load_patterns,
  merge_pattern_configs,
  motion_props,
)
from motion_switcheroo.templates.store import Template, TemplateFilter, TemplateStore, load_templates

__all__ = [
  "AnimationPattern",
  "PatternLibrary",
  "Template",
  "TemplateFilter",
  "TemplateStore",
  "load_patterns",
  "load_templates",
  "merge_pattern_configs",
  "motion_props",
]
