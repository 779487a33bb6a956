from .analysis import handle_analyze, handle_optimize
from .catalog import handle_frameworks, handle_patterns, handle_templates
from .generate import build_motion_props, handle_generate, handle_scaffold

__all__ = [
  "build_motion_props",
  "handle_analyze",
  "handle_frameworks",
  "handle_generate",
  "handle_optimize",
  "handle_patterns",
  "handle_scaffold",
  "handle_templates",
]
