"""
Rewriter Passes.

- `RuleApplicationPass`: the ordered generic rule registry.
- `ImportInjectionPass`: animation library import injection.
- `AccessibilityPass` / `PerformancePass`: attribute enhancements.
"""

from motion_switcheroo.core.rewriter.passes.enhance import AccessibilityPass, PerformancePass
from motion_switcheroo.core.rewriter.passes.imports import ImportInjectionPass, package_name
from motion_switcheroo.core.rewriter.passes.rules import RuleApplicationPass

__all__ = [
  "AccessibilityPass",
  "ImportInjectionPass",
  "PerformancePass",
  "RuleApplicationPass",
  "package_name",
]
