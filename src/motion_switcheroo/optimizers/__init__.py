"""
Optimizer Suite.

Runs the text-level analyzers selected by `OptimizationFlags` in fixed order:
performance, accessibility, bundle-size.
"""

from typing import Any, List, Optional

from motion_switcheroo.config import OptimizationFlags
from motion_switcheroo.enums import Framework
from motion_switcheroo.optimizers.accessibility import AccessibilityAnalyzer
from motion_switcheroo.optimizers.base import Analyzer, Suggestion, to_fixpoint
from motion_switcheroo.optimizers.bundle import BundleAnalyzer, BundleCostEstimate, estimate_cost
from motion_switcheroo.optimizers.performance import PerformanceAnalyzer

__all__ = [
  "AccessibilityAnalyzer",
  "Analyzer",
  "BundleAnalyzer",
  "BundleCostEstimate",
  "OptimizerSuite",
  "PerformanceAnalyzer",
  "Suggestion",
  "estimate_cost",
]


class OptimizerSuite:
  """
  Composition of the enabled analyzers.
  """

  def __init__(self, flags: Optional[OptimizationFlags] = None):
    self.flags = flags or OptimizationFlags()
    self.analyzers: List[Analyzer] = []
    if self.flags.performance:
      self.analyzers.append(PerformanceAnalyzer())
    if self.flags.accessibility:
      self.analyzers.append(AccessibilityAnalyzer())
    if self.flags.bundle_size:
      self.analyzers.append(BundleAnalyzer())

  def analyze(self, code: str, framework: Any) -> List[Suggestion]:
    """
    Collects suggestions from every enabled analyzer.

    Args:
        code (str): Generated source.
        framework (Any): Framework the code targets.

    Returns:
        List[Suggestion]: Findings grouped by analyzer order.

    Raises:
        UnsupportedFrameworkError: If the framework is unknown.
    """
    fw = Framework.resolve(framework)
    suggestions: List[Suggestion] = []
    for analyzer in self.analyzers:
      suggestions.extend(analyzer.analyze(code, fw))
    return suggestions

  def optimize(self, code: str, framework: Any) -> str:
    """
    Applies every enabled rewrite until none of them changes the text.
    """
    fw = Framework.resolve(framework)

    def step(text: str) -> str:
      for analyzer in self.analyzers:
        text = analyzer.rewrite(text, fw)
      return text

    return to_fixpoint(step, code)
