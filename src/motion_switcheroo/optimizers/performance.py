"""
Performance Analyzer.

Checks emitted code for animation patterns that defeat compositor-only
rendering:

1.  **Layout properties**: literal ``width``/``height``/offset/spacing values
    force layout on every frame (high).
2.  **Missing hint**: ``transform`` keys without ``willChange``,
    ``will-change`` or ``layoutRoot`` (medium).
3.  **Animation count**: more than `MAX_SIMULTANEOUS_ANIMATIONS` animation
    usages in one component (medium).

The rewrite swaps quoted ``width``/``height`` for scale transforms, adds a
``willChange`` hint before ``transform`` keys, and clamps durations above one
second. ``<style>`` blocks are left untouched.
"""

import re
from typing import Any, List

from motion_switcheroo.enums import Framework, Severity, SuggestionKind
from motion_switcheroo.frameworks.common import outside_style
from motion_switcheroo.optimizers.base import Analyzer, Suggestion, blank_styles, line_of

MAX_SIMULTANEOUS_ANIMATIONS = 5
MAX_DURATION = 1

_KEY_GUARD = r"(?<![\w$-])"
_LAYOUT_PROP_RE = re.compile(_KEY_GUARD + r"(?:width|height|top|left|right|bottom|padding|margin):\s*['\"`]")
_WIDTH_RE = re.compile(_KEY_GUARD + r"width:\s*(['\"`])[^'\"`<>\n]*\1")
_HEIGHT_RE = re.compile(_KEY_GUARD + r"height:\s*(['\"`])[^'\"`<>\n]*\1")
_TRANSFORM_KEY_RE = re.compile(_KEY_GUARD + r"transform:")
_HINT_RE = re.compile(r"willChange|will-change|layoutRoot")
_DURATION_RE = re.compile(_KEY_GUARD + r"duration:\s*(\d+(?:\.\d+)?)")
_ANIMATION_USAGE_RE = re.compile(r"<motion\.\w|<Motion\b|\bv-motion\b|\banimate\(")


class PerformanceAnalyzer(Analyzer):
  """
  Flags and rewrites layout-thrashing animation code.
  """

  kind = SuggestionKind.PERFORMANCE

  def analyze(self, code: str, framework: Any) -> List[Suggestion]:
    Framework.resolve(framework)
    text = blank_styles(code)
    suggestions: List[Suggestion] = []

    layout = _LAYOUT_PROP_RE.search(text)
    if layout:
      suggestions.append(
        self.suggestion(
          Severity.HIGH,
          "Animating width/height can cause layout thrashing",
          "Use transform properties (scale, translate) instead",
          line_of(text, layout.start()),
        )
      )

    transform = _TRANSFORM_KEY_RE.search(text)
    if transform and not _HINT_RE.search(text):
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          "Consider adding will-change for complex animations",
          "Add will-change: transform to animated elements",
          line_of(text, transform.start()),
        )
      )

    if len(_ANIMATION_USAGE_RE.findall(text)) > MAX_SIMULTANEOUS_ANIMATIONS:
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          "Too many simultaneous animations may impact performance",
          "Consider staggering animations or reducing complexity",
        )
      )
    return suggestions

  def rewrite(self, code: str, framework: Framework) -> str:
    hinted = _HINT_RE.search(blank_styles(code)) is not None

    def step(text: str) -> str:
      text = _WIDTH_RE.sub("scaleX: 1", text)
      text = _HEIGHT_RE.sub("scaleY: 1", text)
      if not hinted:
        text = _TRANSFORM_KEY_RE.sub('willChange: "transform", transform:', text)
      return _DURATION_RE.sub(_clamp_duration, text)

    return outside_style(code, step)


def _clamp_duration(match: "re.Match[str]") -> str:
  if float(match.group(1)) > MAX_DURATION:
    return f"duration: {MAX_DURATION}"
  return match.group(0)
