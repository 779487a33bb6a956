"""
Accessibility Analyzer.

Checks animated code for:

1.  **Reduced motion**: no ``prefers-reduced-motion`` handling (high).
2.  **Labels**: hover/tap-triggered elements without ``aria-label`` or
    ``aria-labelledby`` (medium).
3.  **Focus**: hover-triggered elements without a focus treatment, so
    keyboard users never see the effect (medium).

The rewrite adds a ``prefersReducedMotion`` constant with a per-framework
guard, a default label, and mirrors hover props onto focus.
"""

import re
from typing import Any, Callable, List, Optional

from motion_switcheroo.enums import Framework, Severity, SuggestionKind
from motion_switcheroo.optimizers.base import (
  IMPORT_STATEMENT_RE,
  Analyzer,
  OpenTag,
  Suggestion,
  has_attribute,
  iter_open_tags,
  line_of,
)

DEFAULT_LABEL = "Interactive element"
REDUCED_MOTION_QUERY = "(prefers-reduced-motion: reduce)"
REDUCED_MOTION_DECLARATION = (
  "const prefersReducedMotion = typeof window !== 'undefined' && "
  f"window.matchMedia('{REDUCED_MOTION_QUERY}').matches;"
)

_REDUCED_MOTION_RE = re.compile(r"prefers-reduced-motion|prefersReducedMotion|useReducedMotion")
_ANIMATED_RE = re.compile(r"<motion\.\w|<Motion\b|\bv-motion\b|\banimate\(")

_HOVER_ATTRS = r"whileHover|:hovered|v-bind:hovered"
_TAP_ATTRS = r"whileTap|:tapped|v-bind:tapped"
_LABEL_ATTRS = r"aria-label|aria-labelledby|:aria-label|:aria-labelledby"
_FOCUS_ATTRS = r"whileFocus|:focused|v-bind:focused|onFocus|@focus"

_SCRIPT_SETUP_RE = re.compile(r"<script\b[^>]*\bsetup\b[^>]*>", re.IGNORECASE)
_SCRIPT_TAG_RE = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_STATEMENT_ANIMATE_RE = re.compile(r"^([ \t]*)(animate\()", re.MULTILINE)


def _interactive_tags(code: str, pattern: str) -> List[OpenTag]:
  return [t for t in iter_open_tags(code) if has_attribute(t.text(code), pattern)]


class AccessibilityAnalyzer(Analyzer):
  """
  Flags and rewrites inaccessible animation code.
  """

  kind = SuggestionKind.ACCESSIBILITY

  def analyze(self, code: str, framework: Any) -> List[Suggestion]:
    Framework.resolve(framework)
    suggestions: List[Suggestion] = []

    animated = _ANIMATED_RE.search(code)
    if animated and not _REDUCED_MOTION_RE.search(code):
      suggestions.append(
        self.suggestion(
          Severity.HIGH,
          "Missing prefers-reduced-motion support",
          "Skip or simplify animations when the user prefers reduced motion",
          line_of(code, animated.start()),
        )
      )

    unlabelled = [
      t for t in _interactive_tags(code, f"{_HOVER_ATTRS}|{_TAP_ATTRS}") if not has_attribute(t.text(code), _LABEL_ATTRS)
    ]
    if unlabelled:
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          "Interactive animated elements should have ARIA labels",
          "Add aria-label or aria-labelledby attributes",
          line_of(code, unlabelled[0].start),
        )
      )

    unfocused = [t for t in _interactive_tags(code, _HOVER_ATTRS) if not has_attribute(t.text(code), _FOCUS_ATTRS)]
    if unfocused:
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          "Animated interactive elements need visible focus indicators",
          "Mirror hover animations on focus",
          line_of(code, unfocused[0].start),
        )
      )
    return suggestions

  def rewrite(self, code: str, framework: Framework) -> str:
    code = self._add_reduced_motion(code, framework)
    code = _edit_tags(code, _add_label)
    return _edit_tags(code, _mirror_focus)

  # --- Reduced motion ---

  def _add_reduced_motion(self, code: str, framework: Framework) -> str:
    if _REDUCED_MOTION_RE.search(code) or not _ANIMATED_RE.search(code):
      return code
    if framework == Framework.VUE:
      return _guard_vue(code)
    if framework == Framework.JS:
      code = _STATEMENT_ANIMATE_RE.sub(r"\1if (!prefersReducedMotion) \2", code)
      return _declare_after_imports(code)
    code = _guard_attribute(code, "initial={", "}", "prefersReducedMotion ? false : ")
    return _declare_after_imports(code)


def _declare_after_imports(code: str) -> str:
  last = None
  for last in IMPORT_STATEMENT_RE.finditer(code):
    pass
  if last is None:
    return f"{REDUCED_MOTION_DECLARATION}\n\n{code}"
  end = last.end()
  return f"{code[:end]}\n\n{REDUCED_MOTION_DECLARATION}{code[end:]}"


def _guard_attribute(code: str, opener: str, closer: str, guard: str) -> str:
  """
  Prefixes the value of every `opener`...`closer` attribute with `guard`.

  Braced values are matched with nesting, so ``initial={{ x: 0 }}`` becomes
  ``initial={guard{ x: 0 }}``.
  """
  pieces: List[str] = []
  pos = 0
  while True:
    idx = code.find(opener, pos)
    if idx < 0:
      break
    if idx > 0 and not code[idx - 1].isspace():
      pieces.append(code[pos : idx + len(opener)])
      pos = idx + len(opener)
      continue
    value_start = idx + len(opener)
    value_end = _matching_close(code, value_start, closer)
    pieces.append(code[pos:value_start])
    if value_end is not None and code[value_start:value_end].strip():
      pieces.append(guard)
    pos = value_start
  pieces.append(code[pos:])
  return "".join(pieces)


def _matching_close(code: str, pos: int, closer: str) -> Optional[int]:
  if closer != "}":
    end = code.find(closer, pos)
    return end if end >= 0 else None
  depth = 0
  while pos < len(code):
    ch = code[pos]
    if ch == "{":
      depth += 1
    elif ch == "}":
      if depth == 0:
        return pos
      depth -= 1
    pos += 1
  return None


def _guard_vue(code: str) -> str:
  code = _guard_attribute(code, ':initial="', '"', "prefersReducedMotion ? {} : ")
  setup = _SCRIPT_SETUP_RE.search(code)
  if setup:
    end = setup.end()
    return f"{code[:end]}\n{REDUCED_MOTION_DECLARATION}{code[end:]}"
  lang = ' lang="ts"' if re.search(r"<script\b[^>]*lang=['\"]ts['\"]", code) else ""
  block = f"<script setup{lang}>\n{REDUCED_MOTION_DECLARATION}\n</script>\n"
  script = _SCRIPT_TAG_RE.search(code)
  if script:
    return f"{code[: script.start()]}{block}{code[script.start():]}"
  return f"{code.rstrip()}\n\n{block}"


# --- Tag edits ---


def _edit_tags(code: str, edit: Callable[[str, str], str]) -> str:
  pieces: List[str] = []
  pos = 0
  for tag in iter_open_tags(code):
    pieces.append(code[pos : tag.start])
    pieces.append(edit(tag.text(code), tag.name))
    pos = tag.end
  pieces.append(code[pos:])
  return "".join(pieces)


def _add_label(tag_text: str, name: str) -> str:
  interactive = has_attribute(tag_text, f"{_HOVER_ATTRS}|{_TAP_ATTRS}")
  if not interactive or has_attribute(tag_text, _LABEL_ATTRS):
    return tag_text
  insert_at = len(name) + 1
  return f'{tag_text[:insert_at]} aria-label="{DEFAULT_LABEL}"{tag_text[insert_at:]}'


_JSX_HOVER_RE = re.compile(r"(\swhileHover=)(\{)")
_VUE_HOVER_RE = re.compile(r"(\s)(:|v-bind:)hovered=(['\"])(.*?)\3", re.DOTALL)


def _mirror_focus(tag_text: str, name: str) -> str:
  if has_attribute(tag_text, _FOCUS_ATTRS):
    return tag_text

  jsx = _JSX_HOVER_RE.search(tag_text)
  if jsx:
    value_start = jsx.end(2)
    value_end = _matching_close(tag_text, value_start, "}")
    if value_end is None:
      return tag_text
    value = tag_text[value_start:value_end]
    return f"{tag_text[: value_end + 1]} whileFocus={{{value}}}{tag_text[value_end + 1:]}"

  vue = _VUE_HOVER_RE.search(tag_text)
  if vue:
    quote, value = vue.group(3), vue.group(4)
    return f"{tag_text[: vue.end()]} {vue.group(2)}focused={quote}{value}{quote}{tag_text[vue.end():]}"
  return tag_text
