"""
Bundle Size Analyzer.

Checks imports of the animation libraries for tree-shaking problems:

1.  **Default imports** from tracked modules (medium).
2.  **Unused named imports** from tracked modules (low).
3.  **Heavy features** such as ``AnimatePresence`` or ``Reorder`` (medium).

The rewrite unwraps trivial ``AnimatePresence`` conditionals, turns known
default imports into named ones, then merges, dedupes, sorts and prunes named
imports per tracked module. Only the modules the target adapter tracks are
touched; plugin registrations are never pruned.
"""

import re
from typing import Any, Dict, List, NamedTuple, Tuple

from pydantic import BaseModel, Field

from motion_switcheroo.enums import Framework, Severity, SuggestionKind
from motion_switcheroo.frameworks.base import resolve_adapter
from motion_switcheroo.optimizers.base import IMPORT_STATEMENT_RE, Analyzer, Suggestion, blank_styles, line_of

HEAVY_FEATURES = ["AnimatePresence", "LayoutGroup", "Reorder", "useMotionValue", "useTransform", "useSpring"]
NEVER_PRUNED = frozenset({"MotionPlugin"})

_DEFAULT_IMPORT_RE = re.compile(
  r"^([ \t]*)import\s+(?!type\s)([A-Za-z_$][\w$]*)\s+from\s*(['\"])([^'\"\n]+)\3[ \t]*(;?)",
  re.MULTILINE,
)
_NAMED_IMPORT_RE = re.compile(
  r"^([ \t]*)import\s*\{([^}]*)\}\s*from\s*(['\"])([^'\"\n]+)\3[ \t]*(;?)[ \t]*(\n?)",
  re.MULTILINE,
)
_SIMPLE_PRESENCE_RE = re.compile(
  r"<AnimatePresence\s*>(\s*\{[^{}]*?\?\s*<motion\.(\w+)\b[^<>]*>[^<]*</motion\.\2\s*>\s*:\s*null\s*\}\s*)</AnimatePresence\s*>"
)


class BundleCostEstimate(BaseModel):
  """
  Rough bundle footprint of the animation features a component uses.
  """

  total: int = Field(0, description="Estimated bytes.")
  breakdown: Dict[str, int] = Field(default_factory=dict, description="Bytes per detected feature.")


class _NamedImport(NamedTuple):
  start: int
  end: int
  indent: str
  specifiers: List[str]
  quote: str
  source: str
  semicolon: str
  newline: str


def _references(text: str, name: str) -> List[int]:
  return [m.start() for m in re.finditer(rf"(?<![\w$]){re.escape(name)}(?![\w$])", text)]


def _usage_text(code: str) -> str:
  text = blank_styles(code)
  return IMPORT_STATEMENT_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)


def _split_specifiers(clause: str) -> List[str]:
  return [" ".join(part.split()) for part in clause.split(",") if part.strip()]


def _imported_name(specifier: str) -> str:
  words = specifier.split()
  if words and words[0] == "type" and len(words) > 1:
    words = words[1:]
  return words[0] if words else ""


def _local_name(specifier: str) -> str:
  words = specifier.split()
  if "as" in words[:-1]:
    return words[words.index("as") + 1]
  return _imported_name(specifier)


def _named_imports(code: str, tracked: List[str]) -> Dict[str, List[_NamedImport]]:
  text = blank_styles(code)
  found: Dict[str, List[_NamedImport]] = {}
  for m in _NAMED_IMPORT_RE.finditer(text):
    if m.group(4) not in tracked:
      continue
    found.setdefault(m.group(4), []).append(
      _NamedImport(
        start=m.start(),
        end=m.end(),
        indent=m.group(1),
        specifiers=_split_specifiers(m.group(2)),
        quote=m.group(3),
        source=m.group(4),
        semicolon=m.group(5),
        newline=m.group(6),
      )
    )
  return found


def _is_used(specifier: str, usage: str) -> bool:
  return _imported_name(specifier) in NEVER_PRUNED or bool(_references(usage, _local_name(specifier)))


class BundleAnalyzer(Analyzer):
  """
  Flags and rewrites tree-shaking hazards in animation imports.
  """

  kind = SuggestionKind.BUNDLE_SIZE

  def analyze(self, code: str, framework: Any) -> List[Suggestion]:
    tracked = resolve_adapter(Framework.resolve(framework)).tracked_modules
    text = blank_styles(code)
    suggestions: List[Suggestion] = []

    defaults = [m for m in _DEFAULT_IMPORT_RE.finditer(text) if m.group(4) in tracked]
    if defaults:
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          "Using default imports prevents tree-shaking",
          "Use named imports instead of default imports",
          line_of(text, defaults[0].start()),
        )
      )

    unused = self.unused_imports(code, framework)
    if unused:
      suggestions.append(
        self.suggestion(
          Severity.LOW,
          f"Unused imports found: {', '.join(unused)}",
          "Remove unused imports to reduce bundle size",
        )
      )

    usage = _usage_text(code)
    heavy = [name for name in HEAVY_FEATURES if _references(usage, name)]
    if heavy:
      suggestions.append(
        self.suggestion(
          Severity.MEDIUM,
          f"Using heavy animation features that increase bundle size: {', '.join(heavy)}",
          "Consider using lighter alternatives or lazy loading",
          line_of(usage, _references(usage, heavy[0])[0]),
        )
      )
    return suggestions

  def unused_imports(self, code: str, framework: Any) -> List[str]:
    """
    Lists named imports from tracked modules that the code never references.

    Args:
        code (str): Generated source.
        framework (Any): Framework the code targets.

    Returns:
        List[str]: Local names, in import order.
    """
    tracked = resolve_adapter(Framework.resolve(framework)).tracked_modules
    usage = _usage_text(code)
    unused: List[str] = []
    for statements in _named_imports(code, tracked).values():
      for statement in statements:
        for spec in statement.specifiers:
          name = _local_name(spec)
          if not _is_used(spec, usage) and name not in unused:
            unused.append(name)
    return unused

  def rewrite(self, code: str, framework: Framework) -> str:
    adapter = resolve_adapter(framework)
    if framework == Framework.REACT:
      code = _SIMPLE_PRESENCE_RE.sub(r"<>\1</>", code)
    known = set(adapter.import_traits.primary) | set(adapter.import_traits.companions)
    code = _named_defaults(code, adapter.tracked_modules, known)
    return _consolidate(code, adapter.tracked_modules)

  def estimate_cost(self, code: str, framework: Any) -> BundleCostEstimate:
    """
    Estimates the bundle footprint from the adapter's per-feature cost table.

    Args:
        code (str): Generated source.
        framework (Any): Framework the code targets.

    Returns:
        BundleCostEstimate: Total and per-feature bytes.
    """
    table = resolve_adapter(Framework.resolve(framework)).cost_table
    text = blank_styles(code)
    breakdown = {feature: cost for feature, cost in table.items() if _references(text, feature)}
    return BundleCostEstimate(total=sum(breakdown.values()), breakdown=breakdown)


def estimate_cost(code: str, framework: Any) -> BundleCostEstimate:
  return BundleAnalyzer().estimate_cost(code, framework)


def _named_defaults(code: str, tracked: List[str], known: set) -> str:
  text = blank_styles(code)
  edits: List[Tuple[int, int, str]] = []
  for m in _DEFAULT_IMPORT_RE.finditer(text):
    indent, name, quote, source, semi = m.groups()
    if source in tracked and name in known:
      edits.append((m.start(), m.end(), f"{indent}import {{ {name} }} from {quote}{source}{quote}{semi}"))
  return _apply(code, edits)


def _consolidate(code: str, tracked: List[str]) -> str:
  usage = _usage_text(code)
  edits: List[Tuple[int, int, str]] = []
  for statements in _named_imports(code, tracked).values():
    first = statements[0]
    merged: List[str] = []
    for statement in statements:
      for spec in statement.specifiers:
        if spec not in merged:
          merged.append(spec)
    kept = sorted((s for s in merged if _is_used(s, usage)), key=lambda s: (_imported_name(s), s))

    if kept:
      clause = ", ".join(kept)
      rendered = f"{first.indent}import {{ {clause} }} from {first.quote}{first.source}{first.quote}{first.semicolon}{first.newline}"
      edits.append((first.start, first.end, rendered))
    else:
      edits.append((first.start, first.end, ""))
    for statement in statements[1:]:
      edits.append((statement.start, statement.end, ""))
  return _apply(code, edits)


def _apply(code: str, edits: List[Tuple[int, int, str]]) -> str:
  for start, end, replacement in sorted(edits, reverse=True):
    code = code[:start] + replacement + code[end:]
  return code
