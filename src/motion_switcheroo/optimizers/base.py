"""
Optimizer Base Types.

Analyzers work on emitted text, independent of the structural tree. Each one
reports advisory `Suggestion` objects and offers a best-effort rewrite.

`Analyzer.optimize` re-applies the analyzer's single rewrite step until the
text stops changing, so ``optimize(optimize(code)) == optimize(code)``.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field

from motion_switcheroo.enums import Framework, Severity, SuggestionKind

logger = logging.getLogger(__name__)

MAX_PASSES = 64

_STYLE_BLOCK_RE = re.compile(r"<style\b.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_TAG_START_RE = re.compile(r"<([A-Za-z][\w.:\-]*)")
IMPORT_STATEMENT_RE = re.compile(r"^[ \t]*import\b[^;]*?['\"][^'\"\n]*['\"][ \t]*;?[ \t]*$", re.MULTILINE)


class Suggestion(BaseModel):
  """
  An advisory finding.
  """

  kind: SuggestionKind
  severity: Severity
  message: str
  fix: Optional[str] = Field(None, description="How to address the finding.")
  line: Optional[int] = Field(None, description="1-based line of the first occurrence.")


class OpenTag(NamedTuple):
  """
  A markup opening tag located in text.

  Attributes:
      start (int): Offset of ``<``.
      end (int): Offset just past ``>``.
      name (str): Tag name.
      name_end (int): Offset just past the tag name.
  """

  start: int
  end: int
  name: str
  name_end: int

  def text(self, code: str) -> str:
    return code[self.start : self.end]


def line_of(code: str, pos: int) -> int:
  return code.count("\n", 0, pos) + 1


def style_spans(code: str) -> List[Tuple[int, int]]:
  return [m.span() for m in _STYLE_BLOCK_RE.finditer(code)]


def blank_styles(code: str) -> str:
  """
  Replaces ``<style>`` block contents with spaces, keeping offsets and line
  numbers aligned with `code`.
  """
  spans = style_spans(code)
  if not spans:
    return code
  pieces = []
  pos = 0
  for start, end in spans:
    pieces.append(code[pos:start])
    pieces.append(re.sub(r"[^\n]", " ", code[start:end]))
    pos = end
  pieces.append(code[pos:])
  return "".join(pieces)


def in_spans(pos: int, spans: List[Tuple[int, int]]) -> bool:
  return any(start <= pos < end for start, end in spans)


def iter_open_tags(code: str) -> Iterator[OpenTag]:
  """
  Yields markup opening tags outside ``<style>`` blocks.

  Attribute values in quotes or braces may contain ``>``; a tag that never
  closes is skipped.

  Args:
      code (str): Source text.

  Yields:
      OpenTag: Tags in source order.
  """
  spans = style_spans(code)
  pos = 0
  while True:
    match = _TAG_START_RE.search(code, pos)
    if not match:
      return
    if in_spans(match.start(), spans):
      pos = match.end()
      continue
    end = _scan_tag_end(code, match.end())
    if end is None:
      pos = match.end()
      continue
    yield OpenTag(match.start(), end, match.group(1), match.end())
    pos = end


def _scan_tag_end(code: str, pos: int) -> Optional[int]:
  depth = 0
  quote = None
  while pos < len(code):
    ch = code[pos]
    if quote:
      if ch == quote:
        quote = None
    elif ch in ("'", '"', "`"):
      quote = ch
    elif ch == "{":
      depth += 1
    elif ch == "}":
      depth -= 1
      if depth < 0:
        return None
    elif ch == "<" and depth == 0:
      return None
    elif ch == ">" and depth == 0:
      return pos + 1
    pos += 1
  return None


def has_attribute(tag_text: str, pattern: str) -> bool:
  """
  Checks whether an opening tag carries an attribute.

  Args:
      tag_text (str): Text of the opening tag.
      pattern (str): Regex for the attribute name.

  Returns:
      bool: True if the attribute appears in name position.
  """
  return re.search(rf"[\s](?:{pattern})(?=[\s=/>])", tag_text) is not None


def to_fixpoint(step: Callable[[str], str], code: str) -> str:
  """
  Applies `step` until the text stops changing.

  Args:
      step (Callable[[str], str]): A single rewrite pass.
      code (str): Input text.

  Returns:
      str: The stable text.
  """
  for _ in range(MAX_PASSES):
    rewritten = step(code)
    if rewritten == code:
      return code
    code = rewritten
  logger.debug("Optimizer did not settle; returning the last rewrite")
  return code


class Analyzer(ABC):
  """
  Base class of text-level analyzers.
  """

  kind: SuggestionKind

  @abstractmethod
  def analyze(self, code: str, framework: Any) -> List[Suggestion]:
    """
    Reports findings for emitted code.

    Args:
        code (str): Generated source.
        framework (Any): Framework the code targets.

    Returns:
        List[Suggestion]: Findings in fixed check order.
    """

  @abstractmethod
  def rewrite(self, code: str, framework: Framework) -> str:
    """One rewrite pass. Must return `code` itself when nothing applies."""

  def optimize(self, code: str, framework: Any) -> str:
    """
    Rewrites `code` until no rule of this analyzer applies.

    Args:
        code (str): Generated source.
        framework (Any): Framework the code targets.

    Returns:
        str: The optimized text (the input itself when nothing matched).
    """
    fw = Framework.resolve(framework)
    return to_fixpoint(lambda text: self.rewrite(text, fw), code)

  def suggestion(self, severity: Severity, message: str, fix: Optional[str] = None, line: Optional[int] = None) -> Suggestion:
    return Suggestion(kind=self.kind, severity=severity, message=message, fix=fix, line=line)
