"""
Shared helpers for framework adapters.

Markup attribute dialect conversion and JavaScript literal rendering used by
emitter normalization and component scaffolding.
"""

import json
import re
from typing import Any, Callable, List

_STYLE_BLOCK_RE = re.compile(r"<style\b.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_JSX_EVENT_RE = re.compile(r"(\s)on([A-Z][A-Za-z]*)=")
_TEMPLATE_EVENT_RE = re.compile(r"(\s)(?:@|v-on:)([a-z][\w-]*)=")


def outside_style(code: str, rewrite: Callable[[str], str]) -> str:
  """
  Applies `rewrite` to everything except ``<style>`` blocks.

  Args:
      code (str): Source text.
      rewrite (Callable[[str], str]): Text transformation.

  Returns:
      str: The rewritten text with style blocks untouched.
  """
  pieces: List[str] = []
  pos = 0
  for match in _STYLE_BLOCK_RE.finditer(code):
    pieces.append(rewrite(code[pos : match.start()]))
    pieces.append(match.group(0))
    pos = match.end()
  pieces.append(rewrite(code[pos:]))
  return "".join(pieces)


def jsx_to_template(code: str) -> str:
  """
  Converts JSX attribute names to template dialect.

  ``className=`` -> ``class=``, ``htmlFor=`` -> ``for=``,
  ``onMouseEnter=`` -> ``@mouseEnter=``.
  """

  def rewrite(text: str) -> str:
    text = re.sub(r"(\s)className=", r"\1class=", text)
    text = re.sub(r"(\s)htmlFor=", r"\1for=", text)
    return _JSX_EVENT_RE.sub(lambda m: f"{m.group(1)}@{m.group(2)[0].lower()}{m.group(2)[1:]}=", text)

  return outside_style(code, rewrite)


def template_to_jsx(code: str) -> str:
  """
  Converts template attribute names to JSX dialect.

  ``class=`` -> ``className=``, ``for=`` -> ``htmlFor=``,
  ``@click=`` -> ``onClick=``.
  """

  def rewrite(text: str) -> str:
    text = re.sub(r"(\s)class=", r"\1className=", text)
    text = re.sub(r"(\s)for=", r"\1htmlFor=", text)
    return _TEMPLATE_EVENT_RE.sub(lambda m: f"{m.group(1)}on{_camel(m.group(2))}=", text)

  return outside_style(code, rewrite)


def _camel(name: str) -> str:
  parts = name.split("-")
  return "".join(p[:1].upper() + p[1:] for p in parts)


def js_literal(value: Any) -> str:
  """
  Renders a Python value as a compact JavaScript literal.

  Objects use unquoted keys where possible and single-quoted strings, so the
  result can sit inside a double-quoted attribute.

  Args:
      value (Any): JSON-compatible value.

  Returns:
      str: e.g. ``{ opacity: 0, x: 'auto' }``.
  """
  if isinstance(value, bool):
    return "true" if value else "false"
  if value is None:
    return "null"
  if isinstance(value, (int, float)):
    return json.dumps(value)
  if isinstance(value, str):
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
  if isinstance(value, dict):
    if not value:
      return "{}"
    members = []
    for key, item in value.items():
      key_text = key if _IDENTIFIER_RE.match(str(key)) else js_literal(str(key))
      members.append(f"{key_text}: {js_literal(item)}")
    return "{ " + ", ".join(members) + " }"
  if isinstance(value, (list, tuple)):
    return "[" + ", ".join(js_literal(v) for v in value) + "]"
  raw = getattr(value, "raw", None)
  if raw is not None:
    return raw
  return js_literal(str(value))
