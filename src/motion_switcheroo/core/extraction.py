"""
Animated Element Extraction.

Recognizes usages of the animation namespace in a parsed component:

- Elements under the ``motion.`` namespace (``<motion.div>``).
- The ``<Motion>`` component.
- Elements carrying a ``v-motion`` directive (``v-motion``, ``v-motion-fade``).
- Calls to the ``animate(...)`` invocation.

Prop values are resolved statically where they are literals (strings,
numbers, booleans, null, object and array literals, recursively). Anything
else becomes an `OpaqueValue` holding the expression text. Extraction never
raises on unresolvable values.
"""

import re
from typing import Any, Dict, Iterator, List

from motion_switcheroo.core.component import AnimatedElement, ComponentAST, OpaqueValue
from motion_switcheroo.core.emitter import Serializer
from motion_switcheroo.core.lexer import ScriptLexer, Token, TokenKind
from motion_switcheroo.core.nodes import NodeArena, StructuralNode
from motion_switcheroo.enums import NodeType
from motion_switcheroo.errors import ParseError

ANIMATION_NAMESPACE = "motion"
MOTION_COMPONENT = "Motion"
MOTION_DIRECTIVE = "v-motion"
ANIMATE_INVOCATION = "animate"

_BOUND_PREFIXES = ("v-bind:", ":")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[\s\S])")
_TRIVIA = (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)


def is_animated_element(node: StructuralNode) -> bool:
  if node.type != NodeType.ELEMENT:
    return False
  tag = node.attributes.get("tag", "")
  if tag.startswith(ANIMATION_NAMESPACE + ".") or tag == MOTION_COMPONENT:
    return True
  return any(p.name == MOTION_DIRECTIVE or p.name.startswith(MOTION_DIRECTIVE + "-") for p in node.props)


def is_animation_call(node: StructuralNode) -> bool:
  return (
    node.type == NodeType.CALL
    and node.attributes.get("callee") == ANIMATE_INVOCATION
    and not node.attributes.get("definition", False)
  )


def iter_animated_nodes(arena: NodeArena, root: int) -> Iterator[StructuralNode]:
  """
  Yields animated elements and animation calls in source order.

  Args:
      arena (NodeArena): Node storage.
      root (int): Subtree root.

  Yields:
      StructuralNode: Matching nodes.
  """
  for node in arena.walk(root):
    if is_animated_element(node) or is_animation_call(node):
      yield node


def extract_animated_elements(ast: ComponentAST) -> List[AnimatedElement]:
  """
  Lists the animation usages of a component.

  Args:
      ast (ComponentAST): The parsed component.

  Returns:
      List[AnimatedElement]: Usages in source order, with literal props
      resolved and everything else opaque.
  """
  serializer = Serializer(ast.arena)
  results: List[AnimatedElement] = []
  for node in iter_animated_nodes(ast.arena, ast.root_id):
    if node.type == NodeType.CALL:
      args = split_arguments(serializer.render_children(node.id))
      results.append(
        AnimatedElement(
          tag=ANIMATE_INVOCATION,
          props={"arguments": [evaluate_literal(a) for a in args]},
          line=node.attributes.get("line"),
        )
      )
    else:
      results.append(
        AnimatedElement(
          tag=node.attributes["tag"],
          props=_element_props(node, serializer),
          line=node.attributes.get("line"),
        )
      )
  return results


def _element_props(node: StructuralNode, serializer: Serializer) -> Dict[str, Any]:
  props: Dict[str, Any] = {}
  for prop in node.props:
    if prop.is_spread:
      continue
    name = prop.name
    if prop.expression is not None:
      props[name] = evaluate_literal(serializer.render_children(prop.expression))
      continue
    if prop.value is None:
      props[name] = True
      continue

    raw = prop.string_value if prop.is_string else prop.value
    bound = next((p for p in _BOUND_PREFIXES if name.startswith(p)), None)
    if bound:
      props[name[len(bound) :]] = evaluate_literal(raw)
    elif name == MOTION_DIRECTIVE or name.startswith(MOTION_DIRECTIVE + "-"):
      props[name] = evaluate_literal(raw) if raw.strip() else True
    else:
      props[name] = raw
  return props


def split_arguments(text: str) -> List[str]:
  """
  Splits call-argument source on top-level commas.

  Args:
      text (str): Source between the call parentheses.

  Returns:
      List[str]: Stripped argument texts (empty list for no arguments).
  """
  lexer = ScriptLexer(text)
  args: List[str] = []
  depth = 0
  start = pos = 0
  previous = None
  try:
    while True:
      regex_allowed = previous is None or (previous.kind == TokenKind.PUNCT and previous.text not in (")", "]", "}"))
      token = lexer.read(pos, regex_allowed)
      if token.kind == TokenKind.EOF:
        break
      if token.is_punct("(", "[", "{"):
        depth += 1
      elif token.is_punct(")", "]", "}"):
        depth -= 1
      elif token.is_punct(",") and depth == 0:
        args.append(text[start : token.start])
        start = token.end
      if token.kind not in _TRIVIA:
        previous = token
      pos = token.end
  except ParseError:
    return [text.strip()] if text.strip() else []
  args.append(text[start:])
  return [a.strip() for a in args if a.strip()]


class _Opaque(Exception):
  """Signals that the current value is not a literal."""


class LiteralReader:
  """
  Recursive-descent reader for JavaScript literal expressions.

  Object and array members are resolved independently: a non-literal member
  becomes opaque without affecting its siblings.
  """

  def __init__(self, text: str):
    self.text = text
    self.lexer = ScriptLexer(text)
    self.pos = 0

  def _peek(self) -> Token:
    pos = self.pos
    while True:
      token = self.lexer.read(pos, regex_allowed=True)
      if token.kind not in _TRIVIA:
        return token
      pos = token.end

  def _consume(self) -> Token:
    token = self._peek()
    self.pos = token.end
    return token

  def read(self) -> Any:
    try:
      value = self._value()
      if self._peek().kind != TokenKind.EOF:
        raise _Opaque()
      return value
    except (_Opaque, ParseError):
      return OpaqueValue(self.text.strip())

  def _value(self) -> Any:
    token = self._consume()
    if token.kind == TokenKind.STRING:
      return _unescape(token.text[1:-1])
    if token.kind == TokenKind.TEMPLATE:
      if "${" in token.text:
        raise _Opaque()
      return _unescape(token.text[1:-1])
    if token.kind == TokenKind.NUMBER:
      return _number(token.text)
    if token.is_punct("-", "+") and self._peek().kind == TokenKind.NUMBER:
      number = _number(self._consume().text)
      return -number if token.text == "-" else number
    if token.is_ident("true"):
      return True
    if token.is_ident("false"):
      return False
    if token.is_ident("null", "undefined"):
      return None
    if token.is_punct("{"):
      return self._object()
    if token.is_punct("["):
      return self._array()
    raise _Opaque()

  def _member(self) -> Any:
    """Reads one object/array member, degrading it to opaque on failure."""
    start = self.pos
    try:
      value = self._value()
      if self._peek().is_punct(",", "}", "]"):
        return value
    except (_Opaque, ParseError):
      pass
    self.pos = start
    self._skip_member()
    return OpaqueValue(self.text[start : self.pos].strip())

  def _skip_member(self) -> None:
    depth = 0
    while True:
      token = self._peek()
      if token.kind == TokenKind.EOF:
        raise _Opaque()
      if depth == 0 and token.is_punct(",", "}", "]"):
        return
      if token.is_punct("(", "[", "{"):
        depth += 1
      elif token.is_punct(")", "]", "}"):
        depth -= 1
      self._consume()

  def _object(self) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    while True:
      token = self._consume()
      if token.is_punct("}"):
        return result
      if token.kind == TokenKind.STRING:
        key = _unescape(token.text[1:-1])
      elif token.kind in (TokenKind.IDENT, TokenKind.NUMBER):
        key = token.text
      else:
        raise _Opaque()

      separator = self._peek()
      if separator.is_punct(":"):
        self._consume()
        result[key] = self._member()
      elif separator.is_punct(",", "}"):
        # Shorthand property refers to a binding.
        result[key] = OpaqueValue(key)
      else:
        raise _Opaque()

      end = self._consume()
      if end.is_punct("}"):
        return result
      if not end.is_punct(","):
        raise _Opaque()

  def _array(self) -> List[Any]:
    result: List[Any] = []
    while True:
      if self._peek().is_punct("]"):
        self._consume()
        return result
      result.append(self._member())
      end = self._consume()
      if end.is_punct("]"):
        return result
      if not end.is_punct(","):
        raise _Opaque()


def evaluate_literal(text: str) -> Any:
  """
  Resolves expression text to a Python value.

  Args:
      text (str): Expression source.

  Returns:
      Any: str, int, float, bool, None, dict, list, or `OpaqueValue`.
  """
  if not text.strip():
    return OpaqueValue(text)
  return LiteralReader(text).read()


def _number(text: str) -> Any:
  cleaned = text.replace("_", "").rstrip("n")
  if cleaned[:2].lower() in ("0x", "0o", "0b"):
    return int(cleaned, 0)
  if any(c in cleaned for c in ".eE"):
    return float(cleaned)
  return int(cleaned)


def _unescape(body: str) -> str:
  def replace(match: "re.Match[str]") -> str:
    esc = match.group(1)
    if esc.startswith("u{"):
      return chr(int(esc[2:-1], 16))
    if esc[0] in ("u", "x") and len(esc) > 1:
      return chr(int(esc[1:], 16))
    if esc == "\n":
      return ""
    return _ESCAPES.get(esc, esc)

  return _ESCAPE_RE.sub(replace, body)
