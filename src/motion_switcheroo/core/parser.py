"""
Structural Parser.

Turns component source text into a `ComponentAST`. A single permissive grammar
covers every supported framework:

1.  **Script code**: JavaScript/TypeScript, tokenized by `ScriptLexer`. Code is
    kept as verbatim `Text` runs; only comments, imports, calls and embedded
    markup become structural nodes.
2.  **JSX/TSX markup**: elements, fragments, ``{expression}`` containers and
    spread attributes, recognized wherever an expression may start.
3.  **Single-file components**: top-level ``<template>``, ``<script>`` (parsed
    as code) and ``<style>`` (kept raw) blocks, template directives
    (``v-motion``, ``:prop``, ``@event``, ``#slot``), HTML comments and void
    elements.

The tree is lossless: serializing an untransformed tree reproduces the input.

Module-level facts (exports, declarations, component candidates) are derived
from a flattened stream of top-level tokens by `ModuleScanner`.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from motion_switcheroo.core.component import (
  UNNAMED_COMPONENT,
  ComponentAST,
  ExportDeclaration,
  ExportSpecifier,
  ImportDeclaration,
  ImportSpecifier,
  ParseOptions,
)
from motion_switcheroo.core.lexer import ScriptLexer, Token, TokenKind, error_at, location
from motion_switcheroo.core.nodes import NodeArena, Prop, StructuralNode
from motion_switcheroo.enums import ExportKind, Framework, NodeType, SpecifierKind
from motion_switcheroo.errors import ParseError
from motion_switcheroo.frameworks.base import resolve_adapter

logger = logging.getLogger(__name__)

KNOWN_PLUGINS = frozenset({"jsx", "typescript", "vue-template", "decorators"})

# Elements plus nested code regions (calls, expression containers).
MAX_NESTING = 150

VOID_ELEMENTS = frozenset(
  {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

_CLOSERS = {"(": ")", "[": "]", "{": "}"}

# Keywords after which an expression (regex literal or markup) may start.
_EXPRESSION_KEYWORDS = frozenset(
  {"return", "default", "case", "typeof", "void", "delete", "in", "of", "instanceof", "new", "throw", "yield", "await", "else", "do"}
)

# Identifiers that are never the callee of a call expression.
_NON_CALLEES = frozenset(
  {
    "if",
    "for",
    "while",
    "switch",
    "catch",
    "function",
    "with",
    "return",
    "typeof",
    "void",
    "delete",
    "await",
    "yield",
    "in",
    "of",
    "instanceof",
    "do",
    "else",
    "case",
    "throw",
    "async",
  }
)

# Modifiers that may precede a method definition.
_METHOD_MODIFIERS = frozenset(
  {"async", "static", "get", "set", "public", "private", "protected", "override", "readonly"}
)

_TAG_NAME_RE = re.compile(r"[A-Za-z][\w.:\-]*")
_ATTR_NAME_RE = re.compile(r"[^\s=/>\"'{}<]+")
_ATTR_SEPARATOR_RE = re.compile(r"\s*=\s*")
_UNQUOTED_VALUE_RE = re.compile(r"[^\s>\"'=<`]+?(?=\s|/?>)")
_CLOSE_TAG_RE = re.compile(r"</\s*([A-Za-z][\w.:\-]*)?\s*>")
_SPACE_RE = re.compile(r"\s*")
_HSPACE_RE = re.compile(r"[ \t]*")
_TS_GENERIC_RE = re.compile(r"<\s*[A-Za-z_$][\w$]*\s*(?:,|extends\b)")
_TS_ASSERTION_RE = re.compile(r"<([A-Za-z_$][\w$.]*)(?:\[\])*(?:\s*\|\s*[\w$.]+(?:\[\])*)*>")

_SCRIPT_END = "</script"


@dataclass
class ModuleToken:
  """
  A top-level token of a script body.

  Bracketed groups, calls, elements and imports collapse into a single entry
  so the module scanner never needs to track nesting.

  Attributes:
      kind (str): ``IDENT``, ``PUNCT``, ``STRING``, ``GROUP``, ``CALL``,
          ``ELEMENT``, ``IMPORT`` or ``OTHER``.
      text (str): Token text (opener for groups, callee for calls).
      raw (str): Full source of groups, argument source of calls.
  """

  kind: str
  text: str
  raw: str = ""

  def is_ident(self, *values: str) -> bool:
    return self.kind == "IDENT" and (not values or self.text in values)

  def is_punct(self, *values: str) -> bool:
    return self.kind == "PUNCT" and self.text in values

  def is_group(self, opener: str) -> bool:
    return self.kind == "GROUP" and self.text == opener


_END = ModuleToken("EOF", "")
_ELEMENT = Token(TokenKind.PUNCT, "<element>", -1, -1)
_CALL = Token(TokenKind.PUNCT, ")", -1, -1)
_STATEMENT_END = Token(TokenKind.PUNCT, ";", -1, -1)


class StructuralParser:
  """
  Recursive-descent parser producing a lossless structural tree.
  """

  def __init__(self, source: str, options: ParseOptions):
    self.text = source
    self.options = options
    self.adapter = resolve_adapter(options.framework)
    self.lexer = ScriptLexer(source)
    self.arena = NodeArena()
    self.module_tokens: List[ModuleToken] = []
    self.depth = 0

    plugins = set(options.plugins)
    for name in sorted(plugins - KNOWN_PLUGINS):
      logger.warning(f"Ignoring unknown parser plugin '{name}'")

    self.typescript = options.typescript or "typescript" in plugins
    self.jsx = options.jsx if options.jsx is not None else True
    if "jsx" in plugins:
      self.jsx = True
    self.sfc = self.adapter.parse_hints.sfc or "vue-template" in plugins

  def parse(self) -> ComponentAST:
    """
    Main entry point.

    Returns:
        ComponentAST: The parsed component.

    Raises:
        ParseError: If the source is malformed.
    """
    root = self.arena.add(StructuralNode(NodeType.PROGRAM, {"mode": "script"}))
    if self.sfc and self._starts_with_markup():
      self.arena.get(root).attributes["mode"] = "sfc"
      self._parse_markup(0, root, template=True, owner=None)
    else:
      self._parse_code(0, root, terminator=None, top_level=True)

    scanner = ModuleScanner(self.module_tokens)
    scanner.scan()
    name = resolve_component_name(scanner.exports, scanner.candidates, self.adapter.parse_hints.component_style)
    logger.debug(f"Parsed {self.options.framework.value} component '{name}' ({len(self.arena)} nodes)")

    return ComponentAST(
      framework=self.options.framework,
      component_name=name,
      arena=self.arena,
      root_id=root,
      exports=scanner.exports,
      typescript=self.typescript,
      declarations=scanner.declarations,
      source=self.text,
    )

  # --- Helpers ---

  def _error(self, pos: int, message: str) -> ParseError:
    return error_at(self.text, pos, message)

  def _flush(self, start: int, end: int, parent: int) -> None:
    if end > start:
      self.arena.add(StructuralNode(NodeType.TEXT, {"value": self.text[start:end], "start": start}), parent=parent)

  def _enter(self, pos: int) -> None:
    self.depth += 1
    if self.depth > MAX_NESTING:
      raise self._error(pos, f"Nesting deeper than {MAX_NESTING} levels")

  def _record(self, kind: str, text: str, raw: str = "") -> None:
    self.module_tokens.append(ModuleToken(kind, text, raw))

  def _starts_with_markup(self) -> bool:
    stripped = self.text.lstrip()
    return stripped.startswith("<") and (stripped[1:2].isalpha() or stripped.startswith("<!--"))

  # --- Markup ---

  def _parse_markup(self, pos: int, parent: int, template: bool, owner: Optional[Tuple[str, int]]) -> int:
    """
    Parses element children until a closing tag or end of input.

    Args:
        pos (int): Start offset.
        parent (int): Node receiving the children.
        template (bool): Template dialect (``{`` is plain text).
        owner (Optional[Tuple[str, int]]): Tag and offset of the enclosing
            element, None at the top level of a single-file component.

    Returns:
        int: Offset of the closing tag, or end of input at the top level.
    """
    text = self.text
    buf = pos
    while True:
      if pos >= len(text):
        self._flush(buf, pos, parent)
        if owner is not None:
          raise self._error(owner[1], f"Unclosed element <{owner[0]}>")
        return pos

      ch = text[pos]
      if ch == "<":
        if text.startswith("</", pos):
          self._flush(buf, pos, parent)
          if owner is None:
            raise self._error(pos, "Unexpected closing tag")
          return pos
        if text.startswith("<!--", pos):
          self._flush(buf, pos, parent)
          pos = buf = self._parse_html_comment(pos, parent)
          continue
        nxt = text[pos + 1 : pos + 2]
        if nxt.isalpha() or (nxt == ">" and not template):
          self._flush(buf, pos, parent)
          pos = buf = self._parse_element(pos, parent, template)
          continue
      elif ch == "{" and not template:
        self._flush(buf, pos, parent)
        _, pos = self._parse_expression_container(pos, parent)
        buf = pos
        continue
      pos += 1

  def _parse_html_comment(self, pos: int, parent: int) -> int:
    end = self.text.find("-->", pos + 4)
    if end < 0:
      raise self._error(pos, "Unterminated HTML comment")
    end += 3
    self.arena.add(StructuralNode(NodeType.COMMENT, {"value": self.text[pos:end], "style": "html", "start": pos}), parent=parent)
    return end

  def _parse_element(self, pos: int, parent: Optional[int], template: bool) -> int:
    """
    Parses an element (or fragment) starting at ``<``.

    Returns:
        int: Offset just past the element.
    """
    self._enter(pos)
    try:
      return self._element_body(pos, parent, template)
    finally:
      self.depth -= 1

  def _element_body(self, pos: int, parent: Optional[int], template: bool) -> int:
    text = self.text
    start = pos
    pos += 1
    match = _TAG_NAME_RE.match(text, pos)
    tag = match.group(0) if match else ""
    if not match and not text.startswith(">", pos):
      raise self._error(start, "Malformed element tag")
    pos = match.end() if match else pos

    props, tail, self_closing, pos = self._parse_attributes(pos, start, tag)
    void = template and not self_closing and tag.lower() in VOID_ELEMENTS
    node = StructuralNode(
      NodeType.ELEMENT,
      {
        "tag": tag,
        "props": props,
        "tail": tail,
        "self_closing": self_closing,
        "void": void,
        "closing": "",
        "line": location(text, start)[0],
        "start": start,
      },
    )
    node_id = self.arena.add(node, parent=parent)
    if self_closing or void:
      return pos

    lowered = tag.lower()
    if template and lowered == "style":
      end = text.lower().find("</style", pos)
      if end < 0:
        raise self._error(start, "Unclosed element <style>")
      self._flush(pos, end, node_id)
      pos = end
    elif template and lowered == "script":
      pos = self._parse_code(pos, node_id, terminator=_SCRIPT_END, top_level=parent == 0)
    else:
      pos = self._parse_markup(pos, node_id, template, owner=(tag or "<>", start))

    close = _CLOSE_TAG_RE.match(text, pos)
    if not close:
      raise self._error(pos, f"Malformed closing tag for <{tag}>")
    closing_name = close.group(1) or ""
    same = closing_name.lower() == lowered if template else closing_name == tag
    if not same:
      raise self._error(pos, f"Mismatched closing tag </{closing_name}> for <{tag}>")
    node.attributes["closing"] = close.group(0)
    return close.end()

  def _parse_attributes(self, pos: int, start: int, tag: str) -> Tuple[List[Prop], str, bool, int]:
    text = self.text
    props: List[Prop] = []
    while True:
      space = _SPACE_RE.match(text, pos)
      leading = space.group(0)
      pos = space.end()
      if pos >= len(text):
        raise self._error(start, f"Unclosed tag <{tag}>")
      if text.startswith("/>", pos):
        return props, leading, True, pos + 2
      if text[pos] == ">":
        return props, leading, False, pos + 1

      if text[pos] == "{":
        expr_id, pos = self._parse_expression_container(pos, None)
        props.append(Prop(name="...", leading=leading, expression=expr_id))
        continue

      match = _ATTR_NAME_RE.match(text, pos)
      if not match:
        raise self._error(pos, f"Malformed attribute in <{tag}>")
      name = match.group(0)
      pos = match.end()

      sep = _ATTR_SEPARATOR_RE.match(text, pos)
      if sep is None:
        props.append(Prop(name=name, leading=leading))
        continue
      pos = sep.end()

      quote = text[pos : pos + 1]
      if quote in ("'", '"'):
        end = text.find(quote, pos + 1)
        if end < 0:
          raise self._error(pos, f"Unterminated value for attribute '{name}'")
        props.append(Prop(name=name, value=text[pos : end + 1], leading=leading, separator=sep.group(0)))
        pos = end + 1
      elif quote == "{":
        expr_id, pos = self._parse_expression_container(pos, None)
        props.append(Prop(name=name, leading=leading, expression=expr_id, separator=sep.group(0)))
      else:
        value = _UNQUOTED_VALUE_RE.match(text, pos)
        if not value:
          raise self._error(pos, f"Malformed value for attribute '{name}'")
        props.append(Prop(name=name, value=value.group(0), leading=leading, separator=sep.group(0)))
        pos = value.end()

  def _parse_expression_container(self, pos: int, parent: Optional[int]) -> Tuple[int, int]:
    node_id = self.arena.add(StructuralNode(NodeType.EXPRESSION, {"start": pos}), parent=parent)
    self._enter(pos)
    try:
      end = self._parse_code(pos + 1, node_id, terminator="}")
    finally:
      self.depth -= 1
    return node_id, end + 1

  # --- Script code ---

  def _parse_code(self, pos: int, parent: int, terminator: Optional[str], top_level: bool = False) -> int:
    """
    Parses script code into text runs and structural nodes.

    Args:
        pos (int): Start offset.
        parent (int): Node receiving the children.
        terminator (Optional[str]): ``}`` or ``)`` for nested code,
            ``</script`` inside a script block, None for a whole file.
        top_level (bool): Whether module-level statements are parsed here.

    Returns:
        int: Offset of the terminator (end of input when None).
    """
    text = self.text
    stack: List[Tuple[str, int]] = []
    buf = pos
    prev: Optional[Token] = None

    while True:
      if terminator == _SCRIPT_END and text[pos : pos + len(_SCRIPT_END)].lower() == _SCRIPT_END:
        if stack:
          raise self._error(stack[-1][1], f"Unclosed '{text[stack[-1][1]]}'")
        self._flush(buf, pos, parent)
        return pos

      token = self.lexer.read(pos, self._regex_allowed(prev))
      kind = token.kind

      if kind == TokenKind.EOF:
        if stack:
          raise self._error(stack[-1][1], f"Unclosed '{text[stack[-1][1]]}'")
        if terminator is not None:
          expected = "</script>" if terminator == _SCRIPT_END else terminator
          raise self._error(pos, f"Unexpected end of input, expected '{expected}'")
        self._flush(buf, pos, parent)
        return pos

      if kind == TokenKind.WHITESPACE:
        pos = token.end
        continue

      if kind in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
        self._flush(buf, pos, parent)
        style = "line" if kind == TokenKind.LINE_COMMENT else "block"
        self.arena.add(StructuralNode(NodeType.COMMENT, {"value": token.text, "style": style, "start": token.start}), parent=parent)
        pos = buf = token.end
        continue

      at_module_level = top_level and not stack

      if kind == TokenKind.PUNCT:
        if token.text in _CLOSERS:
          stack.append((_CLOSERS[token.text], token.start))
          prev = token
          pos = token.end
          continue
        if token.text in (")", "]", "}"):
          if not stack:
            if token.text == terminator:
              self._flush(buf, token.start, parent)
              return token.start
            raise self._error(token.start, f"Unbalanced '{token.text}'")
          expected, open_pos = stack.pop()
          if token.text != expected:
            raise self._error(token.start, f"Mismatched '{token.text}', expected '{expected}'")
          if top_level and not stack:
            self._record("GROUP", text[open_pos], text[open_pos : token.end])
          prev = token
          pos = token.end
          continue
        if token.text == "<" and self.jsx and self._markup_allowed(prev) and self._is_markup_start(token.start):
          self._flush(buf, token.start, parent)
          pos = buf = self._parse_element(token.start, parent, template=False)
          if at_module_level:
            self._record("ELEMENT", "<")
          prev = _ELEMENT
          continue

      if kind == TokenKind.IDENT:
        if at_module_level and token.text == "import" and self._is_import_statement(token, prev):
          self._flush(buf, token.start, parent)
          pos = buf = self._parse_import(token.start, parent)
          self._record("IMPORT", "import")
          prev = _STATEMENT_END
          continue
        if self._is_call(token, prev):
          self._flush(buf, token.start, parent)
          pos, raw_args = self._parse_call(token, parent, prev)
          buf = pos
          if at_module_level:
            self._record("CALL", token.text, raw_args)
          prev = _CALL
          continue

      if at_module_level:
        self._record(kind.name if kind in (TokenKind.IDENT, TokenKind.PUNCT, TokenKind.STRING) else "OTHER", token.text)
      prev = token
      pos = token.end

  def _regex_allowed(self, prev: Optional[Token]) -> bool:
    if prev is None:
      return True
    if prev is _ELEMENT or prev is _CALL:
      return False
    if prev.kind == TokenKind.PUNCT:
      return prev.text not in (")", "]", "}")
    return prev.kind == TokenKind.IDENT and prev.text in _EXPRESSION_KEYWORDS

  def _markup_allowed(self, prev: Optional[Token]) -> bool:
    if prev is None:
      return True
    if prev is _ELEMENT or prev is _CALL:
      return False
    if prev.kind == TokenKind.PUNCT:
      return prev.text not in (")", "]")
    return prev.kind == TokenKind.IDENT and prev.text in _EXPRESSION_KEYWORDS

  def _is_markup_start(self, pos: int) -> bool:
    nxt = self.text[pos + 1 : pos + 2]
    if not (nxt.isalpha() or nxt == ">"):
      return False
    if self.typescript:
      if _TS_GENERIC_RE.match(self.text, pos):
        return False
      assertion = _TS_ASSERTION_RE.match(self.text, pos)
      if assertion and f"</{assertion.group(1)}" not in self.text[assertion.end() :]:
        return False
    return True

  def _is_call(self, token: Token, prev: Optional[Token]) -> bool:
    if token.text in _NON_CALLEES:
      return False
    if prev is not None and prev.kind == TokenKind.PUNCT and prev.text in (".", "?."):
      return False
    if prev is not None and prev.kind == TokenKind.IDENT and prev.text in ("function", "class"):
      return False
    gap = _HSPACE_RE.match(self.text, token.end)
    return self.text.startswith("(", gap.end())

  def _parse_call(self, token: Token, parent: int, prev: Optional[Token]) -> Tuple[int, str]:
    """
    Parses ``callee(args)`` into a CallExpression node.

    Returns:
        Tuple[int, str]: Offset after ``)`` and the raw argument text.
    """
    gap = _HSPACE_RE.match(self.text, token.end).group(0)
    open_paren = token.end + len(gap)
    node = StructuralNode(
      NodeType.CALL,
      {"callee": token.text, "gap": gap, "line": location(self.text, token.start)[0], "start": token.start},
    )
    node_id = self.arena.add(node, parent=parent)
    self._enter(token.start)
    try:
      close = self._parse_code(open_paren + 1, node_id, terminator=")")
    finally:
      self.depth -= 1

    after = self.lexer.skip_trivia(close + 1)
    starts_block = self.text.startswith("{", after)
    after_statement = prev is None or (prev.kind == TokenKind.PUNCT and prev.text in (";", "}", "{", ","))
    after_modifier = prev is not None and prev.kind == TokenKind.IDENT and prev.text in _METHOD_MODIFIERS
    node.attributes["definition"] = starts_block and (after_statement or after_modifier) and prev is not _CALL
    return close + 1, self.text[open_paren + 1 : close]

  # --- Imports ---

  def _is_import_statement(self, token: Token, prev: Optional[Token]) -> bool:
    if prev is not None and prev.kind == TokenKind.PUNCT and prev.text in (".", "?."):
      return False
    nxt = self.lexer.read(self.lexer.skip_trivia(token.end))
    return not nxt.is_punct("(", ".")

  def _parse_import(self, pos: int, parent: int) -> int:
    """
    Parses an import statement into an ImportDeclaration node.

    Returns:
        int: Offset just past the statement.

    Raises:
        ParseError: On malformed import syntax.
    """
    reader = _ImportReader(self.lexer, pos)
    try:
      declaration = reader.read()
    except _MalformedImport as exc:
      raise self._error(exc.pos, "Malformed import declaration") from None

    end = reader.pos
    raw = self.text[pos:end]
    node = StructuralNode(
      NodeType.IMPORT,
      {
        "declaration": declaration,
        "raw": raw,
        "canonical": declaration.to_source(),
        "line": location(self.text, pos)[0],
        "start": pos,
      },
    )
    self.arena.add(node, parent=parent)
    return end


class _MalformedImport(Exception):
  def __init__(self, pos: int):
    super().__init__(pos)
    self.pos = pos


class _ImportReader:
  """Cursor over the significant tokens of one import statement."""

  def __init__(self, lexer: ScriptLexer, pos: int):
    self.lexer = lexer
    self.pos = pos

  def _peek(self) -> Token:
    return self.lexer.read(self.lexer.skip_trivia(self.pos))

  def _consume(self) -> Token:
    token = self._peek()
    self.pos = token.end
    return token

  def _expect_ident(self, *values: str) -> Token:
    token = self._consume()
    if not token.is_ident(*values):
      raise _MalformedImport(token.start)
    return token

  def _expect_punct(self, value: str) -> Token:
    token = self._consume()
    if not token.is_punct(value):
      raise _MalformedImport(token.start)
    return token

  def read(self) -> ImportDeclaration:
    self._expect_ident("import")
    type_only = False
    token = self._peek()
    if token.is_ident("type"):
      after_type = self.lexer.read(self.lexer.skip_trivia(token.end))
      if not (after_type.is_ident("from") or after_type.is_punct(",")):
        self._consume()
        type_only = True

    specifiers: List[ImportSpecifier] = []
    token = self._peek()
    if token.kind != TokenKind.STRING:
      specifiers = self._clause()
      self._expect_ident("from")

    source = self._consume()
    if source.kind != TokenKind.STRING:
      raise _MalformedImport(source.start)

    semicolon = self._peek().is_punct(";")
    if semicolon:
      self._consume()
    return ImportDeclaration(
      source=source.text[1:-1],
      specifiers=specifiers,
      type_only=type_only,
      quote=source.text[0],
      semicolon=semicolon,
    )

  def _clause(self) -> List[ImportSpecifier]:
    specifiers: List[ImportSpecifier] = []
    token = self._peek()
    if token.kind == TokenKind.IDENT and not token.is_ident("from"):
      self._consume()
      specifiers.append(ImportSpecifier(kind=SpecifierKind.DEFAULT, local=token.text))
      if not self._peek().is_punct(","):
        return specifiers
      self._consume()
      token = self._peek()

    if token.is_punct("*"):
      self._consume()
      self._expect_ident("as")
      local = self._consume()
      if local.kind != TokenKind.IDENT:
        raise _MalformedImport(local.start)
      specifiers.append(ImportSpecifier(kind=SpecifierKind.NAMESPACE, local=local.text))
      return specifiers

    if token.is_punct("{"):
      self._consume()
      specifiers.extend(self._named())
      return specifiers

    raise _MalformedImport(token.start)

  def _named(self) -> List[ImportSpecifier]:
    specifiers: List[ImportSpecifier] = []
    while True:
      token = self._consume()
      if token.is_punct("}"):
        return specifiers
      type_only = False
      if token.is_ident("type") and self._peek().kind in (TokenKind.IDENT, TokenKind.STRING):
        type_only = True
        token = self._consume()
      if token.kind not in (TokenKind.IDENT, TokenKind.STRING):
        raise _MalformedImport(token.start)
      imported = token.text if token.kind == TokenKind.IDENT else token.text[1:-1]
      local = imported
      if self._peek().is_ident("as"):
        self._consume()
        alias = self._consume()
        if alias.kind != TokenKind.IDENT:
          raise _MalformedImport(alias.start)
        local = alias.text
      elif token.kind == TokenKind.STRING:
        raise _MalformedImport(token.start)
      specifiers.append(
        ImportSpecifier(kind=SpecifierKind.NAMED, imported=imported, local=local, type_only=type_only)
      )
      separator = self._consume()
      if separator.is_punct("}"):
        return specifiers
      if not separator.is_punct(","):
        raise _MalformedImport(separator.start)


# --- Module scanning ---

_DECLARATION_KEYWORDS = ("function", "class", "const", "let", "var", "interface", "type", "enum")
_STATEMENT_KEYWORDS = ("const", "let", "var", "function", "class", "export", "import")
_COMPONENT_WRAPPERS = frozenset({"memo", "forwardRef", "observer"})
_NAME_OPTION_RE = re.compile(r"""\bname\s*:\s*(['"])([^'"\\]+)\1""")
_IDENT_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


class ModuleScanner:
  """
  Extracts exports, declarations and component candidates from the
  top-level token stream of a script.

  Attributes:
      exports (List[ExportDeclaration]): Exports in source order.
      declarations (List[str]): Top-level declared identifiers.
      candidates (List[str]): Uppercase function-like declarations.
  """

  def __init__(self, tokens: List[ModuleToken]):
    self.tokens = tokens
    self.i = 0
    self.exports: List[ExportDeclaration] = []
    self.declarations: List[str] = []
    self.candidates: List[str] = []

  def _peek(self, offset: int = 0) -> ModuleToken:
    idx = self.i + offset
    return self.tokens[idx] if idx < len(self.tokens) else _END

  def _consume(self) -> ModuleToken:
    token = self._peek()
    self.i += 1
    return token

  def scan(self) -> None:
    while self.i < len(self.tokens):
      token = self._peek()
      if token.is_ident("export"):
        self._consume()
        self._export()
      elif token.is_ident(*_DECLARATION_KEYWORDS) and self._peek(1).kind in ("IDENT", "GROUP", "PUNCT"):
        self._declaration()
      else:
        self._consume()

  def _declare(self, name: Optional[str], function_like: bool) -> None:
    if not name:
      return
    if name not in self.declarations:
      self.declarations.append(name)
    if function_like and name[:1].isupper() and name not in self.candidates:
      self.candidates.append(name)

  def _declaration(self) -> Optional[str]:
    """Consumes a declaration head, returning the declared name."""
    keyword = self._consume()
    if keyword.is_ident("abstract", "declare"):
      keyword = self._consume()

    if keyword.is_ident("function"):
      if self._peek().is_punct("*"):
        self._consume()
      name = self._consume().text if self._peek().kind == "IDENT" else None
      self._declare(name, True)
      return name

    if keyword.is_ident("class"):
      name = self._consume().text if self._peek().kind == "IDENT" and not self._peek().is_ident("extends") else None
      self._declare(name, True)
      return name

    if keyword.is_ident("const", "let", "var"):
      if self._peek().kind != "IDENT":
        self._consume()
        return None
      name = self._consume().text
      self._declare(name, self._initializer_is_function())
      return name

    if keyword.is_ident("interface", "type", "enum") and self._peek().kind == "IDENT":
      name = self._consume().text
      self._declare(name, False)
      return name
    return None

  def _initializer_is_function(self) -> bool:
    # Skip a type annotation up to `=`.
    for offset in range(0, 32):
      token = self._peek(offset)
      if token.is_punct("=") or token.kind == "EOF" or token.is_punct(";") or token.is_ident(*_STATEMENT_KEYWORDS):
        break
    if not self._peek(offset).is_punct("="):
      return False
    j = offset + 1

    token = self._peek(j)
    if token.is_ident("async"):
      j += 1
      token = self._peek(j)
    if token.is_ident("function", "class"):
      return True
    if token.kind == "CALL":
      return "=>" in token.raw or "function" in token.raw
    if token.is_group("(") or token.is_punct("<"):
      for k in range(j + 1, j + 16):
        ahead = self._peek(k)
        if ahead.is_punct("=>"):
          return True
        if ahead.is_punct(";", "=") or ahead.kind == "EOF" or ahead.is_group("{"):
          return False
      return False
    if token.kind == "IDENT":
      if self._peek(j + 1).is_punct("=>"):
        return True
      # Dotted wrapper call such as React.memo(...)
      k = j
      while self._peek(k).kind == "IDENT" and self._peek(k + 1).is_punct("."):
        k += 2
      wrapped = self._peek(k + 1)
      return self._peek(k).kind == "IDENT" and wrapped.is_group("(") and ("=>" in wrapped.raw or "function" in wrapped.raw)
    return False

  def _export(self) -> None:
    token = self._peek()
    if token.is_ident("default"):
      self._consume()
      self.exports.append(ExportDeclaration(kind=ExportKind.DEFAULT, declaration=self._default_export_name()))
      return

    if token.is_punct("*"):
      self._consume()
      specifiers: List[ExportSpecifier] = []
      if self._peek().is_ident("as"):
        self._consume()
        specifiers.append(ExportSpecifier(exported=self._consume().text, local="*"))
      self.exports.append(ExportDeclaration(kind=ExportKind.NAMED, specifiers=specifiers))
      return

    if token.is_ident("type") and self._peek(1).is_group("{"):
      self._consume()
      token = self._peek()

    if token.is_group("{"):
      self._consume()
      self._export_list(token.raw)
      return

    if token.is_ident("async"):
      self._consume()

    if self._peek().is_ident(*_DECLARATION_KEYWORDS, "abstract", "declare"):
      name = self._declaration()
      self.exports.append(ExportDeclaration(kind=ExportKind.NAMED, declaration=name))

  def _export_list(self, raw: str) -> None:
    named: List[ExportSpecifier] = []
    for part in raw[1:-1].split(","):
      words = part.split()
      if words[:1] == ["type"] and len(words) > 1:
        words = words[1:]
      if not words:
        continue
      local = words[0]
      exported = words[2] if len(words) >= 3 and words[1] == "as" else local
      if exported == "default":
        self.exports.append(ExportDeclaration(kind=ExportKind.DEFAULT, declaration=local))
      else:
        named.append(ExportSpecifier(exported=exported, local=local))
    if named:
      self.exports.append(ExportDeclaration(kind=ExportKind.NAMED, specifiers=named))

  def _default_export_name(self) -> Optional[str]:
    token = self._peek()
    if token.is_ident("async") and self._peek(1).is_ident("function"):
      self._consume()
      token = self._peek()

    if token.is_ident("function", "class", "abstract"):
      return self._declaration()

    if token.kind == "CALL":
      self._consume()
      if token.text in _COMPONENT_WRAPPERS and _IDENT_RE.match(token.raw.strip()):
        return token.raw.strip()
      if token.text == "defineComponent":
        return _name_option(token.raw)
      return None

    if token.is_group("{"):
      self._consume()
      return _name_option(token.raw)

    if token.kind == "IDENT":
      # Dotted wrapper call such as React.memo(Foo)
      k = 0
      while self._peek(k).kind == "IDENT" and self._peek(k + 1).is_punct("."):
        k += 2
      callee, args = self._peek(k), self._peek(k + 1)
      if k and callee.text in _COMPONENT_WRAPPERS and args.is_group("("):
        inner = args.raw[1:-1].strip()
        return inner if _IDENT_RE.match(inner) else None
      if k == 0 and not args.is_group("(") and not args.is_punct("=>"):
        self._consume()
        return token.text
    return None


def _name_option(raw: str) -> Optional[str]:
  """
  Returns the ``name: '...'`` option declared at the first level of an
  object literal.
  """
  for match in _NAME_OPTION_RE.finditer(raw):
    prefix = raw[: match.start()]
    depth = sum(prefix.count(c) for c in "{([") - sum(prefix.count(c) for c in "})]")
    if depth == 1:
      return match.group(2)
  return None


def resolve_component_name(exports: List[ExportDeclaration], candidates: List[str], component_style: bool) -> str:
  """
  Resolves the component identifier.

  Order: the default export's identifier, then the first uppercase
  function-like declaration (component-style frameworks only), then the
  ``UnnamedComponent`` sentinel.

  Args:
      exports (List[ExportDeclaration]): Module exports.
      candidates (List[str]): Uppercase function/class/arrow declarations.
      component_style (bool): Whether the framework defines components as
          functions or classes.

  Returns:
      str: The component name.
  """
  for export in exports:
    if export.kind == ExportKind.DEFAULT and export.declaration:
      return export.declaration
  if component_style and candidates:
    return candidates[0]
  return UNNAMED_COMPONENT


def parse(source: str, options: ParseOptions) -> ComponentAST:
  """
  Parses component source text.

  Args:
      source (str): The component source.
      options (ParseOptions): Framework and syntax flags.

  Returns:
      ComponentAST: The parsed component.

  Raises:
      ParseError: If the source is malformed.
  """
  return StructuralParser(source, options).parse()


def parse_react(source: str, typescript: bool = False) -> ComponentAST:
  return parse(source, ParseOptions(framework=Framework.REACT, typescript=typescript))


def parse_vue(source: str, typescript: bool = False) -> ComponentAST:
  return parse(source, ParseOptions(framework=Framework.VUE, typescript=typescript))


def parse_javascript(source: str, typescript: bool = False) -> ComponentAST:
  return parse(source, ParseOptions(framework=Framework.JS, typescript=typescript))
