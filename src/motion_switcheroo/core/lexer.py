"""
Script Lexer.

Tokenizes JavaScript/TypeScript source on demand. The parser drives the lexer
position by position because whether ``/`` opens a regular expression (and
whether ``<`` opens markup) depends on the preceding significant token, which
only the parser knows.

Tokens carry absolute offsets into the source so that the structural tree can
be serialized back to the exact input text.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from motion_switcheroo.errors import ParseError


class TokenKind(Enum):
  """Enumeration of script token types."""

  WHITESPACE = auto()
  LINE_COMMENT = auto()  # // ...
  BLOCK_COMMENT = auto()  # /* ... */
  STRING = auto()  # '...' or "..."
  TEMPLATE = auto()  # `...${...}...`
  REGEX = auto()  # /.../flags
  NUMBER = auto()
  IDENT = auto()
  PUNCT = auto()
  EOF = auto()


@dataclass
class Token:
  """A lexical unit addressed by offsets into the source."""

  kind: TokenKind
  text: str
  start: int
  end: int

  def is_punct(self, *values: str) -> bool:
    return self.kind == TokenKind.PUNCT and self.text in values

  def is_ident(self, *values: str) -> bool:
    return self.kind == TokenKind.IDENT and (not values or self.text in values)


_PUNCTUATORS = [
  ">>>=",
  "...",
  "===",
  "!==",
  "**=",
  "<<=",
  ">>=",
  ">>>",
  "&&=",
  "||=",
  "??=",
  "=>",
  "==",
  "!=",
  "<=",
  ">=",
  "&&",
  "||",
  "??",
  "++",
  "--",
  "+=",
  "-=",
  "*=",
  "/=",
  "%=",
  "&=",
  "|=",
  "^=",
  "**",
  "<<",
  ">>",
]

# Order matters: longest punctuators first, optional chaining must not swallow `?.5`.
_PUNCT_RE = re.compile(r"\?\.(?!\d)|" + "|".join(re.escape(p) for p in _PUNCTUATORS) + r"|[{}()\[\];,<>+\-*/%&|^!~?:=.@#]")

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_STRING_RE = re.compile(r"""'(?:[^'\\\n]|\\[\s\S])*'|"(?:[^"\\\n]|\\[\s\S])*\"""")
_NUMBER_RE = re.compile(
  r"(?:0[xXbBoO][\da-fA-F_]+|\d[\d_]*(?:\.[\d_]*)?(?:[eE][+-]?\d+)?|\.\d[\d_]*(?:[eE][+-]?\d+)?)n?"
)
_IDENT_RE = re.compile(r"#?[A-Za-z_$\u00c0-\uffff][\w$\u00c0-\uffff]*")
_REGEX_FLAGS_RE = re.compile(r"[a-zA-Z]*")


def location(text: str, pos: int) -> Tuple[int, int]:
  """
  Converts an offset into a 1-based (line, column) pair.

  Args:
      text (str): The full source.
      pos (int): Character offset.

  Returns:
      Tuple[int, int]: Line and column.
  """
  pos = max(0, min(pos, len(text)))
  line = text.count("\n", 0, pos) + 1
  col = pos - (text.rfind("\n", 0, pos) + 1) + 1
  return line, col


def snippet_at(text: str, pos: int, radius: int = 30) -> str:
  """Returns the source fragment surrounding `pos`."""
  start = max(0, pos - radius)
  end = min(len(text), pos + radius)
  return text[start:end]


def error_at(text: str, pos: int, message: str) -> ParseError:
  """
  Builds a ParseError pointing at `pos`.

  Args:
      text (str): The full source.
      pos (int): Offset of the failure.
      message (str): Description of the failure.

  Returns:
      ParseError: The error, ready to raise.
  """
  line, col = location(text, pos)
  return ParseError(message, snippet=snippet_at(text, pos), line=line, column=col)


class ScriptLexer:
  """
  Pull-based tokenizer for script code.

  Unlike a batch tokenizer, `read` is called with the current offset and a flag
  telling whether a regular expression literal may start there.
  """

  def __init__(self, text: str):
    self.text = text

  def read(self, pos: int, regex_allowed: bool = False) -> Token:
    """
    Reads the token starting at `pos`.

    Args:
        pos (int): Offset to read from.
        regex_allowed (bool): Whether ``/`` starts a regex literal here.

    Returns:
        Token: The next token (EOF at the end of input).

    Raises:
        ParseError: On unterminated strings, comments, templates or regexes.
    """
    text = self.text
    if pos >= len(text):
      return Token(TokenKind.EOF, "", pos, pos)

    ch = text[pos]

    match = _WHITESPACE_RE.match(text, pos)
    if match:
      return self._token(TokenKind.WHITESPACE, match.end(), pos)

    if text.startswith("//", pos):
      match = _LINE_COMMENT_RE.match(text, pos)
      return self._token(TokenKind.LINE_COMMENT, match.end(), pos)

    if text.startswith("/*", pos):
      end = text.find("*/", pos + 2)
      if end < 0:
        raise error_at(text, pos, "Unterminated block comment")
      return self._token(TokenKind.BLOCK_COMMENT, end + 2, pos)

    if ch in ("'", '"'):
      match = _STRING_RE.match(text, pos)
      if not match:
        raise error_at(text, pos, "Unterminated string literal")
      return self._token(TokenKind.STRING, match.end(), pos)

    if ch == "`":
      return self._token(TokenKind.TEMPLATE, self._scan_template(pos), pos)

    if ch == "/" and regex_allowed:
      return self._token(TokenKind.REGEX, self._scan_regex(pos), pos)

    if ch.isdigit() or (ch == "." and text[pos + 1 : pos + 2].isdigit()):
      match = _NUMBER_RE.match(text, pos)
      return self._token(TokenKind.NUMBER, match.end(), pos)

    match = _IDENT_RE.match(text, pos)
    if match:
      return self._token(TokenKind.IDENT, match.end(), pos)

    match = _PUNCT_RE.match(text, pos)
    if match:
      return self._token(TokenKind.PUNCT, match.end(), pos)

    # Stray characters (e.g. a lone backslash) pass through as punctuation.
    return self._token(TokenKind.PUNCT, pos + 1, pos)

  def skip_trivia(self, pos: int) -> int:
    """
    Returns the offset of the next significant token after `pos`.
    """
    while True:
      token = self.read(pos)
      if token.kind not in (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
        return pos
      pos = token.end

  def _token(self, kind: TokenKind, end: int, start: int) -> Token:
    return Token(kind, self.text[start:end], start, end)

  def _scan_template(self, pos: int) -> int:
    text = self.text
    i = pos + 1
    while i < len(text):
      ch = text[i]
      if ch == "\\":
        i += 2
        continue
      if ch == "`":
        return i + 1
      if text.startswith("${", i):
        i = self._scan_substitution(i + 2)
        continue
      i += 1
    raise error_at(text, pos, "Unterminated template literal")

  def _scan_substitution(self, pos: int) -> int:
    """Skips a ``${ ... }`` body, returning the offset after its closing brace."""
    depth = 0
    i = pos
    regex_allowed = True
    while True:
      token = self.read(i, regex_allowed)
      if token.kind == TokenKind.EOF:
        raise error_at(self.text, pos - 2, "Unterminated template substitution")
      if token.is_punct("{"):
        depth += 1
      elif token.is_punct("}"):
        if depth == 0:
          return token.end
        depth -= 1
      if token.kind not in (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
        regex_allowed = token.kind == TokenKind.PUNCT and token.text not in (")", "]", "}")
      i = token.end

  def _scan_regex(self, pos: int) -> int:
    text = self.text
    i = pos + 1
    in_class = False
    while i < len(text):
      ch = text[i]
      if ch == "\n":
        break
      if ch == "\\":
        i += 2
        continue
      if ch == "[":
        in_class = True
      elif ch == "]":
        in_class = False
      elif ch == "/" and not in_class:
        return _REGEX_FLAGS_RE.match(text, i + 1).end()
      i += 1
    raise error_at(text, pos, "Unterminated regular expression")
