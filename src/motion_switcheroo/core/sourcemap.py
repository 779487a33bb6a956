"""
Line-level Source Maps (Revision 3).

Each generated line is mapped to column 0 of the source line it was emitted
from. Column precision is not tracked.
"""

import json
from typing import List, Optional

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


def encode_vlq(value: int) -> str:
  """
  Encodes a signed integer as a Base64 VLQ string.

  Args:
      value (int): The number to encode.

  Returns:
      str: e.g. ``"A"`` for 0, ``"C"`` for 1, ``"D"`` for -1.
  """
  vlq = (-value << 1) + 1 if value < 0 else value << 1
  encoded = ""
  while True:
    digit = vlq & _VLQ_MASK
    vlq >>= _VLQ_SHIFT
    if vlq:
      digit |= _VLQ_CONTINUATION
    encoded += _BASE64[digit]
    if not vlq:
      return encoded


def encode_mappings(origins: List[Optional[int]]) -> str:
  """
  Builds the ``mappings`` field from per-line origins.

  Args:
      origins (List[Optional[int]]): 0-based source line per generated line.

  Returns:
      str: Semicolon separated segments, empty for unmapped lines.
  """
  lines: List[str] = []
  previous_source_line = 0
  for origin in origins:
    if origin is None:
      lines.append("")
      continue
    # [generated column, source index, source line delta, source column]
    lines.append(encode_vlq(0) + encode_vlq(0) + encode_vlq(origin - previous_source_line) + encode_vlq(0))
    previous_source_line = origin
  return ";".join(lines)


def build_source_map(origins: List[Optional[int]], source_name: str, source_text: str, file: str) -> str:
  """
  Serializes a Source Map v3 document.

  Args:
      origins (List[Optional[int]]): 0-based source line per generated line.
      source_name (str): Name recorded in ``sources``.
      source_text (str): Original content, embedded as ``sourcesContent``.
      file (str): Name of the generated file.

  Returns:
      str: The JSON document.
  """
  document = {
    "version": 3,
    "file": file,
    "sources": [source_name],
    "sourcesContent": [source_text],
    "names": [],
    "mappings": encode_mappings(origins),
  }
  return json.dumps(document)
