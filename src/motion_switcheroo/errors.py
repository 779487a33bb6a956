"""
Error Taxonomy.

All failures raised by the pipeline derive from `MotionSwitcherooError`, which
carries a stable machine-readable `code` and a `details` dictionary. The
engine converts these into a failed `GenerationResult` so callers receive
either a complete result or a structured error.

Hierarchy:
    MotionSwitcherooError
    ├── UnsupportedFrameworkError  (rejected before parsing)
    ├── ParseError                 (malformed input, carries a snippet)
    ├── TransformRuleError         (a rewrite rule raised)
    ├── GenerationError            (no viable output text)
    ├── FormatterError             (pretty-printer failed; always recovered)
    ├── TemplateNotFoundError
    └── PatternNotFoundError
"""

from typing import Any, Dict, Optional


class MotionSwitcherooError(Exception):
  """
  Base class for pipeline errors.

  Attributes:
      code (str): Stable identifier of the failure class (e.g. 'PARSE_ERROR').
      details (Dict[str, Any]): Structured context for the failure.
  """

  code: str = "INTERNAL_ERROR"

  def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
    super().__init__(message)
    self.message = message
    self.details: Dict[str, Any] = details or {}

  def to_dict(self) -> Dict[str, Any]:
    """
    Serializes the error for JSON output.

    Returns:
        Dict[str, Any]: `{code, message, details}`.
    """
    return {"code": self.code, "message": self.message, "details": self.details}


class UnsupportedFrameworkError(MotionSwitcherooError, ValueError):
  code = "INVALID_FRAMEWORK"

  def __init__(self, framework: Any, supported: Optional[list] = None):
    supported = supported or []
    super().__init__(
      f"Unsupported framework: '{framework}'. Supported frameworks: {supported}",
      {"framework": str(framework), "supported": supported},
    )
    self.framework = framework


class ParseError(MotionSwitcherooError):
  """
  Raised when source text cannot be turned into a structural tree.

  Attributes:
      snippet (str): The source fragment around the failure point.
      line (int): 1-based line of the failure.
      column (int): 1-based column of the failure.
  """

  code = "PARSE_ERROR"

  def __init__(self, message: str, snippet: str = "", line: int = 0, column: int = 0):
    super().__init__(
      f"{message} (line {line}, column {column})" if line else message,
      {"snippet": snippet, "line": line, "column": column, "cause": message},
    )
    self.cause = message
    self.snippet = snippet
    self.line = line
    self.column = column


class TransformRuleError(MotionSwitcherooError):
  """Raised when a rewrite rule's condition or transform fails."""

  code = "TRANSFORM_ERROR"

  def __init__(self, rule_name: str, cause: BaseException):
    super().__init__(
      f"Rule '{rule_name}' failed: {cause}",
      {"rule": rule_name, "cause": type(cause).__name__},
    )
    self.rule_name = rule_name
    self.__cause__ = cause


class GenerationError(MotionSwitcherooError):
  code = "GENERATION_ERROR"


class FormatterError(MotionSwitcherooError):
  code = "FORMATTER_ERROR"


class TemplateNotFoundError(MotionSwitcherooError, KeyError):
  code = "RESOURCE_NOT_FOUND"

  def __init__(self, template_id: str, framework: Optional[str] = None):
    suffix = f" for framework '{framework}'" if framework else ""
    super().__init__(
      f"Template '{template_id}' not found{suffix}",
      {"id": template_id, "framework": framework},
    )

  def __str__(self) -> str:
    return self.message


class PatternNotFoundError(MotionSwitcherooError, KeyError):
  code = "RESOURCE_NOT_FOUND"

  def __init__(self, pattern_id: str):
    super().__init__(f"Pattern '{pattern_id}' not found", {"id": pattern_id})

  def __str__(self) -> str:
    return self.message
