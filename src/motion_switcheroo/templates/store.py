"""
Template Store.

Starter snippets for each framework. Metadata lives in ``catalog.json``; the
snippet sources sit beside it under ``snippets/`` so they stay valid,
readable component files. A fetched template's code is ordinary parser input.

A store is built once at startup and shared read-only; lookups never mutate it.
"""

import json
import logging
from collections import Counter
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from motion_switcheroo.enums import Complexity, Framework, TemplateCategory
from motion_switcheroo.errors import TemplateNotFoundError

logger = logging.getLogger(__name__)

CATALOG_FILE = "catalog.json"
SNIPPETS_DIR = "snippets"


class Template(BaseModel):
  """
  A starter snippet with its metadata.
  """

  id: str
  name: str
  description: str = ""
  framework: Framework
  category: TemplateCategory
  complexity: Complexity = Complexity.BASIC
  code: str = Field(description="Snippet source.")
  typescript: bool = False
  dependencies: List[str] = Field(default_factory=list)
  tags: List[str] = Field(default_factory=list)


class TemplateFilter(BaseModel):
  """
  Criteria for `TemplateStore.search_templates`. Unset fields match anything.
  """

  framework: Optional[Framework] = None
  category: Optional[TemplateCategory] = None
  complexity: Optional[Complexity] = None
  tags: List[str] = Field(default_factory=list, description="All listed tags must be present.")


def resolve_templates_dir() -> Path:
  return Path(str(files("motion_switcheroo.templates")))


def load_templates(directory: Optional[Path] = None) -> List[Template]:
  """
  Reads the catalogue and the snippet files it references.

  Args:
      directory (Optional[Path]): Directory holding ``catalog.json`` and
          ``snippets/``. Defaults to the packaged templates.

  Returns:
      List[Template]: Templates in catalogue order.
  """
  directory = directory or resolve_templates_dir()
  with open(directory / CATALOG_FILE, "rt", encoding="utf-8") as f:
    entries: List[Dict[str, Any]] = json.load(f)

  templates: List[Template] = []
  for entry in entries:
    entry = dict(entry)
    snippet = directory / SNIPPETS_DIR / entry.pop("file")
    entry["code"] = snippet.read_text(encoding="utf-8")
    templates.append(Template.model_validate(entry))
  logger.debug(f"Loaded {len(templates)} templates from {directory}")
  return templates


class TemplateStore:
  """
  Read-only collection of templates keyed by id.
  """

  def __init__(self, templates: Optional[List[Template]] = None):
    self._templates: Dict[str, Template] = {}
    for template in templates if templates is not None else load_templates():
      self._templates[template.id] = template

  def __len__(self) -> int:
    return len(self._templates)

  def __contains__(self, template_id: object) -> bool:
    return template_id in self._templates

  def get_template(self, template_id: str, framework: Any = None) -> Template:
    """
    Fetches a template by id.

    Args:
        template_id (str): Template identifier.
        framework (Any): If set, the template must belong to this framework.

    Returns:
        Template: The template.

    Raises:
        TemplateNotFoundError: If no matching template exists.
        UnsupportedFrameworkError: If `framework` is not a known key.
    """
    fw = Framework.resolve(framework) if framework is not None else None
    template = self._templates.get(template_id)
    if template is None or (fw is not None and template.framework != fw):
      raise TemplateNotFoundError(template_id, fw.value if fw else None)
    return template

  def has_template(self, template_id: str, framework: Any = None) -> bool:
    try:
      self.get_template(template_id, framework)
    except TemplateNotFoundError:
      return False
    return True

  def templates_for(self, framework: Any) -> List[Template]:
    fw = Framework.resolve(framework)
    return [t for t in self._templates.values() if t.framework == fw]

  def search_templates(self, criteria: Optional[TemplateFilter] = None, **kwargs: Any) -> List[Template]:
    """
    Lists templates matching every given criterion.

    Args:
        criteria (Optional[TemplateFilter]): Filter object.
        **kwargs: Filter fields, used when `criteria` is omitted.

    Returns:
        List[Template]: Matches in catalogue order.
    """
    criteria = criteria or TemplateFilter.model_validate(kwargs)
    results = []
    for template in self._templates.values():
      if criteria.framework and template.framework != criteria.framework:
        continue
      if criteria.category and template.category != criteria.category:
        continue
      if criteria.complexity and template.complexity != criteria.complexity:
        continue
      if not set(criteria.tags).issubset(template.tags):
        continue
      results.append(template)
    return results

  def all_template_ids(self) -> List[str]:
    return list(self._templates)

  def stats(self) -> Dict[str, Any]:
    """
    Returns:
        Dict[str, Any]: ``total`` plus counts ``by_framework``,
        ``by_category`` and ``by_complexity``.
    """
    templates = list(self._templates.values())
    by_complexity = {c.value: 0 for c in Complexity}
    by_complexity.update(Counter(t.complexity.value for t in templates))
    return {
      "total": len(templates),
      "by_framework": {fw.value: len(self.templates_for(fw)) for fw in Framework},
      "by_category": dict(Counter(t.category.value for t in templates)),
      "by_complexity": by_complexity,
    }
