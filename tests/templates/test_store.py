"""
Tests for the Template Store.

Verifies:
1. The packaged catalogue loads and every snippet is valid parser input.
2. Lookup, framework filtering and search criteria.
3. Catalogue statistics.
4. Loading a catalogue from an arbitrary directory.
"""

import json

import pytest

from motion_switcheroo.core.component import ParseOptions
from motion_switcheroo.core.emitter import serialize
from motion_switcheroo.core.parser import parse
from motion_switcheroo.enums import Complexity, Framework, TemplateCategory
from motion_switcheroo.errors import TemplateNotFoundError, UnsupportedFrameworkError
from motion_switcheroo.templates import Template, TemplateFilter, TemplateStore, load_templates

PACKAGED_IDS = [
  "react-fade-card",
  "react-hover-button",
  "vue-fade-card",
  "vue-hover-button",
  "js-fade-in",
  "js-stagger",
  "js-scroll-trigger",
]


@pytest.fixture(scope="module")
def store():
  return TemplateStore()


def test_packaged_catalogue(store):
  assert len(store) == 7
  assert store.all_template_ids() == PACKAGED_IDS
  assert "vue-fade-card" in store


@pytest.mark.parametrize("template_id", PACKAGED_IDS)
def test_snippets_parse_losslessly(store, template_id):
  template = store.get_template(template_id)
  ast = parse(template.code, ParseOptions(framework=template.framework, typescript=template.typescript))
  assert serialize(ast.arena, ast.root_id) == template.code
  assert ast.framework == template.framework


def test_react_snippet_component_names(store):
  options = ParseOptions(framework="react", typescript=True)
  assert parse(store.get_template("react-fade-card").code, options).component_name == "FadeCard"
  assert parse(store.get_template("react-hover-button").code, options).component_name == "HoverButton"


def test_get_template_with_framework(store):
  template = store.get_template("vue-hover-button", "vue")
  assert template.framework == Framework.VUE
  assert template.category == TemplateCategory.INTERACTION
  assert template.dependencies == ["@vueuse/motion"]

  with pytest.raises(TemplateNotFoundError) as exc:
    store.get_template("vue-hover-button", Framework.REACT)
  assert str(exc.value) == "Template 'vue-hover-button' not found for framework 'react'"
  assert exc.value.code == "RESOURCE_NOT_FOUND"


def test_missing_template(store):
  with pytest.raises(TemplateNotFoundError):
    store.get_template("nope")
  with pytest.raises(KeyError):
    store.get_template("nope")
  assert not store.has_template("nope")
  assert store.has_template("js-stagger", "js")
  assert not store.has_template("js-stagger", "vue")


def test_unknown_framework_is_rejected(store):
  with pytest.raises(UnsupportedFrameworkError):
    store.get_template("js-stagger", "svelte")


def test_templates_for(store):
  assert [t.id for t in store.templates_for("js")] == ["js-fade-in", "js-stagger", "js-scroll-trigger"]


@pytest.mark.parametrize(
  "criteria, expected",
  [
    ({"tags": ["fade"]}, ["react-fade-card", "vue-fade-card", "js-fade-in"]),
    ({"framework": "vue", "category": "interaction"}, ["vue-hover-button"]),
    ({"complexity": "intermediate"}, ["js-stagger", "js-scroll-trigger"]),
    ({"framework": "react", "tags": ["hover", "spring"]}, ["react-hover-button"]),
    ({"tags": ["missing"]}, []),
    ({}, PACKAGED_IDS),
  ],
)
def test_search_templates(store, criteria, expected):
  assert [t.id for t in store.search_templates(**criteria)] == expected


def test_search_with_filter_object(store):
  criteria = TemplateFilter(framework=Framework.JS, category=TemplateCategory.ANIMATION)
  assert [t.id for t in store.search_templates(criteria)] == ["js-fade-in", "js-stagger"]


def test_stats(store):
  assert store.stats() == {
    "total": 7,
    "by_framework": {"react": 2, "vue": 2, "js": 3},
    "by_category": {"component": 2, "interaction": 3, "animation": 2},
    "by_complexity": {"basic": 5, "intermediate": 2, "advanced": 0},
  }


def test_load_from_directory(tmp_path):
  (tmp_path / "snippets").mkdir()
  (tmp_path / "snippets" / "pop.js").write_text("animate('.pop', { scale: 1.2 });\n", encoding="utf-8")
  catalog = [
    {
      "id": "js-pop",
      "name": "Pop",
      "framework": "js",
      "category": "animation",
      "complexity": "advanced",
      "file": "pop.js",
      "tags": ["pop"],
    }
  ]
  (tmp_path / "catalog.json").write_text(json.dumps(catalog), encoding="utf-8")

  (template,) = load_templates(tmp_path)
  assert template.code == "animate('.pop', { scale: 1.2 });\n"
  assert template.complexity == Complexity.ADVANCED
  assert template.typescript is False

  store = TemplateStore([template])
  assert store.stats()["by_complexity"] == {"basic": 0, "intermediate": 0, "advanced": 1}


def test_store_is_keyed_by_id():
  template = Template(id="x", name="X", framework="react", category="utility", code="")
  store = TemplateStore([template, template.model_copy(update={"name": "Y"})])
  assert len(store) == 1
  assert store.get_template("x").name == "Y"
