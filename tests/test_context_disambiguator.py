"""Tests for declaration and call-site detection."""

import pytest

from impact_estimator.analyzers.context_disambiguator import ContextDisambiguator
from impact_estimator.core.line_scanner import MatchType, STANDALONE_CONTEXT


@pytest.fixture
def disambiguator() -> ContextDisambiguator:
    return ContextDisambiguator()


@pytest.mark.parametrize("source, expected", [
    ("class Widget {}", "Widget"),
    ("export default class Widget extends Base {", "Widget"),
    ("abstract class Repository\n{", "Repository"),
    ("final class Money", "Money"),
    ("export interface Renderer {", "Renderer"),
    ("trait Loggable\n{", "Loggable"),
    ("type Server struct {", "Server"),
    ("type Store interface {", "Store"),
    ("export const Api = {\n  get() {}\n}", "Api"),
    ("const Service = new Registry();", "Service"),
])
def test_declaring_context_patterns(disambiguator, source, expected):
    assert disambiguator.detect_declaring_context(source) == expected


def test_first_declaration_wins(disambiguator):
    """Only the first declaration, top to bottom, is honored."""
    source = "// helpers\nconst limit = 3;\nclass First {}\nclass Second {}\n"

    assert disambiguator.detect_declaring_context(source) == "First"


def test_no_declaration(disambiguator):
    assert disambiguator.detect_declaring_context("function render() {}\n") is None


def test_method_call_shapes(disambiguator):
    """Dot, arrow and static calls capture the receiver token."""
    source = "widget.render();\n$this->render();\nWidget::render();\nApp\\Widget::render();\n"

    matches = disambiguator.detect_method_context(source, "render")

    assert [(m.line_number, m.call_context) for m in matches] == [
        (1, "widget"), (2, "$this"), (3, "Widget"), (4, "App\\Widget"),
    ]
    assert all(m.match_type is MatchType.METHOD_CALL for m in matches)


def test_receiver_with_call(disambiguator):
    matches = disambiguator.detect_method_context("getWidget().render();", "render")

    assert [m.call_context for m in matches] == ["getWidget"]


def test_standalone_call(disambiguator):
    matches = disambiguator.detect_method_context("  render(props);", "render")

    assert len(matches) == 1
    assert matches[0].match_type is MatchType.STANDALONE_CALL
    assert matches[0].call_context == STANDALONE_CONTEXT
    assert matches[0].line_text == "render(props);"


def test_longer_identifiers_are_not_calls(disambiguator):
    """prerender( and renderAll( are not calls of render."""
    source = "prerender();\nrenderAll();\nobj.prerender();\n$render();\n"

    assert disambiguator.detect_method_context(source, "render") == []


def test_multiple_shapes_on_one_line(disambiguator):
    """Distinct call sites on one line each produce a record."""
    matches = disambiguator.detect_method_context("widget.render(); render();", "render")

    assert [(m.match_type, m.call_context) for m in matches] == [
        (MatchType.METHOD_CALL, "widget"),
        (MatchType.STANDALONE_CALL, STANDALONE_CONTEXT),
    ]


def test_symbol_is_escaped(disambiguator):
    """Regex metacharacters in the symbol are literal."""
    assert disambiguator.detect_method_context("a.b$c();", "b$c")[0].call_context == "a"
    assert disambiguator.detect_method_context("abxc();", "b.c") == []


def test_contextual_subset_is_case_insensitive(disambiguator):
    matches = disambiguator.detect_method_context(
        "widget.render();\nmyWidgetList.render();\nchart.render();\nrender();\n", "render"
    )

    contextual = disambiguator.contextual_subset(matches, "Widget")

    assert [m.call_context for m in contextual] == ["widget", "myWidgetList"]
    assert set(contextual) <= set(matches)


def test_contextual_subset_without_context(disambiguator):
    matches = disambiguator.detect_method_context("widget.render();", "render")

    assert disambiguator.contextual_subset(matches, None) == []


def test_optional_chaining_call(disambiguator):
    matches = disambiguator.detect_method_context("widget?.render();\n", "render")

    assert [(m.match_type, m.call_context) for m in matches] == [(MatchType.METHOD_CALL, "widget")]


@pytest.mark.parametrize("source", [
    "const API = 'x';",
    "<?php\nconst LIMIT = 10;",
    "const Timeout = 5 * time.Second",
])
def test_scalar_constants_are_not_contexts(disambiguator, source):
    assert disambiguator.detect_declaring_context(source) is None
