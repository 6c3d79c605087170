"""Tests for impact aggregation."""

import threading
import time
from pathlib import Path

import pytest

from impact_estimator.analyzers import impact_aggregator
from impact_estimator.analyzers.impact_aggregator import ImpactAggregator
from impact_estimator.config import ScanConfiguration
from impact_estimator.core.line_scanner import MatchType
from impact_estimator.errors import ScanCancelledError


def _aggregate(root: Path, target: str, symbol=None, context=None, **kwargs):
    target_path = root / target
    return ImpactAggregator(ScanConfiguration(max_workers=2)).aggregate(
        root, target_path, target_path.name, symbol, context, **kwargs
    )


def _keys(root: Path, result) -> set:
    return {p.relative_to(root).as_posix() for p in result.impacts}


def test_filename_reference_scenario(make_project):
    """b.js references a.js; c.js only calls foo() and is not impacted."""
    root = make_project({"a.js": "", "b.js": "import x from './a.js';\n", "c.js": "foo();\n"})

    result = _aggregate(root, "a.js")

    assert _keys(root, result) == {"b.js"}
    impact = next(iter(result.impacts.values()))
    assert impact.is_direct
    assert [m.match_type for m in impact.matches] == [MatchType.FILENAME_REFERENCE]
    assert result.scanned_file_count == 2


def test_target_file_is_never_impacted(make_project):
    """Self references in the target do not count."""
    root = make_project({"a.js": "// a.js\nrender();\n", "b.js": "render();\n"})

    result = _aggregate(root, "a.js", "render")

    assert _keys(root, result) == {"b.js"}


def test_same_line_filename_and_symbol_deduplicated(make_project):
    """A line matching both keywords yields exactly one record, the filename one."""
    root = make_project({
        "a.js": "class Widget {}\n",
        "b.js": "require('./a.js').widget.render();\nrender();\n",
    })

    result = _aggregate(root, "a.js", "render", "Widget")
    impact = result.impacts[root / "b.js"]

    assert impact.line_numbers == [1, 2]
    assert impact.matches[0].match_type is MatchType.FILENAME_REFERENCE
    assert impact.matches[1].match_type is MatchType.STANDALONE_CALL
    assert impact.is_high_confidence
    assert impact.references_symbol


def test_indirect_usage_with_via_attribution(make_project):
    """An indirect file referenced by a direct user is attributed through it."""
    root = make_project({
        "core.js": "export function render() {}\n",
        "loader.js": "import './core.js';\nimport './view.js';\n",
        "view.js": "render();\n",
        "lonely.js": "render();\n",
    })

    result = _aggregate(root, "core.js", "render")

    view = result.impacts[root / "view.js"]
    lonely = result.impacts[root / "lonely.js"]
    assert not view.is_direct
    assert view.via_attribution == root / "loader.js"
    assert lonely.via_attribution is None
    assert [i.file.name for i in result.direct_impacts] == ["loader.js"]
    assert {i.file.name for i in result.indirect_impacts} == {"view.js", "lonely.js"}


def test_files_without_matches_are_omitted(make_project):
    root = make_project({"a.js": "", "b.js": "nothing here\n"})

    assert _aggregate(root, "a.js", "render").impacts == {}


def test_symbol_count_prefers_contextual_matches(widget_project: Path):
    """With contextual matches present only those files are counted."""
    result = _aggregate(widget_project, "src/widget.js", "render", "Widget")

    assert _keys(widget_project, result) == {"src/app.js", "src/other.js"}
    assert result.contextual_file_count == 1
    assert result.symbol_file_count == 2
    assert result.symbol_found_count == 1
    assert result.impacts[widget_project / "src/app.js"].is_high_confidence
    assert not result.impacts[widget_project / "src/other.js"].is_high_confidence


def test_symbol_count_without_context(widget_project: Path):
    result = _aggregate(widget_project, "src/widget.js", "render")

    assert result.contextual_file_count == 0
    assert result.symbol_found_count == 2


def test_aggregation_is_idempotent(widget_project: Path):
    """Two runs over an unchanged tree give the same keys and line numbers."""
    first = _aggregate(widget_project, "src/widget.js", "render", "Widget")
    second = _aggregate(widget_project, "src/widget.js", "render", "Widget")

    assert set(first.impacts) == set(second.impacts)
    for path, impact in first.impacts.items():
        assert impact.line_numbers == second.impacts[path].line_numbers


def test_cancelled_aggregation_raises(make_project):
    root = make_project({"a.js": "", "b.js": "a.js\n"})
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(ScanCancelledError):
        _aggregate(root, "a.js", cancel_event=cancel)


def test_interrupt_while_merging_stops_queued_scans(make_project, monkeypatch):
    """An interrupt surfacing from a scan result cancels the files still queued."""
    root = make_project({f"f{i:02d}.js": "a.js\n" for i in range(30)} | {"a.js": ""})
    reads = []
    lock = threading.Lock()

    def interrupting_read(path):
        with lock:
            reads.append(path)
            first = len(reads) == 1
        if first:
            raise KeyboardInterrupt
        time.sleep(0.05)
        return "a.js\n"

    monkeypatch.setattr(impact_aggregator, "read_source", interrupting_read)
    cancel = threading.Event()

    with pytest.raises(KeyboardInterrupt):
        _aggregate(root, "a.js", cancel_event=cancel)

    assert cancel.is_set()
    assert len(reads) < 10
