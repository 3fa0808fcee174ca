"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator
from pathlib import Path

import pytest

from mdmeta.config.settings import MdmetaSettings
from mdmeta.domain.actions import Action
from mdmeta.domain.types import TopicCategory
from mdmeta.services.reconcile import ReconcileRequest, ReconcileService
from mdmeta.services.result import ServiceResult
from mdmeta.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)
from tests.conftest import write_doc


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("status", "modified")
        assert span.to_dict()["annotations"] == {"status": "modified"}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_enabled_with_root(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("child") as span:
                assert span is not None
            assert [c.name for c in root.children] == ["child"]
            assert root.children[0].end_time is not None
        finally:
            _current_span.reset(token)


class TestTraced:
    def test_noop_when_disabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert op().meta is None

    def test_preserves_existing_meta(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="test", meta={"existing": 1})

        enable_telemetry()
        result = op()
        assert result.meta is not None
        assert result.meta["existing"] == 1
        assert "telemetry" in result.meta

    def test_one_child_span_per_document(self, settings: MdmetaSettings, docs: Path) -> None:
        write_doc(docs, "a.md", "---", "---")
        write_doc(docs, "b.md", "---", "ms.author: x", "---")
        write_doc(docs, "index.md", "---", "---")
        enable_telemetry()
        result = ReconcileService(settings).reconcile(
            ReconcileRequest(
                action=Action.FIND_MISSING,
                directory=docs,
                key="ms.author",
                category=TopicCategory.REFERENCE,
                value="jdoe",
            )
        )
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "ReconcileService.reconcile"
        children = {c["name"]: c["annotations"]["status"] for c in tree["children"]}
        assert children == {"a.md": "modified", "b.md": "skipped"}
