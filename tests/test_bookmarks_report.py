"""
tests/test_bookmarks_report.py

Tests for the file-backed bookmark repository and the report generator.

Every test writes under pytest's ``tmp_path``; the clock is injected so
ordering and time ranges are deterministic.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from itertools import count
from pathlib import Path

import pytest
from pydantic import ValidationError

from reporting.bookmarks import BookmarkDraft, BookmarkRepository, ChatMessage
from reporting.report import (
    MAX_KEY_METRICS,
    RECOMMENDATIONS,
    ReportGenerator,
    export_filename,
    export_report,
    load_report,
)

_START = datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)


def _ticking_clock():
    ticks = count()
    return lambda: _START + timedelta(hours=next(ticks))


def _draft(
    title: str,
    *,
    category: str = "Custom Analysis",
    tags: list[str] | None = None,
    response_type: str = "text",
    data=None,
) -> BookmarkDraft:
    return BookmarkDraft(
        title=title,
        description=f"{title} description",
        query=f"query for {title}",
        response=ChatMessage(
            id=f"msg-{title}",
            content=f"answer for {title}",
            sender="assistant",
            timestamp=_START,
            type=response_type,
            data=data,
        ),
        tags=tags or [],
        category=category,
    )


def _cards(*labels: str) -> list[dict]:
    return [
        {"label": label, "value": "1", "change": None, "trend": "up", "color": "info"}
        for label in labels
    ]


@pytest.fixture()
def repo(tmp_path: Path) -> BookmarkRepository:
    return BookmarkRepository(tmp_path / "bookmarks", clock=_ticking_clock())


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TestBookmarkRepository:
    def test_empty_when_no_file(self, repo: BookmarkRepository) -> None:
        assert repo.list_bookmarks("agent") == []

    def test_add_assigns_id_and_orders_newest_first(self, repo: BookmarkRepository) -> None:
        first = repo.add("agent", _draft("first"))
        second = repo.add("agent", _draft("second"))

        assert first.id != second.id
        assert first.user_role == "agent"
        assert first.created_at == _START
        assert [b.title for b in repo.list_bookmarks("agent")] == ["second", "first"]

    def test_file_per_role(self, repo: BookmarkRepository) -> None:
        repo.add("agent", _draft("mine"))
        assert repo.list_bookmarks("supervisor") == []
        assert (repo.directory / "bookmarks_agent.json").exists()

    def test_toggle_star(self, repo: BookmarkRepository) -> None:
        saved = repo.add("agent", _draft("star me"))

        assert repo.toggle_star("agent", saved.id).is_starred is True
        assert repo.get("agent", saved.id).is_starred is True
        assert repo.toggle_star("agent", saved.id).is_starred is False

    def test_toggle_star_unknown(self, repo: BookmarkRepository) -> None:
        assert repo.toggle_star("agent", "missing") is None

    def test_delete(self, repo: BookmarkRepository) -> None:
        saved = repo.add("agent", _draft("gone"))
        assert repo.delete("agent", saved.id) is True
        assert repo.delete("agent", saved.id) is False
        assert repo.list_bookmarks("agent") == []

    def test_search_matches_title_description_and_tags(self, repo: BookmarkRepository) -> None:
        repo.add("agent", _draft("Weekly CSAT", tags=["quality"]))
        repo.add("agent", _draft("Forecast", tags=["Staffing"]))

        assert [b.title for b in repo.search("agent", "csat")] == ["Weekly CSAT"]
        assert [b.title for b in repo.search("agent", "staff")] == ["Forecast"]
        assert [b.title for b in repo.search("agent", "DESCRIPTION")] == ["Forecast", "Weekly CSAT"]

    def test_search_category_filter(self, repo: BookmarkRepository) -> None:
        repo.add("agent", _draft("a", category="KPIs"))
        repo.add("agent", _draft("b", category="Forecasting"))

        assert [b.title for b in repo.search("agent", category="KPIs")] == ["a"]
        assert len(repo.search("agent", category="all")) == 2

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _draft("x", category="Gossip")

    def test_corrupt_file_reads_as_empty(self, repo: BookmarkRepository) -> None:
        repo.directory.mkdir(parents=True)
        (repo.directory / "bookmarks_agent.json").write_text("{not json", encoding="utf-8")
        assert repo.list_bookmarks("agent") == []


class TestExportImport:
    def test_round_trip(self, repo: BookmarkRepository, tmp_path: Path) -> None:
        kept = repo.add("agent", _draft("kept", category="KPIs", data=_cards("A")))
        repo.add("agent", _draft("skipped"))

        payload = repo.export_json("agent", [kept.id])
        exported = json.loads(payload)
        assert [item["title"] for item in exported] == ["kept"]

        other = BookmarkRepository(tmp_path / "elsewhere")
        imported = other.import_json("agent", payload)

        assert imported == [kept]
        assert other.list_bookmarks("agent") == [kept]

    def test_import_replaces_same_id(self, repo: BookmarkRepository) -> None:
        saved = repo.add("agent", _draft("original"))
        repo.toggle_star("agent", saved.id)
        payload = repo.export_json("agent", [saved.id])
        repo.toggle_star("agent", saved.id)

        repo.import_json("agent", payload)

        bookmarks = repo.list_bookmarks("agent")
        assert len(bookmarks) == 1
        assert bookmarks[0].is_starred is True

    def test_malformed_import_writes_nothing(self, repo: BookmarkRepository) -> None:
        repo.add("agent", _draft("safe"))
        with pytest.raises(ValidationError):
            repo.import_json("agent", '[{"title": "incomplete"}]')
        assert [b.title for b in repo.list_bookmarks("agent")] == ["safe"]


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class TestReportGenerator:
    @pytest.fixture()
    def generator(self) -> ReportGenerator:
        return ReportGenerator(clock=lambda: datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))

    def test_summary(self, repo: BookmarkRepository, generator: ReportGenerator) -> None:
        a = repo.add("agent", _draft("a", category="KPIs", response_type="kpi", data=_cards("X", "Y")))
        b = repo.add("agent", _draft("b", category="Forecasting"))
        c = repo.add("agent", _draft("c", category="KPIs", response_type="kpi", data=_cards("Y", "Z")))

        report = generator.generate([a, b, c], title="Q1", report_type="operational")

        assert report.summary.total_insights == 3
        assert report.summary.categories == ["KPIs", "Forecasting"]
        assert report.summary.time_range.earliest == a.created_at
        assert report.summary.time_range.latest == c.created_at
        assert [m["label"] for m in report.summary.key_metrics] == ["X", "Y", "Z"]
        assert report.recommendations == list(RECOMMENDATIONS["operational"])

    def test_key_metrics_capped(self, repo: BookmarkRepository, generator: ReportGenerator) -> None:
        labels = [f"K{i}" for i in range(10)]
        saved = repo.add("agent", _draft("many", response_type="kpi", data=_cards(*labels)))

        report = generator.generate([saved])

        assert len(report.summary.key_metrics) == MAX_KEY_METRICS

    def test_insights(self, repo: BookmarkRepository, generator: ReportGenerator) -> None:
        perf = repo.add("agent", _draft("perf", tags=["performance"]))
        kpi = repo.add("agent", _draft("kpi", category="KPIs"))

        insights = generator.generate([perf, kpi]).insights

        assert [i.title for i in insights] == ["Team Performance Overview", "KPI Summary & Trends"]
        assert insights[0].bookmark_ids == [perf.id]
        assert insights[1].content.startswith("Comprehensive KPI analysis covering 1 key metrics.")

    def test_default_title_uses_date(self, generator: ReportGenerator) -> None:
        report = generator.generate([])
        assert report.title == "Custom Report - 2024-03-01"
        assert report.summary.time_range is None
        assert report.insights == []

    def test_export_and_load(self, repo: BookmarkRepository, generator: ReportGenerator) -> None:
        saved = repo.add("agent", _draft("a", category="KPIs", response_type="kpi", data=_cards("X")))
        report = generator.generate([saved], title="Monthly Ops Review", report_type="technical")

        payload = export_report(report)

        assert "exported_at" in json.loads(payload)
        assert load_report(payload) == report
        assert export_filename(report) == "Monthly_Ops_Review_2024-03-01.json"

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Отчёт Q1", "Q1_2024-03-01.json"),
            ("Отчёт", "report_2024-03-01.json"),
            ('Say "hi" now', "Say_hi_now_2024-03-01.json"),
        ],
    )
    def test_export_filename_is_header_safe(
        self, generator: ReportGenerator, title: str, expected: str
    ) -> None:
        report = generator.generate([], title=title)
        assert export_filename(report) == expected
