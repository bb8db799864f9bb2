"""
reporting/report.py

Builds a shareable report from a selection of bookmarks.

The generator only reads the bookmarks it is given; it does not touch the
repository and has no side effects.
"""

from __future__ import annotations

import json
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from reporting.bookmarks import BookmarkedInteraction

ReportType = Literal["executive", "operational", "technical"]

MAX_KEY_METRICS = 6

RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    "executive": (
        "Focus on revenue-generating metrics and strategic KPIs",
        "Monitor cost efficiency and ROI across all operations",
        "Ensure customer satisfaction aligns with business objectives",
    ),
    "operational": (
        "Optimize agent utilization and scheduling",
        "Improve first-call resolution rates through training",
        "Implement quality monitoring improvements",
    ),
    "technical": (
        "Monitor system performance and response times",
        "Ensure data accuracy and integration quality",
        "Implement automated reporting workflows",
    ),
}


class _ReportModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TimeRange(_ReportModel):
    earliest: datetime
    latest: datetime


class ReportSummary(_ReportModel):
    total_insights: int
    categories: list[str]
    time_range: Optional[TimeRange] = None
    key_metrics: list[dict[str, Any]] = Field(default_factory=list)


class ReportInsight(_ReportModel):
    category: str
    title: str
    content: str
    bookmark_ids: list[str]


class Report(_ReportModel):
    id: str
    title: str
    description: str = ""
    type: ReportType
    generated_at: datetime
    bookmarks: list[BookmarkedInteraction]
    summary: ReportSummary
    insights: list[ReportInsight]
    recommendations: list[str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportGenerator:
    """Summarise bookmarks into a :class:`Report`."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def generate(
        self,
        bookmarks: Sequence[BookmarkedInteraction],
        title: str = "",
        description: str = "",
        report_type: ReportType = "executive",
    ) -> Report:
        generated_at = self._clock()
        return Report(
            id=uuid.uuid4().hex,
            title=title.strip() or f"Custom Report - {generated_at.date().isoformat()}",
            description=description,
            type=report_type,
            generated_at=generated_at,
            bookmarks=list(bookmarks),
            summary=summarize(bookmarks),
            insights=derive_insights(bookmarks),
            recommendations=list(RECOMMENDATIONS[report_type]),
        )


def summarize(bookmarks: Sequence[BookmarkedInteraction]) -> ReportSummary:
    categories = list(dict.fromkeys(b.category for b in bookmarks))
    time_range = None
    if bookmarks:
        created = [b.created_at for b in bookmarks]
        time_range = TimeRange(earliest=min(created), latest=max(created))
    return ReportSummary(
        total_insights=len(bookmarks),
        categories=categories,
        time_range=time_range,
        key_metrics=extract_key_metrics(bookmarks),
    )


def extract_key_metrics(bookmarks: Sequence[BookmarkedInteraction]) -> list[dict[str, Any]]:
    """First card per label across ``kpi`` responses, capped at six."""
    metrics: list[dict[str, Any]] = []
    seen: set[str] = set()
    for bookmark in bookmarks:
        response = bookmark.response
        if response.type != "kpi" or not isinstance(response.data, list):
            continue
        for card in response.data:
            label = card.get("label") if isinstance(card, dict) else None
            if label is None or label in seen:
                continue
            seen.add(label)
            metrics.append(card)
    return metrics[:MAX_KEY_METRICS]


def derive_insights(bookmarks: Sequence[BookmarkedInteraction]) -> list[ReportInsight]:
    insights: list[ReportInsight] = []

    performance = [
        b for b in bookmarks
        if b.category == "Performance Analysis" or "performance" in b.tags
    ]
    if performance:
        insights.append(
            ReportInsight(
                category="Performance Analysis",
                title="Team Performance Overview",
                content=(
                    f"Analysis based on {len(performance)} performance-related insights. "
                    "Key areas include agent productivity, customer satisfaction trends, "
                    "and operational efficiency metrics."
                ),
                bookmark_ids=[b.id for b in performance],
            )
        )

    kpi = [b for b in bookmarks if b.category == "KPIs" or b.response.type == "kpi"]
    if kpi:
        insights.append(
            ReportInsight(
                category="Key Performance Indicators",
                title="KPI Summary & Trends",
                content=(
                    f"Comprehensive KPI analysis covering {len(kpi)} key metrics. "
                    "Includes current performance levels, trend analysis, and benchmark "
                    "comparisons."
                ),
                bookmark_ids=[b.id for b in kpi],
            )
        )

    return insights


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def export_report(report: Report, *, exported_at: datetime | None = None) -> str:
    """Serialise *report* with an ``exported_at`` stamp."""
    payload = report.model_dump(mode="json")
    payload["exported_at"] = (exported_at or _utcnow()).isoformat()
    return json.dumps(payload, indent=2)


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def export_filename(report: Report) -> str:
    """
    Download name for an exported report: title words joined by ``_`` plus
    the generation date.

    Only ASCII letters, digits, ``_`` and ``-`` survive so the name is safe
    inside a ``Content-Disposition`` header.
    """
    stem = _UNSAFE_FILENAME_CHARS.sub("", "_".join(report.title.split())).strip("_-")
    stem = stem or "report"
    return f"{stem}_{report.generated_at.date().isoformat()}.json"


def load_report(payload: str | bytes) -> Report:
    """Inverse of :func:`export_report`; the export stamp is discarded."""
    data = json.loads(payload)
    data.pop("exported_at", None)
    return Report.model_validate(data)
