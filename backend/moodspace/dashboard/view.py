"""
Dashboard view model: stats, trend chart, background and history.
"""
from datetime import date, datetime
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo
from moodspace.core.config import settings
from moodspace.schemas.dashboard import (
    BackgroundResponse, ChartGeometry, ChartPoint, DailyPointResponse,
    DashboardView, MoodButton, MoodStatsResponse
)
from moodspace.schemas.mood import MoodResponse, MAX_INTENSITY
from moodspace.services.aggregator import DailyPoint, daily_series, recent_stats, summarize
from moodspace.services.background import accent_color, map_background

# (mood, label, intensity recorded when pressed)
MOOD_BUTTONS = [
    ("happy", "😊 Happy", 3),
    ("sad", "😔 Sad", 2),
    ("anxious", "😰 Anxious", 4),
    ("lost", "🤍 Lost", 3),
    ("angry", "🔥 Angry", 4),
    ("calm", "🌊 Calm", 2),
]

CHART_WIDTH = 700
CHART_HEIGHT = 240
CHART_PADDING = 32


def today_in(tz_name: str) -> date:
    """Current calendar date in the given IANA zone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def build_chart(series: List[DailyPoint]) -> ChartGeometry:
    """
    Place the series on an SVG canvas.

    Days without data are left out of the points and split the line, so no
    value is ever interpolated across a gap.
    """
    inner_w = CHART_WIDTH - 2 * CHART_PADDING
    inner_h = CHART_HEIGHT - 2 * CHART_PADDING
    step = inner_w / max(len(series) - 1, 1)

    def y_for(value: float) -> float:
        return round(CHART_PADDING + (1 - value / MAX_INTENSITY) * inner_h, 2)

    segments: List[List[ChartPoint]] = []
    points: List[ChartPoint] = []
    current: List[ChartPoint] = []
    for i, point in enumerate(series):
        if point.average is None:
            if current:
                segments.append(current)
                current = []
            continue
        plotted = ChartPoint(
            x=round(CHART_PADDING + i * step, 2),
            y=y_for(point.average),
            date=point.date,
            average=point.average,
        )
        current.append(plotted)
        points.append(plotted)
    if current:
        segments.append(current)

    y_ticks = [
        ChartPoint(x=CHART_PADDING, y=y_for(v), date=str(v), average=v)
        for v in range(MAX_INTENSITY + 1)
    ]

    return ChartGeometry(
        width=CHART_WIDTH,
        height=CHART_HEIGHT,
        padding=CHART_PADDING,
        segments=segments,
        points=points,
        y_ticks=y_ticks,
    )


def _stats(stats) -> Optional[MoodStatsResponse]:
    return MoodStatsResponse.model_validate(stats) if stats else None


def build_dashboard_view(
    records: Sequence,
    today: Optional[date] = None,
    user_email: Optional[str] = None,
    saving: bool = False,
    error: Optional[str] = None,
) -> DashboardView:
    """Compose the dashboard from records ordered newest first."""
    if today is None:
        today = today_in(settings.DASHBOARD_TIMEZONE)

    overall = summarize(records)
    recent = recent_stats(records)
    series = daily_series(records, today)

    recent_average = recent.average if recent else None
    recent_mood = recent.dominant_mood if recent else None
    background = map_background(recent_average, recent_mood)

    return DashboardView(
        user_email=user_email,
        overall=_stats(overall),
        recent=_stats(recent),
        total=len(records),
        series=[
            DailyPointResponse(date=p.date, label=p.date[5:], average=p.average)
            for p in series
        ],
        chart=build_chart(series),
        background=BackgroundResponse(
            image=background.image,
            period=background.period,
            neutral=background.is_neutral,
        ),
        accent=accent_color(recent_mood),
        buttons=[
            MoodButton(mood=mood, label=label, intensity=intensity, highlighted=(mood == recent_mood))
            for mood, label, intensity in MOOD_BUTTONS
        ],
        history=[MoodResponse.model_validate(r) for r in records],
        saving=saving,
        error=error,
    )
