"""
Pydantic schemas for the dashboard view model.
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from moodspace.schemas.mood import MoodResponse


class MoodStatsResponse(BaseModel):
    """Average intensity and dominant mood over a set of records."""
    average: Optional[float]
    dominant_mood: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class DailyPointResponse(BaseModel):
    """One day of the trend series; average is null on days without records."""
    date: str
    label: str  # MM-DD
    average: Optional[float]


class ChartPoint(BaseModel):
    """A plotted point in SVG coordinates."""
    x: float
    y: float
    date: str
    average: float


class ChartGeometry(BaseModel):
    """Trend line split into segments at days without data."""
    width: int
    height: int
    padding: int
    segments: List[List[ChartPoint]] = []
    points: List[ChartPoint] = []
    y_ticks: List[ChartPoint] = []  # date holds the tick label


class BackgroundResponse(BaseModel):
    image: str
    period: float
    neutral: bool


class MoodButton(BaseModel):
    mood: str
    label: str
    intensity: int
    highlighted: bool = False


class DashboardView(BaseModel):
    """Everything the dashboard page renders."""
    user_email: Optional[str] = None
    overall: Optional[MoodStatsResponse] = None
    recent: Optional[MoodStatsResponse] = None
    total: int = 0
    series: List[DailyPointResponse] = []
    chart: ChartGeometry
    background: BackgroundResponse
    accent: str
    buttons: List[MoodButton] = []
    history: List[MoodResponse] = []
    saving: bool = False
    error: Optional[str] = None
