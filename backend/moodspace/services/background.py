"""
Mood-driven dashboard background.
"""
from dataclasses import dataclass
from typing import Optional

NEUTRAL_GRADIENT = "linear-gradient(135deg, #0b0f1a, #111827)"
DEFAULT_PERIOD = 30.0
MIN_PERIOD = 14.0
DEFAULT_HUE = 210
DEFAULT_ACCENT = "#ffffff"

MOOD_HUES = {
    "happy": 45,
    "calm": 200,
    "sad": 220,
    "anxious": 190,
    "angry": 10,
    "lost": 260,
}

MOOD_ACCENTS = {
    "happy": "#facc15",
    "calm": "#22d3ee",
    "sad": "#60a5fa",
    "anxious": "#38bdf8",
    "angry": "#fb7185",
    "lost": "#a78bfa",
}


@dataclass(frozen=True)
class Background:
    """Gradient parameters and animation period (seconds)."""
    image: str
    period: float
    hue1: Optional[int] = None
    hue2: Optional[int] = None
    sat1: Optional[float] = None
    sat2: Optional[float] = None
    light1: Optional[float] = None
    light2: Optional[float] = None

    @property
    def is_neutral(self) -> bool:
        return self.hue1 is None


NEUTRAL_BACKGROUND = Background(image=NEUTRAL_GRADIENT, period=DEFAULT_PERIOD)


def _fmt(value: float) -> str:
    return f"{value:g}"


def map_background(recent_average: Optional[float], dominant_mood: Optional[str]) -> Background:
    """Map the recent average intensity and dominant mood to a background."""
    if recent_average is None:
        return NEUTRAL_BACKGROUND

    t = max(0.0, min(1.0, recent_average / 5))
    hue1 = MOOD_HUES.get(dominant_mood, DEFAULT_HUE) if dominant_mood else DEFAULT_HUE
    hue2 = (hue1 + 35) % 360

    sat1 = 55 + 25 * t
    sat2 = 45 + 30 * t
    light1 = 16 + 12 * t
    light2 = 10 + 10 * t

    image = (
        "radial-gradient(circle at 20% 20%, rgba(255,255,255,0.10), transparent 35%), "
        "radial-gradient(circle at 80% 30%, rgba(255,255,255,0.06), transparent 40%), "
        f"linear-gradient(135deg, hsl({hue1} {_fmt(sat1)}% {_fmt(light1)}%), "
        f"hsl({hue2} {_fmt(sat2)}% {_fmt(light2)}%))"
    )
    period = max(MIN_PERIOD, DEFAULT_PERIOD - 3 * recent_average)

    return Background(
        image=image,
        period=period,
        hue1=hue1,
        hue2=hue2,
        sat1=sat1,
        sat2=sat2,
        light1=light1,
        light2=light2,
    )


def accent_color(mood: Optional[str]) -> str:
    """Highlight color for the dominant mood's button and the trend line."""
    if not mood:
        return DEFAULT_ACCENT
    return MOOD_ACCENTS.get(mood, DEFAULT_ACCENT)
