# ABOUTME: Maps WMO weather codes to display labels and icons.
# ABOUTME: First matching range wins; anything unmatched is reported as clear.

from weather_chat.models import ConditionLabel

CLEAR = ConditionLabel(text="Clear", icon="☀️")

# (low, high) inclusive; high=None means open-ended
_CODE_RANGES: tuple[tuple[int, int | None, ConditionLabel], ...] = (
    (1, 3, ConditionLabel(text="Partly Cloudy", icon="⛅")),
    (45, 48, ConditionLabel(text="Foggy", icon="🌫️")),
    (51, 67, ConditionLabel(text="Rainy", icon="🌧️")),
    (71, 77, ConditionLabel(text="Snowy", icon="❄️")),
    (95, None, ConditionLabel(text="Thunderstorm", icon="⚡")),
)


def map_code(code: int) -> ConditionLabel:
    """Return the label and icon for a WMO weather code."""
    for low, high, label in _CODE_RANGES:
        if code >= low and (high is None or code <= high):
            return label
    return CLEAR
