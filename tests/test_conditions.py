# ABOUTME: Contract tests for WMO weather code mapping.
# ABOUTME: Checks every labelled range, its boundaries, and the clear default for gaps.

import pytest

from weather_chat.conditions import map_code


class TestMapCode:
    @pytest.mark.parametrize(
        ("code", "text"),
        [
            (1, "Partly Cloudy"),
            (3, "Partly Cloudy"),
            (45, "Foggy"),
            (48, "Foggy"),
            (51, "Rainy"),
            (67, "Rainy"),
            (71, "Snowy"),
            (77, "Snowy"),
            (95, "Thunderstorm"),
            (99, "Thunderstorm"),
            (1000, "Thunderstorm"),
        ],
    )
    def test_range_boundaries(self, code, text):
        """Codes at either end of a range map to that range's label.

        Implementation: Maps the first and last code of each labelled range.
        Passing implies: Range bounds are inclusive.
        """
        assert map_code(code).text == text

    @pytest.mark.parametrize("code", [0, 4, 44, 49, 50, 68, 70, 78, 94, -1])
    def test_gaps_default_to_clear(self, code):
        """Codes outside every labelled range are reported as clear.

        Implementation: Maps zero, a negative, and codes inside each gap.
        Passing implies: The mapping is total with Clear as the fallback.
        """
        label = map_code(code)
        assert label.text == "Clear"
        assert label.icon == "☀️"

    def test_icons(self):
        """Each label carries its own icon.

        Implementation: Compares icons across one code per range.
        Passing implies: Labels and icons stay paired.
        """
        assert map_code(2).icon == "⛅"
        assert map_code(45).icon == "🌫️"
        assert map_code(61).icon == "🌧️"
        assert map_code(73).icon == "❄️"
        assert map_code(96).icon == "⚡"

    def test_deterministic(self):
        """Repeated calls return equal labels.

        Implementation: Maps the same code twice.
        Passing implies: The mapping is a pure function of the code.
        """
        assert map_code(61) == map_code(61)
