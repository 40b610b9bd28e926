# ABOUTME: Contract tests for city-name extraction from chat messages.
# ABOUTME: Validates normalization, stopword filtering, and the verbatim fallback.

import pytest

from weather_chat.extractor import extract_city


class TestExtractCity:
    def test_strips_domain_words(self):
        """A typical weather question reduces to the city name.

        Implementation: Extracts from "weather in Paris".
        Passing implies: Stopwords are removed and the result is lowercased.
        """
        assert extract_city("weather in Paris") == "paris"

    def test_removes_punctuation_and_filler(self):
        """Punctuation and politeness words do not survive extraction.

        Implementation: Extracts from a question with commas, apostrophes, and a question mark.
        Passing implies: Non-word characters are stripped before filtering.
        """
        assert extract_city("Please, tell me: how's the weather in New York?") == "hows new york"

    def test_keeps_multi_word_cities(self):
        """Surviving tokens are joined with single spaces.

        Implementation: Extracts from a query with irregular spacing around a two-word city.
        Passing implies: Whitespace runs collapse into one separator.
        """
        assert extract_city("forecast   for   Rio   Janeiro") == "rio janeiro"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("weather in Can Tho", "can tho"),
            ("what's the temperature in Salt Lake City today", "whats salt lake city today"),
            ("forecast for Isle of Man", "isle man"),
        ],
    )
    def test_only_fixed_stopwords_are_removed(self, text, expected):
        """Words outside the fixed stopword set survive, even common ones.

        Implementation: Extracts from queries naming cities that contain ordinary words.
        Passing implies: Real place names like "Can Tho" are not eaten by extra filtering.
        """
        assert extract_city(text) == expected

    def test_drops_short_tokens(self):
        """Tokens of two characters or fewer are discarded.

        Implementation: Extracts from a query containing "a", "is", and "to".
        Passing implies: Length filtering applies alongside the stopword set.
        """
        assert extract_city("is it going to rain in Oslo") == "going rain oslo"

    @pytest.mark.parametrize("text", ["in at for", "weather", "Show me the weather, please!", "a", "NY"])
    def test_falls_back_to_original_text(self, text):
        """When nothing survives filtering the original input is returned unchanged.

        Implementation: Extracts from inputs made only of stopwords or short tokens.
        Passing implies: A non-empty input never produces an empty query.
        """
        assert extract_city(text) == text

    def test_result_is_lowercase_without_punctuation(self):
        """Extracted queries are normalized.

        Implementation: Extracts from mixed-case text with punctuation around the city.
        Passing implies: Output contains no uppercase letters or punctuation.
        """
        result = extract_city("TEMPERATURE at (Berlin)!!")
        assert result == "berlin"
        assert result == result.lower()

    def test_empty_input_returns_empty(self):
        """Empty input falls back to itself.

        Implementation: Extracts from an empty string.
        Passing implies: The fallback returns the input verbatim, even when empty.
        """
        assert extract_city("") == ""
