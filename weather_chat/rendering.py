# ABOUTME: HTML fragment builders for chat bubbles, the typing indicator, and weather cards.
# ABOUTME: Escapes all user and provider text before it reaches the page.

from html import escape

from weather_chat.models import ConditionLabel, CurrentConditions, GeoLocation, Message


def render_message(message: Message) -> str:
    """Render a message as a chat bubble; plain text is escaped, markup is inserted as-is."""
    role = "bot-message" if message.author == "bot" else "user-message"
    body = message.content if message.is_markup else escape(message.content)
    return (
        f'<div class="message {role}" id="msg-{message.id}">'
        f'<div class="message-content">{body}</div>'
        "</div>"
    )


def typing_indicator(handle: str) -> str:
    return (
        f'<div class="typing-indicator" id="{escape(handle)}">'
        '<div class="dot"></div><div class="dot"></div><div class="dot"></div>'
        "</div>"
    )


def weather_card(place: GeoLocation, conditions: CurrentConditions, label: ConditionLabel) -> str:
    """Compose the formatted weather summary shown for a successful lookup."""
    title = escape(place.name) if not place.country else f"{escape(place.name)}, {escape(place.country)}"
    return (
        '<div class="weather-card">'
        '<div class="weather-header">'
        f"<span>{label.icon}</span>"
        f"<span>{title}</span>"
        "</div>"
        f'<div class="weather-temp">{conditions.temperature_c}°C</div>'
        f"<div>{label.text} • Feels like {conditions.feels_like_c}°C</div>"
        '<div class="weather-details">'
        f"<div>💧 Humidity: {_number(conditions.humidity_pct)}%</div>"
        f"<div>💨 Wind: {_number(conditions.wind_kph)} km/h</div>"
        "</div>"
        "</div>"
    )


def _number(value: float) -> str:
    """Format a pass-through reading the way the provider sent it (67.0 -> 67)."""
    return str(int(value)) if float(value).is_integer() else str(value)
