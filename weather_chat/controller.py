# ABOUTME: Input controller that validates chat submissions and drives the weather lookup.
# ABOUTME: Owns the conversation log and runs extract -> geocode -> weather -> render per query.

import asyncio
import logging
from enum import Enum

from weather_chat.conditions import map_code
from weather_chat.conversation import ConversationLog
from weather_chat.deps import ChatDeps
from weather_chat.extractor import extract_city
from weather_chat.rendering import weather_card
from weather_chat.weather_service import geocode, get_current_conditions

logger = logging.getLogger(__name__)

CLARIFY_MESSAGE = "Please tell me which city you'd like to check! 🌍"
NOT_FOUND_MESSAGE = 'I couldn\'t find a city named "{city}". Could you check the spelling? 🤔'
FAILURE_MESSAGE = "Oops! Something went wrong while fetching the weather. Please try again. 😓"


class ChatState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RESOLVING = "resolving"


class ChatBusyError(RuntimeError):
    """Raised when a query is submitted while the previous one is still resolving."""


class ChatController:
    """Processes one chat query at a time against a single conversation log."""

    def __init__(self, deps: ChatDeps, log: ConversationLog | None = None):
        self.deps = deps
        self.log = log if log is not None else ConversationLog()
        self.state = ChatState.IDLE
        self._scheduled: set[asyncio.Task] = set()

    @property
    def busy(self) -> bool:
        return self.state is not ChatState.IDLE

    async def submit(self, text: str) -> None:
        """Handle one user submission through to a bot reply (or none, for blank input)."""
        if self.busy:
            raise ChatBusyError("A query is already being processed")

        text = text.strip()
        if not text:
            return

        self.state = ChatState.VALIDATING
        try:
            self.log.append_message("user", text)
            city = extract_city(text)
            if len(city) < 2:
                self._schedule_clarification()
                return

            self.state = ChatState.RESOLVING
            await self._resolve(city)
        finally:
            self.state = ChatState.IDLE

    async def drain(self) -> None:
        """Wait for any delayed clarification prompts to be appended."""
        if self._scheduled:
            await asyncio.gather(*self._scheduled)

    async def _resolve(self, city: str) -> None:
        settings = self.deps.settings
        client = self.deps.http_client
        handle = self.log.show_pending()

        try:
            place = await geocode(client, city, language=settings.language, url=settings.geocoding_url)
            if place is None:
                logger.info("No geocoding match for %r", city)
                self.log.clear_pending(handle)
                self.log.append_message("bot", NOT_FOUND_MESSAGE.format(city=city))
                return

            conditions = await get_current_conditions(
                client, place.latitude, place.longitude, url=settings.forecast_url
            )
            card = weather_card(place, conditions, map_code(conditions.weather_code))
        except Exception:
            logger.exception("Weather lookup failed for %r", city)
            self.log.clear_pending(handle)
            self.log.append_message("bot", FAILURE_MESSAGE)
            return

        self.log.clear_pending(handle)
        self.log.append_message("bot", card, is_markup=True)

    def _schedule_clarification(self) -> None:
        task = asyncio.create_task(self._clarify_later(self.deps.settings.clarify_delay))
        self._scheduled.add(task)
        task.add_done_callback(self._scheduled.discard)

    async def _clarify_later(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self.log.append_message("bot", CLARIFY_MESSAGE)
