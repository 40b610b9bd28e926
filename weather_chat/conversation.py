# ABOUTME: Append-only conversation log owned by a chat controller.
# ABOUTME: Supports transient typing indicators and notifies subscribers of every change.

from collections.abc import Callable, Iterator
from typing import Literal
from uuid import uuid4

from weather_chat.models import Author, Message
from weather_chat.rendering import typing_indicator

LogEvent = Literal["append", "remove"]
Listener = Callable[[LogEvent, Message], None]


class ConversationLog:
    """Ordered message log.

    Messages are only ever appended. The single exception is a pending
    indicator created by `show_pending`, which `clear_pending` removes again.
    Subscribers receive ("append", message) and ("remove", message) events so
    the presentation layer can render the new entry and scroll to it.
    """

    def __init__(self):
        self._messages: list[Message] = []
        self._pending: dict[str, str] = {}
        self._listeners: list[Listener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append_message(self, author: Author, content: str, is_markup: bool = False) -> Message:
        message = Message(author=author, content=content, is_markup=is_markup)
        self._messages.append(message)
        self._notify("append", message)
        return message

    def show_pending(self) -> str:
        """Append a typing indicator and return its handle."""
        handle = f"typing-{uuid4().hex}"
        message = self.append_message("bot", typing_indicator(handle), is_markup=True)
        self._pending[handle] = message.id
        return handle

    def clear_pending(self, handle: str) -> None:
        """Remove the message holding the given indicator; no-op if already gone."""
        message_id = self._pending.pop(handle, None)
        if message_id is None:
            return
        for i, message in enumerate(self._messages):
            if message.id == message_id:
                del self._messages[i]
                self._notify("remove", message)
                return

    def _notify(self, event: LogEvent, message: Message) -> None:
        for listener in list(self._listeners):
            listener(event, message)
