# ABOUTME: ASGI web entry point for the weather chat UI.
# ABOUTME: Serves the chat page and streams conversation log changes to the browser as SSE.

import asyncio
import json
import logging
from collections import OrderedDict
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response, StreamingResponse
from starlette.routing import Route

from weather_chat.config import load_settings
from weather_chat.controller import ChatController
from weather_chat.conversation import LogEvent
from weather_chat.deps import ChatDeps, create_http_client
from weather_chat.models import Message
from weather_chat.rendering import render_message

logger = logging.getLogger(__name__)

_SSE_HEADERS = {"cache-control": "no-cache", "x-accel-buffering": "no"}

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Weather Chat</title>
<style>
body { font-family: system-ui, sans-serif; background: #eef2f7; margin: 0; }
.chat { max-width: 480px; margin: 2rem auto; background: #fff; border-radius: 12px;
        display: flex; flex-direction: column; height: 80vh; box-shadow: 0 4px 16px #0002; }
#chat-messages { flex: 1; overflow-y: auto; padding: 1rem; }
.message { display: flex; margin: 0.5rem 0; }
.user-message { justify-content: flex-end; }
.message-content { padding: 0.6rem 0.9rem; border-radius: 12px; max-width: 80%; }
.bot-message .message-content { background: #f1f3f6; }
.user-message .message-content { background: #3b82f6; color: #fff; }
.weather-header { font-weight: 600; display: flex; gap: 0.5rem; }
.weather-temp { font-size: 2rem; font-weight: 700; }
.weather-details { display: flex; gap: 1rem; font-size: 0.9rem; margin-top: 0.3rem; }
.typing-indicator { display: flex; gap: 4px; }
.dot { width: 8px; height: 8px; border-radius: 50%; background: #999; animation: blink 1s infinite; }
.dot:nth-child(2) { animation-delay: 0.2s; }
.dot:nth-child(3) { animation-delay: 0.4s; }
@keyframes blink { 50% { opacity: 0.3; } }
.input-row { display: flex; border-top: 1px solid #ddd; }
#user-input { flex: 1; border: 0; padding: 1rem; font-size: 1rem; }
#send-btn { border: 0; background: #3b82f6; color: #fff; padding: 0 1.2rem; cursor: pointer; }
</style>
</head>
<body>
<div class="chat">
  <div id="chat-messages">
    <div class="message bot-message"><div class="message-content">
      Hi! Ask me about the weather in any city. 🌤️
    </div></div>
  </div>
  <div class="input-row">
    <input id="user-input" type="text" placeholder="e.g. weather in Paris" autocomplete="off">
    <button id="send-btn">Send</button>
  </div>
</div>
<script>
const chatMessages = document.getElementById('chat-messages');
const userInput = document.getElementById('user-input');
const sendBtn = document.getElementById('send-btn');
const conversationId = crypto.randomUUID();
let busy = false;

function applyEvent(event) {
  if (event.type === 'append') {
    chatMessages.insertAdjacentHTML('beforeend', event.html);
    chatMessages.scrollTop = chatMessages.scrollHeight;
  } else if (event.type === 'remove') {
    const el = document.getElementById('msg-' + event.id);
    if (el) el.remove();
  }
}

async function handleInput() {
  const text = userInput.value.trim();
  if (!text || busy) return;
  busy = true;
  userInput.value = '';
  try {
    const res = await fetch('/api/chat', {
      method: 'POST',
      headers: {'content-type': 'application/json'},
      body: JSON.stringify({conversation_id: conversationId, text: text}),
    });
    const reader = res.body.getReader();
    const decoder = new TextDecoder();
    let buffer = '';
    while (true) {
      const {done, value} = await reader.read();
      if (done) break;
      buffer += decoder.decode(value, {stream: true});
      const chunks = buffer.split('\\n\\n');
      buffer = chunks.pop();
      for (const chunk of chunks) {
        const data = chunk.replace(/^data: /, '');
        if (data === '[DONE]') continue;
        applyEvent(JSON.parse(data));
      }
    }
  } finally {
    busy = false;
  }
}

sendBtn.addEventListener('click', handleInput);
userInput.addEventListener('keypress', (e) => {
  if (e.key === 'Enter') handleInput();
});
</script>
</body>
</html>
"""


def parse_chat_request(body: bytes) -> tuple[str, str] | None:
    """Extract (conversation_id, text) from a chat request body, or None if malformed."""
    try:
        data = json.loads(body)
        conversation_id = data["conversation_id"]
        text = data["text"]
    except (json.JSONDecodeError, KeyError, TypeError):
        return None
    if not isinstance(conversation_id, str) or not conversation_id or not isinstance(text, str):
        return None
    return conversation_id, text


def encode_event(event: LogEvent, message: Message) -> str:
    """Serialize a conversation log change as one SSE frame."""
    if event == "append":
        payload = {"type": "append", "id": message.id, "author": message.author, "html": render_message(message)}
    else:
        payload = {"type": "remove", "id": message.id}
    return f"data: {json.dumps(payload)}\n\n"


async def homepage(request: Request) -> Response:
    return HTMLResponse(PAGE)


async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok"})


class ConversationRegistry:
    """Bounded map of conversation id to controller, least recently used evicted first.

    `acquire` marks a conversation in flight until `release`; a conversation
    in flight is never handed out twice and never evicted.
    """

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._controllers: OrderedDict[str, ChatController] = OrderedDict()
        self._in_flight: set[str] = set()

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, conversation_id: str) -> bool:
        return conversation_id in self._controllers

    def __getitem__(self, conversation_id: str) -> ChatController:
        return self._controllers[conversation_id]

    def in_flight(self, conversation_id: str) -> bool:
        return conversation_id in self._in_flight

    def acquire(self, conversation_id: str, deps: ChatDeps) -> ChatController | None:
        """Return the conversation's controller marked in flight, or None if it already is."""
        if conversation_id in self._in_flight:
            return None
        controller = self._controllers.pop(conversation_id, None)
        if controller is None:
            controller = ChatController(deps)
        self._controllers[conversation_id] = controller
        self._in_flight.add(conversation_id)
        self._evict()
        return controller

    def release(self, conversation_id: str) -> None:
        self._in_flight.discard(conversation_id)

    def _evict(self) -> None:
        idle = [cid for cid in self._controllers if cid not in self._in_flight]
        for cid in idle[: max(len(self._controllers) - self.max_size, 0)]:
            del self._controllers[cid]
            logger.debug("Evicted conversation %s", cid)


async def chat(request: Request) -> Response:
    """Run one query for a conversation and stream its log changes as they happen."""
    parsed = parse_chat_request(await request.body())
    if parsed is None:
        return JSONResponse({"error": "expected JSON with conversation_id and text"}, status_code=400)
    conversation_id, text = parsed

    conversations: ConversationRegistry = request.app.state.conversations
    controller = conversations.acquire(conversation_id, request.app.state.deps)
    if controller is None:
        return JSONResponse({"error": "a query is already in progress"}, status_code=409)

    queue: asyncio.Queue[str | None] = asyncio.Queue()
    unsubscribe = controller.log.subscribe(lambda event, message: queue.put_nowait(encode_event(event, message)))

    async def run():
        try:
            await controller.submit(text)
            await controller.drain()
        finally:
            unsubscribe()
            conversations.release(conversation_id)
            queue.put_nowait(None)

    task = asyncio.create_task(run())

    async def stream():
        while (frame := await queue.get()) is not None:
            yield frame
        await task
        yield "data: [DONE]\n\n"

    return StreamingResponse(stream(), media_type="text/event-stream", headers=_SSE_HEADERS)


def _bind_deps(app: Starlette, deps: ChatDeps) -> None:
    app.state.deps = deps
    app.state.conversations = ConversationRegistry(deps.settings.max_conversations)


def create_app(deps: ChatDeps | None = None) -> Starlette:
    """Build the chat ASGI app; without deps, settings and the HTTP client are created at startup."""

    @asynccontextmanager
    async def lifespan(app: Starlette):
        if app.state.deps is not None:
            yield
            return
        _bind_deps(app, ChatDeps(http_client=create_http_client(), settings=load_settings()))
        logging.basicConfig(level=app.state.deps.settings.log_level)
        try:
            yield
        finally:
            await app.state.deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/", homepage),
            Route("/health", health),
            Route("/api/chat", chat, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.deps = None
    if deps is not None:
        _bind_deps(app, deps)
    return app


app = create_app()
