# ABOUTME: Dependency container for the chat pipeline using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient and settings used by the weather service.

import httpx
from pydantic import BaseModel, ConfigDict, Field

from weather_chat.config import Settings


class ChatDeps(BaseModel):
    """Dependencies handed to each chat controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings = Field(default_factory=Settings)


def create_http_client() -> httpx.AsyncClient:
    """Create the outbound httpx client.

    No retry transport and no timeout override: a failed lookup surfaces
    straight to the controller.
    """
    return httpx.AsyncClient()
