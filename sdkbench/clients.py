from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from google import genai
from google.genai import types
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from .errors import MissingImageError
from .prompt import Prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class ModelClient(ABC):
    """Narrow seam between the benchmark and a vendor SDK."""

    label: str

    @abstractmethod
    async def invoke(self, prompt: Prompt) -> Any:
        """Send ``prompt`` to the model and return the SDK's response."""

    async def aclose(self) -> None:
        """Release any SDK resources held by the client."""


class DirectModelClient(ModelClient):
    """Calls Gemini through the ``google-genai`` SDK."""

    label = "genai"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        thinking_budget: int = 0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.thinking_budget = thinking_budget
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_request(self, prompt: Prompt) -> tuple[list[types.Content], types.GenerateContentConfig]:
        parts = [types.Part.from_text(text=prompt.user_input)]
        if prompt.image is not None:
            parts.append(
                types.Part.from_bytes(data=prompt.image, mime_type=prompt.image_mime_type)
            )
        config = types.GenerateContentConfig(
            temperature=self.temperature,
            system_instruction=prompt.system_instructions,
            thinking_config=types.ThinkingConfig(
                include_thoughts=False,
                thinking_budget=self.thinking_budget,
            ),
        )
        return [types.Content(role="user", parts=parts)], config

    async def invoke(self, prompt: Prompt) -> Any:
        contents, config = self.build_request(prompt)
        logger.info("Sending request to Google GenAI (%s)", self.model)
        return await self._get_client().aio.models.generate_content(
            model=self.model, contents=contents, config=config
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aio.aclose()
            self._client = None


class FrameworkModelClient(ModelClient):
    """Calls Gemini through LangChain's Google GenAI chat model.

    Unlike :class:`DirectModelClient` this client refuses to run without an
    image; the check happens before the chat model is built so no request is
    ever sent.
    """

    label = "langchain"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        thinking_budget: int = 0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.thinking_budget = thinking_budget
        self._chat: ChatGoogleGenerativeAI | None = None

    def _get_chat(self) -> ChatGoogleGenerativeAI:
        if self._chat is None:
            self._chat = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                temperature=self.temperature,
                thinking_budget=self.thinking_budget,
            )
        return self._chat

    def build_messages(self, prompt: Prompt) -> list:
        data_url = prompt.image_data_url()
        if data_url is None:
            raise MissingImageError("Image is required for the LangChain Google GenAI client")
        return [
            ("system", prompt.system_instructions),
            HumanMessage(
                content=[
                    {"type": "text", "text": prompt.user_input},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ]
            ),
        ]

    async def invoke(self, prompt: Prompt) -> Any:
        messages = self.build_messages(prompt)
        logger.info("Sending request to LangChain Google GenAI (%s)", self.model)
        return await self._get_chat().ainvoke(messages)
