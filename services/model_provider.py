"""Model capability used by the extraction client.

The pipeline depends on ChatModel only: a text completion that takes a model
id, messages and a temperature and returns the response content. Timeouts and
retries are configured here, on the collaborator, never in the pipeline.
"""
import os
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, runtime_checkable

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"


@dataclass
class ChatResponse:
    """Text returned by the model."""
    content: str


@runtime_checkable
class ChatModel(Protocol):
    async def chat(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float
    ) -> ChatResponse:
        ...


def get_default_model() -> str:
    """Model id used when a profile does not name one."""
    return os.getenv("OPENAI_MODEL") or DEFAULT_MODEL


class OpenAIChatModel:
    """ChatModel backed by OpenAI chat completions."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        """Initialize with an injected client or build one from the environment.

        Raises:
            ValueError: If no client is given and OPENAI_API_KEY is not set
        """
        if client is not None:
            self.client = client
        else:
            api_key = os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError("OPENAI_API_KEY environment variable is required")

            timeout = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "30"))
            max_retries = int(os.getenv("OPENAI_MAX_RETRIES", "2"))
            self.client = AsyncOpenAI(
                api_key=api_key,
                timeout=timeout,
                max_retries=max_retries,
            )
            logger.info(
                f"OpenAIChatModel initialized: timeout={timeout}s, "
                f"max_retries={max_retries}"
            )

    async def chat(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float
    ) -> ChatResponse:
        completion = await self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
        )
        content = completion.choices[0].message.content or ""
        return ChatResponse(content=content)
