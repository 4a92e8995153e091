import logging

import httpx
import openai
from openai import OpenAI

from .base import LLMClient
from app.planning.errors import UpstreamError

logger = logging.getLogger(__name__)

class OpenAICompatClient(LLMClient):
    """Any OpenAI-compatible chat endpoint (OpenRouter, OpenAI, Groq)."""

    def __init__(self, * , api_key: str, base_url: str, model: str, timeout: float = 60.0,
    http_client: httpx.Client | None = None):
        # a failed call fails the whole request; no SDK retries
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout,
        max_retries=0, http_client=http_client)
        self.model = model

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2,
    json_mode: bool = False) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **kwargs,
            )
        except openai.APIStatusError as e:
            body = e.response.text
            raise UpstreamError(f"AI error: {e.status_code} {body}",
            status_code=e.status_code, body=body) from e
        except openai.APIConnectionError as e:
            raise UpstreamError(f"AI service unreachable: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        logger.debug("LLM completion from %s: %d chars", self.model, len(content or ""))
        return (content or "{}").strip()
