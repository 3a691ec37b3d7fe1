import os
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import httpx
from openai import (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


# JSON schema for structured outputs: one string array of generated names
NAMES_SCHEMA = {
    "name": "names",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "names": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Generated display names, one per item"
            }
        },
        "required": ["names"],
        "additionalProperties": False
    }
}


class StreamError(RuntimeError):
    """Transport failure while opening or reading a response stream."""


@dataclass(frozen=True)
class StreamEvent:
    """One event of a streamed completion.

    kind is "content", "reasoning" or "end". For "end", text carries the
    full captured content.
    """
    kind: str
    text: str = ""
    finish_reason: Optional[str] = None


class OpenAIClient:
    def __init__(self, model: Optional[str] = None) -> None:
        self.model = model or os.environ.get("OPENAI_MODEL", "gpt-4o")
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not set in environment")
        # OPENAI_BASE_URL allows any OpenAI-compatible provider
        self.client = OpenAI(
            api_key=api_key,
            base_url=os.environ.get("OPENAI_BASE_URL") or None,
            timeout=60.0,
        )

    @retry(
        reraise=True,
        stop=stop_after_attempt(4),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((APIConnectionError, APITimeoutError, RateLimitError, InternalServerError)),
    )
    def _open_stream(
        self,
        prompt: str,
        schema: Dict[str, Any],
        temperature: float,
        max_tokens: int,
    ):
        messages = [{"role": "user", "content": prompt}]
        return self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_completion_tokens=max_tokens,
            response_format={"type": "json_schema", "json_schema": schema},
            stream=True,
        )

    def stream_structured(
        self,
        prompt: str,
        schema: Dict[str, Any],
        temperature: float = 0.5,
        max_tokens: int = 16384,
    ) -> Iterator[StreamEvent]:
        """Stream a structured completion as StreamEvents.

        Ends with an "end" event once the service reports a finish reason.
        Raises StreamError if the stream cannot be opened or breaks mid-way.
        """
        captured = []
        try:
            stream = self._open_stream(prompt, schema, temperature, max_tokens)
        except (OpenAIError, httpx.HTTPError) as e:
            raise StreamError(f"could not open stream: {e}") from e

        try:
            for chunk in stream:
                if not chunk.choices:
                    continue
                choice = chunk.choices[0]
                delta = choice.delta
                # Reasoning models expose thinking under provider-specific names
                reasoning = getattr(delta, "reasoning_content", None) or getattr(delta, "reasoning", None)
                if reasoning:
                    yield StreamEvent("reasoning", str(reasoning))
                if delta is not None and delta.content:
                    captured.append(delta.content)
                    yield StreamEvent("content", delta.content)
                if choice.finish_reason:
                    yield StreamEvent("end", "".join(captured), finish_reason=choice.finish_reason)
                    return
        except (OpenAIError, httpx.HTTPError) as e:
            raise StreamError(str(e)) from e
        finally:
            stream.close()
