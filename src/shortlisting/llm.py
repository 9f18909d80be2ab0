"""HTTP client for the external reasoning (chat completion) service."""

from __future__ import annotations

import asyncio
import json
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

import httpx
import structlog

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-reasoning"

SYSTEM_PROMPT = (
    "You are an expert technical recruiter with deep understanding of candidate "
    "evaluation and project requirements matching."
)


class ReasoningClientError(RuntimeError):
    """Base error for reasoning service failures."""


class ConfigurationAbsent(ReasoningClientError):
    """Raised when the client is used without an API key."""


class TransientAPIError(ReasoningClientError):
    """Raised when every attempt against the reasoning service failed."""

    def __init__(self, message: str, *, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class MalformedResponseError(ReasoningClientError):
    """Raised when the service answered but the content is not a JSON object."""


@dataclass
class ReasoningConfig:
    """Connection and request parameters for the reasoning service."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_s: float = 30.0
    max_attempts: int = 3
    backoff_base_s: float = 1.0
    temperature: float = 0.3
    max_tokens: int = 2000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ReasoningConfig":
        env = os.environ if environ is None else environ
        timeout_raw = (env.get("SHORTLIST_TIMEOUT_S") or "").strip()
        return cls(
            api_key=(env.get("SHORTLIST_API_KEY") or "").strip() or None,
            base_url=(env.get("SHORTLIST_BASE_URL") or "").strip() or DEFAULT_BASE_URL,
            model=(env.get("SHORTLIST_MODEL") or "").strip() or DEFAULT_MODEL,
            timeout_s=float(timeout_raw) if timeout_raw else 30.0,
        )


class ReasoningClient:
    """Send evaluation prompts and return the decoded JSON answer."""

    def __init__(
        self,
        config: ReasoningConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._config = config or ReasoningConfig()
        self._transport = transport
        self._sleep = sleep or asyncio.sleep
        self._logger = structlog.get_logger(__name__)

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    @property
    def model(self) -> str:
        return self._config.model

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "response_format": {"type": "json_object"},
        }

    async def complete_json(self, prompt: str) -> dict[str, Any]:
        if not self.is_configured:
            raise ConfigurationAbsent("reasoning API key is not configured")

        body = self.build_request_body(prompt)
        max_attempts = max(1, self._config.max_attempts)
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            try:
                content = await asyncio.wait_for(
                    self._request_content(body),
                    timeout=self._config.timeout_s,
                )
            except (httpx.HTTPError, asyncio.TimeoutError, ValueError) as exc:
                last_error = exc
                self._logger.warning(
                    "llm.attempt_failed",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                if attempt < max_attempts:
                    await self._sleep(self._config.backoff_base_s * attempt)
                continue

            return self._decode_content(content)

        raise TransientAPIError(
            f"reasoning request failed after {max_attempts} attempts",
            attempts=max_attempts,
        ) from last_error

    async def _request_content(self, body: dict[str, Any]) -> str:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(
            base_url=self._config.base_url,
            transport=self._transport,
            timeout=self._config.timeout_s,
        ) as client:
            response = await client.post("/chat/completions", json=body, headers=headers)
            response.raise_for_status()
            payload = response.json()
        return _extract_content(payload)

    @staticmethod
    def _decode_content(content: str) -> dict[str, Any]:
        try:
            decoded = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"response content is not valid JSON: {exc}") from exc
        if not isinstance(decoded, dict):
            raise MalformedResponseError(
                f"response content must be a JSON object, got {type(decoded).__name__}"
            )
        return decoded


def _extract_content(payload: Any) -> str:
    """Return ``choices[0].message.content`` or raise ValueError on a bad shape."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError("response is missing choices[0].message.content") from exc
    if not isinstance(content, str):
        raise ValueError("response content is not a string")
    return content
