"""HTTP client for the remote language model behind insights and chat."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests
from requests import HTTPError, RequestException
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

# One chat turn: {"role": "user" | "model", "text": "..."}
ChatTurn = dict[str, str]


class AssistantError(Exception):
    """The remote assistant could not produce a usable reply."""


def _is_retryable(exc: BaseException) -> bool:
    # 4xx replies fail the same way on every attempt
    if isinstance(exc, HTTPError) and exc.response is not None:
        return not 400 <= exc.response.status_code < 500
    return isinstance(exc, RequestException)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_retryable),
    )


class AssistantClient(ABC):
    """Text generation backend."""

    @abstractmethod
    def generate(
        self,
        system_instruction: str,
        message: str,
        history: Optional[list[ChatTurn]] = None,
    ) -> str:
        """Return the model's reply to ``message``.

        Raises:
            AssistantError: If no usable reply was produced
            requests.RequestException: On network failure or timeout
        """
        pass


class GeminiClient(AssistantClient):
    """Client for the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
    ):
        self.api_key = api_key or os.getenv("VEIRA_API_KEY") or os.getenv("GEMINI_API_KEY")
        self.model = model or os.getenv("VEIRA_ASSISTANT_MODEL", DEFAULT_MODEL)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_payload(
        self,
        system_instruction: str,
        message: str,
        history: Optional[list[ChatTurn]] = None,
    ) -> dict[str, Any]:
        contents = [
            {"role": turn["role"], "parts": [{"text": turn["text"]}]}
            for turn in history or []
        ]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": contents,
        }

    @staticmethod
    def extract_text(body: Any) -> str:
        """Pull the reply text out of a response body.

        Raises:
            AssistantError: If the body has no text candidate
        """
        try:
            parts = body["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AssistantError(f"Malformed assistant response: {e}") from e
        if not text.strip():
            raise AssistantError("Assistant returned an empty reply")
        return text.strip()

    @http_retry()
    def _post(self, payload: dict[str, Any]) -> Any:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        logger.info("Assistant POST %s", url)
        resp = requests.post(
            url,
            json=payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def generate(
        self,
        system_instruction: str,
        message: str,
        history: Optional[list[ChatTurn]] = None,
    ) -> str:
        if not self.api_key:
            raise AssistantError("No API key configured (set VEIRA_API_KEY)")
        payload = self.build_payload(system_instruction, message, history)
        try:
            body = self._post(payload)
        except ValueError as e:
            raise AssistantError(f"Assistant response is not JSON: {e}") from e
        return self.extract_text(body)
