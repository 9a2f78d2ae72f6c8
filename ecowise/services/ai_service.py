import re
import logging
import httpx
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Dict, Any, Callable

from ecowise.errors import UpstreamCallError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class TransientFailure(str, Enum):
    MODEL_NOT_FOUND = "model_not_found"
    QUOTA_EXHAUSTED = "quota_exhausted"
    TIMEOUT = "timeout"


MODEL_NOT_FOUND_PATTERN = re.compile(r"not found|supported for generateContent", re.IGNORECASE)
QUOTA_PATTERN = re.compile(r"quota exceeded", re.IGNORECASE)
TIMEOUT_PATTERN = re.compile(r"timeout", re.IGNORECASE)

# Checked in order; only these failures may be answered with the fallback plan.
TRANSIENT_FAILURE_RULES: list[tuple[TransientFailure, Callable[[UpstreamCallError], bool]]] = [
    (TransientFailure.MODEL_NOT_FOUND, lambda err: bool(MODEL_NOT_FOUND_PATTERN.search(err.message))),
    (
        TransientFailure.QUOTA_EXHAUSTED,
        lambda err: err.api_status == "RESOURCE_EXHAUSTED" or bool(QUOTA_PATTERN.search(err.message)),
    ),
    (TransientFailure.TIMEOUT, lambda err: err.timed_out or bool(TIMEOUT_PATTERN.search(err.message))),
]


def classify_failure(err: UpstreamCallError) -> Optional[TransientFailure]:
    """Return the transient failure kind, or None if the error must be surfaced."""
    for kind, matches in TRANSIENT_FAILURE_RULES:
        if matches(err):
            return kind
    return None


def _error_details(response: httpx.Response) -> tuple[str, str]:
    """Pull (message, status) out of a Google API error body."""
    try:
        error = response.json().get("error") or {}
    except ValueError:
        return response.text[:500], ""
    if not isinstance(error, dict):
        return str(error), ""
    return str(error.get("message") or ""), str(error.get("status") or "")


class AIBackend(ABC):
    @abstractmethod
    async def complete(self, prompt: str, json_output: bool = False) -> str:
        pass

    @abstractmethod
    async def list_models(self) -> list[dict]:
        pass


class GeminiBackend(AIBackend):
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 45.0,
        models_timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.models_timeout = models_timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def _send(self, method: str, url: str, timeout: float, **kwargs) -> Dict[str, Any]:
        try:
            async with self._client(timeout) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise UpstreamCallError(f"Request timeout: {e}", timed_out=True) from e
        except httpx.HTTPStatusError as e:
            message, status = _error_details(e.response)
            raise UpstreamCallError(
                message or str(e),
                api_status=status,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamCallError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamCallError(f"Unreadable response body: {e}") from e

    async def complete(self, prompt: str, json_output: bool = False) -> str:
        request_json: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if json_output:
            request_json["generationConfig"] = {"response_mime_type": "application/json"}

        data = await self._send(
            "POST",
            f"{self.base_url}/models/{self.model}:generateContent",
            self.timeout,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=request_json,
        )
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or ""
        except (KeyError, IndexError, TypeError):
            return ""

    async def list_models(self) -> list[dict]:
        data = await self._send(
            "GET",
            f"{self.base_url}/models",
            self.models_timeout,
            params={"key": self.api_key},
        )
        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return [
            {
                "name": m.get("name"),
                "displayName": m.get("displayName"),
                "supportedGenerationMethods": m.get("supportedGenerationMethods"),
            }
            for m in models
            if isinstance(m, dict)
        ]


class AIService:
    _backend: Optional[AIBackend] = None
    _model: Optional[str] = None

    @classmethod
    def configure(
        cls,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 45.0,
        models_timeout: float = 15.0,
    ):
        if api_key:
            cls._model = model or DEFAULT_MODEL
            cls._backend = GeminiBackend(
                api_key,
                cls._model,
                base_url=base_url or DEFAULT_BASE_URL,
                timeout=timeout,
                models_timeout=models_timeout,
            )
        else:
            cls._backend = None
            cls._model = None

    @classmethod
    def is_configured(cls) -> bool:
        return cls._backend is not None

    @classmethod
    def get_model(cls) -> Optional[str]:
        return cls._model

    @classmethod
    async def complete(cls, prompt: str, json_output: bool = False) -> str:
        """Run one completion against the configured backend.

        Raises:
            RuntimeError: If no backend is configured.
            UpstreamCallError: If the remote call fails.
        """
        if not cls._backend:
            raise RuntimeError("AI service is not configured. Set GEMINI_API_KEY first.")
        logger.info(f"Requesting completion from {cls._model or 'backend'} ({len(prompt)} chars)")
        return await cls._backend.complete(prompt, json_output=json_output)

    @classmethod
    async def list_models(cls) -> list[dict]:
        if not cls._backend:
            raise RuntimeError("AI service is not configured. Set GEMINI_API_KEY first.")
        return await cls._backend.list_models()


def configure_ai_from_settings(settings) -> bool:
    AIService.configure(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.generation_timeout_seconds,
        models_timeout=settings.models_timeout_seconds,
    )
    return AIService.is_configured()
