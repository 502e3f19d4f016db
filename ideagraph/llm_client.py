"""
Client for the generative model behind an OpenAI-compatible chat completions API.
"""

import time
from typing import Any, Dict, List, Optional, Protocol, Tuple

import openai
from openai import AsyncOpenAI, OpenAI
from loguru import logger

from ideagraph.config import LLMConfig, get_config
from ideagraph.errors import ConfigurationError, UpstreamError
from ideagraph.models import TokenUsage


class GenerativeClient(Protocol):
    """Anything that turns a prompt into raw model text, or raises."""

    def send_prompt(self, prompt: str) -> str:
        ...

    async def send_prompt_async(self, prompt: str) -> str:
        ...


def _upstream_error(exc: Exception) -> UpstreamError:
    """Translate an SDK exception into an UpstreamError carrying status and body."""
    if isinstance(exc, openai.APIStatusError):
        return UpstreamError(
            exc.status_code,
            body=exc.response.text,
            reason=exc.response.reason_phrase or "",
        )
    return UpstreamError(None, body=str(exc))


def _extract_text(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    return choices[0].message.content or ""


def _extract_usage(response: Any) -> TokenUsage:
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    return TokenUsage(
        prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
        total_tokens=getattr(usage, "total_tokens", 0) or 0,
    )


class LLMClient:
    """Client for the model endpoint. Makes exactly one request per prompt."""

    def __init__(self, config: LLMConfig):
        """
        Initialize the client.

        Args:
            config: Endpoint settings; the API key is taken from here only

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ConfigurationError(
                "Model API key is not set (GEMINI_API_KEY or OPENAI_API_KEY)"
            )
        self.config = config
        client_kwargs = {
            "api_key": config.api_key,
            "base_url": config.api_base,
            "timeout": config.timeout,
            # Retry policy belongs to the caller
            "max_retries": 0,
        }
        self.client = OpenAI(**client_kwargs)
        self.async_client = AsyncOpenAI(**client_kwargs)

        logger.info(f"Initialized LLM client with model: {self.config.model} ({self.config.provider})")

    def _build_call_params(self, prompt: str, system_prompt: Optional[str], **kwargs) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return {
            'model': kwargs.get('model', self.config.model),
            'messages': messages,
            'temperature': kwargs.get('temperature', self.config.temperature),
            'max_tokens': kwargs.get('max_tokens', self.config.max_tokens),
        }

    def _finish(self, response: Any, start_time: float) -> Tuple[str, TokenUsage]:
        response_text = _extract_text(response)
        token_usage = _extract_usage(response)
        elapsed_time = time.time() - start_time
        logger.info(
            f"Model call completed in {elapsed_time:.2f}s, "
            f"{len(response_text)} chars, {token_usage.total_tokens} tokens"
        )
        return response_text, token_usage

    def complete_sync(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> Tuple[str, TokenUsage]:
        """
        Generate a completion synchronously.

        Returns:
            Tuple of (response_text, token_usage); the text may be empty

        Raises:
            UpstreamError: On a non-success status or transport failure
        """
        call_params = self._build_call_params(prompt, system_prompt, **kwargs)
        start_time = time.time()
        try:
            response = self.client.chat.completions.create(**call_params)
        except openai.APIError as e:
            error = _upstream_error(e)
            logger.error(f"Model call failed: {error}")
            raise error from e
        return self._finish(response, start_time)

    async def complete_async(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> Tuple[str, TokenUsage]:
        """
        Generate a completion asynchronously.

        Returns:
            Tuple of (response_text, token_usage); the text may be empty

        Raises:
            UpstreamError: On a non-success status or transport failure
        """
        call_params = self._build_call_params(prompt, system_prompt, **kwargs)
        start_time = time.time()
        try:
            response = await self.async_client.chat.completions.create(**call_params)
        except openai.APIError as e:
            error = _upstream_error(e)
            logger.error(f"Model call failed: {error}")
            raise error from e
        return self._finish(response, start_time)

    def send_prompt(self, prompt: str) -> str:
        response_text, _ = self.complete_sync(prompt)
        return response_text

    async def send_prompt_async(self, prompt: str) -> str:
        response_text, _ = await self.complete_async(prompt)
        return response_text


# Global client instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the global LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient(get_config().llm)
    return _llm_client


def reset_llm_client():
    """Reset the global LLM client instance."""
    global _llm_client
    _llm_client = None
