"""Thin wrapper around the OpenAI chat API shared by the battle services."""
import logging
from typing import Optional

import openai
from openai import OpenAI

logger = logging.getLogger(__name__)

LIVE = 'live'
DEGRADED = 'degraded'
GENERATION_MODES = (LIVE, DEGRADED)


class GenerationError(Exception):
    """A generative call failed or produced nothing usable."""

    def __init__(self, reason: str, detail: str = ''):
        super().__init__(f"{reason}: {detail}" if detail else reason)
        self.reason = reason


def classify_error(exc: Exception) -> str:
    """Bucket an OpenAI SDK error for logging. All buckets degrade the same way."""
    if isinstance(exc, GenerationError):
        return exc.reason
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return 'auth'
    if isinstance(exc, openai.RateLimitError):
        return 'rate_limit'
    if isinstance(exc, openai.APIError):
        return 'transient'
    return 'unexpected'


def build_client(mode: str, api_key: str, timeout: float = 30.0) -> Optional[OpenAI]:
    """Return an OpenAI client for live mode, or None when running degraded."""
    if mode not in GENERATION_MODES:
        raise ValueError(f"Unknown GENERATION_MODE: {mode!r}")
    if mode == DEGRADED:
        return None
    if not api_key:
        logger.warning("[generation] mode=live but OPENAI_API_KEY is empty; using degraded content")
        return None
    return OpenAI(api_key=api_key, timeout=timeout, max_retries=0)


def chat_text(client, model: str, messages, temperature: float, max_tokens: int, **kwargs) -> str:
    """Run one chat completion and return its stripped text.

    Raises GenerationError for SDK failures and for blank content.
    """
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
    except Exception as exc:
        raise GenerationError(classify_error(exc), str(exc)) from exc
    try:
        content = resp.choices[0].message.content or ''
    except (AttributeError, IndexError) as exc:
        raise GenerationError('empty', 'response had no choices') from exc
    content = content.strip()
    if not content:
        raise GenerationError('empty', 'response content was blank')
    return content
