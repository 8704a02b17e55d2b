import logging
import os
from typing import Optional

from project_planner.errors import GeneratorUnavailable
from .base import LLMProvider

logger = logging.getLogger(__name__)

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").strip().lower()


def build_provider(name: Optional[str] = None) -> Optional[LLMProvider]:
    """
    Build the configured provider, or None when it cannot be configured
    (e.g. no OPENAI_API_KEY). Callers treat None as "generator unavailable".
    """
    name = (name or LLM_PROVIDER).strip().lower()

    if name == "mock":
        from .mock_provider import MockProvider
        return MockProvider()
    if name == "ollama":
        from .ollama_provider import OllamaProvider
        return OllamaProvider()
    if name == "openai":
        from .openai_provider import OpenAIProvider
        try:
            return OpenAIProvider()
        except GeneratorUnavailable as e:
            logger.warning(f"OpenAI provider disabled: {e}")
            return None

    logger.warning(f"Unknown LLM_PROVIDER '{name}', generator disabled")
    return None
