import logging
from typing import Optional

import httpx

from llm.providers.base import LLMProvider
from project_planner.errors import GeneratorError, GeneratorUnavailable

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper around a provider: text in, text out.

    A client without a provider is "not configured"; callers must check
    `configured` (or catch GeneratorUnavailable) before relying on it.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, system: str = ""):
        self.provider = provider
        self.system = system

    @property
    def configured(self) -> bool:
        return self.provider is not None

    def complete(self, prompt: str) -> str:
        if self.provider is None:
            raise GeneratorUnavailable("No LLM provider configured")

        try:
            text = self.provider.generate(system=self.system, user=prompt)
        except httpx.HTTPError as e:
            raise GeneratorError(f"LLM request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeneratorError(f"Unexpected LLM response: {e}") from e

        if not isinstance(text, str):
            raise GeneratorError(f"LLM returned {type(text).__name__}, expected text")

        logger.debug(f"LLM returned {len(text)} characters")
        return text
