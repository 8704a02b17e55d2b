from __future__ import annotations
import os
import httpx
from project_planner.errors import GeneratorUnavailable
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    def __init__(self):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()

        if not self.api_key:
            raise GeneratorUnavailable("OPENAI_API_KEY is missing")

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user})
        payload = {
            "model": model or self.model,
            "messages": messages,
            "temperature": 0.2,
        }

        with httpx.Client(timeout=60.0) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        # An empty completion is treated as an empty plan.
        choices = data.get("choices") or [{}]
        message = choices[0].get("message") or {}
        return message.get("content") or "{}"
