from __future__ import annotations
import json
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        """
        Returns a canned task plan, wrapped in chatter the way real models often answer.
        """
        if "tasks" not in user:
            return "{}"

        plan = {
            "tasks": [
                {
                    "name": "Kickoff meeting",
                    "category": "Planning",
                    "start": "2026-01-05",
                    "end": "2026-01-05",
                    "responsible": "Project lead",
                },
                {
                    "name": "Design concept",
                    "category": "Design",
                    "start": "2026-01-06",
                    "end": "2026-01-16",
                    "responsible": "Design team",
                },
                {
                    "name": "Implementation",
                    "category": "Development",
                    "start": "2026-01-19",
                    "end": "2026-02-13",
                    "responsible": "Dev team",
                },
                {
                    "name": "Launch",
                    "category": "Release",
                    "start": "2026-02-16",
                    "end": "2026-02-16",
                    "responsible": "Project lead",
                },
            ],
            "categories": ["Planning", "Design", "Development", "Release"],
        }
        return "Here is the project plan:\n```json\n" + json.dumps(plan, indent=2) + "\n```"
