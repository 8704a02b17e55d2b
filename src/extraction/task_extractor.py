import logging
from typing import Optional

from extraction.plan_validator import validate_plan
from extraction.response_parser import extract_payload
from llm.llm_client import LLMClient
from project_planner.errors import GeneratorUnavailable, Unparseable
from project_planner.models import TaskPlan

logger = logging.getLogger(__name__)

PLANNING_PROMPT = """
You are a project planning assistant. From the description below, create a list of tasks with ISO start and end dates (YYYY-MM-DD), freely chosen categories and responsible people.
Return *only* JSON in this format:
{{
  "tasks": [
    {{
      "name": "Task name",
      "category": "Category",
      "start": "YYYY-MM-DD",
      "end": "YYYY-MM-DD",
      "responsible": "Name"
    }}
  ],
  "categories": ["Category1", "Category2"]
}}
Description: \"\"\"{description}\"\"\"
""".strip()


def build_prompt(description: Optional[str]) -> str:
    return PLANNING_PROMPT.format(description=description or "")


class TaskExtractor:

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm_client = llm_client

    def extract(self, description: Optional[str]) -> TaskPlan:
        """Generate a task plan for a project description.

        Raises GeneratorUnavailable before any outbound call when no generator
        is configured; GeneratorError, Unparseable or ValidationFailure otherwise.
        """
        if self.llm_client is None or not self.llm_client.configured:
            raise GeneratorUnavailable("Task generation requested but no LLM provider is configured")

        raw = self.llm_client.complete(build_prompt(description))

        try:
            payload = extract_payload(raw)
        except Unparseable:
            logger.warning(f"Generator output not parseable: {raw[:200]!r}")
            raise

        plan = validate_plan(payload)
        logger.info(
            f"Extracted {len(plan.tasks)} task(s) in {len(plan.categories)} categories"
        )
        return plan
