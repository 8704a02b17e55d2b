"""
Error taxonomy for Project Planner.

Components raise these; the HTTP layer maps them to a status code and a short
message. The exception text itself (detail) is only logged.
"""

from typing import Any, List, Optional


class PlannerError(Exception):
    status_code = 500
    public_message = "Internal error"


class ExtractionFailure(PlannerError):
    public_message = "Task generation failed"


class Unparseable(ExtractionFailure):
    """No JSON object could be recovered from the generator output."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        preview = (raw_text or "")[:200]
        super().__init__(f"Could not extract JSON from generator output: {preview!r}")


class GeneratorUnavailable(ExtractionFailure):
    status_code = 400
    public_message = "Task generator is not configured (set OPENAI_API_KEY or LLM_PROVIDER in the environment or .env)"


class GeneratorError(PlannerError):
    public_message = "Task generation failed"


class ValidationFailure(PlannerError):
    public_message = "Invalid task data"

    def __init__(
        self,
        message: str,
        errors: Optional[List[Any]] = None,
        public_message: Optional[str] = None,
    ):
        self.errors = errors or []
        if public_message:
            self.public_message = public_message
        super().__init__(message)


class PersistenceFailure(PlannerError):
    public_message = "Saving the project failed"


class NotFound(PlannerError):
    status_code = 404
    public_message = "Project not found"

    def __init__(self, project_id: Any):
        self.project_id = project_id
        super().__init__(f"Project {project_id!r} does not exist")


class LoadFailure(PlannerError):
    public_message = "Loading the project failed"
