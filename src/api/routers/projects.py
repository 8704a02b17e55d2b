import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from api.dependencies import get_project_store, get_task_extractor
from api.metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    TASKS_GENERATED_TOTAL,
    PROJECTS_SAVED_TOTAL,
    TASKS_SAVED_TOTAL,
)
from extraction.task_extractor import TaskExtractor
from project_planner.errors import (
    GeneratorUnavailable,
    NotFound,
    PlannerError,
    ValidationFailure,
)
from project_planner.models import ProjectIn, TaskIn
from storage.project_store import ProjectStore

router = APIRouter()
logger = logging.getLogger(__name__)

# Largest id a SERIAL column can hold; anything else cannot exist.
MAX_PROJECT_ID = 2**31 - 1


class GenerateIn(BaseModel):
    projectDescription: Any = None

    def description(self) -> str:
        if self.projectDescription is None:
            return ""
        return str(self.projectDescription)


def _observe(endpoint: str, status: str, start: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)


def _error(endpoint: str, status_code: int, message: str, start: float) -> JSONResponse:
    _observe(endpoint, str(status_code), start)
    return JSONResponse(status_code=status_code, content={"error": message})


def parse_save_request(payload: Any) -> Tuple[ProjectIn, List[TaskIn]]:
    """
    Turn an untrusted /save body into validated inputs.

    A missing or non-list 'tasks' means no tasks; a missing 'project' object or
    malformed fields raise ValidationFailure.
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("project"), Mapping):
        raise ValidationFailure(
            "Request body must contain a 'project' object",
            public_message="Project data is missing or invalid",
        )

    raw_tasks = payload.get("tasks")
    if not isinstance(raw_tasks, list):
        raw_tasks = []

    errors = []
    try:
        project = ProjectIn.model_validate(dict(payload["project"]))
    except ValidationError as e:
        project = None
        errors.extend({"project": True, **err} for err in e.errors(include_url=False))

    tasks: List[TaskIn] = []
    for index, item in enumerate(raw_tasks):
        if not isinstance(item, Mapping):
            errors.append({"task": index, "msg": "task must be an object"})
            continue
        try:
            tasks.append(TaskIn.model_validate(dict(item)))
        except ValidationError as e:
            errors.extend({"task": index, **err} for err in e.errors(include_url=False))

    if errors:
        raise ValidationFailure(
            f"{len(errors)} invalid field(s) in save request",
            errors=errors,
            public_message="Invalid project or task data",
        )

    return project, tasks


@router.post("/generate")
async def generate_tasks(
    payload: Optional[GenerateIn] = None,
    extractor: TaskExtractor = Depends(get_task_extractor),
):
    """Generate a task plan from a free-text project description."""
    start = time.time()
    description = payload.description() if payload is not None else ""
    logger.info(f"Received generate request: {description[:50]}...")

    try:
        plan = await asyncio.to_thread(extractor.extract, description)
    except GeneratorUnavailable as e:
        logger.warning(f"Generate rejected: {e}")
        return _error("/generate", e.status_code, e.public_message, start)
    except PlannerError as e:
        logger.error(f"Generate error: {e}")
        return _error("/generate", 500, "Task generation failed", start)
    except Exception:
        logger.exception("Generate error")
        return _error("/generate", 500, "Task generation failed", start)

    TASKS_GENERATED_TOTAL.inc(len(plan.tasks))
    _observe("/generate", "200", start)
    return plan.model_dump()


@router.post("/save")
async def save_project(
    payload: Any = Body(None),
    store: ProjectStore = Depends(get_project_store),
):
    """Persist a project and its tasks atomically."""
    start = time.time()

    try:
        project, tasks = parse_save_request(payload)
    except ValidationFailure as e:
        logger.warning(f"Save rejected: {e} {e.errors[:5]}")
        return _error("/save", 500, e.public_message, start)

    try:
        project_id = await store.save(project, tasks)
    except PlannerError as e:
        logger.error(f"Save error: {e}")
        return _error("/save", 500, "Saving the project failed", start)
    except Exception:
        logger.exception("Save error")
        return _error("/save", 500, "Saving the project failed", start)

    PROJECTS_SAVED_TOTAL.inc()
    TASKS_SAVED_TOTAL.inc(len(tasks))
    _observe("/save", "200", start)
    return {"success": True, "projectId": project_id}


@router.get("/load/{project_id}")
async def load_project(
    project_id: str,
    store: ProjectStore = Depends(get_project_store),
):
    """Load a project with its tasks ordered by start date."""
    start = time.time()

    try:
        pid = int(project_id)
        if not 0 < pid <= MAX_PROJECT_ID:
            raise NotFound(project_id)
        project, tasks = await store.load(pid)
    except ValueError:
        logger.info(f"Load: invalid project id {project_id!r}")
        return _error("/load", 404, NotFound.public_message, start)
    except NotFound as e:
        logger.info(f"Load: {e}")
        return _error("/load", 404, e.public_message, start)
    except PlannerError as e:
        logger.error(f"Load error: {e}")
        return _error("/load", 500, "Loading the project failed", start)
    except Exception:
        logger.exception("Load error")
        return _error("/load", 500, "Loading the project failed", start)

    _observe("/load", "200", start)
    return {
        "project": project.model_dump(),
        "tasks": [t.model_dump() for t in tasks],
    }
