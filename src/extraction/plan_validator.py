import logging
from collections.abc import Mapping
from typing import Any, List

from pydantic import ValidationError

from project_planner.errors import ValidationFailure
from project_planner.models import TaskIn, TaskPlan

logger = logging.getLogger(__name__)


def _list_field(candidate: Mapping, field: str) -> list:
    value = candidate.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationFailure(
            f"'{field}' must be a list, got {type(value).__name__}",
            errors=[{"field": field, "type": type(value).__name__}],
        )
    return value


def validate_plan(candidate: Any) -> TaskPlan:
    """
    Coerce an extracted candidate into a TaskPlan.

    Lenient by design: missing lists become empty, missing task fields become "",
    and entries that are not objects are dropped. Only a wrong top-level shape or
    a malformed date fails the whole plan.
    """
    if not isinstance(candidate, Mapping):
        raise ValidationFailure(
            f"Task plan must be an object, got {type(candidate).__name__}"
        )

    raw_tasks = _list_field(candidate, "tasks")
    raw_categories = _list_field(candidate, "categories")

    tasks: List[TaskIn] = []
    errors = []
    for index, item in enumerate(raw_tasks):
        if not isinstance(item, Mapping):
            logger.warning(f"Skipping task #{index}: expected object, got {type(item).__name__}")
            continue
        try:
            tasks.append(TaskIn.model_validate(dict(item)))
        except ValidationError as e:
            errors.extend({"task": index, **err} for err in e.errors(include_url=False))

    if errors:
        raise ValidationFailure(f"{len(errors)} invalid task field(s)", errors=errors)

    categories = [str(c) for c in raw_categories if c is not None]

    return TaskPlan(tasks=tasks, categories=categories)
