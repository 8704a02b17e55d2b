from __future__ import annotations

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

DEFAULT_OFF_OFFICE = "Off Office"
DATE_FORMAT = "%Y-%m-%d"


def _coerce_text(v: Any) -> str:
    # Generator output and client bodies are untrusted: missing -> "", scalars -> str.
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    return str(v)


def _check_date(v: str) -> str:
    v = v.strip()
    if not v:
        return v
    try:
        parsed = datetime.strptime(v, DATE_FORMAT)
    except ValueError:
        raise ValueError(f"date must be YYYY-MM-DD, got {v!r}") from None
    # Stored as text and sorted as text, so always zero-padded.
    return parsed.date().isoformat()


class TaskIn(BaseModel):
    name: str = ""
    category: str = ""
    start: str = ""
    end: str = ""
    responsible: str = ""
    dependencies: str = ""

    @field_validator(
        "name", "category", "start", "end", "responsible", "dependencies", mode="before"
    )
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return _coerce_text(v)

    @field_validator("start", "end")
    @classmethod
    def iso_date(cls, v: str) -> str:
        return _check_date(v)


class ProjectIn(BaseModel):
    kunde: str = ""
    titel: str = ""
    datum: str = ""
    off_office: str = DEFAULT_OFF_OFFICE
    notizen: str = ""

    @field_validator("kunde", "titel", "datum", "notizen", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return _coerce_text(v)

    @field_validator("off_office", mode="before")
    @classmethod
    def office_label(cls, v: Any) -> str:
        if v is None:
            return DEFAULT_OFF_OFFICE
        return _coerce_text(v)

    @field_validator("datum")
    @classmethod
    def iso_date(cls, v: str) -> str:
        return _check_date(v)


class TaskPlan(BaseModel):
    """Generated plan: ordered tasks plus the category labels they use."""

    tasks: List[TaskIn] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class Project(BaseModel):
    id: int
    kunde: str = ""
    titel: str = ""
    datum: str = ""
    off_office: str = DEFAULT_OFF_OFFICE
    notizen: str = ""

    @classmethod
    def from_record(cls, record) -> "Project":
        return cls(
            id=record["id"],
            kunde=_coerce_text(record["kunde"]),
            titel=_coerce_text(record["titel"]),
            datum=_coerce_text(record["datum"]),
            off_office=_coerce_text(record["off_office"]),
            notizen=_coerce_text(record["notizen"]),
        )


class Task(BaseModel):
    id: int
    project_id: int
    name: str = ""
    category: str = ""
    start: str = ""
    end_date: str = ""
    responsible: str = ""
    dependencies: str = ""

    @classmethod
    def from_record(cls, record) -> "Task":
        return cls(
            id=record["id"],
            project_id=record["project_id"],
            name=_coerce_text(record["name"]),
            category=_coerce_text(record["category"]),
            start=_coerce_text(record["start"]),
            end_date=_coerce_text(record["end_date"]),
            responsible=_coerce_text(record["responsible"]),
            dependencies=_coerce_text(record["dependencies"]),
        )
