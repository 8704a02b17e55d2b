from typing import Optional

import asyncpg
from fastapi import HTTPException

from api import state
from extraction.task_extractor import TaskExtractor
from storage.project_store import ProjectStore


def get_task_extractor() -> TaskExtractor:
    # An extractor without a configured client fails fast with GeneratorUnavailable.
    return TaskExtractor(llm_client=state.llm_client)


def get_project_store() -> ProjectStore:
    if state.project_store is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return state.project_store


def get_db_pool() -> Optional[asyncpg.Pool]:
    return state.db_pool
