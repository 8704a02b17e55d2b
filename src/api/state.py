from typing import Optional

import asyncpg
from codecarbon import EmissionsTracker

from llm.llm_client import LLMClient
from storage.project_store import ProjectStore

# Process-wide resources, built once in the startup hook and never replaced
# while serving. Handlers get them through api.dependencies.
db_pool: Optional[asyncpg.Pool] = None
llm_client: Optional[LLMClient] = None
project_store: Optional[ProjectStore] = None
tracker: Optional[EmissionsTracker] = None
