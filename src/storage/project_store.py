"""
Project persistence for Project Planner.

A project and its tasks are written in one transaction on one pooled
connection, so readers never see a project without its tasks (or the reverse).
"""

import logging
from typing import List, Sequence, Tuple

from project_planner.errors import LoadFailure, NotFound, PersistenceFailure
from project_planner.models import Project, ProjectIn, Task, TaskIn

logger = logging.getLogger(__name__)

INSERT_PROJECT = """
    INSERT INTO projects (kunde, titel, datum, off_office, notizen)
    VALUES ($1, $2, $3, $4, $5)
    RETURNING id
"""

INSERT_TASK = """
    INSERT INTO tasks (project_id, name, category, start, end_date, responsible, dependencies)
    VALUES ($1, $2, $3, $4, $5, $6, $7)
"""

SELECT_PROJECT = """
    SELECT id, kunde, titel, datum, off_office, notizen
    FROM projects
    WHERE id = $1
"""

SELECT_TASKS = """
    SELECT id, project_id, name, category, start, end_date, responsible, dependencies
    FROM tasks
    WHERE project_id = $1
    ORDER BY start, id
"""


class ProjectStore:
    """
    Saves and loads projects through an asyncpg pool (or anything with the
    same acquire()/transaction()/fetch* surface).
    """

    def __init__(self, pool):
        self.pool = pool

    async def save(self, project: ProjectIn, tasks: Sequence[TaskIn]) -> int:
        """
        Insert the project, then each task in order, atomically.

        Returns the generated project id. Any failure rolls everything back and
        raises PersistenceFailure; the connection goes back to the pool either way.
        """
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    project_id = await conn.fetchval(
                        INSERT_PROJECT,
                        project.kunde,
                        project.titel,
                        project.datum,
                        project.off_office,
                        project.notizen,
                    )
                    for task in tasks:
                        await conn.execute(
                            INSERT_TASK,
                            project_id,
                            task.name,
                            task.category,
                            task.start,
                            task.end,
                            task.responsible,
                            task.dependencies or "",
                        )
        except Exception as e:
            logger.error(f"Saving project '{project.titel}' failed, transaction rolled back: {e}")
            raise PersistenceFailure(f"Could not save project: {e}") from e

        logger.info(f"Saved project {project_id} with {len(tasks)} task(s)")
        return project_id

    async def load(self, project_id: int) -> Tuple[Project, List[Task]]:
        """
        Fetch a project and its tasks ordered by start date, then id.

        Raises NotFound when no such project exists, LoadFailure on store errors.
        """
        try:
            record = await self.pool.fetchrow(SELECT_PROJECT, project_id)
            if record is None:
                raise NotFound(project_id)
            task_records = await self.pool.fetch(SELECT_TASKS, project_id)
        except NotFound:
            raise
        except Exception as e:
            logger.error(f"Loading project {project_id} failed: {e}")
            raise LoadFailure(f"Could not load project {project_id}: {e}") from e

        return Project.from_record(record), [Task.from_record(r) for r in task_records]
