import copy

import pytest

class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str) -> str:
        self.calls.append(user)
        return self._response_text

@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


class FakeTransaction:
    """Snapshot the store on enter, restore it if the block raises."""

    def __init__(self, store):
        self.store = store
        self._snapshot = None

    async def __aenter__(self):
        self._snapshot = self.store.snapshot()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.store.restore(self._snapshot)
            self.store.rollbacks += 1
        else:
            self.store.commits += 1
        return False


class FakeConnection:
    def __init__(self, store):
        self.store = store

    def transaction(self):
        return FakeTransaction(self.store)

    async def fetchval(self, query, *args):
        if "INSERT INTO projects" in query:
            return self.store.insert_project(*args)
        if "SELECT 1" in query:
            return 1
        raise AssertionError(f"unexpected fetchval: {query}")

    async def execute(self, query, *args):
        if "INSERT INTO tasks" in query:
            self.store.insert_task(*args)
            return "INSERT 0 1"
        raise AssertionError(f"unexpected execute: {query}")

    async def fetchrow(self, query, *args):
        return self.store.select_project(*args)

    async def fetch(self, query, *args):
        assert "ORDER BY start, id" in query
        return self.store.select_tasks(*args)


class FakeAcquire:
    def __init__(self, pool):
        self.pool = pool

    async def __aenter__(self):
        self.pool.acquired += 1
        return FakeConnection(self.pool)

    async def __aexit__(self, exc_type, exc, tb):
        self.pool.released += 1
        return False


class FakePool:
    """
    In-memory stand-in for an asyncpg pool over the projects/tasks tables.

    fail_on_task_insert=n makes the n-th task insert (1-based, counted across
    the pool's lifetime) raise, to exercise rollback.
    """

    def __init__(self, fail_on_task_insert=None, fail_reads=False):
        self.projects = {}
        self.tasks = []
        self.next_project_id = 1
        self.next_task_id = 1
        self.task_inserts = 0
        self.fail_on_task_insert = fail_on_task_insert
        self.fail_reads = fail_reads
        self.acquired = 0
        self.released = 0
        self.commits = 0
        self.rollbacks = 0

    def acquire(self):
        return FakeAcquire(self)

    def get_size(self):
        return 1

    def snapshot(self):
        return copy.deepcopy((self.projects, self.tasks, self.next_project_id, self.next_task_id))

    def restore(self, snap):
        # Sequences are not transactional in Postgres either; keep the counters.
        self.projects, self.tasks, _, _ = snap

    def insert_project(self, kunde, titel, datum, off_office, notizen):
        pid = self.next_project_id
        self.next_project_id += 1
        self.projects[pid] = {
            "id": pid,
            "kunde": kunde,
            "titel": titel,
            "datum": datum,
            "off_office": off_office,
            "notizen": notizen,
        }
        return pid

    def insert_task(self, project_id, name, category, start, end_date, responsible, dependencies):
        self.task_inserts += 1
        if self.fail_on_task_insert is not None and self.task_inserts == self.fail_on_task_insert:
            raise RuntimeError("simulated task insert failure")
        if project_id not in self.projects:
            raise RuntimeError("foreign key violation")
        self.tasks.append({
            "id": self.next_task_id,
            "project_id": project_id,
            "name": name,
            "category": category,
            "start": start,
            "end_date": end_date,
            "responsible": responsible,
            "dependencies": dependencies,
        })
        self.next_task_id += 1

    def select_project(self, project_id):
        if self.fail_reads:
            raise RuntimeError("connection lost")
        row = self.projects.get(project_id)
        return dict(row) if row else None

    def select_tasks(self, project_id):
        if self.fail_reads:
            raise RuntimeError("connection lost")
        rows = [dict(t) for t in self.tasks if t["project_id"] == project_id]
        return sorted(rows, key=lambda r: (r["start"], r["id"]))

    # Pool-level shortcuts, as on asyncpg.Pool
    async def fetchval(self, query, *args):
        if self.fail_reads:
            raise RuntimeError("connection lost")
        return await FakeConnection(self).fetchval(query, *args)

    async def fetchrow(self, query, *args):
        return await FakeConnection(self).fetchrow(query, *args)

    async def fetch(self, query, *args):
        return await FakeConnection(self).fetch(query, *args)


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def fake_pool_factory():
    def _make(**kwargs):
        return FakePool(**kwargs)
    return _make
