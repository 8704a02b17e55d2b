import pytest
from pydantic import ValidationError

from project_planner.models import ProjectIn, TaskIn

def test_task_malformed_start_date():
    with pytest.raises(ValidationError):
        TaskIn(name="Bad", start="next tuesday")

def test_task_impossible_date():
    with pytest.raises(ValidationError):
        TaskIn(name="Bad", end="2024-02-30")

def test_project_malformed_date():
    with pytest.raises(ValidationError):
        ProjectIn(kunde="Acme", datum="01.01.2024")
