from project_planner.models import Project, ProjectIn, Task, TaskIn, TaskPlan

def test_task_defaults():
    t = TaskIn()
    assert t.name == ""
    assert t.dependencies == ""
    assert t.start == ""

def test_task_none_fields_become_empty():
    t = TaskIn(name=None, category=None, responsible=None, dependencies=None)
    assert (t.name, t.category, t.responsible, t.dependencies) == ("", "", "", "")

def test_task_scalars_coerced_to_text():
    t = TaskIn(name=42, responsible=3.5)
    assert t.name == "42"
    assert t.responsible == "3.5"

def test_task_dates_are_stripped():
    t = TaskIn(start=" 2024-01-02 ", end="2024-01-10")
    assert t.start == "2024-01-02"

def test_project_defaults():
    p = ProjectIn(kunde="Acme", titel="Launch", datum="2024-01-01")
    assert p.off_office == "Off Office"
    assert p.notizen == ""

def test_project_null_office_label_uses_default():
    p = ProjectIn(off_office=None, notizen=None)
    assert p.off_office == "Off Office"
    assert p.notizen == ""

def test_plan_defaults():
    plan = TaskPlan()
    assert plan.tasks == []
    assert plan.categories == []

def test_records_from_rows():
    project = Project.from_record({
        "id": 7, "kunde": "Acme", "titel": "Launch", "datum": "2024-01-01",
        "off_office": "Off Office", "notizen": None,
    })
    assert project.id == 7
    assert project.notizen == ""

    task = Task.from_record({
        "id": 1, "project_id": 7, "name": "Design", "category": "Plan",
        "start": "2024-01-02", "end_date": "2024-01-10", "responsible": "Ana",
        "dependencies": "",
    })
    assert task.end_date == "2024-01-10"

def test_dates_are_zero_padded():
    t = TaskIn(start="2024-1-2", end="2024-12-3")
    assert (t.start, t.end) == ("2024-01-02", "2024-12-03")
    assert ProjectIn(datum="2024-3-7").datum == "2024-03-07"
