from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "project_planner_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "project_planner_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_GENERATED_TOTAL = get_or_create_metric(
    "project_planner_tasks_generated_total", "Total tasks generated from descriptions", Counter
)

PROJECTS_SAVED_TOTAL = get_or_create_metric(
    "project_planner_projects_saved_total", "Total projects saved", Counter
)

TASKS_SAVED_TOTAL = get_or_create_metric(
    "project_planner_tasks_saved_total", "Total tasks saved", Counter
)

DB_POOL_SIZE = get_or_create_metric(
    "project_planner_db_pool_size", "Open connections in the database pool", Gauge
)
