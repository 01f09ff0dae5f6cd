from .status import (
    TaskStatus,
    FeatureStatus,
    STATUS_ORDER,
    feature_status_to_task_status,
    status_display_name,
    is_completed_status,
)
from .priority import Priority
from .entities import Project, Feature, Task, SearchResults
from .errors import AdapterError, BoardDataError

__all__ = [
    "TaskStatus",
    "FeatureStatus",
    "STATUS_ORDER",
    "feature_status_to_task_status",
    "status_display_name",
    "is_completed_status",
    "Priority",
    "Project",
    "Feature",
    "Task",
    "SearchResults",
    "AdapterError",
    "BoardDataError",
]
