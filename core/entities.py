from dataclasses import dataclass, field
from typing import Optional, Tuple

from .priority import Priority
from .status import FeatureStatus, TaskStatus, is_completed_status


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    summary: str = ""
    status: str = "PLANNING"
    created_at: str = ""


@dataclass(frozen=True)
class Feature:
    """Parent entity: groups tasks inside a project."""
    id: str
    name: str
    summary: str = ""
    status: FeatureStatus = FeatureStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    project_id: Optional[str] = None
    created_at: str = ""
    task_ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_completed(self) -> bool:
        return is_completed_status(self.status.code)


@dataclass(frozen=True)
class Task:
    """Leaf entity."""
    id: str
    title: str
    summary: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    feature_id: Optional[str] = None
    project_id: Optional[str] = None
    created_at: str = ""
    description: str = ""

    @property
    def is_completed(self) -> bool:
        return is_completed_status(self.status.code)


@dataclass(frozen=True)
class SearchResults:
    projects: Tuple[Project, ...] = ()
    features: Tuple[Feature, ...] = ()
    tasks: Tuple[Task, ...] = ()

    @property
    def total(self) -> int:
        return len(self.projects) + len(self.features) + len(self.tasks)
