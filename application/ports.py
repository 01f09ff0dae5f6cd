from typing import Protocol, List, Optional

from core import Feature, FeatureStatus, Project, SearchResults, Task


class DataAdapter(Protocol):
    def list_projects(self) -> List[Project]:
        ...

    def get_project(self, project_id: str) -> Optional[Project]:
        ...

    def list_features(self, project_id: str) -> List[Feature]:
        ...

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        ...

    def list_tasks(self, project_id: str) -> List[Task]:
        ...

    def get_task(self, task_id: str) -> Optional[Task]:
        ...

    def search(self, query: str) -> SearchResults:
        ...

    def set_feature_status(self, feature_id: str, status: FeatureStatus) -> Feature:
        ...
