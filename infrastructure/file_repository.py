import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core import AdapterError, BoardDataError, Feature, FeatureStatus, Priority, Project, SearchResults, Task, TaskStatus
from application.ports import DataAdapter

logger = logging.getLogger("task_board.repository")


def _text(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_id(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value in (None, ""):
        return None
    return str(value)


def _require_id(raw: Any, kind: str) -> str:
    if not isinstance(raw, dict):
        raise BoardDataError(f"{kind} entry must be a mapping, got {type(raw).__name__}")
    value = raw.get("id")
    if value in (None, ""):
        raise BoardDataError(f"{kind} entry without id: {raw!r}")
    return str(value)


def project_from_dict(raw: Any) -> Project:
    project_id = _require_id(raw, "project")
    return Project(
        id=project_id,
        name=_text(raw, "name") or project_id,
        summary=_text(raw, "summary"),
        status=_text(raw, "status") or "PLANNING",
        created_at=_text(raw, "created_at"),
    )


def feature_from_dict(raw: Any) -> Feature:
    feature_id = _require_id(raw, "feature")
    return Feature(
        id=feature_id,
        name=_text(raw, "name") or feature_id,
        summary=_text(raw, "summary"),
        status=FeatureStatus.from_string(_text(raw, "status") or "PLANNING"),
        priority=Priority.from_string(_text(raw, "priority")),
        project_id=_optional_id(raw, "project_id"),
        created_at=_text(raw, "created_at"),
    )


def task_from_dict(raw: Any) -> Task:
    task_id = _require_id(raw, "task")
    return Task(
        id=task_id,
        title=_text(raw, "title") or task_id,
        summary=_text(raw, "summary"),
        status=TaskStatus.from_string(_text(raw, "status") or "PENDING"),
        priority=Priority.from_string(_text(raw, "priority")),
        feature_id=_optional_id(raw, "feature_id"),
        project_id=_optional_id(raw, "project_id"),
        created_at=_text(raw, "created_at"),
        description=_text(raw, "description"),
    )


class YamlBoardRepository(DataAdapter):
    """Board data kept in one YAML document with ``projects``, ``features`` and ``tasks`` lists."""

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path).expanduser()
        self._raw: Dict[str, List[Dict[str, Any]]] = {}
        self._projects: List[Project] = []
        self._features: List[Feature] = []
        self._tasks: List[Task] = []
        self._signature: Optional[int] = None
        self.reload()

    def _read_document(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self.data_path.exists():
            logger.info("board file %s not found; starting empty", self.data_path)
            return {"projects": [], "features": [], "tasks": []}
        try:
            data = yaml.safe_load(self.data_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise BoardDataError(f"{self.data_path}: invalid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise BoardDataError(f"{self.data_path}: top level must be a mapping")
        document: Dict[str, List[Dict[str, Any]]] = {}
        for key in ("projects", "features", "tasks"):
            entries = data.get(key) or []
            if not isinstance(entries, list):
                raise BoardDataError(f"{self.data_path}: '{key}' must be a list")
            document[key] = entries
        return document

    def reload(self) -> None:
        document = self._read_document()
        projects = [project_from_dict(raw) for raw in document["projects"]]
        features = [feature_from_dict(raw) for raw in document["features"]]
        tasks = [task_from_dict(raw) for raw in document["tasks"]]
        task_ids: Dict[str, List[str]] = {}
        for task in tasks:
            if task.feature_id:
                task_ids.setdefault(task.feature_id, []).append(task.id)
        self._features = [replace(f, task_ids=tuple(task_ids.get(f.id, []))) for f in features]
        self._raw = document
        self._projects = projects
        self._tasks = tasks
        self._signature = self.compute_signature()
        logger.debug(
            "loaded %s projects, %s features, %s tasks from %s",
            len(projects),
            len(features),
            len(tasks),
            self.data_path,
        )

    def compute_signature(self) -> int:
        try:
            return int(self.data_path.stat().st_mtime_ns)
        except OSError:
            return 0

    def reload_if_changed(self) -> bool:
        if self.compute_signature() == self._signature:
            return False
        self.reload()
        return True

    def list_projects(self) -> List[Project]:
        return list(self._projects)

    def get_project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self._projects if p.id == project_id), None)

    def list_features(self, project_id: str) -> List[Feature]:
        return [f for f in self._features if f.project_id == project_id]

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        return next((f for f in self._features if f.id == feature_id), None)

    def list_tasks(self, project_id: str) -> List[Task]:
        feature_ids = {f.id for f in self._features if f.project_id == project_id}
        return [t for t in self._tasks if t.project_id == project_id or (t.feature_id in feature_ids and not t.project_id)]

    def get_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def search(self, query: str) -> SearchResults:
        needle = (query or "").strip().lower()
        if not needle:
            return SearchResults()

        def hit(*fields: str) -> bool:
            return any(needle in (value or "").lower() for value in fields)

        return SearchResults(
            projects=tuple(p for p in self._projects if hit(p.name, p.summary)),
            features=tuple(f for f in self._features if hit(f.name, f.summary)),
            tasks=tuple(t for t in self._tasks if hit(t.title, t.summary, t.description)),
        )

    def set_feature_status(self, feature_id: str, status: FeatureStatus) -> Feature:
        if status is FeatureStatus.UNKNOWN:
            raise AdapterError(f"Refusing to set unknown status on feature {feature_id}")
        entry = next((raw for raw in self._raw.get("features", []) if str(raw.get("id")) == feature_id), None)
        if entry is None:
            raise AdapterError(f"Feature not found: {feature_id}")
        entry["status"] = status.code
        self._write_document()
        self.reload()
        updated = self.get_feature(feature_id)
        if updated is None:  # pragma: no cover - reload keeps every entry
            raise AdapterError(f"Feature vanished after update: {feature_id}")
        logger.info("feature %s moved to %s", feature_id, status.code)
        return updated

    def _write_document(self) -> None:
        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.data_path.with_suffix(self.data_path.suffix + f".{time.time_ns()}.tmp")
        tmp_path.write_text(yaml.safe_dump(self._raw, allow_unicode=True, sort_keys=False), encoding="utf-8")
        tmp_path.replace(self.data_path)

