from enum import Enum
from typing import Dict, Final, Tuple


class TaskStatus(Enum):
    PENDING = ("PENDING", "Pending", "○")
    IN_PROGRESS = ("IN_PROGRESS", "In Progress", "◐")
    IN_REVIEW = ("IN_REVIEW", "In Review", "◑")
    BLOCKED = ("BLOCKED", "Blocked", "✖")
    ON_HOLD = ("ON_HOLD", "On Hold", "◌")
    COMPLETED = ("COMPLETED", "Completed", "✓")
    CANCELLED = ("CANCELLED", "Cancelled", "⊘")
    UNKNOWN = ("?", "Unknown", "?")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def glyph(self) -> str:
        return self.value[2]

    @classmethod
    def from_string(cls, value: str) -> "TaskStatus":
        token = normalize_status_token(value)
        for status in cls:
            if status.code == token:
                return status
        return cls.UNKNOWN


class FeatureStatus(Enum):
    DRAFT = ("DRAFT", "Draft")
    PLANNING = ("PLANNING", "Planning")
    IN_DEVELOPMENT = ("IN_DEVELOPMENT", "In Development")
    TESTING = ("TESTING", "Testing")
    VALIDATING = ("VALIDATING", "Validating")
    PENDING_REVIEW = ("PENDING_REVIEW", "Pending Review")
    BLOCKED = ("BLOCKED", "Blocked")
    ON_HOLD = ("ON_HOLD", "On Hold")
    DEPLOYED = ("DEPLOYED", "Deployed")
    COMPLETED = ("COMPLETED", "Completed")
    ARCHIVED = ("ARCHIVED", "Archived")
    UNKNOWN = ("?", "Unknown")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @classmethod
    def from_string(cls, value: str) -> "FeatureStatus":
        token = normalize_status_token(value)
        for status in cls:
            if status.code == token:
                return status
        return cls.UNKNOWN


# Order in which status groups appear in the status-first tree.
STATUS_ORDER: Final[Tuple[TaskStatus, ...]] = (
    TaskStatus.PENDING,
    TaskStatus.IN_PROGRESS,
    TaskStatus.IN_REVIEW,
    TaskStatus.BLOCKED,
    TaskStatus.ON_HOLD,
    TaskStatus.COMPLETED,
    TaskStatus.CANCELLED,
)

_FEATURE_TO_TASK_STATUS: Final[Dict[FeatureStatus, TaskStatus]] = {
    FeatureStatus.COMPLETED: TaskStatus.COMPLETED,
    FeatureStatus.DEPLOYED: TaskStatus.COMPLETED,
    FeatureStatus.BLOCKED: TaskStatus.BLOCKED,
    FeatureStatus.ON_HOLD: TaskStatus.ON_HOLD,
    FeatureStatus.ARCHIVED: TaskStatus.CANCELLED,
    FeatureStatus.PENDING_REVIEW: TaskStatus.IN_REVIEW,
    FeatureStatus.IN_DEVELOPMENT: TaskStatus.IN_PROGRESS,
    FeatureStatus.TESTING: TaskStatus.IN_PROGRESS,
    FeatureStatus.VALIDATING: TaskStatus.IN_PROGRESS,
}

COMPLETED_CODES: Final[frozenset[str]] = frozenset({"COMPLETED", "DEPLOYED", "ARCHIVED", "CANCELLED"})

# Extra labels for codes that only appear in other workflows (kanban filters, search results).
_EXTRA_LABELS: Final[Dict[str, str]] = {
    "BACKLOG": "Backlog",
    "CHANGES_REQUESTED": "Changes Requested",
    "READY_FOR_QA": "Ready for QA",
    "INVESTIGATING": "Investigating",
    "DEFERRED": "Deferred",
    "NEW": "New",
    "ACTIVE": "Active",
    "READY_TO_PROD": "Ready to Prod",
    "CLOSED": "Closed",
    "WILL_NOT_IMPLEMENT": "Won't Implement",
}


def normalize_status_token(value: str) -> str:
    """Uppercase a status token and turn spaces/dashes into underscores."""
    return (value or "").strip().upper().replace(" ", "_").replace("-", "_")


def feature_status_to_task_status(status: FeatureStatus) -> TaskStatus:
    """Place a feature in the task status order (used for features without tasks)."""
    return _FEATURE_TO_TASK_STATUS.get(status, TaskStatus.PENDING)


def status_display_name(code: str) -> str:
    """Human label for any status code; unknown codes are title-cased."""
    token = normalize_status_token(code)
    for enum_cls in (TaskStatus, FeatureStatus):
        for status in enum_cls:
            if status.code == token:
                return status.label
    if token in _EXTRA_LABELS:
        return _EXTRA_LABELS[token]
    return " ".join(part.capitalize() for part in token.split("_") if part)


def is_completed_status(code: str) -> bool:
    return normalize_status_token(code) in COMPLETED_CODES
