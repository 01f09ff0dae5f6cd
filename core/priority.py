from enum import Enum


class Priority(Enum):
    HIGH = ("HIGH", 3, "●●●")
    MEDIUM = ("MEDIUM", 2, "●●○")
    LOW = ("LOW", 1, "●○○")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def rank(self) -> int:
        return self.value[1]

    @property
    def dots(self) -> str:
        return self.value[2]

    @classmethod
    def from_string(cls, value: str) -> "Priority":
        token = (value or "").strip().upper()
        for priority in cls:
            if priority.code == token:
                return priority
        return cls.MEDIUM
