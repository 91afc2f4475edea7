from dataclasses import dataclass, field
from typing import Any

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

DEPARTMENTS = (
    "Computer Science",
    "Electrical Engineering",
    "Mechanical Engineering",
    "Civil Engineering",
    "Accountancy",
    "Business Administration",
    "Mass Communication",
    "Science Laboratory Technology",
)

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class User:
    id: str | None
    first_name: str
    last_name: str
    email: str
    role: str = ROLE_USER
    date_started: str | None = None
    profile_image: str | None = None
    department: str | None = None
    matric_number: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_api(cls, data: dict) -> "User":
        """Собирает пользователя из JSON бэкенда (camelCase, `_id` или `id`)."""
        raw_id = data.get("_id", data.get("id"))
        matric = data.get("matricNumber")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            email=data.get("email") or "",
            role=data.get("role") or ROLE_USER,
            date_started=data.get("dateStarted"),
            profile_image=data.get("profileImage"),
            department=data.get("department"),
            matric_number=str(matric) if matric is not None else None,
        )


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = SUCCESS
    duration: float = 4.0
    details: dict[str, Any] = field(default_factory=dict)
