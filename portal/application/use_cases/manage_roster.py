from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable

from ...domain.entities import User, DEPARTMENTS, ROLES
from ..dto import AddUserInput
from ..errors import ApiError, FormError
from ..matric import generate_matric_number
from .register_user import IAuthApi

ALL_DEPARTMENTS = "all"


class IUsersApi:
    def list_users(self) -> dict: ...
    def delete_user(self, user_id: str) -> dict: ...


def filter_by_department(roster: Iterable[User], department: str = ALL_DEPARTMENTS) -> list[User]:
    """Фильтр на клиенте, порядок записей сохраняется."""
    if department == ALL_DEPARTMENTS:
        return list(roster)
    return [u for u in roster if u.department == department]


def roster_stats(roster: Iterable[User]) -> dict:
    users = list(roster)
    by_role = Counter(u.role for u in users)
    by_department = Counter(u.department for u in users)
    return {
        "total": len(users),
        "by_role": {role: by_role.get(role, 0) for role in ROLES},
        "by_department": {d: by_department.get(d, 0) for d in DEPARTMENTS},
    }


@dataclass
class CreatedUser:
    matric_number: str
    user: User | None
    temporary_password: str | None = None


class ManageRoster:
    def __init__(self, users_api: IUsersApi, auth_api: IAuthApi,
                 matric_generator: Callable[[], str] = generate_matric_number):
        self.users_api = users_api
        self.auth_api = auth_api
        self.matric_generator = matric_generator

    def fetch_all_users(self) -> tuple[User, ...]:
        data = self.users_api.list_users()
        users = data.get("users")
        if not isinstance(users, list):
            raise ApiError()
        return tuple(User.from_api(u) for u in users if isinstance(u, dict))

    def delete_user(self, current_user: User, user_id: str,
                    confirm: Callable[[str], bool]) -> bool:
        """Удаляет пользователя, список перезагружает вызывающий.

        False - администратор отменил удаление, запрос не отправлялся.
        """
        if current_user.id is not None and str(user_id) == current_user.id:
            raise FormError("You cannot delete your own account")
        if not confirm(user_id):
            return False
        self.users_api.delete_user(user_id)
        return True

    def add_user(self, form: AddUserInput) -> CreatedUser:
        payload = form.validate()
        matric = self.matric_generator()
        payload["matricNumber"] = matric
        data = self.auth_api.add_user(payload)
        user = User.from_api(data["user"]) if isinstance(data.get("user"), dict) else None
        return CreatedUser(
            matric_number=matric,
            user=user,
            temporary_password=data.get("temporaryPassword"),
        )
