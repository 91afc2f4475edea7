from dataclasses import dataclass
from typing import Callable

from ...domain.entities import User
from ..dto import SignupInput
from ..matric import generate_matric_number


class IAuthApi:
    def login(self, payload: dict) -> dict: ...
    def register(self, payload: dict) -> dict: ...
    def add_user(self, payload: dict) -> dict: ...
    def forgot_matric(self, payload: dict) -> dict: ...


@dataclass
class Registration:
    matric_number: str
    user: User | None
    message: str | None = None


class RegisterUser:
    def __init__(self, api: IAuthApi, password_min_length: int = 6,
                 matric_generator: Callable[[], str] = generate_matric_number):
        self.api = api
        self.password_min_length = password_min_length
        self.matric_generator = matric_generator

    def execute(self, form: SignupInput) -> Registration:
        payload = form.validate(self.password_min_length)
        # номер генерируется на клиенте и больше нигде не возвращается
        matric = self.matric_generator()
        payload["matricNumber"] = matric
        data = self.api.register(payload)
        user = User.from_api(data["user"]) if isinstance(data.get("user"), dict) else None
        return Registration(matric_number=matric, user=user, message=data.get("message"))
