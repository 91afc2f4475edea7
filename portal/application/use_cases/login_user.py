from ...domain.entities import User
from ..dto import LoginInput
from ..errors import ApiError
from .register_user import IAuthApi


class LoginUser:
    def __init__(self, api: IAuthApi):
        self.api = api

    def execute(self, form: LoginInput) -> User:
        payload = form.validate()
        data = self.api.login(payload)
        user = data.get("user")
        if not isinstance(user, dict):
            raise ApiError()
        return User.from_api(user)
