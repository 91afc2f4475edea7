from ..dto import ForgotMatricInput
from ..errors import ApiError
from .register_user import IAuthApi


class RecoverMatric:
    def __init__(self, api: IAuthApi):
        self.api = api

    def execute(self, form: ForgotMatricInput) -> str:
        data = self.api.forgot_matric(form.validate())
        matric = data.get("matricNumber")
        if not matric:
            raise ApiError()
        return str(matric)
