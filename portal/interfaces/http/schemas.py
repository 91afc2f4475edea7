from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Поля форм допускают пустые строки: проверка делается в портале,
# чтобы пустая форма давала уведомление, а не 422.

class FormBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

class FormReq(BaseModel):
    form: str

class LoginReq(FormBase):
    email: str = ""
    matric_number: str | None = Field(None, alias="matricNumber")
    password: str | None = None

class SignupReq(FormBase):
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    date_started: str = Field("", alias="dateStarted")
    department: str = ""
    password: str | None = None
    profile_image: str | None = Field(None, alias="profileImage")

class AddUserReq(FormBase):
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    date_started: str = Field("", alias="dateStarted")
    department: str = ""
    profile_image: str | None = Field(None, alias="profileImage")

class ForgotMatricReq(FormBase):
    email: str = ""
    password: str = ""

class UserOut(BaseModel):
    id: str | None
    firstName: str
    lastName: str
    email: str
    role: str
    dateStarted: str | None = None
    profileImage: str | None = None
    department: str | None = None
    matricNumber: str | None = None

class NotificationOut(BaseModel):
    message: str
    kind: str
    duration: float
    details: dict[str, Any] = {}

class ViewResp(BaseModel):
    view: str
    form: str | None = None
    user: UserOut | None = None
    roster: list[UserOut] | None = None
    department: str | None = None
    stats: dict[str, Any] | None = None
    notification: NotificationOut | None = None
