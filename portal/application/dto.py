from dataclasses import dataclass
from datetime import date

from pydantic import EmailStr, TypeAdapter, ValidationError

from ..domain.entities import DEPARTMENTS
from .errors import FormError

_email = TypeAdapter(EmailStr)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _check_email(email: str) -> str:
    try:
        return str(_email.validate_python(email))
    except ValidationError:
        raise FormError("Please enter a valid email address")


def _check_department(department: str) -> None:
    if department not in DEPARTMENTS:
        raise FormError(f"Unknown department: {department}")


def _check_date(value: str) -> None:
    try:
        date.fromisoformat(value)
    except ValueError:
        raise FormError("Date started must be a valid date (YYYY-MM-DD)")


@dataclass
class LoginInput:
    email: str
    matric_number: str | None = None
    password: str | None = None

    def validate(self) -> dict:
        """Возвращает тело запроса для /api/auth/login или кидает FormError."""
        email = _clean(self.email)
        matric = _clean(self.matric_number)
        # пароль не обрезаем, но из одних пробелов он считается пустым
        password = self.password or ""
        if not email or not (matric or password.strip()):
            raise FormError(REQUIRED_FIELDS_MESSAGE)
        email = _check_email(email)
        if matric:
            return {"email": email, "matricNumber": matric}
        return {"email": email, "password": password}


@dataclass
class SignupInput:
    first_name: str
    last_name: str
    email: str
    date_started: str
    department: str
    password: str | None = None
    profile_image: str | None = None

    def validate(self, password_min_length: int = 6) -> dict:
        """Проверяет форму регистрации, номер зачётки сюда не входит."""
        payload = {
            "firstName": _clean(self.first_name),
            "lastName": _clean(self.last_name),
            "email": _clean(self.email),
            "dateStarted": _clean(self.date_started),
            "department": _clean(self.department),
        }
        if not all(payload.values()):
            raise FormError(REQUIRED_FIELDS_MESSAGE)
        payload["email"] = _check_email(payload["email"])
        _check_department(payload["department"])
        _check_date(payload["dateStarted"])

        if self.password:
            if len(self.password) < password_min_length:
                raise FormError(f"Password must be at least {password_min_length} characters")
            payload["password"] = self.password

        image = _clean(self.profile_image)
        if image:
            payload["profileImage"] = image
        return payload


@dataclass
class AddUserInput:
    first_name: str
    last_name: str
    email: str
    date_started: str
    department: str
    profile_image: str | None = None

    def validate(self) -> dict:
        # та же форма, что и при регистрации, но без пароля
        return SignupInput(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            date_started=self.date_started,
            department=self.department,
            profile_image=self.profile_image,
        ).validate()


@dataclass
class ForgotMatricInput:
    email: str
    password: str

    def validate(self) -> dict:
        email = _clean(self.email)
        if not email or not self.password:
            raise FormError(REQUIRED_FIELDS_MESSAGE)
        return {"email": _check_email(email), "password": self.password}
