import random
import pytest
from unittest.mock import MagicMock

from portal.application.dto import LoginInput, SignupInput, AddUserInput, ForgotMatricInput
from portal.application.errors import FormError
from portal.application.matric import generate_matric_number, MATRIC_MIN, MATRIC_MAX


def _signup(**overrides):
    data = dict(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@x.com",
        date_started="2024-01-01",
        department="Computer Science",
        password="secret1",
    )
    data.update(overrides)
    return SignupInput(**data)


def test_matric_number_is_ten_digits():
    """Номер зачётки - 10 цифр в допустимом диапазоне"""
    rng = random.Random(486)
    for _ in range(500):
        matric = generate_matric_number(rng)
        assert len(matric) == 10
        assert matric.isdigit()
        assert MATRIC_MIN <= int(matric) <= MATRIC_MAX


@pytest.mark.parametrize("value,expected", [
    (MATRIC_MIN, "1000000000"),
    (MATRIC_MAX, "9999999999"),
])
def test_matric_number_bounds(value, expected):
    """Границы диапазона включены"""
    rng = MagicMock()
    rng.randint.return_value = value
    assert generate_matric_number(rng) == expected
    rng.randint.assert_called_once_with(MATRIC_MIN, MATRIC_MAX)


def test_login_with_matric_number():
    payload = LoginInput(email=" ada@example.com ", matric_number="1234567890").validate()
    assert payload == {"email": "ada@example.com", "matricNumber": "1234567890"}


def test_login_with_password():
    payload = LoginInput(email="ada@example.com", password="secret1").validate()
    assert payload == {"email": "ada@example.com", "password": "secret1"}


@pytest.mark.parametrize("form", [
    LoginInput(email="", matric_number="1234567890"),
    LoginInput(email="ada@example.com", matric_number=""),
    LoginInput(email="ada@example.com", matric_number="   "),
    LoginInput(email="ada@example.com"),
    LoginInput(email="ada@example.com", password="   "),
])
def test_login_requires_fields(form):
    """Пустые поля входа отклоняются"""
    with pytest.raises(FormError, match="required"):
        form.validate()


def test_login_invalid_email():
    with pytest.raises(FormError, match="valid email"):
        LoginInput(email="not-an-email", matric_number="1234567890").validate()


def test_signup_payload():
    """Форма регистрации превращается в тело запроса"""
    payload = _signup(profile_image="data:image/png;base64,AAAA").validate()
    assert payload == {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@x.com",
        "dateStarted": "2024-01-01",
        "department": "Computer Science",
        "password": "secret1",
        "profileImage": "data:image/png;base64,AAAA",
    }


def test_signup_without_optional_fields():
    payload = _signup(password=None).validate()
    assert "password" not in payload
    assert "profileImage" not in payload


@pytest.mark.parametrize("field", ["first_name", "last_name", "email", "date_started", "department"])
def test_signup_requires_fields(field):
    """Каждое обязательное поле регистрации проверяется"""
    with pytest.raises(FormError, match="required"):
        _signup(**{field: ""}).validate()


def test_signup_short_password():
    with pytest.raises(FormError, match="at least 6"):
        _signup(password="12345").validate()


def test_signup_custom_password_length():
    with pytest.raises(FormError, match="at least 8"):
        _signup(password="secret1").validate(password_min_length=8)


def test_signup_unknown_department():
    with pytest.raises(FormError, match="Unknown department"):
        _signup(department="Alchemy").validate()


def test_signup_invalid_date():
    with pytest.raises(FormError, match="valid date"):
        _signup(date_started="01/01/2024").validate()


def test_add_user_drops_password():
    """Администратор создаёт пользователя без пароля"""
    payload = AddUserInput(
        first_name="Alan",
        last_name="Turing",
        email="alan@example.com",
        date_started="2023-09-01",
        department="Accountancy",
    ).validate()
    assert "password" not in payload
    assert payload["department"] == "Accountancy"


def test_forgot_matric_requires_fields():
    with pytest.raises(FormError):
        ForgotMatricInput(email="ada@example.com", password="").validate()
    assert ForgotMatricInput(email="ada@example.com", password="secret1").validate() == {
        "email": "ada@example.com",
        "password": "secret1",
    }


def test_login_password_keeps_spaces():
    """Пробелы внутри пароля отправляются как есть"""
    payload = LoginInput(email="ada@example.com", password=" secret1 ").validate()
    assert payload == {"email": "ada@example.com", "password": " secret1 "}
