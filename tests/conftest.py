import pytest
import os
import sys
from unittest.mock import MagicMock

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from portal.application.portal import Portal


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Настройка тестового окружения"""
    # Бэкенд в тестах недоступен, все вызовы мокаются
    monkeypatch.setenv("API_BASE_URL", "http://backend.test")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


class FakeClock:
    """Ручные часы для уведомлений и экрана загрузки"""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_api():
    """Мок клиента бэкенда"""
    api = MagicMock()
    api.login = MagicMock()
    api.register = MagicMock()
    api.add_user = MagicMock()
    api.forgot_matric = MagicMock()
    api.list_users = MagicMock(return_value={"users": []})
    api.delete_user = MagicMock(return_value={"success": True})
    return api


@pytest.fixture
def portal(mock_api, clock):
    """Портал сразу после экрана загрузки"""
    return Portal(mock_api, notification_seconds=4.0, loading_seconds=0, clock=clock)


def make_user(**overrides) -> dict:
    """JSON пользователя в формате бэкенда"""
    data = {
        "_id": "u1",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "role": "user",
        "dateStarted": "2024-01-01",
        "department": "Computer Science",
        "matricNumber": "1234567890",
    }
    data.update(overrides)
    return data
