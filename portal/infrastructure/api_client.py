import time
from typing import Any
from urllib.parse import quote

import requests
import structlog

from ..config import settings
from ..application.errors import ApiError, GENERIC_ERROR
from .metrics import api_calls_total, api_call_duration_seconds

logger = structlog.get_logger()

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"
ADMIN_ADD_USER_PATH = "/api/auth/admin/add-user"
FORGOT_MATRIC_PATH = "/api/auth/forgot-matric"
USERS_PATH = "/api/users"


class PortalApiClient:
    """HTTP-клиент бэкенда портала. Один запрос - один ответ, без повторов."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 session: requests.Session | None = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, endpoint: str | None = None,
                 json: dict | None = None) -> dict[str, Any]:
        endpoint = endpoint or path
        url = f"{self.base_url}{path}"
        start_time = time.time()
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            api_calls_total.labels(endpoint=endpoint, outcome="transport_error").inc()
            logger.error("api_transport_error", method=method, endpoint=endpoint, error=str(e))
            raise ApiError(GENERIC_ERROR)
        finally:
            api_call_duration_seconds.labels(endpoint=endpoint).observe(time.time() - start_time)

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = None

        if not response.ok:
            api_calls_total.labels(endpoint=endpoint, outcome="rejected").inc()
            message = data.get("message") if isinstance(data, dict) else None
            logger.warning(
                "api_request_rejected",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                message=message,
            )
            raise ApiError(message or GENERIC_ERROR, status_code=response.status_code)

        if not isinstance(data, dict):
            api_calls_total.labels(endpoint=endpoint, outcome="malformed").inc()
            logger.error("api_malformed_response", method=method, endpoint=endpoint,
                         status_code=response.status_code)
            raise ApiError(GENERIC_ERROR, status_code=response.status_code)

        api_calls_total.labels(endpoint=endpoint, outcome="ok").inc()
        logger.info("api_request", method=method, endpoint=endpoint,
                    status_code=response.status_code)
        return data

    # --- Auth

    def login(self, payload: dict) -> dict:
        return self._request("POST", LOGIN_PATH, json=payload)

    def register(self, payload: dict) -> dict:
        return self._request("POST", REGISTER_PATH, json=payload)

    def add_user(self, payload: dict) -> dict:
        return self._request("POST", ADMIN_ADD_USER_PATH, json=payload)

    def forgot_matric(self, payload: dict) -> dict:
        return self._request("POST", FORGOT_MATRIC_PATH, json=payload)

    # --- Users

    def list_users(self) -> dict:
        return self._request("GET", USERS_PATH)

    def delete_user(self, user_id: str) -> dict:
        # id целиком в одном сегменте пути: "?", "/" и "#" экранируются
        path = f"{USERS_PATH}/{quote(str(user_id), safe='')}"
        return self._request("DELETE", path, endpoint=f"{USERS_PATH}/{{id}}")
