GENERIC_ERROR = "Something went wrong!"


class FormError(ValueError):
    """Ошибка валидации формы, до обращения к бэкенду."""


class ApiError(Exception):
    """Сбой запроса к бэкенду: транспорт, не-2xx ответ или битый JSON."""

    def __init__(self, message: str = GENERIC_ERROR, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
