from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000"
    API_TIMEOUT_SECONDS: float | None = None
    LOG_LEVEL: str = "INFO"
    NOTIFICATION_SECONDS: float = 4.0
    LOADING_SECONDS: float = 2.0
    PASSWORD_MIN_LENGTH: int = 6

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
