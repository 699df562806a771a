from typing import Optional, List
from urllib.parse import urlsplit

from pydantic import Field, AliasChoices, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOCAL_MONGO_HOSTS = {"127.0.0.1", "localhost"}


def _extract_host_from_mongo_url(mongo_url: str | None) -> str | None:
    if not mongo_url:
        return None
    try:
        return urlsplit(mongo_url).hostname
    except ValueError:
        return None


class Settings(BaseSettings):
    # Allow comma-separated env vars for list fields like ALLOWED_ORIGINS
    model_config = SettingsConfigDict(env_file=".env", env_parse_delimiter=",")
    PROJECT_NAME: str = "Employee Generator"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # HTTP listener
    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # CORS
    # Accepts either a JSON array or a comma-separated string, normalized below.
    ALLOWED_ORIGINS: List[str] | str = Field(
        default_factory=lambda: ["http://127.0.0.1:3000", "http://localhost:3000"],
        validation_alias=AliasChoices("ALLOWED_ORIGINS", "BACKEND_CORS_ORIGINS"),
    )

    # MongoDB
    MONGO_URL: str = Field(
        default="mongodb://127.0.0.1:27017",
        validation_alias=AliasChoices("MONGO_URL", "MONGODB_URI"),
    )
    MONGO_DB: str = "company"
    EMPLOYEE_COLLECTION: str = "employees"
    # Driver default; startup blocks at most this long waiting for a server
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 30000

    # Serialize generate/delete calls against the collection
    SERIALIZE_WRITES: bool = False

    # Salary generation bounds (inclusive)
    SALARY_MIN: int = 400000
    SALARY_MAX: int = 5000000

    # Logging
    LOG_LEVEL: Optional[str] = None
    JSON_LOGS: Optional[bool] = None

    # Prometheus /metrics endpoint
    ENABLE_METRICS: bool = False

    def model_post_init(self, __context):
        """
        Validate configuration on startup. In production, fail hard on development-only values.
        """
        is_prod = self.ENVIRONMENT.lower() == "production"
        errors = []

        if self.SALARY_MIN > self.SALARY_MAX:
            errors.append(
                f"SALARY_MIN ({self.SALARY_MIN}) must not exceed SALARY_MAX ({self.SALARY_MAX})."
            )

        if not 0 < self.PORT < 65536:
            errors.append(f"PORT must be between 1 and 65535, got {self.PORT}.")

        if is_prod and _extract_host_from_mongo_url(self.MONGO_URL) in _LOCAL_MONGO_HOSTS:
            errors.append("MONGO_URL must point at a managed MongoDB instance in production.")

        # In production, DEBUG must be disabled
        if is_prod and self.DEBUG:
            errors.append("DEBUG must be False in production.")

        if errors:
            error_msg = "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ValueError(error_msg)

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

settings = Settings()
