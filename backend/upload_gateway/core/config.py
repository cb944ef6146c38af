from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from upload_gateway.core.errors import ConfigurationError

BIND_HOST = "0.0.0.0"
BIND_PORT = 3000


class EnvConf(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class Settings(EnvConf):
    region: str = Field(min_length=1, alias="REGION")
    endpoint: str = Field(min_length=1, alias="ENDPOINT")
    access_key_id: str = Field(min_length=1, alias="AWS3_CRED_KEY_ID")
    secret_access_key: str = Field(min_length=1, alias="AWS3_CRED_KEY_SECRET")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


class BucketSettings(EnvConf):
    bucket_name: str = Field(min_length=1, alias="BUCKET_NAME")


def _missing_variables(exc: ValidationError) -> list[str]:
    names = []
    for error in exc.errors():
        if error["loc"]:
            names.append(str(error["loc"][0]))
    return names


def load_settings() -> Settings:
    """Read and validate startup configuration from the environment.

    Raises ConfigurationError naming every variable that is absent or empty.
    """
    try:
        return Settings()
    except ValidationError as exc:
        missing = ", ".join(_missing_variables(exc))
        raise ConfigurationError(f"missing or empty environment variables: {missing}") from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_bucket_name() -> str:
    # Read on every call, BUCKET_NAME is resolved per upload request.
    try:
        return BucketSettings().bucket_name
    except ValidationError as exc:
        raise ConfigurationError("missing or empty environment variable: BUCKET_NAME") from exc
