import os
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from validation.secrets import validate_secret_strength


class BaseAppSettings(BaseSettings):
    """Base application settings configuration.

    This class contains the core configuration settings for the Movie Catalog
    API: token signing, cookie transport and logging. It inherits from
    Pydantic's BaseSettings for automatic environment variable loading and
    validation.

    SECRET_KEY_ACCESS and SECRET_KEY_REFRESH have no default here, so a
    process started without them fails while loading its settings.
    """
    BASE_DIR: Path = Path(__file__).parent.parent
    PATH_TO_DB: str = str(BASE_DIR / "database" / "source" / "movie_catalog.db")

    SECRET_KEY_ACCESS: str
    SECRET_KEY_REFRESH: str
    JWT_SIGNING_ALGORITHM: str = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15)
    )
    REFRESH_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("REFRESH_TOKEN_EXPIRE_MINUTES", 7 * 24 * 60)
    )

    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "True").lower() == "true"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "False").lower() == "true"

    @model_validator(mode="after")
    def check_distinct_secrets(self) -> "BaseAppSettings":
        if self.SECRET_KEY_ACCESS == self.SECRET_KEY_REFRESH:
            raise ValueError(
                "SECRET_KEY_ACCESS and SECRET_KEY_REFRESH must be different."
            )
        return self


class Settings(BaseAppSettings):
    """Production settings configuration.

    Adds the PostgreSQL connection parameters and enforces the strength
    rules for both signing secrets.
    """
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "test_user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "test_password")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "test_host")
    POSTGRES_DB_PORT: int = int(os.getenv("POSTGRES_DB_PORT", 5432))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "test_db")

    @field_validator("SECRET_KEY_ACCESS", "SECRET_KEY_REFRESH")
    @classmethod
    def validate_secret(cls, value: str) -> str:
        return validate_secret_strength(value)


class TestingSettings(BaseAppSettings):
    """Testing settings configuration.

    Uses a dedicated SQLite file and fixed signing secrets so the test suite
    runs without any environment preparation.
    """
    PATH_TO_DB: str = str(
        Path(__file__).parent.parent / "database" / "source" / "movie_catalog_test.db"
    )
    SECRET_KEY_ACCESS: str = "testing-access-secret-Kq3v9Xw2Lm8Rt5Yp1Zn7Bc4Hd6Jf0Gs"
    SECRET_KEY_REFRESH: str = "testing-refresh-secret-Vb2Nm5Qw8Er1Ty4Ui7Op0As3Df6Gh9"


def get_settings() -> BaseAppSettings:
    """Return the settings instance based on the ENVIRONMENT variable.

    If the ENVIRONMENT environment variable is set to 'testing', this function
    returns an instance of TestingSettings. For any other value (including
    when unset), it returns an instance of Settings.

    Returns:
        BaseAppSettings: The settings instance appropriate for the current environment.
    """
    environment = os.getenv("ENVIRONMENT", "developing")
    if environment == "testing":
        return TestingSettings()
    return Settings()
