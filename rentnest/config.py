from pathlib import Path
from urllib.parse import urlparse

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"

DEFAULT_MONGO_URI = "mongodb://localhost:27017/rentnest"
DEFAULT_DB_NAME = "rentnest"

# Template passwords left in copied Atlas connection strings
PLACEHOLDER_PASSWORDS = ("YOURPASSWORD", "<password>", "REAL_PASSWORD")


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # MongoDB settings. MONGO_URI wins over MONGODB_URI; both unset -> local default.
    MONGO_URI: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MONGO_URI", "MONGODB_URI"),
    )
    MONGO_DB_NAME: str | None = None
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 10000
    MONGO_MAX_POOL_SIZE: int = 10

    # Migration settings
    MIGRATION_DRY_RUN: bool = False

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def mongo_uri(self) -> str:
        """Resolved connection string with the local fallback applied."""
        return self.MONGO_URI or DEFAULT_MONGO_URI

    def using_default_mongo_uri(self) -> bool:
        return not self.MONGO_URI

    def mongo_uri_has_placeholder(self) -> bool:
        uri = self.mongo_uri()
        return any(marker in uri for marker in PLACEHOLDER_PASSWORDS)

    def mongo_db_name(self) -> str:
        """
        Database to migrate.

        Explicit MONGO_DB_NAME first, then the path component of the URI
        (mongodb://host/rentnest -> rentnest), then the default.
        """
        if self.MONGO_DB_NAME:
            return self.MONGO_DB_NAME
        try:
            path = urlparse(self.mongo_uri()).path or ""
        except ValueError:
            return DEFAULT_DB_NAME
        name = path.lstrip("/").split("/")[0]
        return name or DEFAULT_DB_NAME

    def get_mongo_client_config(self) -> dict:
        """Keyword arguments for the Mongo client."""
        config = {
            "serverSelectionTimeoutMS": self.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            "maxPoolSize": self.MONGO_MAX_POOL_SIZE,
        }

        if self.environment == "development":
            # Fail fast against a local mongod
            config["serverSelectionTimeoutMS"] = min(
                self.MONGO_SERVER_SELECTION_TIMEOUT_MS, 5000
            )

        return config


settings = Settings()
