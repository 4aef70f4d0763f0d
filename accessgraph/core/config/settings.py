"""Settings read from the environment (and an optional .env file)."""

from typing import Optional

from pydantic import Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from accessgraph.core.config.enums import Environment


class Settings(BaseSettings):
    """Application settings.

    Attributes:
    ----------
        ENVIRONMENT (Environment): Deployment environment.
        LOG_LEVEL (str): Root log level for the accessgraph logger.
        LOCAL_DEVELOPMENT (bool): Human-readable logs instead of JSON lines.
        POSTGRES_* : Connection parameters for the membership/permission store.
        PERMISSION_INHERITANCE_DEFAULT (bool): Default for the ``inherit`` flag
            of every permission check.
        USER_GROUP_INHERITANCE_ENABLED (bool): Whether a user group acting as the
            subject of a check inherits permissions from its own parent groups.
        BULK_FILTER_CHUNK_SIZE (int): Max identifiers or group names bound into
            one IN clause by the SQL repositories.

    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"
    LOCAL_DEVELOPMENT: bool = False

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "accessgraph"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "accessgraph"
    POSTGRES_SSLMODE: str = "prefer"
    SQLALCHEMY_ASYNC_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    db_pool_size: int = Field(default=20, ge=1)
    db_pool_max_overflow: int = Field(default=40, ge=0)

    PERMISSION_INHERITANCE_DEFAULT: bool = True
    USER_GROUP_INHERITANCE_ENABLED: bool = True
    BULK_FILTER_CHUNK_SIZE: int = Field(default=1000, ge=1)

    @field_validator("SQLALCHEMY_ASYNC_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info) -> str:
        """Build the async database URI from the POSTGRES_* fields unless given.

        Args:
        ----
            v (Optional[str]): Explicit URI, if any.
            info: Validation info carrying the already-parsed fields.

        Returns:
        -------
            str: The database URI.

        """
        if isinstance(v, str) and v:
            return v
        data = info.data
        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD") or None,
                host=data.get("POSTGRES_HOST"),
                port=data.get("POSTGRES_PORT"),
                path=data.get("POSTGRES_DB") or "",
            )
        )
