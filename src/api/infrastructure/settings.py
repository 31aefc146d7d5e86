"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Document store selection.

    Environment variables:
        SQUADRAN_STORAGE_BACKEND: firestore, sql or memory (default: sql)
        SQUADRAN_STORAGE_DATABASE_URL: SQLAlchemy async URL for the sql backend
            (default: sqlite+aiosqlite:///./squadran.db)
        SQUADRAN_STORAGE_ECHO_SQL: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="SQUADRAN_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["firestore", "sql", "memory"] = Field(
        default="sql",
        description="Which DocumentStore implementation to use",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./squadran.db",
        description="SQLAlchemy async database URL for the sql backend",
    )
    echo_sql: bool = Field(default=False, description="Log emitted SQL")


class FirebaseSettings(BaseSettings):
    """Firebase project settings for the remote backend.

    Environment variables:
        SQUADRAN_FIREBASE_PROJECT_ID: Google Cloud project id
        SQUADRAN_FIREBASE_CREDENTIALS_PATH: Service account JSON
            (default: application default credentials)
        SQUADRAN_FIREBASE_API_KEY: Web API key used for password sign-in
        SQUADRAN_FIREBASE_IDENTITY_TOOLKIT_URL: Identity Toolkit base URL
        SQUADRAN_FIREBASE_REQUEST_TIMEOUT_SECONDS: HTTP timeout (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="SQUADRAN_FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_id: str | None = Field(default=None, description="Firebase project id")
    credentials_path: str | None = Field(
        default=None,
        description="Path to a service account JSON file",
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Web API key for the Identity Toolkit REST API",
    )
    identity_toolkit_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
        description="Identity Toolkit REST base URL",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for Identity Toolkit requests",
        gt=0,
    )


class PlatformSettings(BaseSettings):
    """Platform-level credentials and behaviour.

    Environment variables:
        SQUADRAN_SUPER_ADMIN_EMAIL: Platform owner login (default: superadmin@nexora.com)
        SQUADRAN_SUPER_ADMIN_PASSWORD: Platform owner password (required in production)
        SQUADRAN_INSTITUTION_ADMIN_EMAIL: The single recognised admin login
            (default: admin@nexora.com)
        SQUADRAN_ADMIN_BOOTSTRAP_ENABLED: Auto-provision admin identities on
            first login (default: true)
        SQUADRAN_MESSAGE_POLL_INTERVAL_SECONDS: Conversation refresh interval
            (default: 1.0)
        SQUADRAN_DEFAULT_THEME_COLOR: Theme for new institutions (default: #4AA4F2)
        SQUADRAN_ONBOARDING_PALETTE: Theme colours picked for approved requests
    """

    model_config = SettingsConfigDict(
        env_prefix="SQUADRAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    super_admin_email: str = Field(
        default="superadmin@nexora.com",
        description="Email of the single super-admin identity",
    )
    super_admin_password: SecretStr = Field(
        default=SecretStr("squadran_root"),
        description="Super-admin password; also used for first-use bootstrap",
    )
    institution_admin_email: str = Field(
        default="admin@nexora.com",
        description="The only email accepted by institution admin login",
    )
    # Bootstrap triggers only when the identity provider reports an unknown
    # email. Firebase projects with email-enumeration protection (the default
    # for new projects) answer INVALID_LOGIN_CREDENTIALS instead, so there the
    # admin identities must be created in the Firebase console.
    admin_bootstrap_enabled: bool = Field(
        default=True,
        description="Create admin identities on first login instead of rejecting",
    )
    message_poll_interval_seconds: float = Field(
        default=1.0,
        description="How often an open conversation re-fetches messages",
        gt=0,
    )
    default_theme_color: str = Field(
        default="#4AA4F2",
        description="Theme colour for institutions created without one",
    )
    onboarding_palette: list[str] = Field(
        default_factory=lambda: ["#FF725E", "#4AA4F2", "#6C63FF", "#43D9AD", "#FFC75F"],
        description="Colours randomly assigned to approved onboarding requests",
    )

    @field_validator("onboarding_palette")
    @classmethod
    def validate_palette(cls, value: list[str]) -> list[str]:
        """Require at least one colour to choose from."""
        if not value:
            raise ValueError("onboarding_palette must contain at least one colour")
        return value


@lru_cache
def get_storage_settings() -> StorageSettings:
    """Get cached storage settings."""
    return StorageSettings()


@lru_cache
def get_firebase_settings() -> FirebaseSettings:
    """Get cached Firebase settings."""
    return FirebaseSettings()


@lru_cache
def get_platform_settings() -> PlatformSettings:
    """Get cached platform settings."""
    return PlatformSettings()
