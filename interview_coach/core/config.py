"""
Configuration management via environment variables.

This module loads configuration from a .env file using python-dotenv.
All configuration values are accessed through the Settings class, which is
built once per process by get_settings().
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_JWT_SECRET = "change-me-in-production"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        mongodb_uri: MongoDB connection string
        mongodb_database: Database holding all collections
        db_timeout_ms: Server selection timeout for the Mongo client
        llm_provider: Which AI provider answers prompts (gemini or groq)
        gemini_api_key: API key for Google Gemini
        groq_api_key: API key for Groq
        gemini_model: Gemini model identifier
        groq_model: Groq model identifier
        llm_temperature: Sampling temperature sent to the provider
        llm_max_tokens: Maximum response length
        jwt_secret: Key used to sign bearer tokens
        jwt_expire_minutes: Token lifetime
        bcrypt_rounds: Cost factor for password hashing
        cors_origins: Allowed origins outside development
        enable_audit_logging: Whether every request is logged
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str

    # Database settings
    mongodb_uri: str
    mongodb_database: str
    db_timeout_ms: int

    # LLM settings
    llm_provider: str
    gemini_api_key: str
    groq_api_key: str
    gemini_model: str
    groq_model: str
    llm_temperature: float
    llm_max_tokens: int

    # Auth settings
    jwt_secret: str
    jwt_expire_minutes: int
    bcrypt_rounds: int

    # HTTP settings
    cors_origins: List[str]
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_bool(key: str, default: str) -> bool:
    return _get_env(key, default).strip().lower() in ("1", "true", "yes")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; maxsize=1 ensures only one
    instance exists for the lifetime of the process.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a variable cannot be parsed into its type
    """
    provider = _get_env("LLM_PROVIDER", "gemini").strip().lower()
    if provider not in ("gemini", "groq"):
        raise ValueError(f"Unsupported LLM_PROVIDER '{provider}'. Use 'gemini' or 'groq'.")

    origins = [o.strip() for o in _get_env("CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "InterviewCoach"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),

        # Database
        mongodb_uri=_get_env("MONGODB_URI", "mongodb://localhost:27017"),
        mongodb_database=_get_env("MONGODB_DATABASE", "interview-coach"),
        db_timeout_ms=int(_get_env("DB_TIMEOUT_MS", "5000")),

        # LLM
        llm_provider=provider,
        gemini_api_key=_get_env("GEMINI_API_KEY", ""),
        groq_api_key=_get_env("GROQ_API_KEY", ""),
        gemini_model=_get_env("GEMINI_MODEL", "gemini-2.0-flash"),
        groq_model=_get_env("GROQ_MODEL", "llama-3.3-70b-versatile"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "4096")),

        # Auth
        jwt_secret=_get_env("JWT_SECRET", DEFAULT_JWT_SECRET),
        jwt_expire_minutes=int(_get_env("JWT_EXPIRE_MINUTES", "10080")),
        bcrypt_rounds=int(_get_env("BCRYPT_ROUNDS", "12")),

        # HTTP
        cors_origins=origins,
        enable_audit_logging=_get_bool("ENABLE_AUDIT_LOGGING", "true"),
    )
