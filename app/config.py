"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="CountMe", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/countme",
        description="SQLAlchemy database URL (PostgreSQL or SQLite)",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Nutrition database (FatSecret Platform API)
    fatsecret_base_url: str = Field(
        default="https://platform.fatsecret.com/rest/server.api",
        description="FatSecret REST endpoint",
    )
    fatsecret_consumer_key: str = Field(default="", description="FatSecret consumer key")
    fatsecret_consumer_secret: str = Field(
        default="", description="FatSecret consumer secret"
    )
    nutrition_api_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout for nutrition API requests"
    )

    # AI recipe parser (Ollama-compatible chat endpoint)
    recipe_parser_endpoint: str = Field(
        default="http://localhost:11434/api/chat",
        description="Chat endpoint used for recipe parsing",
    )
    recipe_parser_model: str = Field(default="gpt-oss:20b", description="LLM model name")
    recipe_parser_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout for a single parse request"
    )
    recipe_parser_max_attempts: int = Field(
        default=3, ge=1, description="Parse attempts before giving up"
    )

    # Network reachability monitor
    network_monitor_enabled: bool = Field(
        default=True, description="Run the background reachability probe"
    )
    network_probe_host: str = Field(
        default="platform.fatsecret.com", description="Host probed for connectivity"
    )
    network_probe_port: int = Field(default=443, ge=1, le=65535)
    network_probe_interval_sec: float = Field(default=15.0, gt=0)
    network_probe_timeout_sec: float = Field(default=3.0, gt=0)

    # Debounced search (WebSocket endpoints)
    food_search_debounce_ms: int = Field(
        default=500, ge=0, description="Delay before a food search runs"
    )
    meal_search_debounce_ms: int = Field(
        default=300, ge=0, description="Delay before a custom meal search runs"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="CountMe API", description="API documentation title")
    api_description: str = Field(
        default="Calorie tracking with food search, exercise logging and custom meals",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
