"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Rendering
    module_load_timeout: float = Field(
        default=3.0, gt=0.0, le=30.0, description="Hard timeout for module component loading (seconds)"
    )
    diagnostic_mode: bool = Field(
        default=False, description="Emit visible placeholders for unknown component types"
    )

    # Migration
    strict_migration: bool = Field(default=False, description="Fail on unmapped legacy types")
    preserve_ids: bool = Field(default=False, description="Keep legacy node ids during migration")
    json_repair: bool = Field(default=True, description="Attempt to repair malformed JSON documents")
    max_document_bytes: int = Field(default=2 * 1024 * 1024, gt=0, description="Max raw document size")
    max_document_depth: int = Field(default=64, gt=0, description="Max raw document nesting depth")
    max_tree_depth: int = Field(
        default=100, gt=0, le=200, description="Max component nesting walked by migration, rendering and export"
    )

    # Styles / export
    class_prefix: str = Field(default="dc", min_length=1, description="Generated class name prefix")
    minify_output: bool = Field(default=False, description="Minify exported HTML and CSS")

    # Caching
    palette_cache_size: int = Field(default=128, gt=0, description="Resolved palette cache size")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
