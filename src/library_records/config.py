"""Configuration management for Library Records.

Settings are read from the environment (``LIBRARY_RECORDS_`` prefix) and an
optional ``.env`` file:
1. Storage Locations - Where the three collection files live
2. Load Policy - How a corrupt collection file affects the others
3. Logging - Level and debug switch for the command-line program
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LibraryConfig(BaseSettings):
    """Runtime configuration for the library record manager.

    The defaults reproduce the classic layout of three JSON files
    (``books.json``, ``readers.json``, ``loans.json``) side by side in one
    data directory.
    """

    model_config = SettingsConfigDict(
        # Use LIBRARY_RECORDS_ prefix for all env vars
        env_prefix="LIBRARY_RECORDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Storage Configuration ===

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the collection files",
    )

    books_file: str = Field(
        default="books.json",
        description="File name of the book catalog inside data_dir",
        pattern=r"^[\w.\-]+$",
    )

    readers_file: str = Field(
        default="readers.json",
        description="File name of the reader list inside data_dir",
        pattern=r"^[\w.\-]+$",
    )

    loans_file: str = Field(
        default="loans.json",
        description="File name of the loan history inside data_dir",
        pattern=r"^[\w.\-]+$",
    )

    json_indent: int = Field(
        default=4,
        description="Indentation used when writing collection files",
        ge=0,
        le=8,
    )

    # === Load Policy ===

    isolate_load_failures: bool = Field(
        default=False,
        description=(
            "When False, a corrupt collection file empties all three "
            "collections on load. When True, only the corrupt one is emptied."
        ),
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Validation Methods ===

    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: Path) -> Path:
        """Ensure the data directory exists and is a directory."""
        abs_path = v.absolute()
        abs_path.mkdir(parents=True, exist_ok=True)

        if not abs_path.is_dir():
            raise ValueError(f"Data directory {abs_path} is not accessible")

        return abs_path

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    @property
    def books_path(self) -> Path:
        return self.data_dir / self.books_file

    @property
    def readers_path(self) -> Path:
        return self.data_dir / self.readers_file

    @property
    def loans_path(self) -> Path:
        return self.data_dir / self.loans_file


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LibraryConfig | None = None


def get_config() -> LibraryConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LibraryConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
