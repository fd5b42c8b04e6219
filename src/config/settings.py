"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STYLERUN_ prefix (e.g., STYLERUN_JSON_INDENT=4).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STYLERUN_ prefix.

    Examples:
        STYLERUN_OUTPUT_FILENAME=elements.json
        STYLERUN_VALIDATE_RUNS=false
        STYLERUN_PYGMENTS_STYLE=native
    """

    model_config = SettingsConfigDict(
        env_prefix="STYLERUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Input configuration
    input_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read markup source files",
    )

    # Output configuration
    output_filename: str = Field(
        default="runs.json",
        description="Name of the runs file written to the output directory",
    )

    json_indent: int = Field(
        default=2,
        ge=0,
        description="Indentation of the runs JSON output",
    )

    pygments_style: str = Field(
        default="monokai",
        description="Pygments style used when highlighting source (--highlight)",
    )

    # Validation configuration
    validate_runs: bool = Field(
        default=True,
        description="Reject parsed runs whose open and close tags differ before writing",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
