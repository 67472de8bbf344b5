"""
Pydantic model for application configuration.
Provides validation for all settings of a download run.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUTPUT_TEMPLATE = "{author}/{album}/{name}.{ext}"
TEMPLATE_PLACEHOLDERS = ("{author}", "{album}", "{name}", "{ext}")


class DownloadConfig(BaseModel):
    """A validated configuration model for a download run."""

    model_config = ConfigDict(validate_assignment=True)

    # Authentication
    username: str
    password: str = Field(..., repr=False)

    # Download Settings
    output_template: str = DEFAULT_OUTPUT_TEMPLATE
    verbose: int = 0

    # Internal fields not set by options
    source_refs: list[str] = Field(default_factory=list, repr=False)

    @field_validator("username", "password")
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        """Rejects blank credentials before a login is attempted."""
        if not v or not v.strip():
            raise ValueError("Credentials cannot be empty.")
        return v

    @field_validator("output_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """
        Ensures the template is usable. Whether it yields a folder is only known
        once a track is substituted into it.
        """
        if not v or not v.strip():
            raise ValueError("Output template cannot be empty.")
        return v

    @field_validator("verbose")
    @classmethod
    def validate_verbose(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Verbosity cannot be negative.")
        return v
