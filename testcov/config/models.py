"""Pydantic models for testcov configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_FILE = "testcov.yaml"


class CoverageConfig(BaseModel):
    """Settings for one coverage run."""

    model_config = ConfigDict(extra="forbid")

    exclude: str | None = None
    port: int = Field(default=8787, ge=0, le=65535)
    report_on: list[str] = Field(default_factory=lambda: ["src/"])
    test_suffix: str = "_test.py"
    timeout: float = Field(default=15 * 60, gt=0)
    runtime: list[str] | None = None
    badge: bool = True
    min_coverage: float | None = Field(default=None, ge=0, le=100)
    print_test_output: bool = False

    @field_validator("report_on", mode="before")
    @classmethod
    def normalize_report_on(cls, value: Any) -> Any:
        """Allow a single prefix string instead of a list."""
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("runtime", mode="before")
    @classmethod
    def normalize_runtime(cls, value: Any) -> Any:
        """Split a runtime command given as one string."""
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("test_suffix")
    @classmethod
    def check_suffix(cls, value: str) -> str:
        if not value.endswith(".py"):
            raise ValueError("test_suffix must end with '.py'")
        return value

    def merged(self, **overrides: Any) -> "CoverageConfig":
        """Return a copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.model_validate({**self.model_dump(), **updates})
