"""Configuration for Logfire observability."""

import os
from typing import Literal

from pydantic import BaseModel, Field


def _send_mode() -> bool | Literal["if-token-present"]:
    value = os.getenv("LOGFIRE_SEND", "if-token-present").lower()
    if value in ("true", "false"):
        return value == "true"
    return "if-token-present"


class ObservabilityConfig(BaseModel):
    """Configuration for Logfire observability."""

    # Connection
    token: str = Field(default_factory=lambda: os.getenv("LOGFIRE_TOKEN", ""), repr=False)
    project_name: str = "bookshelf-graphql"
    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))

    # Behavior
    enabled: bool = Field(
        default_factory=lambda: os.getenv("LOGFIRE_ENABLED", "true").lower() == "true"
    )
    console_output: bool = Field(
        default_factory=lambda: os.getenv("LOGFIRE_CONSOLE", "false").lower() == "true"
    )
    send_to_logfire: bool | Literal["if-token-present"] = Field(default_factory=_send_mode)
