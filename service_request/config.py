"""
service_request configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import os
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_LOG_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "logging.yml")


class ServiceRequestConfig(BaseSettings):
    """
    Settings shared by every ServiceRequest in the process.
    """

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default=_DEFAULT_LOG_CONFIG_PATH, description="YAML logging config file path"
    )
    PAYLOAD_LOG_SNIPPET_LENGTH: int = Field(
        default=200, ge=0, description="Max characters of raw content included in warnings"
    )

    # Request defaults
    DEFAULT_API_VERSION: str = Field(
        default="2.0", description="API version assigned when a request does not set one"
    )
    API_KEY_HEADER: str = Field(
        default="X-Api-Key", description="Header consulted when no api_key parameter is given"
    )
    REQUEST_ID_HEADER: str = Field(
        default="X-Request-Id", description="Header carrying the id used to correlate log records"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = ServiceRequestConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
