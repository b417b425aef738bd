# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Configuration management for passhash.

This module handles application configuration from environment variables.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed transport deadline, not exposed as a setting
TRANSPORT_TIMEOUT_SECONDS = 10


class Settings(BaseSettings):
    """Application settings loaded from environment variables.
    
    Assumptions:
    - Environment variables override defaults
    - The --addr command-line flag overrides listen_addr
    - max_cost is unset by default, leaving the range check to bcrypt
    """
    
    # Server
    listen_addr: str = ":8080"
    
    # Hashing
    max_cost: Optional[int] = None
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
