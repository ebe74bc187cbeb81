"""Configuration schema and loading for Switchboard.

This module defines the Pydantic models for YAML configuration files.
Every section has defaults, so an empty file (or no file) is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ServerConfig(BaseModel):
    """WebSocket server settings."""

    host: str = "0.0.0.0"
    """Server bind address."""

    port: int = 8081
    """Server port. 0 picks a free port."""

    max_clients: int | None = None
    """Maximum simultaneous sessions. None = unlimited."""

    serve_page: bool = True
    """Whether plain HTTP requests get the built-in control page."""

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 <= v <= 65535:
            raise ValueError("port must be between 0 and 65535")
        return v

    @field_validator("max_clients")
    @classmethod
    def _validate_max_clients(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_clients must be positive")
        return v


class StateConfig(BaseModel):
    """Shared actuator state settings."""

    initial: bool = False
    """Actuator value at startup."""


class ActuatorConfig(BaseModel):
    """Actuator collaborator settings."""

    active_low: bool = True
    """Drive the output LOW for on (typical built-in LED wiring)."""


class DisplayConfig(BaseModel):
    """Status display settings."""

    enabled: bool = True
    """Whether to render the status display."""

    title: str = "Switchboard"
    """Title line shown at the top of the display."""


class SwitchboardConfig(BaseModel):
    """Root Switchboard configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    """WebSocket server settings."""

    state: StateConfig = Field(default_factory=StateConfig)
    """Shared state settings."""

    actuator: ActuatorConfig = Field(default_factory=ActuatorConfig)
    """Actuator settings."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    """Display settings."""

    @classmethod
    def from_yaml(cls, path: Path | str) -> SwitchboardConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Parsed configuration

        Raises:
            FileNotFoundError: If file doesn't exist
            pydantic.ValidationError: If configuration invalid
        """
        import yaml

        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data or {})
