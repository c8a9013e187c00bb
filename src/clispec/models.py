"""Base Pydantic models for declaration elements.

This module defines the foundational model classes used by every
declaration and by runtime settings. Declarations are immutable and
strictly validated so that a built specification stays consistent.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all declaration elements.

    Design principles enforced by this model:
        - Immutability: fields cannot be reassigned after creation.
          Aggregates change only through their dedicated operations.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.

    All declaration models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Unknown or extra fields are ignored so that unrelated environment
    variables never break settings resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
