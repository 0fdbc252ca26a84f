"""Base Pydantic models for suite elements and runtime settings.

Suite elements are immutable and strictly validated so that a parsed
suite is deterministic and typos in a definition are reported instead
of being silently ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Base URL against which path-only request targets are resolved.
DEFAULT_BASE_URL = 'http://example.com'

#: Supported handler calling conventions.
type Interface = Literal['wsgi', 'native']


class SchemaModel(BaseModel):
    """Base immutable model for all suite elements.

    Design principles enforced by this model:
        - Immutability: cases cannot be modified after creation, so one
          case value is safe to reuse across runs.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in suite definitions.
        - Scalar text: numbers given for text fields are kept as strings,
          so `body: 42` expects the body `42`.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Unknown or extra fields are ignored, so the surrounding environment
    may contain unrelated variables without breaking resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


class HandlerTestSettings(SettingsModel):
    """Runtime settings resolved from `HANDLERTEST_*` environment variables.

    Pytest command-line options take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix='HANDLERTEST_',
        frozen=True,
        extra='ignore',
    )

    handler: str | None = Field(
        default=None,
        title='Default handler',
        description=(
            'Reference to the handler under test in `module:attribute` form. '
            'Used by suite files that do not name a handler themselves.'
        ),
    )

    interface: Interface = Field(
        default='wsgi',
        title='Handler interface',
        description='Calling convention of the default handler.',
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        title='Base URL',
        description='Base against which path-only request URLs are resolved.',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description='Turn suite warnings (such as duplicate case names) into errors.',
    )
