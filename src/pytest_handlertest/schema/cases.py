"""Case and suite models.

A case pairs one request spec with the response expected for it. A suite
is an ordered sequence of cases, optionally naming the handler to run
them against.
"""

from typing import Any

from pydantic import Field, field_validator, model_validator

from pytest_handlertest.models import Interface, SchemaModel

from .requests import RequestSpec
from .responses import ResponseSpec


class Case(SchemaModel):
    """One declarative request and expected response pair.

    A named case is run as its own sub-test; an unnamed case is run
    inline and its failures are attributed to the enclosing test.
    """

    name: str | None = Field(
        default=None,
        title='Case name',
        description=(
            'Optional name identifying the case in test output.\n'
            'Named cases are reported as separate sub-tests.'
        ),
    )

    request: RequestSpec = Field(
        default_factory=RequestSpec,
        title='Request',
        description='Request fired at the handler under test.',
    )

    response: ResponseSpec = Field(
        default_factory=ResponseSpec,
        title='Expected response',
        description='Expected response. Fields that are not set are not asserted.',
    )

    @field_validator('name', mode='after')
    @classmethod
    def unset_empty_name(cls, value: str | None) -> str | None:
        """Treat an empty name as an unnamed case."""
        return value or None

    @field_validator('request', 'response', mode='before')
    @classmethod
    def allow_null(cls, value: Any) -> Any:  # noqa: ANN401
        """Accept a `null` section, as written by an empty YAML key."""
        if value is None:
            return {}

        return value


class Suite(SchemaModel):
    """Suite document.

    A suite file holds either a bare sequence of cases or a mapping
    with the cases and the handler they are run against.
    """

    handler: str | None = Field(
        default=None,
        title='Handler',
        description=(
            'Reference to the handler under test in `module:attribute` form.\n'
            'When omitted the configured default handler is used.'
        ),
    )

    interface: Interface = Field(
        default='wsgi',
        title='Handler interface',
        description=(
            'Calling convention of the handler: `wsgi` for a WSGI application, '
            '`native` for a callable accepting a request and a response recorder.'
        ),
    )

    base_url: str | None = Field(
        default=None,
        alias='baseUrl',
        title='Base URL',
        description='Base against which path-only request URLs are resolved.',
    )

    cases: list[Case] = Field(
        default_factory=list,
        title='Cases',
        description='Ordered sequence of cases. Cases run in this order.',
    )

    @model_validator(mode='before')
    @classmethod
    def wrap_sequence(cls, value: Any) -> Any:  # noqa: ANN401
        """Accept a bare sequence of cases as a suite."""
        if isinstance(value, list):
            return {'cases': value}

        return value
