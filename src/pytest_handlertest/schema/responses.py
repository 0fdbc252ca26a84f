"""Expected response specification model."""

from http import HTTPStatus

from pydantic import Field, field_validator

from pytest_handlertest.models import SchemaModel


class ResponseSpec(SchemaModel):
    """Expected response of the handler under test.

    All fields are optional: a field that is not set is not asserted.
    A zero status code or an empty body in a definition is treated the
    same way as an absent field.
    """

    code: int | None = Field(
        default=None,
        title='Expected status code',
        description='Expected HTTP status code. Defaults to `200` when not set.',
    )

    body: str | None = Field(
        default=None,
        title='Expected body',
        description='Expected response body. Not checked when not set or empty.',
    )

    @field_validator('code', mode='after')
    @classmethod
    def unset_zero_code(cls, value: int | None) -> int | None:
        """Treat a zero status code as not set."""
        return value or None

    @field_validator('body', mode='after')
    @classmethod
    def unset_empty_body(cls, value: str | None) -> str | None:
        """Treat an empty body as not set."""
        return value or None

    @property
    def effective_code(self) -> int:
        """Status code the response is checked against."""
        if self.code is None:
            return HTTPStatus.OK.value

        return self.code
