"""Request specification model.

A request spec is a declarative description of the request fired at the
handler under test. It is intentionally permissive: headers are kept as
raw `Key: Value` strings and are only split when a request is built, so
a malformed header fails its own case instead of the whole suite.
"""

from pydantic import Field

from pytest_handlertest.models import SchemaModel


class RequestSpec(SchemaModel):
    """Declarative description of a synthetic request.

    Empty values mean "use the default": `GET` for the method, `/` for
    the URL, and no body stream at all for the body.
    """

    method: str = Field(
        default='',
        title='Request method',
        description='HTTP method of the request. Defaults to `GET` when empty.',
    )

    url: str = Field(
        default='',
        title='Request URL',
        description=(
            'Absolute URL or a path-only target such as `/items?page=2`.\n'
            'Path-only targets are resolved against the synthetic base URL.'
        ),
    )

    body: str = Field(
        default='',
        title='Request body',
        description=(
            'Request body sent to the handler.\n'
            'An empty body means no body is attached to the request.'
        ),
    )

    headers: list[str] = Field(
        default_factory=list,
        title='Request headers',
        description=(
            'Ordered list of headers in `Key: Value` form.\n'
            'A later header with the same key replaces an earlier one.'
        ),
        json_schema_extra={
            'items': {'pattern': '^[^:]+: '},
        },
    )
