"""JSON Schema management."""

from functools import cache
from json import dumps

from pydantic.json_schema import GenerateJsonSchema

from pytest_handlertest.schema import Suite

DEFS_KEY = '$defs'


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for suite documents.

    A suite document is either a mapping validated by `Suite`, or a bare
    sequence of cases; the generated schema accepts both forms.
    """

    @classmethod
    @cache
    def make_schema(cls, indent: int | str | None = 4) -> str:
        """Generate the JSON Schema for suite documents.

        Args:
            indent: Indentation level used for JSON formatting.

        Returns:
            Serialized JSON Schema string.
        """
        suite = Suite.model_json_schema(by_alias=True, schema_generator=cls)
        definitions = suite.pop(DEFS_KEY, {})
        definitions[Suite.__name__] = suite

        schema = {
            '$schema': cls.schema_dialect,
            'title': 'pytest-handlertest',
            'description': 'JSON Schema for pytest-handlertest suite documents',
            'anyOf': [
                {'$ref': f'#/{DEFS_KEY}/Suite'},
                {'type': 'array', 'items': {'$ref': f'#/{DEFS_KEY}/Case'}},
                {'type': 'null'},
            ],
            DEFS_KEY: definitions,
        }

        return dumps(
            schema,
            ensure_ascii=False,
            sort_keys=True,
            indent=indent,
        )
