"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report suite loading failures, request construction problems, and
errors escaping the handler under test in a structured way.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump
from yaml.error import MarkedYAMLError

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails, ValidationError

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Line number in the source file.
    line_num: int | None
    #: Column number in the source file.
    column_num: int | None

    #: Position of the case within the suite.
    case_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Suite element associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting suite-related errors.

    This formatter produces human-readable error messages with optional
    source location and YAML-based contextual snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message.rstrip()

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line,
            column, and case numbers when available.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num + 1}'
            if (column_num := context.get('column_num')) is not None:
                message += f', column {column_num + 1}'
        message += linesep

        if (case_num := context.get('case_num')) is not None:
            message += f'{indent}on case {case_num + 1}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing element or exception data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        error = context.get('error')
        if isinstance(error, MarkedYAMLError) and error.problem_mark:
            snippet = error.problem_mark.get_snippet(indent=0) or ''
            return cls._make_indent(snippet, indent)

        if element := context.get('element'):
            snippet = f'{indent}{SNIPPET_ELLIPSIS}'
            snippet += cls._make_yaml(element, indent)
            return snippet + linesep

        return ''

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, dict):
            return {
                key: cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple)):
            return [cls._filter_unsafe(item) for item in value]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a sanitized value to an indented YAML string."""
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string."""
        return linesep.join(
            f'{indent}{line}'
            for line in value.rstrip().splitlines()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation given as a string or a number of spaces."""
        if not indent:
            return ''
        if isinstance(indent, int):
            return ' ' * indent

        return indent


class SuiteWarning(UserWarning):
    """Warning emitted for non-fatal suite issues.

    Used when a suite definition is valid but suspicious (for example,
    two cases sharing one name) and strict mode is disabled.
    """


class HandlerTestError(Exception, ErrorFormatter):
    """Base exception for all pytest-handlertest errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class SuiteLoadError(HandlerTestError):
    """Error raised when a suite definition cannot be read or validated.

    A load failure is fatal for the whole suite: no case is executed.
    """

    @classmethod
    def from_yaml_error(cls, error: MarkedYAMLError, *,
                        filename: str | None = None) -> 'Self':
        """Create a load error from a YAML parsing failure.

        Args:
            error: Exception raised by the YAML parser.
            filename: Name of the source file, if known.

        Returns:
            SuiteLoadError keeping the position of the YAML problem.
        """
        mark = error.problem_mark
        error_context = ErrorContext(
            filename=filename or (mark.name if mark else None),
            line_num=mark.line if mark else None,
            column_num=mark.column if mark else None,
            error=error,
        )

        message = 'Invalid YAML'
        if error.problem:
            message += f'{linesep}{' ' * FORMAT_INDENT}{error.problem}'

        return cls(message, context=error_context)

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None,  # noqa: ANN401
                            filename: str | None = None) -> 'Self':
        """Create a load error from a Pydantic validation failure.

        The failing fragment of the document is located by walking the
        error location path, and is attached as the snippet element.

        Args:
            error: ValidationError raised by Pydantic.
            data: Raw document data.
            filename: Name of the source file, if known.

        Returns:
            SuiteLoadError describing the first located validation issue.
        """
        error_context = ErrorContext(filename=filename)

        if not data or not isinstance(data, (dict, list)):
            return cls('Suite must be a sequence of cases or a mapping', context=error_context)

        for item in error.errors(include_url=False, include_input=False):
            if located := cls._locate_pydantic_context(data, item):
                message, value, case_num = located
                return cls(message, context=ErrorContext(
                    **error_context,
                    case_num=case_num,
                    element=value,
                ))

        return cls('Validation error', context=error_context)

    @classmethod
    def _locate_pydantic_context(cls, value: Any,  # noqa: ANN401
                                 error: 'ErrorDetails') -> tuple[str, Any, int | None] | None:
        """Locate the most specific failing element in validated data.

        Args:
            value: Root data structure being validated.
            error: Pydantic error details including location path.

        Returns:
            A tuple of (error message, extracted element, case position)
            if a relevant context can be located, otherwise None.
        """
        container = last_item = value
        last_key: int | str | None = None
        case_num: int | None = None

        for key in error['loc']:
            if isinstance(last_item, list):
                if isinstance(key, int) and 0 <= key < len(last_item):
                    if case_num is None:
                        case_num = key
                    container = last_item
                    last_item = last_item[key]
                    last_key = key
            elif isinstance(last_item, dict):
                if key in last_item:
                    container = last_item
                    last_item = last_item[key]
                    last_key = key
            else:
                break

        message = next((
            line.strip()
            for line in (error.get('msg') or '').splitlines()
            if line.strip()
        ), None)
        if not message or last_key is None:
            return None

        if isinstance(container, list):
            return message, [last_item], case_num

        return message, {last_key: last_item}, case_num


class RequestBuildError(HandlerTestError):
    """Error raised when a request spec cannot be turned into a request.

    Covers malformed `Key: Value` headers and unusable URLs. The error
    is scoped to the offending case and reported like a mismatch.
    """


class HandlerError(HandlerTestError):
    """Error raised when the handler under test raises an exception."""


class HandlerResolveError(HandlerTestError):
    """Error raised when a `module:attribute` handler reference is unusable."""
