"""Declarative models for handler test cases.

Defines immutable Pydantic models describing a case, the request it
fires, the response it expects, and the suite document grouping cases.
"""

from .cases import Case, Suite
from .requests import RequestSpec
from .responses import ResponseSpec

__all__ = (
    'Case',
    'RequestSpec',
    'ResponseSpec',
    'Suite',
)
