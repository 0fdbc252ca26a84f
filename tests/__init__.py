"""Test suite for the pytest-handlertest package.

This package contains unit and integration tests validating request
construction, handler invocation, response assertions, suite loading,
orchestration, and the pytest and command-line integrations.
"""
