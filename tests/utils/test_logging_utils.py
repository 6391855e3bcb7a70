"""Tests for logging helpers."""

import logging

import pytest

from cityweather.utils.logging_utils import EnhancedLoggerMixin
from cityweather.utils.logging_utils import log_execution


class Component(EnhancedLoggerMixin):
    def __init__(self):
        super().__init__()
        self.set_log_context(component="test")

    @log_execution(level='INFO', include_args=True)
    def add(self, a, b=2):
        return a + b

    @log_execution(level='INFO')
    def fail(self):
        raise RuntimeError("boom")

def test_context_in_messages(caplog):
    component = Component()

    with caplog.at_level(logging.INFO):
        component.info("Fetched weather", city="London")

    assert caplog.records[-1].getMessage() == "Fetched weather | Context: component=test | city=London"

def test_clear_context(caplog):
    component = Component()
    component.clear_log_context()

    with caplog.at_level(logging.WARNING):
        component.warning("Plain")

    assert caplog.records[-1].getMessage() == "Plain"

def test_error_with_exception(caplog):
    component = Component()

    with caplog.at_level(logging.ERROR):
        component.error("Failed", exc_info=ValueError("bad value"))

    message = caplog.records[-1].getMessage()
    assert message.startswith("Failed | Context: component=test")
    assert "error=bad value" in message

def test_log_execution_with_args(caplog):
    with caplog.at_level(logging.INFO):
        assert Component().add(1) == 3

    messages = [r.getMessage() for r in caplog.records]
    assert "Calling Component.add(a=1, b=2)" in messages
    assert any(m.startswith("Component.add completed in") for m in messages)

def test_log_execution_failure(caplog):
    with caplog.at_level(logging.INFO):
        with pytest.raises(RuntimeError):
            Component().fail()

    assert "Component.fail failed after" in caplog.text
    assert "boom" in caplog.text

def test_context_as_structured_fields(caplog):
    """Context is also attached to the record for structured handlers."""
    component = Component()

    with caplog.at_level(logging.INFO):
        component.info("Fetched weather", city="London", succeeded=2)

    assert caplog.records[-1].extra_fields == {"component": "test", "city": "London", "succeeded": 2}
