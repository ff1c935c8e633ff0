"""
Pytest configuration and fixtures for visitorip tests
"""
import pytest

from visitorip.logging import disable_logging, set_warning_handler


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset visitorip logging state around every test"""
    disable_logging()
    yield
    disable_logging()


@pytest.fixture
def captured_warnings():
    """Capture warnings reported through the custom warning handler"""
    captured = []

    def handler(name, message, ctx):
        captured.append({
            'name': name,
            'message': message,
            'context': ctx,
        })

    set_warning_handler(handler)
    yield captured
    set_warning_handler(None)
