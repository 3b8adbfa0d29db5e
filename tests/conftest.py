"""Pytest configuration and shared fixtures for Logo interpreter tests."""

import pytest
from logo_interpreter import getLogoParser, getLogoLexer
from logo_interpreter.drawing import RecordingSink
from logo_interpreter.environment import Environment
from logo_interpreter.turtle_state import Turtle


@pytest.fixture
def parser():
    """Create a language parser instance for testing."""
    return getLogoParser(reduce_tree=False)


@pytest.fixture
def lexer():
    """Create a token stream parser instance for testing."""
    return getLogoLexer()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def turtle():
    return Turtle()


@pytest.fixture
def environment():
    return Environment()
