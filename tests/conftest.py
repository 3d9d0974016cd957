"""
Shared fixtures for pydantractor tests.
"""

from unittest.mock import MagicMock

import pytest

from helpers import make_completion
from pydantractor import ExtractorConfig


@pytest.fixture
def config():
    return ExtractorConfig(api_key="test-api-key", model="gpt-4o-mini")


@pytest.fixture
def mock_client():
    """OpenAI client stand-in; override chat.completions.create.return_value per test."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion('{"name": "John Doe", "age": 25}')
    return client
