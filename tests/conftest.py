"""Pytest configuration and shared fixtures."""
import os
from unittest.mock import AsyncMock

import pytest

from helpers import openai_reply
from polychat.conversation import ChatTransport, ConversationController, Message, Role
from polychat.providers import create_provider_registry


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def registry():
    """Default registry: openai then deepseek."""
    return create_provider_registry()


@pytest.fixture
def mock_transport():
    """Transport double whose post_json answers 'pong' by default."""
    transport = AsyncMock(spec=ChatTransport)
    transport.post_json.return_value = openai_reply("pong")
    return transport


@pytest.fixture
def controller(registry, mock_transport):
    """Controller on the default provider with a credential set."""
    return ConversationController(registry, mock_transport, credential="sk-test-secret")


@pytest.fixture
def sample_history():
    """Two prior turns."""
    return [
        Message(role=Role.USER, content="Hello"),
        Message(role=Role.ASSISTANT, content="Hi! How can I help?"),
    ]
