"""
Test fixtures for the agent_relay test suite.
"""

import os
import pytest

# Keep the logger quiet no matter what config/.env says
os.environ["LOG_ENABLED"] = "false"
os.environ["VERBOSE"] = "false"

from agent_relay.demo_tools import DEMO_SPECIALISTS

from fakes import ScriptedChatModel, demo_dispatcher, make_config


@pytest.fixture
def config():
    """Settings with short timeouts and logging off."""
    return make_config()


@pytest.fixture
def models():
    """One scripted model per demo agent, keyed by agent name."""
    return {name: ScriptedChatModel() for name in ["general", *DEMO_SPECIALISTS]}


@pytest.fixture
def dispatcher(models, config):
    """Dispatcher over the demo general, shopping and banking agents."""
    return demo_dispatcher(models, config)
