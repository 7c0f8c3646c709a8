"""
Tests for environment-backed settings and model construction.
"""

from pathlib import Path

import pytest

from agent_relay.modules.config import Config
from agent_relay.modules.logger import ChatLogger
from agent_relay.utils import get_agent_model, get_ai_backend, get_dispatcher, get_llm

from fakes import make_config


SETTINGS = [
    "MAX_ITERATIONS",
    "MAX_TRANSFER_DEPTH",
    "COMPLETION_TIMEOUT",
    "TOOL_TIMEOUT",
    "LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so values loaded from a .env file are removed on teardown
    for name in SETTINGS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestConfig:
    """Config.load reads the process environment and an optional .env file."""

    def test_defaults_without_env_file(self, clean_env, tmp_path):
        config = Config.load(tmp_path / "missing.env")
        assert config.max_iterations == 10
        assert config.max_transfer_depth == 2
        assert config.completion_timeout == 60.0
        assert config.tool_timeout == 30.0
        assert config.log_file == Path("logs/log.txt")

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("MAX_ITERATIONS", "3")
        clean_env.setenv("COMPLETION_TIMEOUT", "2.5")
        config = Config.load(tmp_path / "missing.env")
        assert config.max_iterations == 3
        assert config.completion_timeout == 2.5

    def test_env_file_is_read(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TOOL_TIMEOUT=7\nMAX_TRANSFER_DEPTH=1\n", encoding="utf-8")
        config = Config.load(env_file)
        assert config.tool_timeout == 7.0
        assert config.max_transfer_depth == 1

    def test_environment_wins_over_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("MAX_ITERATIONS=7\n", encoding="utf-8")
        clean_env.setenv("MAX_ITERATIONS", "4")
        assert Config.load(env_file).max_iterations == 4

    def test_non_integer_rejected(self, clean_env, tmp_path):
        clean_env.setenv("MAX_ITERATIONS", "many")
        with pytest.raises(ValueError, match="MAX_ITERATIONS"):
            Config.load(tmp_path / "missing.env")

    def test_ceiling_must_be_positive(self):
        with pytest.raises(ValueError):
            make_config(max_iterations=0)


class TestChatLogger:
    """The chat log is written only when enabled."""

    def test_log_file_gets_timestamp_suffix(self, tmp_path):
        logger = ChatLogger(tmp_path / "chat.txt")
        assert logger.path.parent == tmp_path
        assert logger.path.name.startswith("chat_")
        assert logger.path.suffix == ".txt"

    def test_enabled_logger_writes_one_line_entries(self, tmp_path, monkeypatch):
        monkeypatch.setattr(ChatLogger, "_CFG", make_config(log_enabled=True))
        logger = ChatLogger(tmp_path / "logs" / "chat.txt")

        logger.log("user", "hello\nthere")
        logger.event("dispatcher.transfer", source="general", target="shopping")

        lines = logger.path.read_text(encoding="utf-8").splitlines()
        assert lines[0].endswith("user: hello there")
        assert lines[1].endswith("event:dispatcher.transfer source=general target=shopping")

    def test_disabled_logger_writes_nothing(self, tmp_path, monkeypatch):
        monkeypatch.setattr(ChatLogger, "_CFG", make_config(log_enabled=False))
        logger = ChatLogger(tmp_path / "chat.txt")
        logger.log("user", "hello")
        assert not logger.path.exists()


class TestModelSelection:
    """Backends and per-agent model overrides."""

    def test_backend_defaults_to_gpt(self, monkeypatch):
        monkeypatch.delenv("AI_BACKEND", raising=False)
        assert get_ai_backend() == "gpt"

    def test_per_agent_model_override(self, monkeypatch):
        monkeypatch.setenv("SHOPPING_MODEL", "gpt-4o-mini")
        monkeypatch.delenv("BANKING_MODEL", raising=False)
        assert get_agent_model("shopping") == "gpt-4o-mini"
        assert get_agent_model("banking") is None

    def test_openai_model_per_agent(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "gpt")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("GPT_MODEL", "gpt-4o")
        monkeypatch.setenv("SHOPPING_MODEL", "gpt-4o-mini")
        monkeypatch.delenv("GENERAL_MODEL", raising=False)

        assert get_llm("shopping", make_config()).model_name == "gpt-4o-mini"
        assert get_llm("general", make_config()).model_name == "gpt-4o"

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "gpt")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            get_llm("general", make_config())

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "cohere")
        with pytest.raises(ValueError, match="cohere"):
            get_llm("general", make_config())

    def test_demo_dispatcher(self, monkeypatch):
        monkeypatch.setenv("AI_BACKEND", "gpt")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        dispatcher = get_dispatcher(make_config())

        assert dispatcher.agent_names == ["general", "shopping", "banking"]
        assert dispatcher.general_agent.tools.names() == ["current_datetime", "switch_domain"]
        assert dispatcher.specialists["banking"].tools.names() == ["credit_card_balance", "escalate"]
