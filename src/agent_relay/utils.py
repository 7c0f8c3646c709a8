from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.language_models import BaseChatModel

import os
from typing import Optional

from agent_relay.modules.config import Config
from agent_relay.dispatchers import Dispatcher
from agent_relay.agents import GeneralAgent, SpecialistAgent
from agent_relay.demo_tools import DEMO_SPECIALISTS, GENERAL_TOOL_NAMES, demo_catalog


def get_openai_config() -> dict:
    """Load OpenAI settings from the environment.

    Returns
    -------
    dict
        Mapping with keys {"api_key", "model", "base_url"}.

    Raises
    ------
    RuntimeError
        If the required OPENAI_API_KEY is not set in the environment.
    """
    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is not set in environment or config/.env")

    model = os.getenv("GPT_MODEL", "gpt-4o").strip() or "gpt-4o"
    base_url = os.getenv("OPENAI_BASE_URL", "").strip() or None

    return {"api_key": api_key, "model": model, "base_url": base_url}


def get_google_genai_config() -> dict:
    """Load Google (Generative AI) settings from the environment.

    Returns
    -------
    dict
        Mapping with keys {"api_key", "model"}.

    Raises
    ------
    RuntimeError
        If the required GOOGLE_API_KEY is not present in the environment.
    """
    api_key = os.getenv("GOOGLE_API_KEY", "").strip()
    if not api_key:
        raise RuntimeError("GOOGLE_API_KEY is not set in environment or config/.env")

    model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip() or "gemini-2.5-flash"

    return {"api_key": api_key, "model": model}


def get_ai_backend() -> str:
    """Return the configured AI backend name ('gpt' or 'gemini'), default 'gpt'."""
    return os.getenv("AI_BACKEND", "gpt").strip().lower() or "gpt"


def get_agent_model(agent_name: str) -> Optional[str]:
    """Return the per-agent model override, e.g. ``SHOPPING_MODEL`` for 'shopping'."""
    return os.getenv(f"{agent_name.upper()}_MODEL", "").strip() or None


def get_llm(agent_name: str, config: Config) -> BaseChatModel:
    """Build the chat model answering for ``agent_name``.

    Different agents may run on different models of the configured
    backend; see ``get_agent_model``.

    Raises
    ------
    ValueError
        If an unknown AI backend is configured.
    """
    backend = get_ai_backend()

    if backend == "gpt":
        cfg = get_openai_config()
        return ChatOpenAI(
            model=get_agent_model(agent_name) or cfg["model"],
            api_key=cfg["api_key"],
            base_url=cfg["base_url"],
            temperature=0,
            timeout=config.completion_timeout,
        )
    elif backend == "gemini":
        cfg = get_google_genai_config()
        return ChatGoogleGenerativeAI(
            model=get_agent_model(agent_name) or cfg["model"],
            api_key=cfg["api_key"],
            temperature=0,
        )

    raise ValueError(f"Unknown AI backend: {backend}")


def get_dispatcher(config: Optional[Config] = None) -> Dispatcher:
    """Construct a Dispatcher with the demo general, shopping and banking agents.

    Every call builds fresh agents with empty histories, so each session
    (or each concurrent user) must get its own Dispatcher.
    """
    config = config if config is not None else Config.load()
    catalog = demo_catalog()

    general_agent = GeneralAgent.create(
        get_llm("general", config), catalog.select(GENERAL_TOOL_NAMES), config
    )
    specialists = [
        SpecialistAgent.create(
            domain, description, get_llm(domain, config), catalog.select(tool_names), config
        )
        for domain, (description, tool_names) in DEMO_SPECIALISTS.items()
    ]

    return Dispatcher(general_agent, specialists, config)
