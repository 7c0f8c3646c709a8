from pathlib import Path

PACKAGE_DIR = Path(__file__).parent

BASE_DIR = Path(__file__).parents[2]

CONFIG_PATH = BASE_DIR / "config"

ENV_PATH = CONFIG_PATH / ".env"

PROMPTS_PATH = PACKAGE_DIR / "prompts"

GENERAL_AGENT_SYSTEM_PROMPT_PATH = PROMPTS_PATH / "general_agent_system_prompt.txt"

SPECIALIST_AGENT_SYSTEM_PROMPT_PATH = PROMPTS_PATH / "specialist_agent_system_prompt.txt"

GENERAL_AGENT_NAME = "general"

SWITCH_DOMAIN_TOOL_NAME = "switch_domain"

ESCALATE_TOOL_NAME = "escalate"

DEFAULT_MAX_ITERATIONS = 10

DEFAULT_MAX_TRANSFER_DEPTH = 2

DEFAULT_COMPLETION_TIMEOUT = 60.0

DEFAULT_TOOL_TIMEOUT = 30.0

DEGRADED_REPLY = "I could not complete that request."

TURN_FAILED_REPLY = "Sorry, I could not complete that request. Please try again."

FORMAT_CORRECTION_NUDGE = (
    "Your previous response could not be understood. Reply either with a plain-text "
    "answer for the user or with a single call to one of the available tools, using "
    "valid JSON arguments that match the tool's schema."
)

USER_PROMPT = "🧑 "

REPLY_PREFIX = "🤖 "
