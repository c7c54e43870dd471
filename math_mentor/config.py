import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
STATIC_DIR = BASE_DIR / "static"

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
MODEL_NAME = os.getenv("MODEL_NAME", "claude-sonnet-4-5-20250929")

# Extended thinking budgets; the full analysis gets more room to reason.
# max_tokens must stay above the budget for the request to be accepted.
HINT_THINKING_BUDGET = int(os.getenv("HINT_THINKING_BUDGET", "1024"))
ANALYSIS_THINKING_BUDGET = int(os.getenv("ANALYSIS_THINKING_BUDGET", "2048"))
HINT_MAX_TOKENS = int(os.getenv("HINT_MAX_TOKENS", "4096"))
ANALYSIS_MAX_TOKENS = int(os.getenv("ANALYSIS_MAX_TOKENS", "8192"))

# Dev mode: set to "true" to use mock responses without an API key
DEV_MODE = os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")
