# content_analyst/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Storage
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB = os.getenv("MONGO_DB", "content_analyst")

# Brave web search
BRAVE_API_KEY = os.getenv("BRAVE_API_KEY", "")
BRAVE_SEARCH_URL = os.getenv("BRAVE_SEARCH_URL", "https://api.search.brave.com/res/v1/web/search")
SEARCH_RESULT_LIMIT = int(os.getenv("SEARCH_RESULT_LIMIT", "5"))

# Chat completions (OpenAI-compatible)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
ANALYSIS_TEMPERATURE = float(os.getenv("ANALYSIS_TEMPERATURE", "0.7"))
DIGEST_TEMPERATURE = float(os.getenv("DIGEST_TEMPERATURE", "0.6"))

# Applies to every upstream HTTP call (search and completion)
UPSTREAM_TIMEOUT_SECONDS = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "30"))

# Bearer token verification
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", "")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE", "")

# Background analysis workers and the stale-row reaper
ANALYSIS_WORKERS = int(os.getenv("ANALYSIS_WORKERS", "4"))
REAPER_ENABLED = _flag("REAPER_ENABLED", "true")
REAPER_INTERVAL_SECONDS = float(os.getenv("REAPER_INTERVAL_SECONDS", "60"))
STALE_ANALYSIS_MINUTES = int(os.getenv("STALE_ANALYSIS_MINUTES", "15"))

# Number of recent pipeline log lines served by GET /logs
LOG_BUFFER_LINES = int(os.getenv("LOG_BUFFER_LINES", "1000"))
