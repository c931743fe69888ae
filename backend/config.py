import dotenv
import os

dotenv.load_dotenv()

PORT = int(os.getenv("PORT", "8000"))

if not PORT:
    raise ValueError("PORT is not set")

# "openrouter" (any OpenAI-compatible endpoint) or "gemini"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openrouter").lower()

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

if LLM_PROVIDER == "gemini" and not GEMINI_API_KEY:
    print("Warning: GEMINI_API_KEY is not set. AI features will not work.")
elif LLM_PROVIDER != "gemini" and not OPENROUTER_API_KEY:
    print("Warning: OPENROUTER_API_KEY is not set. AI features will not work.")

# Deep reasoning off -> fast tier, on -> reasoning tier with a token budget
MODEL_FAST = os.getenv("MODEL_FAST", "gemini-3-flash-preview")
MODEL_REASONING = os.getenv("MODEL_REASONING", "gemini-3-pro-preview")
REASONING_BUDGET = int(os.getenv("REASONING_BUDGET", "4000"))
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))

STORAGE_PATH = os.getenv("STORAGE_PATH", ".ai-editor/storage.json")

# Seconds before a success/status message clears itself
STATUS_TTL = float(os.getenv("STATUS_TTL", "2.0"))

EXPLAIN_LANGUAGE = os.getenv("EXPLAIN_LANGUAGE", "Arabic")
PREVIEW_LANG = os.getenv("PREVIEW_LANG", "ar")
PREVIEW_DIR = os.getenv("PREVIEW_DIR", "rtl")
PREVIEW_PLACEHOLDER = os.getenv("PREVIEW_PLACEHOLDER", "بانتظار ملفاتك...")
