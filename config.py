import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

def get_env_int(name: str, default: int) -> int:
    """Get an integer environment variable or raise a clear error if malformed."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(
            f"❌ Environment variable {name} must be an integer, got {value!r}\n"
            f"👉 Check your .env file."
        )

# Optional vars (with defaults)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# "now" for every parse is taken in this zone (guests think in local dates)
TIMEZONE = os.getenv("TIMEZONE", "Europe/Prague")

# 2-digit years above the pivot belong to the 1900s
TWO_DIGIT_YEAR_PIVOT = get_env_int("TWO_DIGIT_YEAR_PIVOT", 50)
