import os

from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

DEFAULT_API_URL = "https://www.virustotal.com/api/v3"

VT_API_KEY = os.getenv("VT_API_KEY")
VT_API_URL = os.getenv("VT_API_URL", DEFAULT_API_URL)
# parsed by seconds() when a client is built
VT_TIMEOUT = os.getenv("VT_TIMEOUT", "30")
VT_UPLOAD_TIMEOUT = os.getenv("VT_UPLOAD_TIMEOUT", "60")

# POST /files limit, bigger files go through /files/upload_url
MAX_UPLOAD_SIZE = 32 * 1024 * 1024

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def seconds(name, value):
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}") from None
