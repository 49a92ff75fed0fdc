# coingecko/config.py
import os
import logging
import configparser

from .constants import HOST

logger = logging.getLogger(__name__)

config = configparser.ConfigParser()

DEFAULT_CONFIG_FILE = "coingecko.ini"
DEFAULT_TIMEOUT = 20
DEFAULT_MAX_WORKERS = 4


def load_config(path: str = DEFAULT_CONFIG_FILE) -> bool:
    """Loads configuration from a .ini file. Returns False when the file is absent."""
    if not os.path.isfile(path):
        return False
    config.read(path)
    logger.debug(f"Loaded configuration from {path}")
    return True


def load_env_from_dotenv(path: str = ".env") -> None:
    """Load simple KEY=VALUE pairs from a .env file into os.environ if not already set."""
    if not os.path.isfile(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw_line in f:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, val = line.split("=", 1)
                key, val = key.strip(), val.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = val
    except OSError as e:
        logger.warning(f"Failed to read .env file {path}: {e}")


def get_config(section: str, key: str, env_var: str, default: str = "") -> str:
    """Gets a configuration value from environment variables or the .ini file."""
    value = os.getenv(env_var)
    if value is not None:
        return value
    return config.get(section, key, fallback=default)


def get_int_config(section: str, key: str, env_var: str, default: int = 0) -> int:
    """Gets an integer configuration value."""
    value = os.getenv(env_var)
    if value is not None:
        try:
            return int(value)
        except (ValueError, TypeError):
            return default
    try:
        return config.getint(section, key, fallback=default)
    except ValueError:
        return default


def get_host() -> str:
    return get_config("api", "host", "COINGECKO_HOST", HOST) or HOST


def get_timeout() -> int:
    return max(1, get_int_config("api", "timeout", "COINGECKO_TIMEOUT", DEFAULT_TIMEOUT))


def get_max_workers() -> int:
    return max(1, get_int_config("api", "max_workers", "COINGECKO_MAX_WORKERS", DEFAULT_MAX_WORKERS))
