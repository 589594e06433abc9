import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".phrasecoach"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_DIR = Path(__file__).parent
PROJECT_CONFIG_EXAMPLE = PROJECT_DIR / "config.toml"

DEFAULT_DAILY_GOAL = 10
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

def load_config() -> Dict[str, Any]:
    """Load config from ~/.phrasecoach/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., PHRASECOACH_CARDS_CSV env var)
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    cards_cfg = config.get("cards", {})
    config["cards"] = {
        "csv_path": os.getenv(
            "PHRASECOACH_CARDS_CSV",
            cards_cfg.get("csv_path") or str(PROJECT_DIR / "data.csv"),
        )
    }
    daily_cfg = config.get("daily", {})
    goal = int(os.getenv("PHRASECOACH_DAILY_GOAL", daily_cfg.get("goal", DEFAULT_DAILY_GOAL)))
    config["daily"] = {
        # A non-positive goal would make the daily bar divide by zero
        "goal": goal if goal > 0 else DEFAULT_DAILY_GOAL,
    }
    server_cfg = config.get("server", {})
    config["server"] = {
        "host": os.getenv("PHRASECOACH_HOST", server_cfg.get("host", DEFAULT_HOST)),
        "port": int(os.getenv("PHRASECOACH_PORT", server_cfg.get("port", DEFAULT_PORT))),
    }
    return config

def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('daily', 'goal')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
