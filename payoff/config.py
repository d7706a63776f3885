# payoff/config.py
import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'.")


class Settings:
    """Environment-driven settings, read once at construction."""

    def __init__(self) -> None:
        self.GROQ_API_KEY: Optional[str] = os.getenv("GROQ_API_KEY") or None
        self.LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
        self.LLM_TEMPERATURE = _env_float("LLM_TEMPERATURE", 0.2)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def llm_configured(self) -> bool:
        return bool(self.GROQ_API_KEY)


def get_settings() -> Settings:
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or get_settings().LOG_LEVEL).upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
