# embedscore/config.py
"""
Process configuration, read once at startup and passed around explicitly.

Environment variables (a .env file in the working directory is honoured):
  OPENAI_API_KEY        credential for the openai backend
  EMBEDDING_BACKEND     "openai" (default) or "local" (sentence-transformers)
  EMBEDDING_MODEL       model id; defaults depend on the backend
  SIMILARITY_THRESHOLD  percentage above which a match counts as similar
  EMBEDSCORE_DATA_DIR   where review sources and corpora live
  EMBEDDING_TIMEOUT     seconds before an embedding request is abandoned
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from embedscore.errors import ConfigurationError

BACKENDS = ("openai", "local")
DEFAULT_MODELS = {
    "openai": "text-embedding-3-small",
    "local": "all-MiniLM-L6-v2",
}
DEFAULT_THRESHOLD = 50.0
DEFAULT_DATA_DIR = "data"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = None
    backend: str = "openai"
    embedding_model: str = DEFAULT_MODELS["openai"]
    threshold: float = DEFAULT_THRESHOLD
    data_dir: str = DEFAULT_DATA_DIR
    timeout: float = DEFAULT_TIMEOUT


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `env` (defaults to os.environ after loading .env).
    """
    if env is None:
        load_dotenv()
        env = os.environ

    backend = env.get("EMBEDDING_BACKEND", "openai").strip().lower() or "openai"
    if backend not in BACKENDS:
        raise ConfigurationError(f"EMBEDDING_BACKEND must be one of {BACKENDS}, got {backend!r}")

    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        backend=backend,
        embedding_model=env.get("EMBEDDING_MODEL") or DEFAULT_MODELS[backend],
        threshold=_float_setting(env, "SIMILARITY_THRESHOLD", DEFAULT_THRESHOLD),
        data_dir=env.get("EMBEDSCORE_DATA_DIR") or DEFAULT_DATA_DIR,
        timeout=_float_setting(env, "EMBEDDING_TIMEOUT", DEFAULT_TIMEOUT),
    )
