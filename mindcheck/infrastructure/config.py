import os
import logging
import math
from pathlib import Path

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


DEFAULT_SPACE_URL = "https://ourafla-mental-health-detection-model-interface.hf.space"
DEFAULT_HISTORY_PATH = str(Path(".streamlit") / "results_history.json")
MAX_HISTORY_LIMIT = 10


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            pass
    # Fallback to environment variables
    return os.environ.get(name, default)


def _get_number(name: str, default, cast):
    raw = get_secret(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; using default %s", name, raw, default)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("%s must be a positive finite number; using default %s", name, default)
        return default
    return value


class Settings:
    @property
    def classifier_backend(self) -> str:
        return (get_secret("CLASSIFIER_BACKEND", "gradio") or "gradio").strip().lower()

    @property
    def gradio_space_url(self) -> str:
        return (get_secret("GRADIO_SPACE_URL", DEFAULT_SPACE_URL) or DEFAULT_SPACE_URL).rstrip("/")

    @property
    def gradio_api_name(self) -> str:
        return get_secret("GRADIO_API_NAME", "analyze_text") or "analyze_text"

    @property
    def hf_token(self) -> str | None:
        return get_secret("HF_TOKEN")

    @property
    def classifier_timeout_seconds(self) -> float:
        return _get_number("CLASSIFIER_TIMEOUT_SECONDS", 15.0, float)

    @property
    def mistral_api_key(self) -> str | None:
        return get_secret("MISTRAL_API_KEY")

    @property
    def mistral_model(self) -> str:
        return get_secret("MISTRAL_MODEL", "mistral-large-latest") or "mistral-large-latest"

    @property
    def history_path(self) -> str:
        return get_secret("HISTORY_PATH", DEFAULT_HISTORY_PATH) or DEFAULT_HISTORY_PATH

    @property
    def history_limit(self) -> int:
        limit = _get_number("HISTORY_LIMIT", MAX_HISTORY_LIMIT, int)
        if limit > MAX_HISTORY_LIMIT:
            logger.warning("HISTORY_LIMIT=%s exceeds %s; capping", limit, MAX_HISTORY_LIMIT)
            return MAX_HISTORY_LIMIT
        return limit
