"""
Bootstrap environment for Streamlit Cloud & local dev:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD)
- If a service account JSON is provided inline (GOOGLE_CREDENTIALS_JSON secret,
  or JSON text in GOOGLE_APPLICATION_CREDENTIALS), write it to a temp file and
  point GOOGLE_APPLICATION_CREDENTIALS at it
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from typing import Any, Dict, Iterator, Optional, Tuple

import streamlit as st
from dotenv import load_dotenv

log = logging.getLogger(__name__)

CREDENTIALS_TMP_NAME = "matharena-credentials.json"


def _sanitize_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from _flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _secrets_dict() -> Dict[str, Any]:
    """Return st.secrets as a plain dict, or {} outside the Streamlit runtime."""
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return {}
        try:
            return items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            return dict(items)
    except Exception as exc:
        # st.secrets raises when no secrets.toml exists
        log.debug("Streamlit secrets unavailable: %s", exc)
        return {}


def _bridge_secrets_to_env(secrets: Dict[str, Any]) -> None:
    for key, value in secrets.items():
        if isinstance(value, dict):
            # nested tables (e.g. a [firebase] service account) are handled separately
            if key.upper() == "GOOGLE_CREDENTIALS_JSON":
                continue
            for flat_k, flat_v in _flatten_secrets(key, value):
                os.environ.setdefault(flat_k, flat_v)
        else:
            os.environ.setdefault(_sanitize_key(key), str(value))


def _as_json_text(raw: Any) -> Optional[str]:
    if isinstance(raw, dict):
        return json.dumps(raw)
    text = str(raw).strip()
    if not (text.startswith("{") and text.endswith("}")):
        return None
    try:
        json.loads(text)
    except ValueError:
        return None
    return text


def _materialize_google_credentials(secrets: Dict[str, Any]) -> None:
    """Create a temp service account file from inline JSON if needed.

    Priority:
    1) GOOGLE_APPLICATION_CREDENTIALS set and the path exists -> keep
    2) GOOGLE_APPLICATION_CREDENTIALS holds JSON content -> write it out
    3) GOOGLE_CREDENTIALS_JSON secret (table or JSON string) -> write it out
    4) Else do nothing (the loader reports the missing file)
    """
    existing = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing and os.path.exists(existing):
        return

    json_text = _as_json_text(existing) if existing else None
    if json_text is None:
        raw = secrets.get("GOOGLE_CREDENTIALS_JSON") or os.getenv("GOOGLE_CREDENTIALS_JSON")
        if not raw:
            return
        json_text = _as_json_text(raw)
        if json_text is None:
            log.warning("GOOGLE_CREDENTIALS_JSON is not valid JSON; ignoring it.")
            return

    tmp_path = os.path.join(tempfile.gettempdir(), CREDENTIALS_TMP_NAME)
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = tmp_path
    log.info("Service account credentials written to %s", tmp_path)


def ensure_env() -> None:
    """Idempotent: make sure env vars and creds are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    secrets = _secrets_dict()
    _bridge_secrets_to_env(secrets)
    # .env never overrides values that already came from the environment or secrets
    load_dotenv()
    _materialize_google_credentials(secrets)


ensure_env()
