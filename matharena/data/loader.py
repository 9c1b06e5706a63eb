"""
Participant loader: reads every document of the Firestore collection and
normalises it into a DataFrame with a fixed column set.

Normalisation rules:
    - optional text fields that are missing or blank become None
    - missing or non-numeric `puncte` is substituted by 0
    - `timestamp` becomes a timezone-aware datetime (NaT when absent)
    - duplicate document ids keep their first occurrence
"""

from __future__ import annotations

import logging
import math
import os
import time
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import streamlit as st
from google.cloud import firestore
from google.oauth2.service_account import Credentials

from matharena.config import COLUMNS, DEFAULT_COLLECTION, DEFAULT_CREDENTIALS_FILE, TEXT_FIELDS

log = logging.getLogger(__name__)

Record = Dict[str, Any]


class LoadError(RuntimeError):
    """Raised for any failure while fetching or decoding the participant collection."""


def _get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception as exc:
        log.debug("Secret %s not readable from st.secrets: %s", name, exc)
    return default


def _clean_text(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = value.strip() if isinstance(value, str) else str(value).strip()
    return text or None


def normalize_participants(records: Iterable[Record]) -> pd.DataFrame:
    """Build the participant frame from raw document dicts (each carrying its `id`)."""
    df = pd.DataFrame(list(records), columns=list(COLUMNS))

    df["id"] = df["id"].astype(str)
    duplicate_ids = int(df["id"].duplicated().sum())
    if duplicate_ids:
        log.warning("Dropping %d participant(s) with duplicate document ids.", duplicate_ids)
        df = df.drop_duplicates(subset="id", keep="first").reset_index(drop=True)

    for col in TEXT_FIELDS:
        cleaned = df[col].map(_clean_text).astype(object)
        df[col] = cleaned.where(cleaned.notna(), None)

    scores = pd.to_numeric(df["puncte"], errors="coerce")
    missing_scores = int(scores.isna().sum())
    df["puncte"] = scores.fillna(0).astype(float)

    df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce", utc=True)

    df.attrs["diagnostics"] = {
        "row_count": int(len(df)),
        "duplicate_ids": duplicate_ids,
        "score_substitutions": missing_scores,
        "timestamp_non_null": int(df["timestamp"].notna().sum()),
    }
    return df


def fetch_documents(client: Any, collection: str) -> List[Record]:
    """Stream all documents of `collection` as plain dicts with their `id`."""
    records: List[Record] = []
    for doc in client.collection(collection).stream():
        data = doc.to_dict() or {}
        records.append({**data, "id": doc.id})
    return records


def _build_client() -> firestore.Client:
    service_account_file = _get_secret("GOOGLE_APPLICATION_CREDENTIALS", DEFAULT_CREDENTIALS_FILE)
    if not service_account_file or not os.path.exists(service_account_file):
        raise LoadError(f"Service account file not found: {service_account_file}")

    credentials = Credentials.from_service_account_file(service_account_file)
    project_id = (
        _get_secret("FIRESTORE_PROJECT_ID")
        or _get_secret("GOOGLE_CLOUD_PROJECT")
        or credentials.project_id
    )
    return firestore.Client(project=project_id, credentials=credentials)


def load_participants(client: Any = None, collection: str | None = None) -> pd.DataFrame:
    """Fetch and normalise the whole participant collection.

    Any failure is re-raised as LoadError so callers handle a single error class.
    """
    collection = collection or _get_secret("FIRESTORE_COLLECTION", DEFAULT_COLLECTION) or DEFAULT_COLLECTION
    log.info("Loading participants from collection %r…", collection)
    t0 = time.perf_counter()

    try:
        if client is None:
            client = _build_client()
        records = fetch_documents(client, collection)
        df = normalize_participants(records)
    except LoadError:
        raise
    except Exception as exc:
        raise LoadError(f"Could not load collection {collection!r}: {exc}") from exc

    elapsed = time.perf_counter() - t0
    log.info("  %d participants loaded in %.2fs.", len(df), elapsed)
    log.info("  Diagnostics: %s", df.attrs["diagnostics"])
    return df
