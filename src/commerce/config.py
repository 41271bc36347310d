"""Configuration helpers for the commerce ledger.

Settings come from environment variables with sensible fallbacks, so the
CLI works out of the box and tests can point it at a temporary directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from commerce.domain.model.value_objects import DEFAULT_CURRENCY, normalize_currency

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
ROOT = Path(__file__).resolve().parents[2]

DATA_DIR_ENV = "COMMERCE_DATA_DIR"
CURRENCY_ENV = "COMMERCE_CURRENCY"


def get_data_dir() -> Path:
    """Directory holding the JSON data files.

    Returns ``$COMMERCE_DATA_DIR`` when set, otherwise ``<root>/data``.
    """
    if value := os.environ.get(DATA_DIR_ENV):
        return Path(value).expanduser()
    return ROOT / "data"


def get_default_currency() -> str:
    """Currency for new accounts: ``$COMMERCE_CURRENCY`` or CNY.

    Raises InvalidCurrencyError if the variable holds an unsupported code.
    """
    return normalize_currency(os.environ.get(CURRENCY_ENV) or DEFAULT_CURRENCY)
