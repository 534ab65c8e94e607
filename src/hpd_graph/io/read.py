from __future__ import annotations

from pathlib import Path

import pandas as pd

from hpd_graph.config import ContactColumnsConfig, RegistrationColumnsConfig
from hpd_graph.io.schema import normalize_contact_columns, normalize_registration_columns


def _read_text_csv(path: Path) -> pd.DataFrame:
    # Every field stays a string so blank cells read as "" rather than NaN.
    # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
    return pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")


def load_contacts(path: Path, columns: ContactColumnsConfig | None = None) -> pd.DataFrame:
    """Load the HPD registration-contacts table with canonical column names."""
    df = _read_text_csv(path)
    return normalize_contact_columns(df, columns or ContactColumnsConfig())


def load_registrations(
    path: Path, columns: RegistrationColumnsConfig | None = None
) -> pd.DataFrame:
    """Load the HPD multiple-dwelling registrations table with canonical column names."""
    df = _read_text_csv(path)
    return normalize_registration_columns(df, columns or RegistrationColumnsConfig())
