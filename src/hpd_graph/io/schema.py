from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from hpd_graph.config import ContactColumnsConfig, RegistrationColumnsConfig


@dataclass(frozen=True)
class ContactColumns:
    type: str = "type"
    corp_name: str = "corp_name"
    first_name: str = "first_name"
    last_name: str = "last_name"
    house_no: str = "house_no"
    street_name: str = "street_name"
    apt_no: str = "apt_no"
    city: str = "city"
    state: str = "state"
    contact_id: str = "contact_id"
    registration_id: str = "registration_id"


@dataclass(frozen=True)
class RegistrationColumns:
    registration_id: str = "registration_id"
    boro: str = "boro"
    block: str = "block"
    lot: str = "lot"
    bin: str = "bin"
    end_date: str = "end_date"


CONTACT_COLUMNS = list(ContactColumns.__dataclass_fields__)
REGISTRATION_COLUMNS = list(RegistrationColumns.__dataclass_fields__)

# BIN is missing for a handful of HPD registrations, and absent entirely from older extracts.
OPTIONAL_REGISTRATION_COLUMNS = {"bin"}


def _rename(
    df: pd.DataFrame,
    rename_map: dict[str, str],
    optional: set[str] | None = None,
) -> pd.DataFrame:
    optional = optional or set()
    missing = [
        source
        for source, canonical in rename_map.items()
        if source not in df.columns and canonical not in optional
    ]
    if missing:
        missing_str = ", ".join(missing)
        raise ValueError(f"Missing required columns in CSV: {missing_str}")
    renamed = df.rename(columns=rename_map)
    for canonical in optional:
        if canonical not in renamed.columns:
            renamed[canonical] = ""
    return renamed[list(rename_map.values())]


def normalize_contact_columns(df: pd.DataFrame, columns: ContactColumnsConfig) -> pd.DataFrame:
    """Rename registration-contact source columns to the canonical names."""
    rename_map = {getattr(columns, name): name for name in CONTACT_COLUMNS}
    return _rename(df, rename_map)


def normalize_registration_columns(
    df: pd.DataFrame, columns: RegistrationColumnsConfig
) -> pd.DataFrame:
    """Rename registration source columns to the canonical names."""
    rename_map = {getattr(columns, name): name for name in REGISTRATION_COLUMNS}
    return _rename(df, rename_map, optional=OPTIONAL_REGISTRATION_COLUMNS)
