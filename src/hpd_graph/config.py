from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CONTACTS_CSV = "Registration_Contacts.csv"
DEFAULT_REGISTRATIONS_CSV = "Multiple_Dwelling_Registrations.csv"


class InputsConfig(BaseModel):
    contacts_csv: str | None = None
    registrations_csv: str | None = None


class ContactColumnsConfig(BaseModel):
    type: str = "Type"
    corp_name: str = "CorporationName"
    first_name: str = "FirstName"
    last_name: str = "LastName"
    house_no: str = "BusinessHouseNumber"
    street_name: str = "BusinessStreetName"
    apt_no: str = "BusinessApartment"
    city: str = "BusinessCity"
    state: str = "BusinessState"
    contact_id: str = "RegistrationContactID"
    registration_id: str = "RegistrationID"


class RegistrationColumnsConfig(BaseModel):
    registration_id: str = "RegistrationID"
    boro: str = "BoroID"
    block: str = "Block"
    lot: str = "Lot"
    bin: str = "BIN"
    end_date: str = "RegistrationEndDate"


class ColumnsConfig(BaseModel):
    contacts: ContactColumnsConfig = Field(default_factory=ContactColumnsConfig)
    registrations: RegistrationColumnsConfig = Field(default_factory=RegistrationColumnsConfig)


class RegistrationsConfig(BaseModel):
    max_expiration_age_days: int = Field(default=90, ge=0)


class NamesConfig(BaseModel):
    include_corps: bool = False
    synonyms_path: str | None = None


class PathsConfig(BaseModel):
    min_length: int = Field(default=10, ge=1)


class RankingConfig(BaseModel):
    min_buildings: int = Field(default=0, ge=0)
    top: int = Field(default=5, ge=1)


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"
    site_dir: str = "site"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inputs: InputsConfig = Field(default_factory=InputsConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    registrations: RegistrationsConfig = Field(default_factory=RegistrationsConfig)
    names: NamesConfig = Field(default_factory=NamesConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def resolve_input_paths(config: AppConfig, base_dir: Path) -> AppConfig:
    """Fill unset input paths from the environment, then from the HPD file names."""
    config.inputs.contacts_csv = _resolve_optional_path(
        config.inputs.contacts_csv
        or os.getenv("HPD_GRAPH_CONTACTS_CSV")
        or DEFAULT_CONTACTS_CSV,
        base_dir,
    )
    config.inputs.registrations_csv = _resolve_optional_path(
        config.inputs.registrations_csv
        or os.getenv("HPD_GRAPH_REGISTRATIONS_CSV")
        or DEFAULT_REGISTRATIONS_CSV,
        base_dir,
    )
    return config


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.names.synonyms_path = _resolve_optional_path(config.names.synonyms_path, base_dir)
    config.outputs.site_dir = (
        _resolve_optional_path(config.outputs.site_dir, base_dir) or config.outputs.site_dir
    )
    return resolve_input_paths(config, base_dir)
