from __future__ import annotations

import logging
from collections.abc import Collection

import pandas as pd

from hpd_graph.io.schema import CONTACT_COLUMNS
from hpd_graph.registrations import RegistrationIndex, require_int
from hpd_graph.synonyms import Synonyms

LOGGER = logging.getLogger(__name__)

OWNER_ROLES = ("HeadOfficer", "IndividualOwner", "CorporateOwner")
ACCEPTED_COLUMNS = ["name", "address", "registration_id", "contact_id"]

TEXT_COLUMNS = [
    column for column in CONTACT_COLUMNS if column not in {"contact_id", "registration_id"}
]


def _valid_registration_ids(registrations: RegistrationIndex | Collection[int]) -> set[int]:
    if isinstance(registrations, RegistrationIndex):
        return registrations.valid_ids()
    return set(registrations)


def build_contact_names(df: pd.DataFrame, synonyms: Synonyms | None = None) -> pd.Series:
    """Personal name when both parts are present, otherwise the corporation name."""
    has_full_name = (df["first_name"] != "") & (df["last_name"] != "")
    names = (df["first_name"] + " " + df["last_name"]).where(has_full_name, df["corp_name"])
    resolver = synonyms or Synonyms()
    return names.map(resolver.resolve)


def build_contact_addresses(df: pd.DataFrame) -> pd.Series:
    return (
        df["house_no"]
        + " "
        + df["street_name"]
        + " "
        + df["apt_no"]
        + ", "
        + df["city"]
        + " "
        + df["state"]
    ).str.upper()


def filter_contacts(
    df: pd.DataFrame,
    registrations: RegistrationIndex | Collection[int],
    *,
    include_corps: bool = False,
    synonyms: Synonyms | None = None,
) -> pd.DataFrame:
    """Keep owner/officer contacts with a usable name, address and live registration.

    Returns one row per accepted contact, in input order, with the columns
    ``name``, ``address``, ``registration_id`` and ``contact_id``.
    """
    working = df[CONTACT_COLUMNS].copy()
    for column in TEXT_COLUMNS:
        working[column] = working[column].fillna("").astype(str).str.strip()
    registration_ids = require_int(working, "registration_id")
    contact_ids = require_int(working, "contact_id")

    is_owner = working["type"].isin(OWNER_ROLES)
    has_address = (working["house_no"] != "") & (working["street_name"] != "")
    has_full_name = (working["first_name"] != "") & (working["last_name"] != "")
    has_name = has_full_name
    if include_corps:
        has_name = has_name | (working["corp_name"] != "")
    is_registered = registration_ids.isin(_valid_registration_ids(registrations))

    accepted = is_owner & has_address & has_name & is_registered
    LOGGER.info(
        "Accepted %d of %d contacts (rejected: role=%d, address=%d, name=%d, registration=%d)",
        int(accepted.sum()),
        len(working),
        int((~is_owner).sum()),
        int((is_owner & ~has_address).sum()),
        int((is_owner & has_address & ~has_name).sum()),
        int((is_owner & has_address & has_name & ~is_registered).sum()),
    )

    kept = working.loc[accepted]
    frame = pd.DataFrame(
        {
            "name": build_contact_names(kept, synonyms),
            "address": build_contact_addresses(kept),
            "registration_id": registration_ids.loc[accepted],
            "contact_id": contact_ids.loc[accepted],
        }
    )
    return frame[ACCEPTED_COLUMNS].reset_index(drop=True)
