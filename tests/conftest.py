from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from hpd_graph.config import AppConfig
from hpd_graph.pipeline.dataset import HpdDataset, build_dataset

TODAY = date(2024, 1, 31)

CONTACT_ROWS = [
    # (contact_id, registration_id, type, corp_name, first, last, house_no, street)
    ("11", "1", "HeadOfficer", "", "JANE", "DOE", "10", "MAIN ST"),
    ("12", "2", "HeadOfficer", "", "JANE", "DOE", "10", "MAIN ST"),
    ("13", "3", "IndividualOwner", "", "JOHN", "ROE", "10", "MAIN ST"),
    ("14", "4", "HeadOfficer", "", "JOHN", "ROE", "20", "ELM ST"),
    ("15", "5", "CorporateOwner", "ACME LLC", "", "", "99", "PARK AVE"),
    ("16", "5", "Agent", "", "AL", "AGENT", "99", "PARK AVE"),
]

REGISTRATION_ROWS = [
    # (registration_id, boro, block, lot, bin, end_date)
    ("1", "1", "100", "20", "1000001", "12/31/2030"),
    ("2", "1", "100", "21", "1000002", "12/31/2030"),
    ("3", "3", "5", "7", "", "12/31/2030"),
    ("4", "2", "300", "1", "2000001", "12/31/2030"),
    ("5", "4", "400", "2", "4000001", "12/31/2030"),
]


@pytest.fixture
def contacts_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "type": role,
                "corp_name": corp,
                "first_name": first,
                "last_name": last,
                "house_no": house,
                "street_name": street,
                "apt_no": "",
                "city": "NEW YORK",
                "state": "NY",
                "contact_id": contact_id,
                "registration_id": reg_id,
            }
            for contact_id, reg_id, role, corp, first, last, house, street in CONTACT_ROWS
        ]
    )


@pytest.fixture
def registrations_frame() -> pd.DataFrame:
    return pd.DataFrame(
        REGISTRATION_ROWS,
        columns=["registration_id", "boro", "block", "lot", "bin", "end_date"],
    )


@pytest.fixture
def sample_dataset(contacts_frame: pd.DataFrame, registrations_frame: pd.DataFrame) -> HpdDataset:
    return build_dataset(contacts_frame, registrations_frame, AppConfig(), today=TODAY)
