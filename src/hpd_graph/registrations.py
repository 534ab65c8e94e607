from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterator

import pandas as pd

from hpd_graph.bbl import BBL

LOGGER = logging.getLogger(__name__)

END_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_MAX_EXPIRATION_AGE_DAYS = 90


@dataclass(frozen=True)
class RegistrationRecord:
    registration_id: int
    bbl: BBL
    bin: int | None
    end_date: date

    @property
    def building_id(self) -> str:
        return str(self.bin) if self.bin is not None else str(self.bbl)


INTEGER_RE = r"\d+"


def _check_digits(raw: pd.Series, column: str, allow_blank: bool = False) -> None:
    invalid = ~raw.str.fullmatch(INTEGER_RE)
    if allow_blank:
        invalid &= raw != ""
    if invalid.any():
        bad_value = raw.loc[invalid].iloc[0]
        raise ValueError(f"Invalid integer in column '{column}': {bad_value!r}")


def require_int(df: pd.DataFrame, column: str) -> pd.Series:
    raw = df[column].astype(str).str.strip()
    _check_digits(raw, column)
    return raw.astype("int64")


def _optional_int(df: pd.DataFrame, column: str) -> pd.Series:
    raw = df[column].astype(str).str.strip()
    _check_digits(raw, column, allow_blank=True)
    return pd.to_numeric(raw.where(raw != ""), errors="raise").astype("Int64")


def _parse_end_dates(df: pd.DataFrame) -> pd.Series:
    parsed = pd.to_datetime(df["end_date"].str.strip(), format=END_DATE_FORMAT, errors="coerce")
    invalid = parsed.isna()
    if invalid.any():
        row = df.loc[invalid].iloc[0]
        raise ValueError(
            f"Invalid registration end date {row['end_date']!r} "
            f"for registration {row['registration_id']!r}"
        )
    return parsed


class RegistrationIndex:
    """Registration ids that are still active or only recently expired.

    A registration id absent from the index is invalid: it was expired for too
    long, or never appeared in the registrations dataset.
    """

    def __init__(self, records: dict[int, tuple[RegistrationRecord, ...]]) -> None:
        self._records = records

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        max_expiration_age_days: int = DEFAULT_MAX_EXPIRATION_AGE_DAYS,
        today: date | None = None,
    ) -> RegistrationIndex:
        today = today or date.today()
        registration_ids = require_int(df, "registration_id")
        boros = require_int(df, "boro")
        blocks = require_int(df, "block")
        lots = require_int(df, "lot")
        bins = _optional_int(df, "bin")
        end_dates = _parse_end_dates(df)

        age_days = (pd.Timestamp(today) - end_dates).dt.days
        keep = age_days < max_expiration_age_days

        grouped: dict[int, list[RegistrationRecord]] = {}
        missing_bins = 0
        for reg_id, boro, block, lot, bin_value, end_date, is_kept in zip(
            registration_ids, boros, blocks, lots, bins, end_dates, keep
        ):
            bbl = BBL.from_numbers(boro, block, lot)
            bin_number = None if pd.isna(bin_value) else int(bin_value)
            if bin_number is None:
                missing_bins += 1
            if not is_kept:
                continue
            record = RegistrationRecord(
                registration_id=int(reg_id),
                bbl=bbl,
                bin=bin_number,
                end_date=end_date.date(),
            )
            grouped.setdefault(record.registration_id, []).append(record)

        records = {reg_id: tuple(items) for reg_id, items in grouped.items()}
        kept_rows = int(keep.sum())
        LOGGER.info(
            "Loaded %d registrations from %d rows (skipped %d expired more than %d days ago)",
            len(records),
            len(df),
            len(df) - kept_rows,
            max_expiration_age_days,
        )
        if missing_bins:
            LOGGER.warning("%d registration rows have no BIN", missing_bins)
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, registration_id: object) -> bool:
        return registration_id in self._records

    def __iter__(self) -> Iterator[int]:
        return iter(self._records)

    def is_valid(self, registration_id: int) -> bool:
        return registration_id in self._records

    def get(self, registration_id: int) -> tuple[RegistrationRecord, ...] | None:
        return self._records.get(registration_id)

    def building_id(self, registration_id: int) -> str | None:
        records = self._records.get(registration_id)
        if not records:
            return None
        return records[0].building_id

    def valid_ids(self) -> set[int]:
        return set(self._records)
