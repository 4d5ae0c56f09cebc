"""
Record loader (CSV -> list of header-keyed records)
===================================================

Every page reads its CSV file when it is shown and keeps nothing between
visits. Values are kept as the raw strings found in the file; a cell the
row does not have becomes "".

`read_records` raises `RecordLoadError` when the resource cannot be read.
`load_records` is what the pages call: it logs the failure and returns no
records, so a broken file shows up as an empty view rather than a crash.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pandas as pd

Record = Dict[str, str]

logger = logging.getLogger(__name__)


class RecordLoadError(RuntimeError):
    """The CSV resource could not be fetched or parsed."""


class LoadToken:
    """Lifetime of one page visit.

    The router cancels the token when the user navigates away; a load that
    finishes on a cancelled token hands back nothing.
    """

    def __init__(self, scope: str = ""):
        self.scope = scope
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "live"
        return f"LoadToken({self.scope!r}, {state})"


def _keep_row(fields: List[str]) -> List[str]:
    # Over-long rows: pandas drops the surplus cells and warns.
    return fields


def read_records(source: str) -> List[Record]:
    """Read a CSV path or URL; the header row names the fields."""
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            index_col=False,
            engine="python",
            on_bad_lines=_keep_row,
            encoding="utf-8",
            encoding_errors="replace",
        )
    except pd.errors.EmptyDataError:
        return []
    except (OSError, ValueError) as e:
        raise RecordLoadError(f"Error loading CSV file {source}: {e}") from e

    df = df.fillna("")
    df.columns = [str(c) for c in df.columns]
    return df.to_dict(orient="records")


def load_records(source: str, token: Optional[LoadToken] = None) -> List[Record]:
    try:
        records = read_records(source)
    except RecordLoadError as e:
        logger.error("%s", e)
        return []

    if token is not None and token.cancelled:
        logger.debug("Discarding %d records from %s: %r", len(records), source, token)
        return []

    logger.info("Loaded %d records from %s", len(records), source)
    return records
