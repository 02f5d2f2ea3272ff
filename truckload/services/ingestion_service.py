from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from io import StringIO
from typing import Any, Iterable, Mapping

import pandas as pd
from pydantic import ValidationError

from truckload.core.errors import UnsupportedFormat, ValidationFailure
from truckload.core.flow_logging import flow_info
from truckload.crud.shipment_store import ShipmentStore
from truckload.schemas.shipment import MAX_QUANTITY, ShipmentCreate, ShipmentRecord

logger = logging.getLogger(__name__)

_MAX_ISSUES = 200
_LEADING_INT = re.compile(r"^\s*\+?(\d+)")
_NON_ALNUM = re.compile(r"[^0-9a-z]")

_TEXT_FIELDS = ("plant", "mill", "date", "day_of_week", "truck_number", "sku")
_NUMERIC_FIELDS = ("number_of_rolls", "tons")

# Canonical CSV header per attribute; the camelCase name is accepted too.
CSV_HEADERS = {
    "plant": "Plant",
    "mill": "Mill",
    "date": "Date",
    "day_of_week": "DayOfWeek",
    "truck_number": "TruckNumber",
    "sku": "SKU",
    "number_of_rolls": "NumberOfRolls",
    "tons": "Tons",
}

SAMPLE_SHIPMENTS: tuple[dict[str, Any], ...] = tuple(
    {
        "plant": "Plant_12d99b28",
        "mill": "Mill_e272ad6a",
        "date": "2025-07-03",
        "day_of_week": "Thursday",
        "truck_number": truck,
        "sku": sku,
        "number_of_rolls": rolls,
        "tons": tons,
    }
    for truck, sku, rolls, tons in (
        ("Truck_6b86b273", "SKU_c154e723", 2, 6),
        ("Truck_6b86b273", "SKU_57458d38", 3, 9),
        ("Truck_6b86b273", "SKU_22be846e", 2, 6),
        ("Truck_d4735e3a", "SKU_3cc82521", 5, 15),
        ("Truck_d4735e3a", "SKU_fa4ad148", 3, 9),
        ("Truck_4e074085", "SKU_c154e723", 2, 6),
        ("Truck_4e074085", "SKU_57458d38", 3, 9),
        ("Truck_4e074085", "SKU_22be846e", 2, 6),
        ("Truck_4b227777", "SKU_3cc82521", 3, 9),
        ("Truck_4b227777", "SKU_fa4ad148", 5, 15),
    )
)


class IngestMode(str, Enum):
    REPLACE = "replace"
    # Validate-only: rows are parsed and counted, the store is never touched.
    APPEND = "append"


@dataclass
class IngestResult:
    row_count: int
    inserted_count: int = 0
    records: list[ShipmentRecord] = field(default_factory=list)


def _normalize_header(value: Any) -> str:
    return _NON_ALNUM.sub("", str(value or "").lower())


_HEADER_LOOKUP = {
    _normalize_header(canonical): attr for attr, canonical in CSV_HEADERS.items()
}


def parse_or_default(value: Any, default: int = 0) -> int:
    """
    Read the leading run of digits of `value` ("12abc" -> 12, "3.9" -> 3).
    Anything else, including blanks, negative numbers and values above
    MAX_QUANTITY, yields `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        parsed = int(match.group(1))
    return parsed if 0 <= parsed <= MAX_QUANTITY else default


def parse_csv_payload(payload: bytes) -> list[dict[str, str]]:
    """
    Decode and parse a fully buffered CSV upload into header-keyed rows.

    Raises UnsupportedFormat when there is no header row to speak of or the
    bytes are not UTF-8 text.
    """
    try:
        text = payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnsupportedFormat("CSV file must be UTF-8 encoded text.") from exc

    if not text.strip():
        raise UnsupportedFormat("CSV file is empty.")

    try:
        df = pd.read_csv(
            StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            index_col=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
        raise UnsupportedFormat(f"CSV file could not be parsed: {exc}") from exc

    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    return [
        {col: str(value).strip() for col, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def map_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """
    Map one header-keyed row onto shipment attributes.

    Headers match case-insensitively with separators ignored, so `DayOfWeek`,
    `dayOfWeek` and `day_of_week` land on the same attribute. When a row
    carries more than one spelling, a non-empty canonical column (`Plant`)
    wins; otherwise the first non-empty alias in column order is used.
    """
    canonical: dict[str, str] = {}
    aliases: dict[str, str] = {}
    for header, value in row.items():
        attr = _HEADER_LOOKUP.get(_normalize_header(header))
        if attr is None:
            continue
        text = "" if value is None else str(value).strip()
        if not text:
            continue
        if str(header).strip() == CSV_HEADERS[attr]:
            canonical.setdefault(attr, text)
        else:
            aliases.setdefault(attr, text)
    mapped = {**aliases, **canonical}

    result: dict[str, Any] = {attr: mapped.get(attr, "") for attr in _TEXT_FIELDS}
    for attr in _NUMERIC_FIELDS:
        result[attr] = parse_or_default(mapped.get(attr), 0)
    return result


def _build_creates(rows: Iterable[Mapping[str, Any]]) -> list[ShipmentCreate]:
    creates: list[ShipmentCreate] = []
    issues: list[dict[str, Any]] = []
    bad_rows = 0
    for idx, row in enumerate(rows, start=1):
        mapped = map_row(row)
        missing = [CSV_HEADERS[attr] for attr in _TEXT_FIELDS if not mapped[attr]]
        if missing:
            bad_rows += 1
            if len(issues) < _MAX_ISSUES:
                issues.append({"row": idx, "missing": missing})
            continue
        try:
            creates.append(ShipmentCreate(**mapped))
        except ValidationError as exc:
            bad_rows += 1
            if len(issues) < _MAX_ISSUES:
                invalid = sorted(
                    {
                        CSV_HEADERS[_HEADER_LOOKUP[_normalize_header(err["loc"][0])]]
                        for err in exc.errors(include_url=False)
                    }
                )
                issues.append({"row": idx, "invalid": invalid})

    if bad_rows:
        raise ValidationFailure(
            f"{bad_rows} row(s) are missing or have invalid required fields.",
            errors=issues,
        )
    return creates


def ingest(
    store: ShipmentStore | None,
    rows: list[Mapping[str, Any]] | None,
    mode: IngestMode = IngestMode.REPLACE,
    *,
    from_file: bool = False,
) -> IngestResult:
    """
    Load a batch of rows.

    replace: the whole batch is validated first, then the store contents are
    swapped for one record per row, in input order, as a single step. When no file was
    given and there are no rows, the built-in sample set is loaded instead.

    append: rows are only counted; the store is not read or written.
    """
    if mode == IngestMode.APPEND:
        row_count = len(rows or [])
        flow_info(logger, "ingest_validate_only rows=%s", row_count, category="ingestion")
        return IngestResult(row_count=row_count)

    source = "upload" if from_file else "rows"
    if not rows and not from_file:
        rows = list(SAMPLE_SHIPMENTS)
        source = "sample"

    if store is None:
        raise ValueError("A shipment store is required to replace shipments.")

    creates = _build_creates(rows or [])
    records = store.replace_all(creates)
    flow_info(
        logger,
        "ingest_replace source=%s rows=%s inserted=%s",
        source,
        len(creates),
        len(records),
        category="ingestion",
    )
    return IngestResult(row_count=len(creates), inserted_count=len(records), records=records)
