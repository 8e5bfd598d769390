from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from domain_browser.core.exceptions import SourceParseError

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_FIELD = "domain"

_WHITESPACE_RE = re.compile(r"\s+")


class ValueKind(str, Enum):
    CURRENCY = "currency"
    PERCENT = "percent"
    NUMBER = "number"
    TEXT = "text"

    @property
    def is_numeric(self) -> bool:
        return self is not ValueKind.TEXT


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    One column of the source sheet.

    - key: lowercased label with whitespace removed, used as the row key
    - label: original label, used as the grid header
    - value_kind: drives display formatting and lexical vs numeric sorting
    """
    key: str
    label: str
    value_kind: ValueKind = ValueKind.TEXT


def column_key(label: str) -> str:
    """'Spam Score' -> 'spamscore'"""
    return _WHITESPACE_RE.sub("", str(label)).lower()


def infer_value_kind(col_type: Optional[str], pattern: Optional[str]) -> ValueKind:
    """Map the sheet's declared type/display pattern to a ValueKind."""
    pattern = pattern or ""
    if "$" in pattern:
        return ValueKind.CURRENCY
    if "%" in pattern:
        return ValueKind.PERCENT
    if col_type == "number":
        return ValueKind.NUMBER
    return ValueKind.TEXT


def describe_columns(raw_cols: Sequence[Mapping[str, Any]]) -> List[ColumnDescriptor]:
    """Repeated headers keep their label but get keys suffixed _2, _3, ..."""
    descriptors: List[ColumnDescriptor] = []
    used: set = set()
    for idx, col in enumerate(raw_cols):
        if not isinstance(col, Mapping):
            raise SourceParseError(f"Column {idx} is not an object")
        label = col.get("label") or col.get("id") or f"Column {idx + 1}"
        key = base = column_key(label)
        n = 2
        while key in used:
            key = f"{base}_{n}"
            n += 1
        used.add(key)
        descriptors.append(
            ColumnDescriptor(
                key=key,
                label=str(label),
                value_kind=infer_value_kind(col.get("type"), col.get("pattern")),
            )
        )
    return descriptors


def _cell_value(cells: Sequence[Any], index: int) -> Any:
    if index >= len(cells):
        return None
    cell = cells[index]
    if not isinstance(cell, Mapping):
        return None
    return cell.get("v")


def build_rows(raw_rows: Sequence[Any], columns: Sequence[ColumnDescriptor]) -> List[Dict[str, Any]]:
    keys = [c.key for c in columns]
    rows: List[Dict[str, Any]] = []
    for idx, raw in enumerate(raw_rows):
        if not isinstance(raw, Mapping):
            raise SourceParseError(f"Row {idx} is not an object")
        cells = raw.get("c") or []
        if not isinstance(cells, list):
            raise SourceParseError(f"Row {idx} cells are not a list")
        rows.append({key: _cell_value(cells, i) for i, key in enumerate(keys)})
    return rows


def dedupe_rows(rows: Iterable[Dict[str, Any]], identity_field: str) -> List[Dict[str, Any]]:
    """
    Keep the first row for each distinct identity value.

    Rows with an empty or missing identity value are dropped.
    """
    seen: set = set()
    kept: List[Dict[str, Any]] = []
    for row in rows:
        identity = row.get(identity_field)
        if identity is None or identity == "":
            continue
        if identity in seen:
            continue
        seen.add(identity)
        kept.append(row)
    return kept


class Dataset:
    """
    Immutable, deduplicated snapshot of the source sheet.

    Includes:
    - Column descriptors (key, label, value kind)
    - Rows as plain dicts keyed by column key
    - A pandas frame over the same rows, used for mask-based filtering
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        rows: Sequence[Mapping[str, Any]],
        identity_field: str = DEFAULT_IDENTITY_FIELD,
    ) -> None:
        self._columns = tuple(columns)
        self._by_key: Dict[str, ColumnDescriptor] = {c.key: c for c in self._columns}
        self.identity_field = identity_field

        keys = [c.key for c in self._columns]
        # Every row carries exactly the column key set
        self._rows = tuple({k: row.get(k) for k in keys} for row in rows)
        self._frame = pd.DataFrame(list(self._rows), columns=keys, dtype=object)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def empty(cls, identity_field: str = DEFAULT_IDENTITY_FIELD) -> "Dataset":
        return cls(columns=[], rows=[], identity_field=identity_field)

    # -------------------------------------------------------------------------
    # Properties & getters
    # -------------------------------------------------------------------------
    @property
    def columns(self) -> tuple[ColumnDescriptor, ...]:
        return self._columns

    @property
    def keys(self) -> List[str]:
        return [c.key for c in self._columns]

    @property
    def rows(self) -> List[Dict[str, Any]]:
        """Copies of the rows, in source order."""
        return [dict(r) for r in self._rows]

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def take(self, positions: Iterable[int]) -> List[Dict[str, Any]]:
        """Copies of the rows at the given positions, in the order given."""
        return [dict(self._rows[int(i)]) for i in positions]

    def column(self, key: str) -> Optional[ColumnDescriptor]:
        return self._by_key.get(key)

    def has_column(self, key: str) -> bool:
        return key in self._by_key

    def unique_values(self, key: str) -> List[Any]:
        """Sorted distinct non-empty values of a column, for dropdown filters."""
        if key not in self._by_key or self._frame.empty:
            return []
        series = self._frame[key]
        values = series[series.notna() & (series != "")].unique().tolist()
        return sorted(values, key=lambda v: str(v).casefold())

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Dataset(columns={self.keys!r}, rows={len(self)})"


def load_dataset(raw_table: Mapping[str, Any], identity_field: str = DEFAULT_IDENTITY_FIELD) -> Dataset:
    """
    Build a Dataset from the sheet's `table` object: {cols: [...], rows: [{c: [{v}, ...]}]}.
    """
    if not isinstance(raw_table, Mapping):
        raise SourceParseError("Table payload must be an object")

    raw_cols = raw_table.get("cols")
    raw_rows = raw_table.get("rows")
    if not isinstance(raw_cols, list) or not isinstance(raw_rows, list):
        raise SourceParseError("Table payload must contain 'cols' and 'rows' lists")

    columns = describe_columns(raw_cols)
    rows = build_rows(raw_rows, columns)
    unique = dedupe_rows(rows, identity_field)

    logger.info(
        "Loaded dataset",
        extra={
            "rows": len(unique),
            "columns": len(columns),
            "dropped_duplicates": len(rows) - len(unique),
        },
    )
    return Dataset(columns=columns, rows=unique, identity_field=identity_field)
