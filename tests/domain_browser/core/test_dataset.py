from __future__ import annotations

import pytest

from domain_browser.core.dataset import (
    ColumnDescriptor,
    Dataset,
    ValueKind,
    column_key,
    dedupe_rows,
    infer_value_kind,
    load_dataset,
)
from domain_browser.core.exceptions import SourceParseError


def _raw_table(rows):
    return {
        "cols": [
            {"id": "A", "label": "Domain", "type": "string", "pattern": ""},
            {"id": "B", "label": "Niche 1", "type": "string"},
            {"id": "C", "label": "Traffic", "type": "number", "pattern": "General"},
            {"id": "D", "label": "Price", "type": "number", "pattern": '"$"#,##0.00'},
            {"id": "E", "label": "Spam Score", "type": "number", "pattern": "0%"},
        ],
        "rows": [{"c": [None if v is None else {"v": v} for v in row]} for row in rows],
    }


def test_column_key_lowercases_and_strips_whitespace():
    assert column_key("Spam Score") == "spamscore"
    assert column_key(" Niche\t1 ") == "niche1"
    assert column_key("DR") == "dr"


def test_infer_value_kind_from_pattern_and_type():
    assert infer_value_kind("number", '"$"#,##0.00') is ValueKind.CURRENCY
    assert infer_value_kind("number", "0%") is ValueKind.PERCENT
    assert infer_value_kind("number", None) is ValueKind.NUMBER
    assert infer_value_kind("number", "General") is ValueKind.NUMBER
    assert infer_value_kind("string", "") is ValueKind.TEXT
    assert infer_value_kind(None, None) is ValueKind.TEXT


def test_load_dataset_derives_columns():
    ds = load_dataset(_raw_table([["a.com", "tech", 100, 10.0, 0.1]]))

    assert ds.columns == (
        ColumnDescriptor("domain", "Domain", ValueKind.TEXT),
        ColumnDescriptor("niche1", "Niche 1", ValueKind.TEXT),
        ColumnDescriptor("traffic", "Traffic", ValueKind.NUMBER),
        ColumnDescriptor("price", "Price", ValueKind.CURRENCY),
        ColumnDescriptor("spamscore", "Spam Score", ValueKind.PERCENT),
    )
    assert ds.rows == [
        {"domain": "a.com", "niche1": "tech", "traffic": 100, "price": 10.0, "spamscore": 0.1}
    ]


def test_missing_and_null_cells_become_none():
    raw = _raw_table([["a.com", None]])  # short row, null second cell
    raw["rows"].append({"c": [{"v": "b.com"}, {}, {"v": None}]})

    ds = load_dataset(raw)

    assert ds.rows[0] == {"domain": "a.com", "niche1": None, "traffic": None, "price": None, "spamscore": None}
    assert ds.rows[1]["niche1"] is None
    assert ds.rows[1]["traffic"] is None
    # every row carries the same key set
    assert all(set(r) == set(ds.keys) for r in ds.rows)


def test_duplicate_domains_keep_first_occurrence():
    ds = load_dataset(
        _raw_table(
            [
                ["a.com", "tech", 1, 10.0, 0.1],
                ["b.com", "news", 2, 15.0, 0.2],
                ["a.com", "food", 3, 20.0, 0.3],
            ]
        )
    )

    assert len(ds) == 2
    assert [r["domain"] for r in ds.rows] == ["a.com", "b.com"]
    assert ds.rows[0]["price"] == 10.0


def test_dedupe_rows_drops_empty_identity():
    rows = [{"domain": ""}, {"domain": None}, {"domain": "x.com"}, {"other": 1}]

    assert dedupe_rows(rows, "domain") == [{"domain": "x.com"}]


def test_dedupe_rows_at_most_one_per_identity_in_original_order():
    rows = [{"domain": d, "i": i} for i, d in enumerate(["c", "a", "c", "b", "a", "c"])]

    kept = dedupe_rows(rows, "domain")

    assert [r["domain"] for r in kept] == ["c", "a", "b"]
    assert [r["i"] for r in kept] == [0, 1, 3]


def test_unique_values_sorted_and_non_empty():
    ds = load_dataset(
        _raw_table(
            [
                ["a.com", "tech", 1, 1.0, 0.1],
                ["b.com", "Food", 1, 1.0, 0.1],
                ["c.com", "", 1, 1.0, 0.1],
                ["d.com", None, 1, 1.0, 0.1],
                ["e.com", "tech", 1, 1.0, 0.1],
            ]
        )
    )

    assert ds.unique_values("niche1") == ["Food", "tech"]
    assert ds.unique_values("missing") == []


def test_empty_dataset():
    ds = Dataset.empty()

    assert len(ds) == 0
    assert ds.columns == ()
    assert ds.frame.empty
    assert ds.unique_values("domain") == []


@pytest.mark.parametrize(
    "raw",
    [
        None,
        {"cols": []},
        {"rows": []},
        {"cols": "nope", "rows": []},
        {"cols": [{"label": "Domain"}], "rows": ["not-a-row"]},
        {"cols": ["not-a-col"], "rows": []},
    ],
)
def test_malformed_table_raises_parse_error(raw):
    with pytest.raises(SourceParseError):
        load_dataset(raw)


def test_repeated_labels_get_unique_keys():
    ds = load_dataset(
        {
            "cols": [{"label": "Domain"}, {"label": "Niche"}, {"label": " niche "}, {"label": "Niche"}],
            "rows": [{"c": [{"v": "a.com"}, {"v": "x"}, {"v": "y"}, {"v": "z"}]}],
        },
        identity_field="domain",
    )

    assert ds.keys == ["domain", "niche", "niche_2", "niche_3"]
    assert [c.label for c in ds.columns] == ["Domain", "Niche", " niche ", "Niche"]
    assert ds.rows[0] == {"domain": "a.com", "niche": "x", "niche_2": "y", "niche_3": "z"}


def test_row_cells_must_be_a_list():
    with pytest.raises(SourceParseError):
        load_dataset({"cols": [{"label": "Domain"}], "rows": [{"c": {"x": 1}}]}, identity_field="domain")
