from __future__ import annotations

import threading

from domain_browser.core.exceptions import SourceFetchError, SourceParseError
from domain_browser.services.dataset_service import DatasetService
from domain_browser.services.source import fetch_raw_table


def _table(*domains):
    return {
        "cols": [{"label": "Domain", "type": "string"}, {"label": "Price", "type": "number"}],
        "rows": [{"c": [{"v": d}, {"v": i}]} for i, d in enumerate(domains)],
    }


class _ScriptedFetcher:
    """Returns (or raises) the scripted results in order."""

    def __init__(self, *results):
        self._results = list(results)
        self.calls = 0

    def __call__(self, url, timeout):
        self.calls += 1
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_starts_empty_and_loads_once():
    fetcher = _ScriptedFetcher(_table("a.com", "b.com"))
    service = DatasetService("https://example.test", fetcher=fetcher)

    assert len(service.current) == 0
    assert not service.is_loaded()

    ds = service.ensure_loaded()
    again = service.ensure_loaded()

    assert len(ds) == 2
    assert again is ds
    assert fetcher.calls == 1
    assert service.last_error is None


def test_refresh_replaces_dataset_wholesale():
    fetcher = _ScriptedFetcher(_table("a.com", "b.com"), _table("c.com"))
    service = DatasetService("https://example.test", fetcher=fetcher)

    service.ensure_loaded()
    first = service.current

    assert service.refresh() is True
    assert [r["domain"] for r in service.current.rows] == ["c.com"]
    assert service.current is not first
    # the old snapshot is untouched
    assert [r["domain"] for r in first.rows] == ["a.com", "b.com"]


def test_failed_refresh_keeps_previous_dataset():
    fetcher = _ScriptedFetcher(_table("a.com"), SourceFetchError("timed out"))
    service = DatasetService("https://example.test", fetcher=fetcher)

    service.ensure_loaded()
    assert service.refresh() is False

    assert [r["domain"] for r in service.current.rows] == ["a.com"]
    assert service.last_error == "timed out"


def test_failed_first_load_leaves_empty_dataset_and_does_not_retry():
    fetcher = _ScriptedFetcher(SourceParseError("No JSON object found"))
    service = DatasetService("https://example.test", fetcher=fetcher)

    ds = service.ensure_loaded()
    service.ensure_loaded()

    assert len(ds) == 0
    assert fetcher.calls == 1
    assert service.last_error == "No JSON object found"


def test_malformed_table_is_reported_as_error():
    fetcher = _ScriptedFetcher({"cols": "nope"})
    service = DatasetService("https://example.test", fetcher=fetcher)

    assert service.refresh() is False
    assert service.last_error


def test_successful_refresh_clears_error():
    fetcher = _ScriptedFetcher(SourceFetchError("down"), _table("a.com"))
    service = DatasetService("https://example.test", fetcher=fetcher)

    service.refresh()
    assert service.last_error == "down"

    service.refresh()
    assert service.last_error is None
    assert len(service.current) == 1


def test_url_without_scheme_is_reported_as_error():
    # urlopen rejects the URL before opening a connection
    service = DatasetService("docs.google.com/no-scheme", fetcher=fetch_raw_table)

    assert service.refresh() is False
    assert "docs.google.com/no-scheme" in service.last_error


def test_row_cells_that_are_not_a_list_are_reported_as_error():
    fetcher = _ScriptedFetcher(_table("a.com"), {"cols": [{"label": "Domain"}], "rows": [{"c": {"x": 1}}]})
    service = DatasetService("https://example.test", fetcher=fetcher)

    service.ensure_loaded()
    assert service.refresh() is False

    assert [r["domain"] for r in service.current.rows] == ["a.com"]
    assert service.last_error


def test_concurrent_first_use_fetches_once():
    release = threading.Event()
    calls = []

    def slow_fetcher(url, timeout):
        calls.append(url)
        release.wait(timeout=5)
        return _table("a.com")

    service = DatasetService("https://example.test", fetcher=slow_fetcher)
    threads = [threading.Thread(target=service.ensure_loaded) for _ in range(4)]
    for t in threads:
        t.start()
    release.set()
    for t in threads:
        t.join(timeout=5)

    assert len(calls) == 1
    assert len(service.current) == 1
