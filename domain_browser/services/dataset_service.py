from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional

from domain_browser.core.dataset import Dataset, load_dataset
from domain_browser.core.exceptions import DomainBrowserError
from domain_browser.services.source import fetch_raw_table

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Optional[float]], Dict[str, Any]]


class DatasetService:
    """
    Holds the single Dataset the dashboard queries.

    The dataset is fetched lazily on first use and replaced wholesale on
    refresh. A failed fetch keeps whatever was loaded before and records the
    error for the UI to show.
    """

    def __init__(
        self,
        url: str,
        identity_field: str = "domain",
        timeout: Optional[float] = None,
        fetcher: Fetcher = fetch_raw_table,
    ) -> None:
        self._url = url
        self._identity_field = identity_field
        self._timeout = timeout
        self._fetcher = fetcher

        self._dataset: Dataset = Dataset.empty(identity_field)
        self._loaded = False
        self._last_error: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Dataset:
        return self._dataset

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> Dataset:
        """Fetch once on first use; later calls return the held dataset."""
        if not self._loaded:
            with self._lock:
                # Another request may have loaded while we waited
                if not self._loaded:
                    self._fetch_and_swap()
        return self._dataset

    def refresh(self) -> bool:
        """
        Fetch and swap in a new dataset.

        Returns False (and keeps the previous dataset) when the fetch or
        parse fails.
        """
        with self._lock:
            return self._fetch_and_swap()

    def _fetch_and_swap(self) -> bool:
        """Caller holds the lock."""
        try:
            raw_table = self._fetcher(self._url, self._timeout)
            dataset = load_dataset(raw_table, identity_field=self._identity_field)
        except DomainBrowserError as e:
            self._last_error = str(e)
            self._loaded = True
            logger.error(
                "Dataset fetch failed, keeping previous data",
                extra={"url": self._url, "error": str(e), "rows": len(self._dataset)},
            )
            return False

        self._dataset = dataset
        self._loaded = True
        self._last_error = None
        logger.info("Dataset replaced", extra={"rows": len(dataset)})
        return True
