from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from domain_browser.core.exceptions import SourceFetchError, SourceParseError

logger = logging.getLogger(__name__)


def unwrap_payload(text: str) -> Dict[str, Any]:
    """
    Strip the callback wrapper around the sheet's JSON response.

    The endpoint answers with something like
    `/*O_o*/ google.visualization.Query.setResponse({...});`
    so we parse from the first '{' to the last '}'.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise SourceParseError("No JSON object found in source response")

    try:
        payload = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise SourceParseError(f"Invalid JSON in source response: {e}") from e

    if not isinstance(payload, dict):
        raise SourceParseError("Source response is not a JSON object")
    return payload


def extract_table(payload: Dict[str, Any]) -> Dict[str, Any]:
    table = payload.get("table")
    if not isinstance(table, dict):
        status = payload.get("status")
        raise SourceParseError(f"Source response has no table (status={status!r})")
    return table


def fetch_raw_table(url: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """GET the sheet endpoint and return its `table` object."""
    logger.info("Fetching dataset", extra={"url": url})

    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            charset = resp.headers.get_content_charset() or "utf-8"
            body = resp.read().decode(charset, errors="replace")
    # ValueError: malformed URL; LookupError: unknown response charset
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError, LookupError) as e:
        raise SourceFetchError(f"Could not fetch {url}: {e}") from e

    return extract_table(unwrap_payload(body))
