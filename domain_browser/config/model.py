from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

DEFAULT_SOURCE_URL = (
    "https://docs.google.com/spreadsheets/d/1vwc803C8MwWBMc7ntCre3zJ5xZtG881HKkxlIrwwxNs"
    "/gviz/tq?sheet=Sheet1&range=A1:I36592"
)


@dataclass(frozen=True)
class Credentials:
    """
    Demo login for the dashboard gate. Not a security boundary.
    """
    username: str = "demo"
    password: str = "demo"


@dataclass
class GlobalConfig:
    ui_title: str = "Domain Data Dashboard"
    source_url: str = DEFAULT_SOURCE_URL
    identity_field: str = "domain"
    fetch_timeout: float = 30.0
    page_size_options: Tuple[int, ...] = (10, 20, 50, 100)
    dropdown_filters: List[str] = field(default_factory=lambda: ["niche1", "language"])
    range_filters: List[str] = field(default_factory=lambda: ["traffic", "price", "dr", "da", "spamscore"])
    credentials: Credentials = field(default_factory=Credentials)
