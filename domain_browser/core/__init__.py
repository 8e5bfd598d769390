"""
Core domain layer: dataset store, query engine and the view state that
is mirrored to the address bar
"""

from .dataset import ColumnDescriptor, Dataset, ValueKind, load_dataset
from .query import ResultWindow, query
from .view_state import PageSpec, SortDirection, SortSpec, ViewState, decode, encode

__all__ = [
    "ColumnDescriptor",
    "Dataset",
    "ValueKind",
    "load_dataset",
    "ResultWindow",
    "query",
    "PageSpec",
    "SortDirection",
    "SortSpec",
    "ViewState",
    "decode",
    "encode",
]
