"""Lifecycle states of the station graph store."""

from enum import Enum


class StoreState(str, Enum):
    """States the graph store moves through; it never returns to an earlier one."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
