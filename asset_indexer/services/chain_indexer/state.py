"""Scan loop lifecycle states."""

from enum import StrEnum


class IndexerState(StrEnum):
    """Stopped -> Starting -> Running -> Stopping -> Stopped."""

    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
