from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        rendered = asdict(self)
        rendered["status"] = self.status.value
        return rendered


def resolve_state(*, loaded: bool, error: str | None, has_data: bool) -> ViewState:
    """Collapse loader flags into one state; an error with data still on screen is partial."""
    if not loaded:
        return ViewState(ViewStateStatus.LOADING, "Loading data...", has_data)
    if error:
        status = ViewStateStatus.PARTIAL_ERROR if has_data else ViewStateStatus.FATAL_ERROR
        return ViewState(status, error, has_data)
    if has_data:
        return ViewState(ViewStateStatus.SUCCESS, "Ready", True)
    return ViewState(ViewStateStatus.EMPTY, "No Data")
