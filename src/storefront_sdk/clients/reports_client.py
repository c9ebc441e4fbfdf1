from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from ..exceptions import ValidationError
from ..http_client import unwrap_data
from ..models import CustomerReportRow
from .base import BaseClient


def to_epoch_millis(value: date | datetime | int) -> int:
    if isinstance(value, bool):
        raise TypeError("Expected a date, datetime or epoch milliseconds")
    if isinstance(value, int):
        return value
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


@dataclass
class ReportsClient(BaseClient):
    def customer_report(
        self,
        start_at: date | datetime | int | None = None,
        end_at: date | datetime | int | None = None,
    ) -> list[CustomerReportRow]:
        params = None
        # the range is only sent when both ends are known
        if start_at is not None and end_at is not None:
            start_ms, end_ms = to_epoch_millis(start_at), to_epoch_millis(end_at)
            if start_ms > end_ms:
                raise ValidationError(
                    code="REPORT_INVALID_DATE_RANGE",
                    message="Report start must not be after its end",
                    details={"start_at": start_ms, "end_at": end_ms},
                    trace_id=None,
                    status_code=400,
                )
            params = {"start_at": start_ms, "end_at": end_ms}
        payload = self._request(
            "GET",
            "/report/order-customer",
            params=params,
            module="reports",
            operation="customer_report",
        )
        data = unwrap_data(payload)
        if not isinstance(data, list):
            raise ValueError("Expected customer report response to be a JSON list")
        return [CustomerReportRow.model_validate(row) for row in data if isinstance(row, dict)]
