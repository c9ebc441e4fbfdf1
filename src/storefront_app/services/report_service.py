from __future__ import annotations

import logging
from datetime import date, datetime

from storefront_sdk import ApiSession
from storefront_sdk.exceptions import ApiError
from storefront_sdk.models import CustomerReportRow

from ..shop.catalog_cache import ErrorChannel

logger = logging.getLogger(__name__)

DateLike = date | datetime | int


class ReportService:
    def __init__(self, session: ApiSession, *, on_error: ErrorChannel | None = None) -> None:
        self.session = session
        self.on_error = on_error
        self.rows: list[CustomerReportRow] = []
        self.loaded = False
        self.error: str | None = None

    def load_customer_report(
        self, start_at: DateLike | None = None, end_at: DateLike | None = None
    ) -> list[CustomerReportRow]:
        self.loaded = False
        self.error = None
        try:
            self.rows = self.session.reports_client().customer_report(start_at, end_at)
        except ApiError as exc:
            self.error = exc.message
            logger.warning("customer_report_failed", extra={"code": exc.code, "trace_id": exc.trace_id})
            if self.on_error:
                self.on_error(exc, "fetch_customer_report")
        self.loaded = True
        return list(self.rows)
