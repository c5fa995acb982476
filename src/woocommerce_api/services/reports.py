"""Reports.

Read-only endpoints; totals reports return one row per status or type.
"""

from typing import List, Optional

from ..models import QueryOptions, Report, TotalsReport
from .base import ResourceService, decode_as

REPORTS_BASE_PATH = "reports"


class ReportService(ResourceService[Report]):
    model = Report

    def list(self, options: Optional[QueryOptions] = None) -> List[Report]:
        return decode_as(List[Report], self.client.get(REPORTS_BASE_PATH, options) or [])

    def get(self, report_id: str, options: Optional[QueryOptions] = None) -> List[Report]:
        """Fetch a named report such as ``sales`` or ``top_sellers``.

        Report bodies differ per report; rows are kept as permissive models.
        """
        data = self.client.get(f"{REPORTS_BASE_PATH}/{report_id}", options)
        return decode_as(List[Report], data or [])

    def _totals(self, kind: str, options: Optional[QueryOptions]) -> List[TotalsReport]:
        data = self.client.get(f"{REPORTS_BASE_PATH}/{kind}/totals", options)
        return decode_as(List[TotalsReport], data or [])

    def get_total_orders(self, options: Optional[QueryOptions] = None) -> List[TotalsReport]:
        return self._totals("orders", options)

    def get_total_customers(self, options: Optional[QueryOptions] = None) -> List[TotalsReport]:
        return self._totals("customers", options)

    def get_total_products(self, options: Optional[QueryOptions] = None) -> List[TotalsReport]:
        return self._totals("products", options)
