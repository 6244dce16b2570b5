from .calculations import monthly_revenue, monthly_storage_costs, total_margin
from .financial_service import FinancialService


__all__ = ["FinancialService", "monthly_revenue", "monthly_storage_costs", "total_margin"]
