"""Calculation, aggregation and installment engines."""

from loan_tracker.engine.aggregation import (
    ClientProfit,
    DashboardSummary,
    Forecast,
    MonthlyBucket,
    ProfitReport,
    build_dashboard,
    build_profit_report,
    gross_realized_profit,
    interest_forecast,
    month_to_date_profit,
    monthly_profit_series,
    net_realized_profit,
    profit_by_client,
    receivable_forecast,
    total_expenses,
    trailing_profit,
)
from loan_tracker.engine.calculator import calculate_all, calculate_loan_details
from loan_tracker.engine.installments import (
    InstallmentRequest,
    InstallmentSimulation,
    build_installment_plan,
    format_installment,
    simulate_installments,
)
from loan_tracker.engine.status import mark_active, mark_paid, set_status

__all__ = [
    "ClientProfit",
    "DashboardSummary",
    "Forecast",
    "InstallmentRequest",
    "InstallmentSimulation",
    "MonthlyBucket",
    "ProfitReport",
    "build_dashboard",
    "build_installment_plan",
    "build_profit_report",
    "calculate_all",
    "calculate_loan_details",
    "format_installment",
    "gross_realized_profit",
    "interest_forecast",
    "mark_active",
    "mark_paid",
    "month_to_date_profit",
    "monthly_profit_series",
    "net_realized_profit",
    "profit_by_client",
    "receivable_forecast",
    "set_status",
    "simulate_installments",
    "total_expenses",
    "trailing_profit",
]
