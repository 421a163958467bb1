#!/usr/bin/env python3
"""Generate a demo loan book and print its dashboard.

With ``--output`` the book is written as JSON files (clients.json,
loans.json, expenses.json) that ``JsonFileStore`` can load back.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_tracker.config import LoanTrackerConfig
from loan_tracker.dates import format_date
from loan_tracker.engine import build_dashboard, build_profit_report
from loan_tracker.engine.installments import format_installment
from loan_tracker.logging import setup_logging
from loan_tracker.money import format_currency
from loan_tracker.scenarios import DemoBookScenario
from loan_tracker.store import JsonFileStore, LoanBookStore


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--clients", type=int, default=20, help="Number of clients")
    parser.add_argument("--loans-per-client", type=int, default=2)
    parser.add_argument("--expenses", type=int, default=15)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=None, help="Directory for JSON files")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON files")
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard")
    return parser.parse_args(argv)


def print_dashboard(store: LoanBookStore, config: LoanTrackerConfig) -> None:
    """Print dashboard and profit report figures."""
    loans = store.calculated_loans()
    expenses = store.list_expenses()
    dashboard = build_dashboard(loans, expenses, upcoming_limit=config.report.upcoming_limit)
    report = build_profit_report(
        loans,
        expenses,
        months=config.report.history_months,
        trailing_days=config.report.trailing_days,
        clients=store.list_clients(),
    )

    print(f"\n{'='*60}")
    print("Dashboard")
    print("=" * 60)
    print(f"Total emprestado:   {format_currency(dashboard.total_lent_active)}")
    print(f"Total a receber:    {format_currency(dashboard.total_receivable)}")
    print(
        f"Total vencido:      {format_currency(dashboard.total_overdue)}"
        f" ({dashboard.overdue_count} atrasados)"
    )
    print(f"Lucro líquido:      {format_currency(dashboard.net_realized_profit)}")
    print(f"Multas recebidas:   {format_currency(dashboard.penalties_collected)}")
    print(f"Multas pendentes:   {format_currency(dashboard.penalties_pending)}")

    forecast = dashboard.receivable_forecast
    print("\nPrevisão de recebimentos")
    print(f"  Hoje: {format_currency(forecast.today)}  Semana: {format_currency(forecast.week)}")
    print(f"  Mês:  {format_currency(forecast.month)}  Ano:    {format_currency(forecast.year)}")

    print("\nPróximos vencimentos")
    for loan in dashboard.upcoming:
        print(
            f"  {format_date(loan.due_date)}  {loan.client_name:<30}"
            f" {format_installment(loan):>5}  {format_currency(loan.final_total)}"
        )

    print(f"\n{'='*60}")
    print("Lucros")
    print("=" * 60)
    print(f"Bruto:        {format_currency(report.gross_profit)}")
    print(f"Despesas:     {format_currency(report.total_expenses)}")
    print(f"Líquido:      {format_currency(report.net_profit)}")
    print(f"Este mês:     {format_currency(report.month_profit)}")
    print(f"Últimos {config.report.trailing_days} dias: {format_currency(report.trailing_profit)}")
    for bucket in report.monthly:
        bar = "#" * int(bucket.height / 5)
        print(f"  {bucket.label}  {bar:<20} {format_currency(bucket.total)}")

    print("\nLucro por cliente")
    for entry in report.by_client[:10]:
        print(f"  {entry.client_name:<30} {format_currency(entry.total)}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = LoanTrackerConfig.from_env()
    setup_logging(config.log_level, args.log_format)

    store: LoanBookStore
    if args.output is not None:
        config.storage.data_dir = args.output
        config.storage.pretty_json = args.pretty
        store = JsonFileStore.from_config(config)
    else:
        store = LoanBookStore(unknown_client_label=config.report.unknown_client_label)

    scenario = DemoBookScenario(
        num_clients=args.clients,
        loans_per_client=args.loans_per_client,
        num_expenses=args.expenses,
        seed=args.seed if args.seed is not None else config.seed,
        store=store,
    )
    scenario.generate()
    print_dashboard(store, config)

    if args.output is not None:
        print(f"\nJSON files written to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
