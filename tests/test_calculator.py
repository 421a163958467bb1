"""Tests for the loan calculation engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_tracker.engine.calculator import (
    calculate_all,
    calculate_interest,
    calculate_loan_details,
    calculate_penalty,
    reference_date,
    resolve_client_name,
)
from loan_tracker.models import CalculatedLoan, Client, InterestType, LoanStatus, PenaltyType


class TestInterest:
    """Tests for interest models."""

    def test_percentage_interest(self, make_loan) -> None:
        loan = make_loan(amount=Decimal("1000"), interest_rate=Decimal("10"))
        assert calculate_interest(loan) == Decimal("100")

    def test_fixed_value_interest_ignores_amount(self, make_loan) -> None:
        small = make_loan(
            amount=Decimal("10"), interest_rate=Decimal("200"), interest_type=InterestType.FIXED_VALUE
        )
        large = make_loan(
            amount=Decimal("99999"),
            interest_rate=Decimal("200"),
            interest_type=InterestType.FIXED_VALUE,
        )
        assert calculate_interest(small) == Decimal("200")
        assert calculate_interest(large) == Decimal("200")

    def test_float_inputs_do_not_leak_binary_error(self, make_loan) -> None:
        loan = make_loan(amount=0.1, interest_rate=10.0)
        assert calculate_interest(loan) == Decimal("0.01")


class TestReferenceDate:
    """Tests for overdue determination."""

    def test_paid_loan_uses_paid_date(self, make_loan) -> None:
        loan = make_loan(status=LoanStatus.PAID, paid_at=datetime(2024, 1, 15, 18, 0))
        ref, overdue = reference_date(loan, date(2030, 1, 1))
        assert ref == date(2024, 1, 15)
        assert overdue is True

    def test_paid_on_due_date_is_not_overdue(self, make_loan) -> None:
        loan = make_loan(status=LoanStatus.PAID, paid_at=datetime(2024, 1, 10, 23, 59))
        _, overdue = reference_date(loan, date(2030, 1, 1))
        assert overdue is False

    def test_active_loan_uses_today(self, make_loan) -> None:
        loan = make_loan(due_date=date(2024, 1, 10))
        ref, overdue = reference_date(loan, date(2024, 1, 11))
        assert ref == date(2024, 1, 11)
        assert overdue is True

    def test_paid_without_paid_at_is_never_overdue(self, make_loan) -> None:
        loan = make_loan(status=LoanStatus.PAID, paid_at=None)
        _, overdue = reference_date(loan, date(2030, 1, 1))
        assert overdue is False


class TestPenalty:
    """Tests for the penalty models."""

    base = Decimal("1100")

    def test_daily_percentage_is_linear(self) -> None:
        penalty = calculate_penalty(PenaltyType.DAILY_PERCENTAGE, Decimal("1"), self.base, 5)
        assert penalty == Decimal("55")

    def test_daily_value(self) -> None:
        assert calculate_penalty(PenaltyType.DAILY_VALUE, Decimal("10"), self.base, 5) == Decimal("50")

    def test_fixed_value_applied_once(self) -> None:
        one_day = calculate_penalty(PenaltyType.FIXED_VALUE, Decimal("30"), self.base, 1)
        many_days = calculate_penalty(PenaltyType.FIXED_VALUE, Decimal("30"), self.base, 90)
        assert one_day == many_days == Decimal("30")

    def test_fixed_percentage_applied_once(self) -> None:
        assert calculate_penalty(PenaltyType.FIXED, Decimal("5"), self.base, 40) == Decimal("55")

    def test_unknown_type_falls_back_to_fixed_percentage(self) -> None:
        assert calculate_penalty("SOMETHING_ELSE", Decimal("5"), self.base, 3) == Decimal("55")

    def test_no_days_no_penalty(self) -> None:
        assert calculate_penalty(PenaltyType.FIXED_VALUE, Decimal("30"), self.base, 0) == 0


class TestCalculateLoanDetails:
    """Tests for the full snapshot."""

    def test_scenario_paid_late_fixed_penalty(self, make_loan, sample_client: Client) -> None:
        """Paid five days late with a one-time 5% penalty."""
        loan = make_loan(
            amount=Decimal("1000"),
            interest_rate=Decimal("10"),
            due_date=date(2024, 1, 10),
            penalty_type=PenaltyType.FIXED,
            penalty_rate=Decimal("5"),
            status=LoanStatus.PAID,
            paid_at=datetime(2024, 1, 15),
        )

        result = calculate_loan_details(loan, [sample_client], today=date(2024, 6, 1))

        assert result.initial_interest == Decimal("100")
        assert result.base_total == Decimal("1100")
        assert result.is_overdue is True
        assert result.days_overdue == 5
        assert result.penalty_amount == Decimal("55")
        assert result.final_total == Decimal("1155")
        assert result.profit == Decimal("155")

    def test_scenario_paid_late_daily_value(self, make_loan, sample_client: Client) -> None:
        loan = make_loan(
            due_date=date(2024, 1, 10),
            penalty_type=PenaltyType.DAILY_VALUE,
            penalty_rate=Decimal("10"),
            status=LoanStatus.PAID,
            paid_at=datetime(2024, 1, 15),
        )

        result = calculate_loan_details(loan, [sample_client], today=date(2024, 6, 1))

        assert result.penalty_amount == Decimal("50")
        assert result.final_total == Decimal("1150")

    def test_scenario_fixed_value_interest_not_overdue(self, make_loan) -> None:
        loan = make_loan(
            amount=Decimal("1000"),
            interest_rate=Decimal("200"),
            interest_type=InterestType.FIXED_VALUE,
            due_date=date(2024, 2, 1),
            penalty_rate=Decimal("5"),
        )

        result = calculate_loan_details(loan, [], today=date(2024, 1, 20))

        assert result.initial_interest == Decimal("200")
        assert result.final_total == Decimal("1200")
        assert result.penalty_amount == 0
        assert result.is_overdue is False

    def test_future_due_date_is_clean(self, make_loan) -> None:
        loan = make_loan(
            due_date=date(2024, 7, 1),
            penalty_type=PenaltyType.DAILY_VALUE,
            penalty_rate=Decimal("10"),
        )

        result = calculate_loan_details(loan, [], today=date(2024, 6, 12))

        assert result.is_overdue is False
        assert result.days_overdue == 0
        assert result.penalty_amount == 0

    def test_due_today_is_not_overdue(self, make_loan) -> None:
        loan = make_loan(due_date=date(2024, 6, 12), penalty_rate=Decimal("5"))
        result = calculate_loan_details(loan, [], today=date(2024, 6, 12))
        assert result.is_overdue is False
        assert result.final_total == Decimal("1100")

    def test_one_day_after_due_date(self, make_loan) -> None:
        loan = make_loan(due_date=date(2024, 3, 1))
        result = calculate_loan_details(loan, [], today=date(2024, 3, 2))
        assert result.days_overdue == 1

    def test_late_night_payment_keeps_its_calendar_day(self, make_loan) -> None:
        """A payment stamped just before midnight with an offset stays on its day."""
        loan = make_loan(
            due_date=date(2024, 3, 1),
            status=LoanStatus.PAID,
            paid_at="2024-03-02T23:59:00-03:00",
        )
        result = calculate_loan_details(loan, [], today=date(2024, 6, 1))
        assert result.days_overdue == 1

    def test_active_overdue_daily_percentage(self, make_loan) -> None:
        loan = make_loan(
            due_date=date(2024, 6, 2),
            penalty_type=PenaltyType.DAILY_PERCENTAGE,
            penalty_rate=Decimal("1"),
        )

        result = calculate_loan_details(loan, [], today=date(2024, 6, 12))

        assert result.days_overdue == 10
        assert result.penalty_amount == Decimal("110")
        assert result.final_total == Decimal("1210")
        assert result.profit == Decimal("210")

    def test_paid_loan_is_stable_over_time(self, make_loan) -> None:
        loan = make_loan(
            due_date=date(2024, 1, 10),
            penalty_type=PenaltyType.DAILY_VALUE,
            penalty_rate=Decimal("10"),
            status=LoanStatus.PAID,
            paid_at=datetime(2024, 1, 11, 8, 0),
        )

        early = calculate_loan_details(loan, [], today=date(2024, 1, 11))
        late = calculate_loan_details(loan, [], today=date(2031, 12, 31))

        assert early.days_overdue == late.days_overdue == 1
        assert early.penalty_amount == late.penalty_amount == Decimal("10")
        assert early == late

    def test_identities_hold(self, make_loan) -> None:
        loan = make_loan(
            amount=Decimal("750"),
            interest_rate=Decimal("15"),
            due_date=date(2024, 5, 1),
            penalty_type=PenaltyType.DAILY_PERCENTAGE,
            penalty_rate=Decimal("0.5"),
        )

        result = calculate_loan_details(loan, [], today=date(2024, 6, 12))

        assert result.base_total == result.amount + result.initial_interest
        assert result.final_total == result.base_total + result.penalty_amount
        assert result.profit == result.final_total - result.amount

    def test_pure_and_does_not_mutate_input(self, make_loan, sample_client: Client) -> None:
        loan = make_loan(due_date=date(2024, 5, 1), penalty_rate=Decimal("5"))
        before = repr(loan)

        first = calculate_loan_details(loan, [sample_client], today=date(2024, 6, 12))
        second = calculate_loan_details(loan, [sample_client], today=date(2024, 6, 12))

        assert first == second
        assert repr(loan) == before
        assert isinstance(first, CalculatedLoan)
        assert first.loan_id == loan.loan_id

    def test_client_name_resolved(self, make_loan, sample_client: Client) -> None:
        result = calculate_loan_details(make_loan(), [sample_client], today=date(2024, 1, 1))
        assert result.client_name == "Maria Souza"

    def test_missing_client_uses_fallback(self, make_loan) -> None:
        result = calculate_loan_details(
            make_loan(client_id="gone"), [], today=date(2024, 1, 1)
        )
        assert result.client_name == "Cliente Desconhecido"

    def test_custom_fallback_label(self, make_loan) -> None:
        result = calculate_loan_details(
            make_loan(client_id="gone"), [], today=date(2024, 1, 1), unknown_client_label="?"
        )
        assert result.client_name == "?"

    def test_negative_amount_is_not_rejected(self, make_loan) -> None:
        result = calculate_loan_details(
            make_loan(amount=Decimal("-100")), [], today=date(2024, 1, 1)
        )
        assert result.final_total == Decimal("-110")

    def test_defaults_to_system_date(self, make_loan) -> None:
        loan = make_loan(due_date=date(2999, 1, 1))
        assert calculate_loan_details(loan, []).is_overdue is False


class TestHelpers:
    """Tests for roster lookup and batch calculation."""

    def test_resolve_client_name_empty_name(self) -> None:
        client = Client(client_id="c1", name="", phone="", created_at=datetime(2024, 1, 1))
        assert resolve_client_name("c1", [client]) == "Cliente Desconhecido"

    def test_calculate_all_accepts_generators(self, make_loan, sample_client: Client) -> None:
        loans = [make_loan(), make_loan(client_id="other")]
        results = calculate_all(
            (loan for loan in loans), (c for c in [sample_client]), today=date(2024, 1, 1)
        )
        assert [r.client_name for r in results] == ["Maria Souza", "Cliente Desconhecido"]

    @pytest.mark.parametrize(
        "penalty_type,rate,expected",
        [
            (PenaltyType.DAILY_PERCENTAGE, "2", "220"),
            (PenaltyType.DAILY_VALUE, "3", "30"),
            (PenaltyType.FIXED_VALUE, "25", "25"),
            (PenaltyType.FIXED, "10", "110"),
        ],
    )
    def test_ten_days_late(self, make_loan, penalty_type, rate, expected) -> None:
        loan = make_loan(
            due_date=date(2024, 6, 2), penalty_type=penalty_type, penalty_rate=Decimal(rate)
        )
        result = calculate_loan_details(loan, [], today=date(2024, 6, 12))
        assert result.penalty_amount == Decimal(expected)
