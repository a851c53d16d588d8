"""Tests for the record service."""

from datetime import date
from decimal import Decimal

import pytest

from saldo.domain.entities import DateConfig, INDEFINITE, Until
from saldo.domain.errors import NotFoundError, ValidationError

USER = "alice"


def one_time(day):
    return DateConfig(is_month_only=False, date=day)


class TestCreateRecord:
    """Tests for creating records."""

    def test_create_plain_record(self, record_service, default_accounts):
        main = default_accounts["main"]
        record_id = record_service.create_record(
            USER,
            kind="plain",
            flow="expense",
            amount=Decimal("19.99"),
            start_date=one_time(date(2024, 6, 3)),
            description="Lunch",
            category="dining",
            account_id=main.id,
        )

        record = record_service.get_record(USER, record_id)
        assert record.kind == "plain"
        assert record.flow == "expense"
        assert record.amount == Decimal("19.99")
        assert record.description == "Lunch"
        assert record.category == "dining"
        assert record.account_id == main.id
        assert record.recurrence.is_recurring is False
        assert record.recurrence.start == Until(date=date(2024, 6, 3))
        assert record.execution_date is INDEFINITE
        assert record.created_at is not None

    @pytest.mark.parametrize(
        "kind, expected_flow",
        [("debt", "expense"), ("credit", "income"), ("investment", "expense"), ("commitment", "expense")],
    )
    def test_fixed_flow(self, record_service, kind, expected_flow):
        record_id = record_service.create_record(
            USER,
            kind=kind,
            flow="income" if expected_flow == "expense" else "expense",
            amount=Decimal("10"),
            start_date=one_time(date(2024, 6, 3)),
        )

        assert record_service.get_record(USER, record_id).flow == expected_flow

    def test_date_overrides_indefinite_flag(self, record_service):
        record_id = record_service.create_record(
            USER,
            kind="plain",
            flow="income",
            amount=Decimal("2500"),
            is_recurring=True,
            start_date=DateConfig(is_month_only=True, date=date(2024, 1, 1)),
            end_date=DateConfig(is_month_only=True, date=date(2024, 12, 1), is_indefinite=True),
        )

        record = record_service.get_record(USER, record_id)
        assert record.recurrence.end == Until(date=date(2024, 12, 1), month_only=True)

    def test_debt_with_execution_date(self, record_service):
        record_id = record_service.create_record(
            USER,
            kind="debt",
            amount=Decimal("200"),
            start_date=one_time(date(2024, 1, 5)),
            execution_date=one_time(date(2024, 6, 15)),
        )

        record = record_service.get_record(USER, record_id)
        assert record.execution_date == Until(date=date(2024, 6, 15))

    def test_unknown_kind(self, record_service):
        with pytest.raises(ValidationError, match="Unknown record kind"):
            record_service.create_record(
                USER, kind="loan", amount=Decimal("1"), start_date=one_time(date(2024, 1, 1))
            )

    def test_plain_requires_flow(self, record_service):
        with pytest.raises(ValidationError, match="flow"):
            record_service.create_record(
                USER, kind="plain", amount=Decimal("1"), start_date=one_time(date(2024, 1, 1))
            )

    def test_negative_amount(self, record_service):
        with pytest.raises(ValidationError, match="negative"):
            record_service.create_record(
                USER,
                kind="plain",
                flow="income",
                amount=Decimal("-1"),
                start_date=one_time(date(2024, 1, 1)),
            )

    def test_probability_only_on_credits(self, record_service):
        with pytest.raises(ValidationError, match="credit"):
            record_service.create_record(
                USER,
                kind="debt",
                amount=Decimal("1"),
                start_date=one_time(date(2024, 1, 1)),
                probability=50,
            )

    def test_probability_must_be_allowed(self, record_service):
        with pytest.raises(ValidationError, match="Probability"):
            record_service.create_record(
                USER,
                kind="credit",
                amount=Decimal("1"),
                start_date=one_time(date(2024, 1, 1)),
                probability=60,
            )

    def test_plain_rejects_execution_date(self, record_service):
        with pytest.raises(ValidationError, match="execution"):
            record_service.create_record(
                USER,
                kind="plain",
                flow="income",
                amount=Decimal("1"),
                start_date=one_time(date(2024, 1, 1)),
                execution_date=one_time(date(2024, 2, 1)),
            )

    def test_one_time_record_needs_a_date(self, record_service):
        with pytest.raises(ValidationError, match="date"):
            record_service.create_record(USER, kind="credit", amount=Decimal("1"))

    def test_unknown_account(self, record_service):
        with pytest.raises(NotFoundError):
            record_service.create_record(
                USER,
                kind="plain",
                flow="income",
                amount=Decimal("1"),
                start_date=one_time(date(2024, 1, 1)),
                account_id=999,
            )

    def test_account_of_other_user(self, record_service, account_service):
        other_id = account_service.create_piggy_bank("bob", "Bob's savings")

        with pytest.raises(NotFoundError):
            record_service.create_record(
                USER,
                kind="plain",
                flow="income",
                amount=Decimal("1"),
                start_date=one_time(date(2024, 1, 1)),
                account_id=other_id,
            )


class TestUpdateAndDelete:
    """Tests for updating and deleting records."""

    def test_update_fields(self, record_service, piggy_bank):
        record_id = record_service.create_record(
            USER, kind="credit", amount=Decimal("100"), start_date=one_time(date(2024, 1, 1))
        )

        record_service.update_record(
            USER,
            record_id,
            amount=Decimal("150"),
            description="Refund",
            account_id=piggy_bank.id,
            probability=70,
        )

        record = record_service.get_record(USER, record_id)
        assert record.amount == Decimal("150")
        assert record.description == "Refund"
        assert record.account_id == piggy_bank.id
        assert record.probability == 70

    def test_update_recurrence_keeps_other_side(self, record_service):
        record_id = record_service.create_record(
            USER,
            kind="plain",
            flow="expense",
            amount=Decimal("150"),
            is_recurring=True,
            start_date=DateConfig(is_month_only=True, date=date(2024, 1, 1)),
        )

        record_service.update_record(
            USER, record_id, end_date=DateConfig(is_month_only=True, date=date(2024, 3, 1))
        )

        recurrence = record_service.get_record(USER, record_id).recurrence
        assert recurrence.is_recurring is True
        assert recurrence.start == Until(date=date(2024, 1, 1), month_only=True)
        assert recurrence.end == Until(date=date(2024, 3, 1), month_only=True)

    def test_update_execution_date(self, record_service):
        record_id = record_service.create_record(
            USER, kind="debt", amount=Decimal("10"), start_date=one_time(date(2024, 1, 1))
        )

        record_service.update_record(USER, record_id, execution_date=one_time(date(2024, 5, 5)))

        assert record_service.get_record(USER, record_id).execution_date == Until(date(2024, 5, 5))

    def test_update_rejects_negative_amount(self, record_service):
        record_id = record_service.create_record(
            USER, kind="debt", amount=Decimal("10"), start_date=one_time(date(2024, 1, 1))
        )

        with pytest.raises(ValidationError):
            record_service.update_record(USER, record_id, amount=Decimal("-5"))

    def test_update_missing_record(self, record_service):
        with pytest.raises(NotFoundError):
            record_service.update_record(USER, 42, amount=Decimal("1"))

    def test_update_to_one_time_needs_a_date(self, record_service):
        record_id = record_service.create_record(
            USER, kind="plain", flow="income", amount=Decimal("2500"), is_recurring=True
        )

        with pytest.raises(ValidationError, match="need a date"):
            record_service.update_record(USER, record_id, is_recurring=False)

        assert record_service.get_record(USER, record_id).recurrence.is_recurring is True

    def test_update_to_one_time_with_date(self, record_service):
        record_id = record_service.create_record(
            USER, kind="plain", flow="income", amount=Decimal("2500"), is_recurring=True
        )

        record_service.update_record(
            USER, record_id, is_recurring=False, start_date=one_time(date(2024, 6, 1))
        )

        recurrence = record_service.get_record(USER, record_id).recurrence
        assert recurrence.is_recurring is False
        assert recurrence.start == Until(date=date(2024, 6, 1))

    def test_update_one_time_debt_keeps_execution_date(self, record_service):
        record_id = record_service.create_record(
            USER, kind="debt", amount=Decimal("10"), execution_date=one_time(date(2024, 5, 5))
        )

        record_service.update_record(
            USER, record_id, start_date=DateConfig(is_indefinite=True)
        )

        assert record_service.get_record(USER, record_id).execution_date == Until(date(2024, 5, 5))

    def test_delete_record(self, record_service):
        record_id = record_service.create_record(
            USER, kind="debt", amount=Decimal("10"), start_date=one_time(date(2024, 1, 1))
        )

        record_service.delete_record(USER, record_id)

        assert record_service.get_record(USER, record_id) is None

    def test_delete_missing_record(self, record_service):
        with pytest.raises(NotFoundError):
            record_service.delete_record(USER, 42)

    def test_records_are_scoped_by_user(self, record_service):
        record_id = record_service.create_record(
            "bob", kind="debt", amount=Decimal("10"), start_date=one_time(date(2024, 1, 1))
        )

        assert record_service.get_record(USER, record_id) is None
        with pytest.raises(NotFoundError):
            record_service.delete_record(USER, record_id)


class TestListRecords:
    """Tests for listing records."""

    @pytest.fixture
    def records(self, record_service):
        return {
            "salary": record_service.create_record(
                USER,
                kind="plain",
                flow="income",
                amount=Decimal("2500"),
                is_recurring=True,
                start_date=DateConfig(is_month_only=True, date=date(2024, 1, 1)),
            ),
            "debt": record_service.create_record(
                USER,
                kind="debt",
                amount=Decimal("200"),
                start_date=one_time(date(2024, 1, 5)),
                execution_date=one_time(date(2024, 6, 15)),
            ),
            "credit": record_service.create_record(
                USER, kind="credit", amount=Decimal("50"), start_date=one_time(date(2024, 2, 1))
            ),
        }

    def test_list_all_newest_first(self, record_service, records):
        ids = [r.id for r in record_service.list_records(USER)]
        assert ids == [records["credit"], records["debt"], records["salary"]]

    def test_filter_by_kind(self, record_service, records):
        listed = record_service.list_records(USER, kind="debt")
        assert [r.id for r in listed] == [records["debt"]]

    def test_filter_by_month(self, record_service, records):
        listed = record_service.list_records(USER, target_month=date(2024, 6, 1))
        assert {r.id for r in listed} == {records["salary"], records["debt"]}

    def test_filter_by_unknown_kind(self, record_service, records):
        with pytest.raises(ValidationError):
            record_service.list_records(USER, kind="loan")


class TestSettlement:
    """Tests for settling debts and credits."""

    def test_settle_debt(self, record_service, default_accounts):
        main = default_accounts["main"]
        debt_id = record_service.create_record(
            USER,
            kind="debt",
            amount=Decimal("200"),
            start_date=one_time(date(2024, 1, 5)),
            description="Loan to Marco",
            category="gifts",
            account_id=main.id,
        )

        payment_id = record_service.settle_record(USER, debt_id, date(2024, 7, 1))

        payment = record_service.get_record(USER, payment_id)
        assert payment.kind == "plain"
        assert payment.flow == "expense"
        assert payment.amount == Decimal("200")
        assert payment.description == "Payment: Loan to Marco"
        assert payment.category == "gifts"
        assert payment.account_id == main.id
        assert payment.recurrence.is_recurring is False
        assert payment.recurrence.start == Until(date=date(2024, 7, 1))
        assert record_service.get_record(USER, debt_id) is not None

    def test_settle_credit_month_only(self, record_service):
        credit_id = record_service.create_record(
            USER,
            kind="credit",
            amount=Decimal("50"),
            start_date=one_time(date(2024, 1, 5)),
            description="Dinner refund",
        )

        collection_id = record_service.settle_record(
            USER, credit_id, date(2024, 2, 1), month_only=True
        )

        collection = record_service.get_record(USER, collection_id)
        assert collection.flow == "income"
        assert collection.description == "Collection: Dinner refund"
        assert collection.recurrence.start == Until(date=date(2024, 2, 1), month_only=True)

    @pytest.mark.parametrize("kind", ["investment", "commitment"])
    def test_only_debts_and_credits(self, record_service, kind):
        record_id = record_service.create_record(
            USER, kind=kind, amount=Decimal("50"), start_date=one_time(date(2024, 1, 5))
        )

        with pytest.raises(ValidationError, match="only debts and credits"):
            record_service.settle_record(USER, record_id, date(2024, 2, 1))

    def test_settle_missing_record(self, record_service):
        with pytest.raises(NotFoundError):
            record_service.settle_record(USER, 42, date(2024, 2, 1))


class TestTransfer:
    """Tests for transfers between accounts."""

    def test_transfer_creates_two_records(self, record_service, default_accounts, piggy_bank):
        main = default_accounts["main"]

        expense_id, income_id = record_service.transfer(
            USER, main.id, piggy_bank.id, Decimal("100"), date(2024, 3, 1), description="Savings"
        )

        expense = record_service.get_record(USER, expense_id)
        income = record_service.get_record(USER, income_id)
        assert (expense.account_id, expense.flow) == (main.id, "expense")
        assert (income.account_id, income.flow) == (piggy_bank.id, "income")
        for record in (expense, income):
            assert record.kind == "plain"
            assert record.amount == Decimal("100")
            assert record.description == "Transfer: Savings"
            assert record.recurrence.start == Until(date=date(2024, 3, 1))

    def test_transfer_default_description(self, record_service, default_accounts, piggy_bank):
        expense_id, _ = record_service.transfer(
            USER, default_accounts["main"].id, piggy_bank.id, Decimal("1"), date(2024, 3, 1)
        )

        assert record_service.get_record(USER, expense_id).description == "Transfer: Transfer"

    def test_transfer_to_same_account(self, record_service, piggy_bank):
        with pytest.raises(ValidationError, match="itself"):
            record_service.transfer(USER, piggy_bank.id, piggy_bank.id, Decimal("1"), date(2024, 3, 1))

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_transfer_needs_positive_amount(self, record_service, default_accounts, piggy_bank, amount):
        with pytest.raises(ValidationError, match="positive"):
            record_service.transfer(
                USER, default_accounts["main"].id, piggy_bank.id, Decimal(amount), date(2024, 3, 1)
            )

    def test_transfer_unknown_account(self, record_service, piggy_bank):
        with pytest.raises(NotFoundError):
            record_service.transfer(USER, 999, piggy_bank.id, Decimal("1"), date(2024, 3, 1))

    def test_transfer_is_stored_in_one_batch(
        self, record_service, temp_store, default_accounts, piggy_bank, monkeypatch
    ):
        batches = []
        create_records = temp_store.create_records

        def recording_create_records(user_id, records):
            batches.append(len(records))
            return create_records(user_id, records)

        monkeypatch.setattr(temp_store, "create_records", recording_create_records)

        record_service.transfer(
            USER, default_accounts["main"].id, piggy_bank.id, Decimal("5"), date(2024, 3, 1)
        )

        assert batches == [2]
