"""Tests for circle-scoped bills, budgets and bill categories."""

from datetime import date

import pytest

from circles.extensions import db
from circles.models import Bill, BillCategory, Budget
from circles.services.authorization_service import AuthorizationError
from circles.services.circle_service import create_circle
from circles.services.expense_service import (
    add_bill, add_budget, get_bill_categories, get_bills, get_budgets,
    remove_bill, remove_budget, seed_bill_categories, ExpenseError
)
from circles.services.membership_service import add_member


@pytest.fixture
def circles(owner, member):
    """Owner owns circles 1 and 2; member only belongs to circle 1."""
    first = create_circle(owner.id, 'Team A')
    second = create_circle(owner.id, 'Team B')
    add_member(first.id, member.email, owner.id)
    return first, second


class TestBills:

    def test_added_bill_is_listed(self, circles, owner, category):
        first, _ = circles
        bill = add_bill(first.id, owner.id, 'Pizza', 42.5, category.id, date(2024, 5, 1))

        bills = get_bills(owner.id, first.id)

        assert [b.id for b in bills] == [bill.id]
        data = bills[0].to_dict()
        assert data['billName'] == 'Pizza'
        assert data['billAmount'] == 42.5
        assert data['categoryName'] == category.category_name
        assert data['billDate'] == '2024-05-01'

    def test_newest_bill_date_first_ties_in_insertion_order(self, circles, owner, category):
        first, _ = circles
        old = add_bill(first.id, owner.id, 'Old', 1, category.id, date(2024, 1, 1))
        tie_a = add_bill(first.id, owner.id, 'Tie A', 2, category.id, date(2024, 3, 1))
        new = add_bill(first.id, owner.id, 'New', 3, category.id, date(2024, 6, 1))
        tie_b = add_bill(first.id, owner.id, 'Tie B', 4, category.id, date(2024, 3, 1))

        ids = [b.id for b in get_bills(owner.id, first.id)]
        assert ids == [new.id, tie_a.id, tie_b.id, old.id]

    def test_member_sees_owner_bills(self, circles, owner, member, category):
        first, _ = circles
        add_bill(first.id, owner.id, 'Groceries', 80, category.id, date(2024, 2, 2))

        assert [b.bill_name for b in get_bills(member.id, first.id)] == ['Groceries']

    def test_non_member_sees_nothing(self, circles, owner, member, outsider, category):
        first, second = circles
        add_bill(first.id, owner.id, 'Rent', 900, category.id, date(2024, 2, 1))
        add_bill(second.id, owner.id, 'Fuel', 60, category.id, date(2024, 2, 1))

        assert get_bills(outsider.id, first.id) == []
        assert get_bills(member.id, second.id) == []

    def test_outsider_cannot_add_bill(self, circles, outsider, category):
        first, _ = circles
        with pytest.raises(AuthorizationError):
            add_bill(first.id, outsider.id, 'Sneaky', 10, category.id, date(2024, 1, 1))
        assert Bill.query.count() == 0

    def test_unknown_category(self, circles, owner):
        first, _ = circles
        with pytest.raises(ExpenseError, match='category'):
            add_bill(first.id, owner.id, 'Mystery', 10, 999, date(2024, 1, 1))

    def test_remove_with_mismatched_circle_removes_nothing(self, circles, owner, category):
        first, second = circles
        bill = add_bill(first.id, owner.id, 'Pizza', 20, category.id, date(2024, 1, 1))

        assert remove_bill(owner.id, bill.id, second.id) == 0
        assert db.session.get(Bill, bill.id) is not None

    def test_outsider_remove_removes_nothing(self, circles, owner, outsider, category):
        first, _ = circles
        bill = add_bill(first.id, owner.id, 'Pizza', 20, category.id, date(2024, 1, 1))

        assert remove_bill(outsider.id, bill.id, first.id) == 0
        assert Bill.query.count() == 1

    def test_member_removes_bill_once(self, circles, owner, member, category):
        first, _ = circles
        bill = add_bill(first.id, owner.id, 'Pizza', 20, category.id, date(2024, 1, 1))
        bill_id = bill.id

        assert remove_bill(member.id, bill_id, first.id) == 1
        assert remove_bill(member.id, bill_id, first.id) == 0
        assert get_bills(owner.id, first.id) == []


class TestBudgets:

    def test_latest_start_date_first(self, circles, owner):
        first, _ = circles
        spring = add_budget(first.id, owner.id, 'Spring', 500, date(2024, 3, 1), date(2024, 5, 31))
        winter = add_budget(first.id, owner.id, 'Winter', 300, date(2024, 1, 1), date(2024, 2, 28))
        summer = add_budget(first.id, owner.id, 'Summer', 800, date(2024, 6, 1), date(2024, 8, 31))

        budgets = get_budgets(owner.id, first.id)

        assert [b.id for b in budgets] == [summer.id, spring.id, winter.id]
        assert budgets[0].to_dict()['budgetEndDate'] == '2024-08-31'

    def test_non_member_sees_nothing(self, circles, owner, member):
        _, second = circles
        add_budget(second.id, owner.id, 'Trip', 1000, date(2024, 7, 1), date(2024, 7, 15))

        assert get_budgets(member.id, second.id) == []

    def test_end_before_start_rejected(self, circles, owner):
        first, _ = circles
        with pytest.raises(ExpenseError):
            add_budget(first.id, owner.id, 'Broken', 10, date(2024, 5, 1), date(2024, 4, 1))
        assert Budget.query.count() == 0

    def test_outsider_cannot_add_budget(self, circles, outsider):
        first, _ = circles
        with pytest.raises(AuthorizationError):
            add_budget(first.id, outsider.id, 'Sneaky', 10, date(2024, 1, 1), date(2024, 1, 2))

    def test_remove_scoped_by_circle(self, circles, owner):
        first, second = circles
        budget = add_budget(first.id, owner.id, 'Trip', 100, date(2024, 1, 1), date(2024, 1, 31))
        budget_id = budget.id

        assert remove_budget(owner.id, budget_id, second.id) == 0
        assert remove_budget(owner.id, budget_id, first.id) == 1
        assert get_budgets(owner.id, first.id) == []


class TestCategories:

    def test_default_categories_seeded(self, app_ctx):
        names = [c.category_name for c in get_bill_categories()]
        assert names == app_ctx.config['DEFAULT_BILL_CATEGORIES']

    def test_seeding_is_idempotent(self, app_ctx):
        assert seed_bill_categories(app_ctx.config['DEFAULT_BILL_CATEGORIES']) == 0
        assert seed_bill_categories(['Pets']) == 1
        assert BillCategory.query.filter_by(category_name='Pets').count() == 1

    def test_none_when_empty(self, app_ctx):
        BillCategory.query.delete()
        db.session.commit()
        assert get_bill_categories() is None
