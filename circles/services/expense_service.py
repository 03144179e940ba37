"""
EXPENSE SERVICE - BILLS AND BUDGETS
===================================

CIRCLE SCOPING RULES:
1. Listing joins on circle membership inside the query itself
2. Removal matches id, circle and membership in one DELETE
3. A removal count of 0 means "not found or not allowed", never which
4. Recording requires membership of the circle
"""

from circles.extensions import db
from circles.logger import get_logger
from circles.models import Bill, BillCategory, Budget, CircleMember
from circles.services.authorization_service import (
    can_access_circle, membership_filter, require_authorization
)

logger = get_logger(__name__)


class ExpenseError(Exception):
    """Base exception for bill and budget operations"""
    pass


# ============================================================
# BILL CATEGORIES
# ============================================================

def get_bill_categories():
    """All bill categories, or None when there are none"""
    categories = BillCategory.query.order_by(BillCategory.id.asc()).all()
    return categories or None


def seed_bill_categories(names):
    """Insert any missing default categories. Returns how many were added."""
    existing = {c.category_name for c in BillCategory.query.all()}
    added = 0
    for name in names:
        if name not in existing:
            db.session.add(BillCategory(category_name=name))
            added += 1

    if added:
        db.session.commit()
    return added


# ============================================================
# BILLS
# ============================================================

def get_bills(user_id, circle_id):
    """
    Bills of a circle, newest bill_date first.
    Ties keep insertion order. Non-members get an empty list.
    """
    return Bill.query \
        .join(CircleMember, CircleMember.circle_id == Bill.circle_id) \
        .join(BillCategory, Bill.bill_category_id == BillCategory.id) \
        .filter(CircleMember.user_id == user_id,
                CircleMember.circle_id == circle_id) \
        .order_by(Bill.bill_date.desc(), Bill.id.asc()) \
        .all()


def add_bill(circle_id, user_id, bill_name, bill_amount, bill_category_id, bill_date):
    """
    Record a bill in a circle.

    Returns: Bill
    """
    try:
        require_authorization(can_access_circle, user_id, circle_id)

        if not db.session.get(BillCategory, bill_category_id):
            raise ExpenseError("Bill category not found")

        bill = Bill(
            circle_id=circle_id,
            user_id=user_id,
            bill_name=bill_name,
            bill_amount=bill_amount,
            bill_category_id=bill_category_id,
            bill_date=bill_date
        )
        db.session.add(bill)
        db.session.commit()

        logger.info('bill_added', bill_id=bill.id, circle_id=circle_id, user_id=user_id)
        return bill

    except Exception:
        db.session.rollback()
        raise


def remove_bill(user_id, bill_id, circle_id):
    """Delete a bill. Returns the number of rows removed (0 or 1)."""
    try:
        removed = Bill.query.filter(
            Bill.id == bill_id,
            Bill.circle_id == circle_id,
            membership_filter(user_id, circle_id)
        ).delete(synchronize_session=False)
        db.session.commit()

        logger.info('bill_removed', bill_id=bill_id, circle_id=circle_id,
                    user_id=user_id, rows_removed=removed)
        return removed

    except Exception:
        db.session.rollback()
        raise


# ============================================================
# BUDGETS
# ============================================================

def get_budgets(user_id, circle_id):
    """
    Budgets of a circle, latest budget_start_date first.
    Ties keep insertion order. Non-members get an empty list.
    """
    return Budget.query \
        .join(CircleMember, CircleMember.circle_id == Budget.circle_id) \
        .filter(CircleMember.user_id == user_id,
                CircleMember.circle_id == circle_id) \
        .order_by(Budget.budget_start_date.desc(), Budget.id.asc()) \
        .all()


def add_budget(circle_id, user_id, budget_name, budget_amount,
               budget_start_date, budget_end_date):
    """
    Record a budget in a circle.

    Returns: Budget
    """
    try:
        require_authorization(can_access_circle, user_id, circle_id)

        if budget_end_date < budget_start_date:
            raise ExpenseError("Budget end date cannot be before its start date")

        budget = Budget(
            circle_id=circle_id,
            user_id=user_id,
            budget_name=budget_name,
            budget_amount=budget_amount,
            budget_start_date=budget_start_date,
            budget_end_date=budget_end_date
        )
        db.session.add(budget)
        db.session.commit()

        logger.info('budget_added', budget_id=budget.id, circle_id=circle_id,
                    user_id=user_id)
        return budget

    except Exception:
        db.session.rollback()
        raise


def remove_budget(user_id, budget_id, circle_id):
    """Delete a budget. Returns the number of rows removed (0 or 1)."""
    try:
        removed = Budget.query.filter(
            Budget.id == budget_id,
            Budget.circle_id == circle_id,
            membership_filter(user_id, circle_id)
        ).delete(synchronize_session=False)
        db.session.commit()

        logger.info('budget_removed', budget_id=budget_id, circle_id=circle_id,
                    user_id=user_id, rows_removed=removed)
        return removed

    except Exception:
        db.session.rollback()
        raise
