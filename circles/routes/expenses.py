"""
EXPENSE ROUTES
==============
Bills, budgets and bill categories of a circle.

Removal answers 404 both for unknown ids and for circles the caller
cannot touch.
"""

from flask import Blueprint
from flask_login import login_required, current_user
from circles.schemas import BillCreate, BudgetCreate, load_body
from circles.services.expense_service import (
    get_bill_categories, get_bills, add_bill, remove_bill,
    get_budgets, add_budget, remove_budget
)
from circles.transport import json_success, json_not_found

expenses_bp = Blueprint('expenses', __name__)


# ============== CATEGORIES ==============
@expenses_bp.route('/expenses/categories')
@login_required
def list_categories():
    categories = get_bill_categories()
    if categories is None:
        return json_not_found()
    return json_success({'categories': [c.to_dict() for c in categories]})


# ============== BILLS ==============
@expenses_bp.route('/circle/<int:circle_id>/bills')
@login_required
def list_bills(circle_id):
    bills = get_bills(current_user.id, circle_id)
    return json_success({'bills': [b.to_dict() for b in bills]})


@expenses_bp.route('/circle/<int:circle_id>/bills', methods=['POST'])
@login_required
def add_bill_route(circle_id):
    payload = load_body(BillCreate)

    bill = add_bill(
        circle_id,
        current_user.id,
        payload.bill_name,
        payload.bill_amount,
        payload.bill_category_id,
        payload.bill_date
    )
    return json_success({'billId': bill.id})


@expenses_bp.route('/circle/<int:circle_id>/bills/<int:bill_id>', methods=['DELETE'])
@login_required
def remove_bill_route(circle_id, bill_id):
    removed = remove_bill(current_user.id, bill_id, circle_id)
    if removed == 0:
        return json_not_found()
    return json_success({'rowsRemoved': removed})


# ============== BUDGETS ==============
@expenses_bp.route('/circle/<int:circle_id>/budgets')
@login_required
def list_budgets(circle_id):
    budgets = get_budgets(current_user.id, circle_id)
    return json_success({'budgets': [b.to_dict() for b in budgets]})


@expenses_bp.route('/circle/<int:circle_id>/budgets', methods=['POST'])
@login_required
def add_budget_route(circle_id):
    payload = load_body(BudgetCreate)

    budget = add_budget(
        circle_id,
        current_user.id,
        payload.budget_name,
        payload.budget_amount,
        payload.budget_start_date,
        payload.budget_end_date
    )
    return json_success({'budgetId': budget.id})


@expenses_bp.route('/circle/<int:circle_id>/budgets/<int:budget_id>', methods=['DELETE'])
@login_required
def remove_budget_route(circle_id, budget_id):
    removed = remove_budget(current_user.id, budget_id, circle_id)
    if removed == 0:
        return json_not_found()
    return json_success({'rowsRemoved': removed})
