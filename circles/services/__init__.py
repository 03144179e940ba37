# This makes 'services' a Python package
"""
Services Package
================

Business logic layer for Circles.

All authorization and data access rules are handled here.
Routes should call these services, not manipulate models directly.
"""

from circles.services.authorization_service import (
    can_access_circle,
    can_add_member,
    can_create_circle,
    count_circles_by_owner,
    is_circle_member,
    is_circle_owner,
    require_authorization,
    AuthorizationError,
    QuotaExceededError
)

from circles.services.circle_service import (
    create_circle,
    get_circle,
    get_circles_by_user,
    CircleError,
    CircleNotFoundError
)

from circles.services.membership_service import (
    add_member,
    get_members,
    MembershipError
)

from circles.services.expense_service import (
    get_bill_categories,
    seed_bill_categories,
    get_bills,
    add_bill,
    remove_bill,
    get_budgets,
    add_budget,
    remove_budget,
    ExpenseError
)

from circles.services.user_service import (
    add_new_user,
    authenticate,
    get_user_by_email,
    get_user_by_ext_id,
    UserError,
    UserNotFoundError
)
