"""
CENTRALIZED AUTHORIZATION SERVICE
==================================

All permission checks live here.
Routes and other services call these functions.

Check functions return (allowed, reason). Use require_authorization
to turn a denial into an exception.
"""

from flask import current_app
from circles.models import Circle, CircleMember, User
from circles.extensions import db


QUOTA_EXCEEDED_REASON = 'You reached the free account limit.'
NOT_A_MEMBER_REASON = 'You are not a member of this circle'


class AuthorizationError(Exception):
    """Raised when authorization fails"""
    pass


class QuotaExceededError(AuthorizationError):
    """Raised when an owner already has the maximum number of circles"""
    pass


# ============================================================
# CIRCLE MEMBERSHIP CHECKS
# ============================================================

def membership_filter(user_id, circle_id):
    """
    SQL predicate: a membership row exists for (user_id, circle_id).

    Embed this in the read or delete statement itself so the check and
    the access happen in one query.
    """
    return db.exists().where(db.and_(
        CircleMember.user_id == user_id,
        CircleMember.circle_id == circle_id
    ))


def get_membership(user_id, circle_id):
    """Get membership record"""
    return CircleMember.query.filter_by(
        user_id=user_id,
        circle_id=circle_id
    ).first()


def is_circle_member(user_id, circle_id):
    """Check if user belongs to the circle, owner or not"""
    return get_membership(user_id, circle_id) is not None


def is_circle_owner(user_id, circle_id):
    """Check if user is an owner of the circle"""
    membership = get_membership(user_id, circle_id)
    return bool(membership and membership.is_owner)


# ============================================================
# CIRCLE CREATION (QUOTA)
# ============================================================

def count_circles_by_owner(owner_id):
    """Number of circles created by this user"""
    return db.session.query(db.func.count(Circle.id)).filter(
        Circle.created_by == owner_id
    ).scalar()


def can_create_circle(owner_id):
    """
    Check if user may create another circle.

    Requirements:
    - Owned circles must be strictly below CIRCLE_QUOTA
    """
    quota = current_app.config['CIRCLE_QUOTA']
    if count_circles_by_owner(owner_id) >= quota:
        return False, QUOTA_EXCEEDED_REASON

    return True, None


def claim_circle_slot(owner_id):
    """
    Take one circle slot for the owner, in the caller's transaction.

    A single conditional UPDATE does the check and the increment, so
    concurrent requests from one owner cannot both pass the quota.
    The caller must commit with the new circle or roll back.

    Returns: True if a slot was taken
    """
    quota = current_app.config['CIRCLE_QUOTA']
    result = db.session.execute(
        db.update(User)
        .where(User.id == owner_id, User.owned_circles < quota)
        .values(owned_circles=User.owned_circles + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


# ============================================================
# CIRCLE RESOURCE AUTHORIZATION
# ============================================================

def can_access_circle(user_id, circle_id):
    """
    Check if user can read or record bills and budgets in a circle.

    Requirements:
    - User must be a member of the circle
    """
    if not is_circle_member(user_id, circle_id):
        return False, NOT_A_MEMBER_REASON

    return True, None


def can_add_member(user_id, circle_id):
    """
    Check if user can add members to a circle.

    Requirements:
    - User must be an owner of the circle
    """
    if not is_circle_member(user_id, circle_id):
        return False, NOT_A_MEMBER_REASON

    if not is_circle_owner(user_id, circle_id):
        return False, 'Only the circle owner can add members'

    return True, None


# ============================================================
# HELPER FUNCTION: REQUIRE AUTHORIZATION
# ============================================================

def require_authorization(check_func, *args, error_class=AuthorizationError):
    """
    Wrapper to raise exception if authorization fails.

    Usage:
        require_authorization(can_access_circle, user_id, circle_id)
    """
    allowed, reason = check_func(*args)
    if not allowed:
        raise error_class(reason)
    return True
