"""
CIRCLE SERVICE
==============

Handles:
- Creating circles (subject to the owner quota)
- Listing the circles a user belongs to
"""

from datetime import datetime
from circles.extensions import db
from circles.logger import get_logger
from circles.models import Circle, CircleMember, User
from circles.services.authorization_service import (
    claim_circle_slot, QuotaExceededError, QUOTA_EXCEEDED_REASON
)

logger = get_logger(__name__)


class CircleError(Exception):
    """Base exception for circle operations"""
    pass


class CircleNotFoundError(CircleError):
    """Raised when no visible circle matches"""
    pass


# ============================================================
# CREATE CIRCLE (ATOMIC QUOTA CHECK)
# ============================================================

def create_circle(owner_id, name):
    """
    Create a circle and make the creator its owner.

    The quota slot is claimed with one conditional UPDATE on the owner
    row, in the same transaction as the inserts. A denied claim inserts
    nothing.

    Returns: Circle
    """
    try:
        if not claim_circle_slot(owner_id):
            if db.session.get(User, owner_id) is None:
                raise CircleError(f"User {owner_id} not found")
            raise QuotaExceededError(QUOTA_EXCEEDED_REASON)

        circle = Circle(name=name, created_by=owner_id)
        db.session.add(circle)
        db.session.flush()

        db.session.add(CircleMember(
            circle_id=circle.id,
            user_id=owner_id,
            is_owner=True,
            joined_at=datetime.utcnow()
        ))
        db.session.commit()

        logger.info('circle_created', circle_id=circle.id, owner_id=owner_id)
        return circle

    except QuotaExceededError:
        db.session.rollback()
        logger.info('circle_quota_exceeded', owner_id=owner_id)
        raise
    except Exception:
        db.session.rollback()
        raise


# ============================================================
# QUERIES
# ============================================================

def get_circles_by_user(user_id):
    """
    All circles the user belongs to, invited or owner, by circle id.

    Raises CircleNotFoundError when the user belongs to none.
    """
    rows = db.session.query(Circle, CircleMember) \
        .join(CircleMember, CircleMember.circle_id == Circle.id) \
        .filter(CircleMember.user_id == user_id) \
        .order_by(Circle.id.asc()) \
        .all()

    if not rows:
        raise CircleNotFoundError("Not Found")

    return [
        {
            'id': circle.id,
            'name': circle.name,
            'isOwner': membership.is_owner,
            'joinedAt': membership.joined_at.isoformat() if membership.joined_at else None,
        }
        for circle, membership in rows
    ]


def get_circle(circle_id):
    circle = db.session.get(Circle, circle_id)
    if not circle:
        raise CircleNotFoundError("Not Found")
    return circle

