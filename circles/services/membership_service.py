"""
MEMBERSHIP SERVICE
==================

Handles:
- Adding members to a circle (owner only)
- Listing the members of a circle
"""

from datetime import datetime
from circles.extensions import db
from circles.logger import get_logger
from circles.models import CircleMember, User
from circles.services.authorization_service import (
    can_access_circle, can_add_member, require_authorization
)
from circles.services.user_service import get_user_by_email, UserNotFoundError

logger = get_logger(__name__)


class MembershipError(Exception):
    """Base exception for membership operations"""
    pass


# ============================================================
# ADD MEMBER
# ============================================================

def add_member(circle_id, email, added_by_user_id):
    """
    Add the user registered with `email` to a circle.

    Returns: CircleMember
    """
    try:
        require_authorization(can_add_member, added_by_user_id, circle_id)

        user = get_user_by_email(email)
        if not user:
            raise UserNotFoundError("User not found with this email")

        existing = CircleMember.query.filter_by(
            circle_id=circle_id,
            user_id=user.id
        ).first()

        if existing:
            raise MembershipError("User is already a member")

        membership = CircleMember(
            circle_id=circle_id,
            user_id=user.id,
            is_owner=False,
            joined_at=datetime.utcnow()
        )
        db.session.add(membership)
        db.session.commit()

        logger.info('member_added', circle_id=circle_id, user_id=user.id,
                    added_by=added_by_user_id)
        return membership

    except Exception:
        db.session.rollback()
        raise


# ============================================================
# LIST MEMBERS
# ============================================================

def get_members(circle_id, user_id):
    """Members of a circle, owners first, visible to members only"""
    require_authorization(can_access_circle, user_id, circle_id)

    return CircleMember.query.join(User, CircleMember.user_id == User.id).filter(
        CircleMember.circle_id == circle_id
    ).order_by(CircleMember.is_owner.desc(), CircleMember.id.asc()).all()
