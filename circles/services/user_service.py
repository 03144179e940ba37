"""
USER SERVICE
============

Handles:
- Registration
- Credential checks for login
- Lookups by e-mail and external id
"""

from circles.extensions import db
from circles.logger import get_logger
from circles.models import User

logger = get_logger(__name__)


class UserError(Exception):
    """Base exception for user operations"""
    pass


class UserNotFoundError(UserError):
    """Raised when no user matches"""
    pass


def get_user_by_email(email):
    return User.query.filter_by(email=email.strip().lower()).first()


def get_user_by_ext_id(ext_id):
    return User.query.filter_by(ext_id=ext_id).first()


def add_new_user(email, password, first_name, last_name):
    """
    Register a new user.

    Returns: the external id of the new user
    """
    try:
        email = email.strip().lower()
        if get_user_by_email(email):
            raise UserError("E-mail already in use")

        user = User(email=email, first_name=first_name, last_name=last_name)
        user.set_password(password)

        db.session.add(user)
        db.session.commit()

        logger.info('user_registered', user_id=user.id, ext_id=user.ext_id)
        return user.ext_id

    except Exception:
        db.session.rollback()
        raise


def authenticate(email, password):
    """Return the user for valid credentials, None otherwise"""
    user = get_user_by_email(email)
    if user and user.check_password(password):
        return user

    logger.info('login_failed')
    return None
