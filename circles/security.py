"""
BEARER TOKENS
=============

HS256 JWTs signed with SECRET_KEY. The subject is the user's
external id; the internal id never leaves the server.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt import InvalidTokenError
from flask import current_app

from circles.models import User
from circles.services.user_service import get_user_by_ext_id


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=current_app.config['JWT_EXPIRES_MINUTES']))
    payload = {'sub': user.ext_id, 'iat': now, 'exp': expire}
    return jwt.encode(payload, current_app.config['SECRET_KEY'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an 'Authorization: bearer <token>' header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def load_user_from_token(token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    try:
        payload = jwt.decode(token, current_app.config['SECRET_KEY'],
                             algorithms=[current_app.config['JWT_ALGORITHM']])
    except InvalidTokenError:
        return None

    ext_id = payload.get('sub')
    if ext_id is None:
        return None
    return get_user_by_ext_id(ext_id)


def load_user_from_request(request) -> Optional[User]:
    return load_user_from_token(bearer_token(request.headers.get('Authorization')))
