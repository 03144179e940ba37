"""
USER ROUTES
===========
Registration, token login and the current profile.
"""

from flask import Blueprint
from flask_login import login_required, current_user
from circles.schemas import UserCreate, UserLogin, load_body
from circles.security import create_access_token
from circles.services.user_service import add_new_user, authenticate
from circles.transport import json_success, json_error

users_bp = Blueprint('users', __name__, url_prefix='/user')


# ============== REGISTER ==============
@users_bp.route('/create', methods=['POST'])
def create_user():
    payload = load_body(UserCreate)

    ext_id = add_new_user(
        payload.email,
        payload.password,
        payload.first_name,
        payload.last_name
    )

    return json_success({'extId': ext_id})


# ============== LOGIN ==============
@users_bp.route('/login', methods=['POST'])
def login():
    payload = load_body(UserLogin)

    user = authenticate(payload.email, payload.password)
    if not user:
        return json_error(401, 'Invalid email or password')

    return json_success({'token': create_access_token(user), 'tokenType': 'bearer'})


# ============== CURRENT USER ==============
@users_bp.route('/me')
@login_required
def me():
    return json_success(current_user.to_dict())
