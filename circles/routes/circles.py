"""
CIRCLE ROUTES
=============
Circle creation, listing and membership.
"""

from flask import Blueprint
from flask_login import login_required, current_user
from circles.schemas import CircleCreate, MemberAdd, load_body
from circles.services.circle_service import create_circle, get_circles_by_user
from circles.services.membership_service import add_member, get_members
from circles.transport import json_success

circles_bp = Blueprint('circles', __name__, url_prefix='/circle')


# ============== CREATE NEW CIRCLE ==============
@circles_bp.route('/create', methods=['POST'])
@login_required
def create_circle_route():
    payload = load_body(CircleCreate)

    circle = create_circle(current_user.id, payload.name)
    return json_success({'circleId': circle.id})


# ============== LIST ALL MY CIRCLES ==============
@circles_bp.route('/byUser')
@login_required
def list_circles():
    return json_success({'circles': get_circles_by_user(current_user.id)})


# ============== MEMBERS ==============
@circles_bp.route('/<int:circle_id>/members', methods=['POST'])
@login_required
def add_member_route(circle_id):
    payload = load_body(MemberAdd)

    membership = add_member(circle_id, payload.email, current_user.id)
    return json_success({'userExtId': membership.user.ext_id})


@circles_bp.route('/<int:circle_id>/members')
@login_required
def list_members(circle_id):
    members = get_members(circle_id, current_user.id)
    return json_success({'members': [m.to_dict() for m in members]})
