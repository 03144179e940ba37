"""
ERROR HANDLERS
==============

Maps domain exceptions to status codes:
- validation problems, quota and business rule violations -> 422
- authorization denials -> 403
- nothing visible -> 404
- anything else -> 500, logged, detail never returned
"""

from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from circles.logger import get_logger
from circles.schemas import validation_messages
from circles.services import (
    AuthorizationError, QuotaExceededError,
    CircleError, CircleNotFoundError,
    MembershipError, ExpenseError,
    UserError, UserNotFoundError
)
from circles.transport import json_error, json_internal_error

logger = get_logger(__name__)


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return json_error(422, validation_messages(e))

    @app.errorhandler(QuotaExceededError)
    def handle_quota_exceeded(e):
        return json_error(422, str(e))

    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(e):
        return json_error(403, str(e))

    @app.errorhandler(CircleNotFoundError)
    @app.errorhandler(UserNotFoundError)
    def handle_not_found(e):
        return json_error(404, str(e) or 'Not Found')

    @app.errorhandler(CircleError)
    @app.errorhandler(MembershipError)
    @app.errorhandler(ExpenseError)
    @app.errorhandler(UserError)
    def handle_business_error(e):
        return json_error(422, str(e))

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return json_error(e.code, e.name)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception('unhandled_error', error_type=type(e).__name__)
        return json_internal_error()
