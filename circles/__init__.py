import os

from flask import Flask
from circles.extensions import db, login_manager
from circles.logger import configure_logging, get_logger
from circles.transport import json_error
from config import Config


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY is not set')

    configure_logging(app.config['LOG_LEVEL'])
    logger = get_logger(__name__)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Bearer token loader for Flask-Login
    from circles.security import load_user_from_request

    @login_manager.request_loader
    def load_user(request):
        return load_user_from_request(request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return json_error(401, 'Unauthorized')

    # Register blueprints
    from circles.routes.users import users_bp
    from circles.routes.circles import circles_bp
    from circles.routes.expenses import expenses_bp

    app.register_blueprint(users_bp)
    app.register_blueprint(circles_bp)
    app.register_blueprint(expenses_bp)

    from circles.errors import register_error_handlers
    register_error_handlers(app)

    # Create tables and reference data
    from circles.services.expense_service import seed_bill_categories

    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        db.create_all()
        added = seed_bill_categories(app.config['DEFAULT_BILL_CATEGORIES'])
        logger.info('database_ready', categories_added=added)

    return app
