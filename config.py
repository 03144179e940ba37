import os

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    # Signs bearer tokens; create_app refuses to start without it
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'circles.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer tokens
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_MINUTES = int(os.environ.get('JWT_EXPIRES_MINUTES', 60 * 24))

    # Free accounts may own this many circles
    CIRCLE_QUOTA = int(os.environ.get('CIRCLE_QUOTA', 2))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    DEFAULT_BILL_CATEGORIES = [
        'Groceries', 'Utilities', 'Rent', 'Transport', 'Entertainment', 'Other'
    ]


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key-that-is-long-enough-for-hs256'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    CIRCLE_QUOTA = 2
    LOG_LEVEL = 'WARNING'
