"""
Shared fixtures.

Service tests run inside an application context (`app_ctx`).
HTTP tests go through the Flask test client only.
"""

import pytest

from circles import create_app
from circles.extensions import db
from circles.models import BillCategory
from circles.services.user_service import add_new_user, get_user_by_ext_id
from config import TestConfig

PASSWORD = 'Secret1'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


# ============================================================
# SERVICE-LEVEL FACTORIES
# ============================================================

def make_user(email, first_name='Test', last_name='User'):
    ext_id = add_new_user(email, PASSWORD, first_name, last_name)
    return get_user_by_ext_id(ext_id)


@pytest.fixture
def owner(app_ctx):
    return make_user('owner@mail.com', 'Olivia', 'Owner')


@pytest.fixture
def member(app_ctx):
    return make_user('member@mail.com', 'Max', 'Member')


@pytest.fixture
def outsider(app_ctx):
    return make_user('outsider@mail.com', 'Otto', 'Outsider')


@pytest.fixture
def category(app_ctx):
    return BillCategory.query.order_by(BillCategory.id).first()


# ============================================================
# HTTP HELPERS
# ============================================================

def register(client, email, password=PASSWORD, first_name='Test', last_name='User'):
    return client.post('/user/create', json={
        'email': email,
        'password': password,
        'firstName': first_name,
        'lastName': last_name,
    })


def auth_headers(client, email, password=PASSWORD):
    response = client.post('/user/login', json={'email': email, 'password': password})
    token = response.get_json()['data']['token']
    return {'Authorization': f'bearer {token}'}


def register_and_login(client, email):
    register(client, email)
    return auth_headers(client, email)
