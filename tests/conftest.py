"""
Shared fixtures for the Stampcard test suite.

The `app` fixture keeps one app context pushed for the whole test, so
fixtures, services and test-client requests share the same db.session.
"""
import pytest

from stampcard import create_app
from stampcard.extensions import db
from stampcard.services.establishment_service import EstablishmentService
from stampcard.services.redemption_service import RedemptionService

ADMIN_PASSWORD = 'abc123'


@pytest.fixture
def app(tmp_path):
    """Create test application."""
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    app.extensions['blob_store'].root = str(tmp_path / 'uploads')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_establishment(app):
    """An establishment with one admin (admin@example.com / abc123)."""
    created = EstablishmentService().create_establishment(
        name='Test Coffee Shop',
        email='admin@example.com',
        password=ADMIN_PASSWORD,
    )
    return created['establishment']


@pytest.fixture
def sample_admin(sample_establishment):
    return sample_establishment.admins.first()


@pytest.fixture
def other_establishment(app):
    """A second tenant with its own admin (other@example.com / abc123)."""
    created = EstablishmentService().create_establishment(
        name='Other Bakery',
        email='other@example.com',
        password=ADMIN_PASSWORD,
        grid_size=4,
    )
    return created['establishment']


@pytest.fixture
def superuser(app):
    return EstablishmentService().create_superuser('root@example.com', ADMIN_PASSWORD)


@pytest.fixture
def sample_transaction(sample_establishment):
    return RedemptionService().issue_token(sample_establishment.id)


def login(client, email, password=ADMIN_PASSWORD):
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def admin_client(client, sample_admin):
    """Test client logged in as the sample establishment's admin."""
    login(client, sample_admin.email)
    return client


@pytest.fixture
def superuser_client(client, superuser):
    """Test client logged in as a superuser."""
    login(client, superuser.email)
    return client
