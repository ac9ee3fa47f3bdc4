"""
Tests for the Auth API endpoints.

- POST /api/auth/login
- POST /api/auth/logout
- GET /api/auth/me
"""
from conftest import login


class TestLogin:

    def test_login_sets_session_cookie(self, client, sample_admin):
        """Test that login returns the user and sets an HttpOnly session cookie."""
        response = client.post('/api/auth/login', json={
            'email': 'admin@example.com',
            'password': 'abc123'
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data['user']['id'] == sample_admin.id
        assert data['user']['role'] == 'establishment_admin'
        assert data['user']['establishmentId'] == sample_admin.establishment_id
        assert 'password_hash' not in data['user']

        set_cookie = response.headers['Set-Cookie']
        assert 'session_id=' in set_cookie
        assert 'HttpOnly' in set_cookie
        assert 'Max-Age=604800' in set_cookie

    def test_login_wrong_password(self, client, sample_admin):
        """Test login with a wrong password."""
        response = client.post('/api/auth/login', json={
            'email': 'admin@example.com',
            'password': 'wrong-password'
        })

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid email or password'
        assert 'Set-Cookie' not in response.headers

    def test_login_unknown_email(self, client, sample_admin):
        """Test login with an email nobody registered."""
        response = client.post('/api/auth/login', json={
            'email': 'nobody@example.com',
            'password': 'abc123'
        })
        assert response.status_code == 401

    def test_login_missing_fields(self, client):
        """Test login without a password."""
        response = client.post('/api/auth/login', json={'email': 'admin@example.com'})
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_login_non_json_body(self, client):
        """Test that a non-JSON body is rejected."""
        response = client.post('/api/auth/login', data='email=x', content_type='text/plain')
        assert response.status_code == 400

    def test_login_non_string_email(self, client, sample_admin):
        """Test that a numeric email is a 400, not a server error."""
        response = client.post('/api/auth/login', json={'email': 123, 'password': 'abc123'})
        assert response.status_code == 400
        assert response.get_json()['code'] == 'VALIDATION_ERROR'

    def test_login_non_string_password(self, client, sample_admin):
        """Test that a numeric password is a 400, not a server error."""
        response = client.post('/api/auth/login', json={
            'email': 'admin@example.com',
            'password': 123456
        })
        assert response.status_code == 400

    def test_login_over_long_password(self, client, sample_admin):
        """Test that a password bcrypt cannot check is a plain credential failure."""
        response = client.post('/api/auth/login', json={
            'email': 'admin@example.com',
            'password': 'x' * 100
        })
        assert response.status_code == 401


class TestMeAndLogout:

    def test_me_requires_session(self, client):
        """Test /me without a session cookie."""
        response = client.get('/api/auth/me')
        assert response.status_code == 401
        assert response.get_json() == {'error': 'Unauthorized', 'code': 'AUTH_REQUIRED'}

    def test_me_returns_current_user(self, admin_client, sample_admin):
        """Test /me returns the logged-in admin."""
        response = admin_client.get('/api/auth/me')
        assert response.status_code == 200
        assert response.get_json()['user']['email'] == sample_admin.email

    def test_logout_ends_session(self, admin_client):
        """Test that logout invalidates the session."""
        response = admin_client.post('/api/auth/logout')
        assert response.status_code == 200
        assert response.get_json() == {'success': True}

        assert admin_client.get('/api/auth/me').status_code == 401

    def test_logout_without_session(self, client):
        """Test that logout is safe when not logged in."""
        response = client.post('/api/auth/logout')
        assert response.status_code == 200

    def test_forged_cookie_is_rejected(self, client, sample_admin):
        """Test that an unknown session id is not accepted."""
        client.set_cookie('session_id', 'a3bb189e-8bf9-3888-9912-ace4e6543002')
        assert client.get('/api/auth/me').status_code == 401

    def test_login_twice_gives_independent_sessions(self, client, sample_admin):
        """Test that each login opens a new session."""
        first = login(client, 'admin@example.com').headers['Set-Cookie']
        second = login(client, 'admin@example.com').headers['Set-Cookie']
        assert first != second
