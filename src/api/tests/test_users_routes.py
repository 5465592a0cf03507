"""Tests for /api/users routes."""

import unittest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi.testclient import TestClient
from adapter.crypto.password_hasher import BcryptPasswordHasher
from adapter.memory.user_repository import InMemoryUserRepository
from api.main import create_app


VALID_USER = {
    'name': 'John Doe',
    'email': 'john@email.com',
    'password': 'MyPass@123',
}


class UsersRouteTestCase(unittest.TestCase):

    def setUp(self):
        """Fresh app and empty store per test."""
        self.repo = InMemoryUserRepository()
        self.app = create_app(repo=self.repo, hasher=BcryptPasswordHasher(rounds=4))
        self.client = TestClient(self.app)

    def _create(self, **overrides) -> dict:
        response = self.client.post('/api/users', json={**VALID_USER, **overrides})
        self.assertEqual(response.status_code, 201)
        return response.json()['data']


class TestCreateUserRoute(UsersRouteTestCase):
    """Test cases for POST /api/users."""

    def test_create_user_success(self):
        response = self.client.post('/api/users', json=VALID_USER)

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'User created successfully')
        self.assertEqual(body['data']['name'], 'John Doe')
        self.assertEqual(body['data']['email'], 'john@email.com')
        self.assertTrue(body['data']['id'])
        self.assertIn('createdAt', body['data'])
        self.assertIn('updatedAt', body['data'])
        self.assertNotIn('password', body['data'])
        self.assertNotIn('password_hash', body['data'])
        self.assertNotIn('error', body)

    def test_create_user_invalid_data(self):
        response = self.client.post(
            '/api/users',
            json={'name': 'J', 'email': 'invalid-email', 'password': '123'},
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertIn('Invalid data', body['error'])
        self.assertIn('Name', body['error'])
        self.assertIn('Email', body['error'])
        self.assertIn('Password', body['error'])

    def test_create_user_missing_fields(self):
        response = self.client.post('/api/users', json={'name': 'John Doe'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['error'],
            'Invalid data: Email is required, Password is required',
        )

    def test_create_user_without_body(self):
        response = self.client.post('/api/users')

        self.assertEqual(response.status_code, 400)
        self.assertIn('Invalid data', response.json()['error'])

    def test_create_user_with_non_object_body(self):
        response = self.client.post('/api/users', json=['John Doe'])

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'success': False, 'error': 'Invalid request body'})

    def test_create_user_duplicate_email(self):
        self._create()
        response = self.client.post(
            '/api/users',
            json={'name': 'John Smith', 'email': 'john@email.com', 'password': 'OtherPass@456'},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'success': False, 'error': 'Email already in use'})


class TestGetUserRoutes(UsersRouteTestCase):
    """Test cases for GET /api/users and GET /api/users/{id}."""

    def test_get_user(self):
        created = self._create()

        response = self.client.get(f"/api/users/{created['id']}")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['data'], created)
        self.assertNotIn('message', body)

    def test_get_user_not_found(self):
        response = self.client.get('/api/users/nonexistent-id')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'success': False, 'error': 'User not found'})

    def test_list_users(self):
        self._create(email='user1@email.com', name='User 1')
        self._create(email='user2@email.com', name='User 2')

        response = self.client.get('/api/users')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['count'], 2)
        self.assertEqual(len(body['data']), 2)
        self.assertTrue(all('password' not in u for u in body['data']))

    def test_list_users_empty(self):
        response = self.client.get('/api/users')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'success': True, 'data': [], 'count': 0})


class TestUpdateUserRoute(UsersRouteTestCase):
    """Test cases for PUT /api/users/{id}."""

    def test_update_user(self):
        created = self._create()

        response = self.client.put(f"/api/users/{created['id']}", json={'name': 'John Updated'})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['message'], 'User updated successfully')
        self.assertEqual(body['data']['name'], 'John Updated')
        self.assertEqual(body['data']['email'], 'john@email.com')
        self.assertNotEqual(body['data']['updatedAt'], created['updatedAt'])

    def test_update_user_not_found(self):
        response = self.client.put('/api/users/nonexistent-id', json={'name': 'John Updated'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'User not found')

    def test_update_user_invalid_field(self):
        created = self._create()

        response = self.client.put(f"/api/users/{created['id']}", json={'email': 'invalid-email'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('Email must have a valid format', response.json()['error'])

    def test_update_password_then_login(self):
        created = self._create()
        self.client.put(f"/api/users/{created['id']}", json={'password': 'NewPass@789'})

        old = self.client.post('/api/users/login', json={'email': 'john@email.com', 'password': 'MyPass@123'})
        new = self.client.post('/api/users/login', json={'email': 'john@email.com', 'password': 'NewPass@789'})

        self.assertEqual(old.status_code, 401)
        self.assertEqual(new.status_code, 200)


class TestDeleteUserRoute(UsersRouteTestCase):
    """Test cases for DELETE /api/users/{id}."""

    def test_delete_user(self):
        created = self._create()

        response = self.client.delete(f"/api/users/{created['id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'success': True, 'message': 'User deleted successfully'})
        self.assertEqual(self.client.get(f"/api/users/{created['id']}").status_code, 404)

    def test_delete_user_twice(self):
        created = self._create()
        self.client.delete(f"/api/users/{created['id']}")

        response = self.client.delete(f"/api/users/{created['id']}")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'User not found')


class TestLoginRoute(UsersRouteTestCase):
    """Test cases for POST /api/users/login."""

    def setUp(self):
        super().setUp()
        self.user = self._create()

    def test_login_success(self):
        response = self.client.post('/api/users/login', json={'email': 'john@email.com', 'password': 'MyPass@123'})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'Login successful')
        self.assertEqual(body['data']['id'], self.user['id'])
        self.assertNotIn('password', body['data'])

    def test_login_wrong_password(self):
        response = self.client.post('/api/users/login', json={'email': 'john@email.com', 'password': 'WrongPass@1'})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'success': False, 'error': 'Invalid credentials'})

    def test_login_unknown_email_looks_like_wrong_password(self):
        wrong_password = self.client.post('/api/users/login', json={'email': 'john@email.com', 'password': 'WrongPass@1'})
        unknown_email = self.client.post('/api/users/login', json={'email': 'nobody@email.com', 'password': 'MyPass@123'})

        self.assertEqual(unknown_email.status_code, 401)
        self.assertEqual(unknown_email.json(), wrong_password.json())

    def test_login_missing_password(self):
        response = self.client.post('/api/users/login', json={'email': 'john@email.com'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Email and password are required')

    def test_login_without_body(self):
        response = self.client.post('/api/users/login')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Email and password are required')


if __name__ == '__main__':
    unittest.main()
