"""Shared test helpers for API tests."""
from uuid import uuid4

from apps.identity.jwt_auth import create_access_token
from apps.identity.models import User, UserRole

PASSWORD = 'testpass123'


def make_user(role=UserRole.USER, email=None, name='Test User'):
    """Create a user with a random email unless one is given."""
    email = email or f"user_{uuid4().hex[:8]}@test.com"
    return User.objects.create_user(
        email=email,
        password=PASSWORD,
        name=name,
        role=role,
    )


def auth_header(user):
    """Client kwargs carrying a bearer token for `user`."""
    token = create_access_token(user.id, user.role)
    return {'HTTP_AUTHORIZATION': f'Bearer {token}'}
