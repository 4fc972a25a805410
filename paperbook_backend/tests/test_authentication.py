"""
Tests for Basic credential verification.
"""

import pytest

from paperbook_backend.exceptions import BasicAuthException
from paperbook_backend.permissions import auth
from paperbook_backend.permissions.auth import AuthenticationService
from paperbook_backend.tests.conftest import DEFAULT_PASSWORD, ROOT


@pytest.fixture
def verify_calls(monkeypatch):
    """Record every password verification made during authentication."""
    calls = []
    real_verify = auth.verify_password

    def _verify(password, hashed):
        calls.append(hashed)
        return real_verify(password, hashed)

    monkeypatch.setattr(auth, "verify_password", _verify)
    return calls


@pytest.mark.unit
class TestAuthenticateBasic:

    def test_valid_credentials(self, db, make_user, verify_calls):
        user = make_user()

        principal = AuthenticationService.authenticate_basic(user.email, DEFAULT_PASSWORD, db)

        assert principal.user_id == user.id
        assert verify_calls == [user.password]

    def test_unknown_email_still_verifies(self, db, verify_calls):
        with pytest.raises(BasicAuthException):
            AuthenticationService.authenticate_basic("nobody@paperbook.dev", DEFAULT_PASSWORD, db)

        assert len(verify_calls) == 1
        assert verify_calls[0].startswith("$argon2")

    def test_disabled_user_still_verifies(self, db, services, make_user, verify_calls):
        user = make_user()
        services.users.disable(user.id, ROOT)

        with pytest.raises(BasicAuthException):
            AuthenticationService.authenticate_basic(user.email, DEFAULT_PASSWORD, db)

        assert len(verify_calls) == 1
        assert verify_calls[0] != user.password

    def test_wrong_password(self, db, make_user, verify_calls):
        user = make_user()

        with pytest.raises(BasicAuthException):
            AuthenticationService.authenticate_basic(user.email, "Wr0ng!Password", db)

        assert verify_calls == [user.password]
