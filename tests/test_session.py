"""
Тесты сессии администратора
"""
import pytest

from registry.exceptions import InvalidCredentialsError, NotAuthenticatedError
from registry.session import AdminSessionGuard, Authenticator, StaticCredentialAuthenticator


@pytest.fixture
def guard():
    return AdminSessionGuard(StaticCredentialAuthenticator("admin", "password"))


class TestAdminSessionGuard:
    """Тесты конечного автомата сессии"""

    def test_initially_logged_out(self, guard):
        assert not guard.is_logged_in
        assert guard.session.username is None

    def test_login(self, guard):
        session = guard.login("admin", "password")

        assert session.is_logged_in
        assert session.username == "admin"
        assert guard.require_admin() == "admin"

    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("root", "password"),
        ("Admin", "password"),
        ("", ""),
    ])
    def test_invalid_credentials(self, guard, username, password):
        with pytest.raises(InvalidCredentialsError):
            guard.login(username, password)

        assert not guard.is_logged_in

    def test_failed_login_keeps_existing_session(self, guard):
        guard.login("admin", "password")

        with pytest.raises(InvalidCredentialsError):
            guard.login("admin", "wrong")

        assert guard.username == "admin"

    def test_logout_requires_confirmation(self, guard):
        guard.login("admin", "password")

        assert guard.logout(confirm=False) is False
        assert guard.logout(confirm=lambda: False) is False
        assert guard.is_logged_in

        assert guard.logout(confirm=lambda: True) is True
        assert not guard.is_logged_in

    def test_logout_when_logged_out(self, guard):
        assert guard.logout(confirm=True) is False

    def test_require_admin_when_logged_out(self, guard):
        with pytest.raises(NotAuthenticatedError):
            guard.require_admin()

    def test_custom_authenticator(self):
        class TokenAuthenticator(Authenticator):
            def authenticate(self, username, password):
                return password == f"token-{username}"

        guard = AdminSessionGuard(TokenAuthenticator())

        assert guard.login("alice", "token-alice").username == "alice"


def test_state_uses_configured_credentials(settings):
    from registry.state import create_application_state

    state = create_application_state(settings.model_copy(update={"admin_password": "s3cret"}))

    with pytest.raises(InvalidCredentialsError):
        state.guard.login("admin", "password")
    assert state.guard.login("admin", "s3cret").is_logged_in
