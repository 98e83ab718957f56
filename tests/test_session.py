"""
Tests for the per-request identity holder.
"""
from unittest.mock import MagicMock

import pytest
from supabase import AuthApiError

from storerate.core.session import AuthSession, SessionState
from storerate.schemas.user import SignupRequest

from fakes import DEFAULT_PASSWORD, token_for


@pytest.fixture
def supabase(backend):
    return backend.client()


class TestStart:
    def test_no_session_is_anonymous(self, supabase):
        holder = AuthSession(supabase).start()
        assert holder.state is SessionState.ANONYMOUS
        assert holder.user is None

    def test_access_token_resolves_profile(self, backend, supabase):
        holder = AuthSession(supabase).start(access_token=token_for(backend.normal))

        assert holder.is_authenticated
        assert holder.user.email == "user@example.com"
        assert supabase.postgrest.token == token_for(backend.normal)

    def test_both_tokens_restore_session(self, backend, supabase):
        holder = AuthSession(supabase).start(
            access_token=token_for(backend.admin), refresh_token="refresh"
        )
        assert holder.user.email == "admin@example.com"
        assert supabase.auth.get_session() is not None

    def test_existing_client_session_is_used(self, backend, supabase):
        supabase.auth.sign_in_with_password({"email": "owner@example.com", "password": DEFAULT_PASSWORD})
        holder = AuthSession(supabase).start()
        assert holder.user.email == "owner@example.com"

    def test_rejected_token_raises(self, supabase):
        with pytest.raises(AuthApiError):
            AuthSession(supabase).start(access_token="forged")

    def test_profile_error_leaves_anonymous(self, backend, supabase):
        backend.failing_tables.add("users")
        holder = AuthSession(supabase).start(access_token=token_for(backend.normal))
        assert holder.state is SessionState.ANONYMOUS

    def test_close_unsubscribes(self, supabase):
        holder = AuthSession(supabase).start()
        assert len(supabase.auth.listeners) == 1
        holder.close()
        assert supabase.auth.listeners == []


class TestAuthEvents:
    def test_signed_in_event_loads_profile(self, backend, supabase):
        holder = AuthSession(supabase).start()
        # Sign in through the raw client: only the event reaches the holder.
        supabase.auth.sign_in_with_password({"email": "admin@example.com", "password": DEFAULT_PASSWORD})
        assert holder.user.email == "admin@example.com"
        assert holder.is_authenticated

    def test_signed_out_event_clears_identity(self, backend, supabase):
        holder = AuthSession(supabase).start(access_token=token_for(backend.normal))
        supabase.auth.sign_out()
        assert holder.user is None
        assert holder.state is SessionState.ANONYMOUS


class TestOperations:
    def test_login(self, supabase):
        holder = AuthSession(supabase).start()
        res = holder.login("user@example.com", DEFAULT_PASSWORD)

        assert res.session.access_token
        assert holder.user.email == "user@example.com"
        assert holder.state is SessionState.AUTHENTICATED

    def test_login_error_propagates_and_settles(self, supabase):
        holder = AuthSession(supabase).start()
        with pytest.raises(AuthApiError):
            holder.login("user@example.com", "wrong")
        assert holder.state is SessionState.ANONYMOUS

    def test_login_is_loading_while_in_flight(self, backend):
        seen = []
        auth = MagicMock()
        auth.get_session.return_value = None
        holder = AuthSession(backend.client(), auth=auth).start()
        auth.sign_in.side_effect = lambda *args: seen.append(holder.state) or MagicMock(user=None)

        holder.login("a@b.co", "pw")

        assert seen == [SessionState.LOADING]
        assert holder.state is SessionState.ANONYMOUS

    def test_signup_forces_user_role(self, backend, supabase):
        holder = AuthSession(supabase).start()
        holder.signup(
            SignupRequest(
                name="Someone Signing Up Today",
                email="new@example.com",
                password="Passw0rd!",
                address="3 New Street",
            )
        )
        assert holder.user.email == "new@example.com"
        assert holder.user.role.value == "user"

    def test_signup_error_propagates(self, supabase):
        holder = AuthSession(supabase).start()
        with pytest.raises(AuthApiError):
            holder.signup(
                SignupRequest(
                    name="Someone Signing Up Again",
                    email="user@example.com",
                    password="Passw0rd!",
                    address="3 New Street",
                )
            )
        assert holder.state is SessionState.ANONYMOUS

    def test_logout_clears_identity(self, backend, supabase):
        holder = AuthSession(supabase).start()
        holder.login("user@example.com", DEFAULT_PASSWORD)
        holder.logout()
        assert holder.user is None
        assert holder.state is SessionState.ANONYMOUS

    def test_logout_error_is_swallowed(self, backend, supabase):
        holder = AuthSession(supabase).start(access_token=token_for(backend.normal))
        supabase.auth.fail_sign_out = True

        holder.logout()

        assert holder.user is None
        assert holder.state is SessionState.ANONYMOUS
