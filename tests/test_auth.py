from __future__ import annotations

import asyncio

from conftest import SESSION_COOKIE, run
from gameclient.services import AuthState
from gameclient.services.auth import (
    LOGIN_FAILED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    SIGNUP_FAILED_MESSAGE,
)


def test_login_sets_session_and_captures_cookie(ctx, backend):
    result = run(ctx.auth.login("  alice ", " wonderland "))

    assert result.ok
    assert result.state is AuthState.AUTHENTICATED
    assert ctx.sessions.current_username() == "alice"
    assert ctx.sessions.current_credential() == SESSION_COOKIE
    assert backend.bodies[0] == ("/api/auth/login", {"username": "alice", "password": "wonderland"})


def test_login_without_set_cookie_leaves_credential_absent(ctx, backend):
    backend.set_cookie = False
    result = run(ctx.auth.login("alice", "wonderland"))
    assert result.ok
    assert ctx.sessions.current_credential() is None

    run(ctx.leaderboard.fetch(1))
    assert backend.cookies[-1] == ("GET", "/api/leaderboard/1", None)


def test_cookie_is_forwarded_on_later_requests(ctx, backend):
    run(ctx.auth.login("alice", "wonderland"))
    run(ctx.leaderboard.fetch(1))
    assert backend.cookies[-1] == ("GET", "/api/leaderboard/1", SESSION_COOKIE)


def test_empty_fields_fail_locally_without_request(ctx, backend):
    result = run(ctx.auth.login("   ", "pw"))

    assert not result.ok
    assert result.message == MISSING_FIELDS_MESSAGE
    assert ctx.auth.state is AuthState.IDLE
    assert backend.cookies == []
    assert ctx.sessions.current() is None


def test_rejected_login_keeps_existing_session(ctx):
    run(ctx.auth.login("alice", "wonderland"))
    result = run(ctx.auth.login("bob", "wrong"))

    assert result.state is AuthState.FAILED
    assert result.message == LOGIN_FAILED_MESSAGE
    assert ctx.sessions.current_username() == "alice"


def test_signup_conflict_reports_signup_message(ctx):
    result = run(ctx.auth.signup("alice", "whatever"))
    assert result.state is AuthState.FAILED
    assert result.message == SIGNUP_FAILED_MESSAGE
    assert ctx.sessions.current() is None


def test_signup_authenticates_new_user(ctx, backend):
    result = run(ctx.auth.signup("carol", "secret"))
    assert result.ok
    assert backend.users["carol"] == "secret"
    assert ctx.sessions.current_username() == "carol"
    # signup sets no cookie on this backend
    assert ctx.sessions.current_credential() is None


def test_network_failure_reports_network_message(ctx, transport):
    transport.down.add("*")
    result = run(ctx.auth.login("alice", "wonderland"))

    assert result.state is AuthState.FAILED
    assert result.message == NETWORK_ERROR_MESSAGE
    assert ctx.sessions.current() is None


def test_retry_after_failure_is_a_fresh_attempt(ctx, transport):
    transport.down.add("*")
    assert not run(ctx.auth.login("alice", "wonderland")).ok
    transport.down.clear()
    assert run(ctx.auth.login("alice", "wonderland")).ok
    assert ctx.auth.state is AuthState.AUTHENTICATED


def test_relogin_replaces_user(ctx):
    run(ctx.auth.login("alice", "wonderland"))
    run(ctx.auth.login("bob", "builder"))
    assert ctx.sessions.current_username() == "bob"


def test_login_returns_resume_options(ctx, backend):
    backend.progress["alice"] = {"username": "alice", "level": 1, "coins": 4, "lastScene": "2"}
    result = run(ctx.auth.login("alice", "wonderland"))
    assert result.options.can_start
    assert result.options.can_resume
    assert result.options.remote_scene == "2"


def test_superseded_login_never_overwrites_newer_session(ctx, transport):
    async def scenario():
        release = asyncio.Event()
        transport.hold["wonderland"] = release
        first = asyncio.create_task(ctx.auth.login("alice", "wonderland"))
        for _ in range(5):
            await asyncio.sleep(0)
        second = await ctx.auth.login("bob", "builder")
        release.set()
        return await first, second

    first, second = run(scenario())

    assert second.ok
    assert first.stale
    assert not first.ok
    assert ctx.sessions.current_username() == "bob"


def test_empty_fields_after_login_is_not_reported_as_success(ctx):
    assert run(ctx.auth.login("alice", "wonderland")).ok
    result = run(ctx.auth.login("alice", ""))
    assert not result.ok
    assert result.message == MISSING_FIELDS_MESSAGE
    assert ctx.sessions.current_username() == "alice"
