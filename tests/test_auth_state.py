# Tests for services/auth_state.py

import pytest

from vibes.services.auth_state import AuthEvent, AuthState, state_from_cookies, transition
from vibes.services.exceptions import InvalidTransition


def _run(*events, start=AuthState.UNAUTHENTICATED):
    state = start
    for event in events:
        state = transition(state, event)
    return state


def test_login_then_refresh():
    assert _run(
        AuthEvent.AUTHORIZE,
        AuthEvent.APPROVE,
        AuthEvent.EXCHANGE_OK,
        AuthEvent.EXPIRE,
        AuthEvent.REFRESH_OK,
    ) is AuthState.AUTHENTICATED


def test_refresh_failure_logs_out():
    assert _run(AuthEvent.REFRESH_FAILED, start=AuthState.EXPIRED) is AuthState.UNAUTHENTICATED


def test_denied_then_retry():
    state = _run(AuthEvent.AUTHORIZE, AuthEvent.DENY)
    assert state is AuthState.AUTHORIZATION_DENIED
    assert transition(state, AuthEvent.RESET) is AuthState.UNAUTHENTICATED


def test_exchange_failure_is_denied():
    assert _run(AuthEvent.AUTHORIZE, AuthEvent.APPROVE, AuthEvent.EXCHANGE_FAILED) is AuthState.AUTHORIZATION_DENIED


@pytest.mark.parametrize("state", list(AuthState))
def test_reset_from_anywhere(state):
    assert transition(state, AuthEvent.RESET) is AuthState.UNAUTHENTICATED


@pytest.mark.parametrize(
    "state, event",
    [
        (AuthState.UNAUTHENTICATED, AuthEvent.EXCHANGE_OK),
        (AuthState.AUTHENTICATED, AuthEvent.REFRESH_OK),
        (AuthState.CODE_RECEIVED, AuthEvent.APPROVE),
        (AuthState.AUTHORIZATION_DENIED, AuthEvent.AUTHORIZE),
    ],
)
def test_invalid_transitions(state, event):
    with pytest.raises(InvalidTransition):
        transition(state, event)


@pytest.mark.parametrize(
    "access, refresh, expected",
    [
        ("AT1", "RT1", AuthState.AUTHENTICATED),
        ("AT1", None, AuthState.AUTHENTICATED),
        (None, "RT1", AuthState.EXPIRED),
        (None, None, AuthState.UNAUTHENTICATED),
        ("", "", AuthState.UNAUTHENTICATED),
    ],
)
def test_state_from_cookies(access, refresh, expected):
    assert state_from_cookies(access, refresh) is expected
