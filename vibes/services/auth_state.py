# vibes/services/auth_state.py
from enum import Enum
from typing import Optional

from vibes.services.exceptions import InvalidTransition


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHORIZATION_REQUESTED = "authorization_requested"
    CODE_RECEIVED = "code_received"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"
    AUTHORIZATION_DENIED = "authorization_denied"


class AuthEvent(str, Enum):
    AUTHORIZE = "authorize"
    APPROVE = "approve"
    DENY = "deny"
    EXCHANGE_OK = "exchange_ok"
    EXCHANGE_FAILED = "exchange_failed"
    EXPIRE = "expire"
    REFRESH_OK = "refresh_ok"
    REFRESH_FAILED = "refresh_failed"
    RESET = "reset"


TRANSITIONS = {
    (AuthState.UNAUTHENTICATED, AuthEvent.AUTHORIZE): AuthState.AUTHORIZATION_REQUESTED,
    (AuthState.AUTHORIZATION_REQUESTED, AuthEvent.APPROVE): AuthState.CODE_RECEIVED,
    (AuthState.AUTHORIZATION_REQUESTED, AuthEvent.DENY): AuthState.AUTHORIZATION_DENIED,
    (AuthState.CODE_RECEIVED, AuthEvent.EXCHANGE_OK): AuthState.AUTHENTICATED,
    (AuthState.CODE_RECEIVED, AuthEvent.EXCHANGE_FAILED): AuthState.AUTHORIZATION_DENIED,
    (AuthState.AUTHENTICATED, AuthEvent.EXPIRE): AuthState.EXPIRED,
    (AuthState.EXPIRED, AuthEvent.REFRESH_OK): AuthState.AUTHENTICATED,
    (AuthState.EXPIRED, AuthEvent.REFRESH_FAILED): AuthState.UNAUTHENTICATED,
}


def transition(state: AuthState, event: AuthEvent) -> AuthState:
    # 使用者重新打開授權視窗 = 從任何狀態回到 UNAUTHENTICATED
    if event is AuthEvent.RESET:
        return AuthState.UNAUTHENTICATED

    next_state = TRANSITIONS.get((state, event))
    if next_state is None:
        raise InvalidTransition(state, event)
    return next_state


def state_from_cookies(access_token: Optional[str], refresh_token: Optional[str]) -> AuthState:
    if access_token:
        return AuthState.AUTHENTICATED
    if refresh_token:
        return AuthState.EXPIRED
    return AuthState.UNAUTHENTICATED
