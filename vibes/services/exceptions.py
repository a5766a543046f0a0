# vibes/services/exceptions.py
from typing import Optional


class SpotifyAuthError(Exception):
    """Base class for Spotify OAuth flow errors."""


class SpotifyConfigError(SpotifyAuthError):
    pass


class ConsentDenied(SpotifyAuthError):
    def __init__(self, reason: str = "access_denied"):
        super().__init__(reason)
        self.reason = reason


class MissingCode(SpotifyAuthError):
    pass


class StateDecodeFailure(SpotifyAuthError):
    pass


class UpstreamTokenError(SpotifyAuthError):
    """Non-success answer (or no answer) from the Spotify token endpoint.

    ``status_code`` is None when the request never got a response
    (connection error, timeout).
    """

    def __init__(self, status_code: Optional[int], body: str):
        super().__init__(f"Spotify token endpoint error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class RefreshFailure(UpstreamTokenError):
    pass


class InvalidTransition(Exception):
    def __init__(self, state, event):
        super().__init__(f"Cannot apply {event.value} in state {state.value}")
        self.state = state
        self.event = event
