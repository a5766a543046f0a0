# Tests for services/spotify_state.py

import base64

import pytest

from vibes.services.exceptions import StateDecodeFailure
from vibes.services.spotify_state import (
    NONCE_ALPHABET,
    NONCE_LENGTH,
    build_state,
    decode_redirect_uri,
    generate_nonce,
    redirect_uri_from_state,
)


class TestNonce:
    def test_length_and_alphabet(self):
        nonce = generate_nonce()
        assert len(nonce) == NONCE_LENGTH >= 8
        assert all(c in NONCE_ALPHABET for c in nonce)
        assert "." not in nonce

    def test_custom_length(self):
        assert len(generate_nonce(8)) == 8


class TestState:
    def test_happy_path_format(self):
        uri = "https://app.example/callback"
        state = build_state("AbCdEfGh", uri)
        expected = base64.b64encode(uri.encode()).decode()
        assert state == f"AbCdEfGh.{expected}"

    @pytest.mark.parametrize(
        "uri",
        [
            "https://app.example/callback",
            "http://localhost:3000/api/auth/callback/spotify",
            "https://host.example/a.b.c/callback?x=1&y=2",
            "https://例え.jp/コールバック",
        ],
    )
    def test_round_trip(self, uri):
        assert decode_redirect_uri(build_state(generate_nonce(), uri)) == uri

    def test_round_trip_nonce_with_dots(self):
        # split happens on the LAST delimiter
        uri = "https://app.example/callback"
        assert decode_redirect_uri(build_state("a.b.c", uri)) == uri

    @pytest.mark.parametrize("state", ["", "nodelimiter", "abc.", "abc.!!!not-base64!!!", "abc.//8="])
    def test_decode_failures(self, state):
        with pytest.raises(StateDecodeFailure):
            decode_redirect_uri(state)

    def test_allow_list(self):
        allowed = ("https://app.example/callback",)
        good = build_state("n", "https://app.example/callback")
        bad = build_state("n", "https://attacker.example/callback")

        assert redirect_uri_from_state(good, allowed) == "https://app.example/callback"
        with pytest.raises(StateDecodeFailure, match="not registered"):
            redirect_uri_from_state(bad, allowed)
