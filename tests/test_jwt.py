"""
Tests for bearer-token creation and verification.
"""

import time

import jwt
import pytest

from auth.jwt import INVALID_TOKEN_MESSAGE, create_token, verify_token
from config.settings import config
from core.exceptions import UnauthorizedError


class TestVerifyToken:
    def test_valid_token_returns_identity(self):
        token = create_token("user-1", username="alice", email="a@x.com")
        identity = verify_token(token)
        assert identity.user_id == "user-1"
        assert identity.username == "alice"
        assert identity.email == "a@x.com"
        assert identity.exp > identity.iat

    def test_wrong_secret_rejected(self):
        token = create_token("user-1", secret="some-other-secret")
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_expired_token_rejected(self):
        token = create_token("user-1", expires_in=-30)
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(UnauthorizedError):
            verify_token("not-a-token")

    def test_missing_exp_rejected(self):
        token = jwt.encode({"sub": "user-1"}, config.jwt_secret, algorithm=config.jwt_algorithm)
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode(
            {"exp": int(time.time()) + 60}, config.jwt_secret, algorithm=config.jwt_algorithm
        )
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_malformed_payload_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "username": 42, "exp": int(time.time()) + 60},
            config.jwt_secret,
            algorithm=config.jwt_algorithm,
        )
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_id_claim_accepted_as_subject(self):
        token = jwt.encode(
            {"id": "legacy-7", "exp": int(time.time()) + 60},
            config.jwt_secret,
            algorithm=config.jwt_algorithm,
        )
        assert verify_token(token).user_id == "legacy-7"

    def test_failures_share_one_message(self):
        messages = set()
        for token in (
            create_token("u", secret="wrong"),
            create_token("u", expires_in=-30),
            "a.b.c",
        ):
            with pytest.raises(UnauthorizedError) as exc_info:
                verify_token(token)
            messages.add(exc_info.value.message)
        assert messages == {INVALID_TOKEN_MESSAGE}
