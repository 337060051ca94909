"""Unit tests for app.core.security: bcrypt hashing, JWT issue/verify and bearer parsing."""

import unittest
import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from app.core.errors import (
    AuthError,
    InvalidTokenError,
    MissingTokenError,
    PasswordHashError,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_user_id,
    hash_password,
    verify_password,
)
from tests.helpers import TEST_SECRET


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_and_is_not_plaintext(self) -> None:
        hashed = hash_password("s3cret-password", rounds=4)
        self.assertNotEqual(hashed, "s3cret-password")
        self.assertTrue(verify_password("s3cret-password", hashed))
        self.assertFalse(verify_password("other-password", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("repeat-me-1", rounds=4), hash_password("repeat-me-1", rounds=4))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything-at-all", "not-a-bcrypt-hash"))

    def test_bcrypt_failure_raises_password_hash_error(self) -> None:
        with patch("app.core.security.bcrypt.hashpw", side_effect=ValueError("boom")):
            with self.assertRaises(PasswordHashError) as ctx:
                hash_password("s3cret-password", rounds=4)
        self.assertEqual(ctx.exception.status_code, 500)


class TestAccessTokens(unittest.TestCase):
    def setUp(self) -> None:
        self.user_id = uuid.uuid4()

    def test_round_trip_yields_user_id(self) -> None:
        token = create_access_token(self.user_id, "alice", secret=TEST_SECRET)
        self.assertEqual(get_user_id(f"Bearer {token}", TEST_SECRET), self.user_id)

    def test_payload_carries_name_and_expiry(self) -> None:
        now = datetime.now(UTC)
        token = create_access_token(
            self.user_id, "alice", secret=TEST_SECRET, ttl=timedelta(minutes=5), now=now
        )
        payload = decode_access_token(token, TEST_SECRET)
        self.assertEqual(payload["sub"], str(self.user_id))
        self.assertEqual(payload["name"], "alice")
        self.assertEqual(payload["exp"] - payload["iat"], 300)

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        token = create_access_token(
            self.user_id, "alice", secret=TEST_SECRET, ttl=timedelta(hours=1), now=issued
        )
        with self.assertRaises(InvalidTokenError):
            get_user_id(f"Bearer {token}", TEST_SECRET)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(self.user_id, "alice", secret=TEST_SECRET)
        with self.assertRaises(InvalidTokenError):
            get_user_id(f"Bearer {token}", "a-completely-different-secret-value-42")

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(self.user_id, "alice", secret=TEST_SECRET)
        with self.assertRaises(InvalidTokenError):
            get_user_id(f"Bearer {token[:-2]}xx", TEST_SECRET)


class TestBearerHeader(unittest.TestCase):
    def test_missing_header(self) -> None:
        for value in (None, "", "   "):
            with self.subTest(value=value):
                with self.assertRaises(MissingTokenError):
                    get_user_id(value, TEST_SECRET)

    def test_bearer_without_token(self) -> None:
        with self.assertRaises(MissingTokenError):
            get_user_id("Bearer ", TEST_SECRET)

    def test_wrong_scheme(self) -> None:
        token = create_access_token(uuid.uuid4(), "alice", secret=TEST_SECRET)
        for value in (token, f"Token {token}", f"bearer {token}"):
            with self.subTest(value=value[:12]):
                with self.assertRaises(InvalidTokenError):
                    get_user_id(value, TEST_SECRET)

    def test_malformed_token(self) -> None:
        with self.assertRaises(InvalidTokenError):
            get_user_id("Bearer not.a.jwt", TEST_SECRET)

    def test_token_errors_are_401(self) -> None:
        self.assertTrue(issubclass(MissingTokenError, AuthError))
        self.assertTrue(issubclass(InvalidTokenError, AuthError))
        self.assertEqual(InvalidTokenError().status_code, 401)


if __name__ == "__main__":
    unittest.main()
