"""Unit tests for app.services.auth: sign-in, token-pair generation and refresh rotation."""

import asyncio
import time
import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import jwt

from app.core.errors import UnauthorizedError
from app.core.guards import authenticate
from app.core.security import TokenConfig, TokenSigner, hash_password
from app.services.auth import (
    INVALID_CREDENTIALS,
    INVALID_REFRESH_TOKEN,
    AuthService,
    dummy_password_hash,
)

ACCESS_SECRET = "unit-access-secret-0123456789abcdef"
REFRESH_SECRET = "unit-refresh-secret-0123456789abcdef"
PASSWORD_HASH = hash_password("secret123", rounds=4)


def _user(**overrides: object) -> SimpleNamespace:
    """Minimal stand-in for a User row."""
    fields = {
        "id": 7,
        "username": "testuser",
        "password_hash": PASSWORD_HASH,
        "role": "user",
        "is_active": True,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _signer() -> TokenSigner:
    return TokenSigner(TokenConfig(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET))


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.users = MagicMock()
        self.signer = _signer()
        self.service = AuthService(self.users, self.signer)


class TestSignIn(AuthServiceTestCase):
    def test_valid_credentials_return_token_pair(self) -> None:
        self.users.find_by_username.return_value = _user()
        tokens = asyncio.run(self.service.sign_in("testuser", "secret123"))
        self.users.find_by_username.assert_called_once_with("testuser")
        self.assertIsInstance(tokens.access_token, str)
        self.assertIsInstance(tokens.refresh_token, str)

    def test_access_token_identity_matches_user(self) -> None:
        self.users.find_by_username.return_value = _user(id=11, role="admin")
        tokens = asyncio.run(self.service.sign_in("testuser", "secret123"))
        identity = authenticate(f"Bearer {tokens.access_token}", self.signer)
        self.assertEqual(identity.sub, 11)
        self.assertEqual(identity.username, "testuser")
        self.assertEqual(identity.role, "admin")

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        self.users.find_by_username.return_value = _user()
        with self.assertRaises(UnauthorizedError) as wrong_password:
            asyncio.run(self.service.sign_in("testuser", "wrongpassword"))

        self.users.find_by_username.return_value = None
        with self.assertRaises(UnauthorizedError) as unknown_user:
            asyncio.run(self.service.sign_in("nobody", "secret123"))

        self.assertEqual(wrong_password.exception.message, INVALID_CREDENTIALS)
        self.assertEqual(unknown_user.exception.message, INVALID_CREDENTIALS)

    def test_failed_attempt_logs_warning_with_username(self) -> None:
        self.users.find_by_username.return_value = None
        with self.assertLogs("app.services.auth", level="WARNING") as logs:
            with self.assertRaises(UnauthorizedError):
                asyncio.run(self.service.sign_in("mallory", "secret123"))
        self.assertIn("mallory", logs.output[0])

    def test_inactive_user_rejected_with_generic_message(self) -> None:
        self.users.find_by_username.return_value = _user(is_active=False)
        with self.assertRaises(UnauthorizedError) as ctx:
            asyncio.run(self.service.sign_in("testuser", "secret123"))
        self.assertEqual(ctx.exception.message, INVALID_CREDENTIALS)

    def test_unknown_user_still_checks_a_password_hash(self) -> None:
        self.users.find_by_username.return_value = None
        with patch("app.services.auth.verify_password", return_value=False) as verify:
            with self.assertRaises(UnauthorizedError):
                asyncio.run(self.service.sign_in("nobody", "secret123"))
        verify.assert_called_once_with("secret123", dummy_password_hash())

    def test_slow_store_does_not_block_event_loop(self) -> None:
        def slow_lookup(username: str) -> SimpleNamespace:
            time.sleep(0.3)
            return _user(username=username)

        self.users.find_by_username.side_effect = slow_lookup

        async def scenario() -> list[float]:
            gaps: list[float] = []
            done = asyncio.Event()

            async def heartbeat() -> None:
                last = time.perf_counter()
                while not done.is_set():
                    await asyncio.sleep(0.01)
                    now = time.perf_counter()
                    gaps.append(now - last)
                    last = now

            beat = asyncio.create_task(heartbeat())
            await asyncio.gather(
                self.service.sign_in("testuser", "secret123"),
                self.service.sign_in("testuser", "secret123"),
            )
            done.set()
            await beat
            return gaps

        gaps = asyncio.run(scenario())
        self.assertTrue(gaps)
        self.assertLess(max(gaps), 0.15)


class TestGenerateTokens(AuthServiceTestCase):
    def test_pair_shares_claims_with_separate_secrets(self) -> None:
        tokens = asyncio.run(self.service.generate_tokens(3, "alice", "user"))
        access = jwt.decode(tokens.access_token, ACCESS_SECRET, algorithms=["HS256"])
        refresh = jwt.decode(tokens.refresh_token, REFRESH_SECRET, algorithms=["HS256"])
        for payload in (access, refresh):
            self.assertEqual(payload["sub"], "3")
            self.assertEqual(payload["username"], "alice")
            self.assertEqual(payload["role"], "user")
        self.assertGreater(refresh["exp"], access["exp"])

    def test_both_signers_receive_same_claims(self) -> None:
        signer = MagicMock()
        signer.sign_access.return_value = "access"
        signer.sign_refresh.return_value = "refresh"
        tokens = asyncio.run(AuthService(self.users, signer).generate_tokens(3, "alice", "user"))
        expected = {"sub": 3, "username": "alice", "role": "user"}
        signer.sign_access.assert_called_once_with(expected)
        signer.sign_refresh.assert_called_once_with(expected)
        self.assertEqual((tokens.access_token, tokens.refresh_token), ("access", "refresh"))

    def test_failure_in_either_signature_fails_whole_pair(self) -> None:
        signer = MagicMock()
        signer.sign_access.return_value = "access"
        signer.sign_refresh.side_effect = RuntimeError("signing backend down")
        with self.assertRaises(RuntimeError):
            asyncio.run(AuthService(self.users, signer).generate_tokens(3, "alice", "user"))


class TestRefreshTokens(AuthServiceTestCase):
    def _refresh_token(self, user_id: int = 7) -> str:
        return self.signer.sign_refresh({"sub": user_id, "username": "testuser", "role": "user"})

    def test_valid_refresh_returns_new_pair(self) -> None:
        self.users.find_by_id.return_value = _user()
        tokens = asyncio.run(self.service.refresh_tokens(self._refresh_token()))
        self.users.find_by_id.assert_called_once_with(7)
        identity = authenticate(f"Bearer {tokens.access_token}", self.signer)
        self.assertEqual((identity.sub, identity.username, identity.role), (7, "testuser", "user"))
        self.signer.verify_refresh(tokens.refresh_token)

    def test_refresh_uses_current_role_from_store(self) -> None:
        self.users.find_by_id.return_value = _user(role="admin")
        tokens = asyncio.run(self.service.refresh_tokens(self._refresh_token()))
        self.assertEqual(authenticate(f"Bearer {tokens.access_token}", self.signer).role, "admin")

    def test_access_token_cannot_be_used_as_refresh_token(self) -> None:
        access = self.signer.sign_access({"sub": 7, "username": "testuser", "role": "user"})
        with self.assertRaises(UnauthorizedError) as ctx:
            asyncio.run(self.service.refresh_tokens(access))
        self.assertEqual(ctx.exception.message, INVALID_REFRESH_TOKEN)
        self.users.find_by_id.assert_not_called()

    def test_expired_refresh_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(days=8)
        token = jwt.encode(
            {"sub": "7", "username": "testuser", "role": "user", "iat": past, "exp": past + timedelta(days=7)},
            REFRESH_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(UnauthorizedError):
            asyncio.run(self.service.refresh_tokens(token))

    def test_malformed_refresh_token_rejected(self) -> None:
        with self.assertRaises(UnauthorizedError):
            asyncio.run(self.service.refresh_tokens("invalid-refresh-token"))

    def test_non_numeric_sub_rejected(self) -> None:
        token = self.signer.sign_refresh({"sub": "abc", "username": "testuser", "role": "user"})
        with self.assertRaises(UnauthorizedError):
            asyncio.run(self.service.refresh_tokens(token))

    def test_inactive_user_rejected(self) -> None:
        self.users.find_by_id.return_value = _user(is_active=False)
        with self.assertRaises(UnauthorizedError):
            asyncio.run(self.service.refresh_tokens(self._refresh_token()))

    def test_deleted_user_rejected(self) -> None:
        self.users.find_by_id.return_value = None
        with self.assertRaises(UnauthorizedError):
            asyncio.run(self.service.refresh_tokens(self._refresh_token()))


if __name__ == "__main__":
    unittest.main()
