"""Tests for app.services.auth against an in-memory SQLite database."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.exceptions import (
    InvalidAccessTokenError,
    InvalidCredentialsError,
    RefreshTokenInvalidError,
    RefreshTokenNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from app.core.security import create_access_token, create_token_pair, verify_password
from app.models import Base, User, UserRefreshToken
from app.repositories import refresh_tokens, users
from app.schemas.auth import ProfileUpdateRequest, SignupRequest
from app.services import auth as auth_service

PASSWORD = "s3cret-passw0rd"


def _signup(email: str = "alice@example.com", nickname: str = "alice") -> SignupRequest:
    return SignupRequest(email=email, nickname=nickname, password=PASSWORD, introduction="hi")


class AuthServiceTestCase(unittest.TestCase):
    """Fresh schema per test."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine, autoflush=False)()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def _token_rows(self) -> list[UserRefreshToken]:
        return list(self.db.execute(select(UserRefreshToken)).scalars())


class TestSignUp(AuthServiceTestCase):
    def test_creates_user_with_user_role_and_hashed_password(self) -> None:
        created = auth_service.sign_up(self.db, _signup())
        self.assertEqual(created.email, "alice@example.com")
        self.assertEqual(created.role, "ROLE_USER")
        self.assertEqual(created.introduction, "hi")
        user = self.db.get(User, created.id)
        self.assertNotEqual(user.password_hash, PASSWORD)
        self.assertTrue(verify_password(PASSWORD, user.password_hash))

    def test_duplicate_email_rejected(self) -> None:
        auth_service.sign_up(self.db, _signup())
        with self.assertRaises(UserAlreadyExistsError):
            auth_service.sign_up(self.db, _signup(nickname="other"))
        count = self.db.execute(select(func.count()).select_from(User)).scalar()
        self.assertEqual(count, 1)

    def test_email_taken_between_check_and_insert(self) -> None:
        auth_service.sign_up(self.db, _signup())
        # The existence check ran before the other signup committed.
        with patch.object(users, "exists_by_email", return_value=False):
            with self.assertRaises(UserAlreadyExistsError):
                auth_service.sign_up(self.db, _signup(nickname="racer"))
        count = self.db.execute(select(func.count()).select_from(User)).scalar()
        self.assertEqual(count, 1)
        # Session is usable again after the failed insert.
        auth_service.sign_up(self.db, _signup("carol@example.com", "carol"))


class TestLogin(AuthServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = auth_service.sign_up(self.db, _signup())

    def test_login_returns_tokens_and_stores_refresh_token(self) -> None:
        result = auth_service.login(self.db, "alice@example.com", PASSWORD)
        self.assertEqual(result.user_id, self.user.id)
        self.assertEqual(result.nickname, "alice")
        self.assertEqual(result.token_type, "bearer")
        rows = self._token_rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].refresh_token, result.refresh_token)

    def test_second_login_overwrites_stored_token(self) -> None:
        first = auth_service.login(self.db, "alice@example.com", PASSWORD)
        second = auth_service.login(self.db, "alice@example.com", PASSWORD)
        self.assertNotEqual(first.refresh_token, second.refresh_token)
        rows = self._token_rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].refresh_token, second.refresh_token)

    def test_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentialsError):
            auth_service.login(self.db, "alice@example.com", "not-the-password")
        self.assertEqual(self._token_rows(), [])

    def test_unknown_email(self) -> None:
        with self.assertRaises(InvalidCredentialsError):
            auth_service.login(self.db, "nobody@example.com", PASSWORD)

    def test_token_row_inserted_by_concurrent_login_is_overwritten(self) -> None:
        self.db.add(
            UserRefreshToken(
                user_id=self.user.id,
                refresh_token="from-the-other-login",
                expires_at=datetime.now(timezone.utc) + timedelta(days=1),
            )
        )
        self.db.commit()

        real_find = refresh_tokens.find_by_user_id
        lookups: list[int] = []

        def stale_first_lookup(db, user_id):
            # First lookup happened before the other login committed its row.
            lookups.append(user_id)
            return None if len(lookups) == 1 else real_find(db, user_id)

        with patch.object(refresh_tokens, "find_by_user_id", side_effect=stale_first_lookup):
            result = auth_service.login(self.db, "alice@example.com", PASSWORD)

        self.assertEqual(len(lookups), 2)
        self.assertEqual(result.user_id, self.user.id)
        rows = self._token_rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].refresh_token, result.refresh_token)


class TestRefresh(AuthServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = auth_service.sign_up(self.db, _signup())
        self.login = auth_service.login(self.db, "alice@example.com", PASSWORD)

    def test_reissues_and_overwrites(self) -> None:
        pair = auth_service.refresh(self.db, self.login.refresh_token)
        self.assertNotEqual(pair.refresh_token, self.login.refresh_token)
        rows = self._token_rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].refresh_token, pair.refresh_token)

    def test_old_token_rejected_after_rotation(self) -> None:
        auth_service.refresh(self.db, self.login.refresh_token)
        with self.assertRaises(RefreshTokenInvalidError):
            auth_service.refresh(self.db, self.login.refresh_token)

    def test_invalid_signature_or_garbage(self) -> None:
        with self.assertRaises(RefreshTokenInvalidError):
            auth_service.refresh(self.db, "garbage")

    def test_access_token_cannot_refresh(self) -> None:
        with self.assertRaises(RefreshTokenInvalidError):
            auth_service.refresh(self.db, self.login.access_token)

    def test_unknown_user(self) -> None:
        orphan = create_token_pair(9999, "ROLE_USER")
        with self.assertRaises(UserNotFoundError):
            auth_service.refresh(self.db, orphan.refresh_token)

    def test_no_stored_token(self) -> None:
        other = auth_service.sign_up(self.db, _signup("bob@example.com", "bob"))
        never_stored = create_token_pair(other.id, other.role)
        with self.assertRaises(RefreshTokenNotFoundError):
            auth_service.refresh(self.db, never_stored.refresh_token)

    def test_valid_but_not_stored_token_rejected(self) -> None:
        unstored = create_token_pair(self.user.id, self.user.role)
        with self.assertRaises(RefreshTokenInvalidError):
            auth_service.refresh(self.db, unstored.refresh_token)

    def test_signed_token_with_non_numeric_subject(self) -> None:
        named = create_token_pair("alice", "ROLE_USER")
        with self.assertRaises(RefreshTokenInvalidError):
            auth_service.refresh(self.db, named.refresh_token)


class TestLogout(AuthServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        auth_service.sign_up(self.db, _signup())
        self.login = auth_service.login(self.db, "alice@example.com", PASSWORD)

    def test_logout_deletes_refresh_token(self) -> None:
        auth_service.logout(self.db, self.login.access_token)
        self.assertEqual(self._token_rows(), [])
        with self.assertRaises(RefreshTokenNotFoundError):
            auth_service.refresh(self.db, self.login.refresh_token)

    def test_second_logout_fails(self) -> None:
        auth_service.logout(self.db, self.login.access_token)
        with self.assertRaises(RefreshTokenNotFoundError):
            auth_service.logout(self.db, self.login.access_token)

    def test_invalid_access_token(self) -> None:
        with self.assertRaises(InvalidAccessTokenError):
            auth_service.logout(self.db, "garbage")
        with self.assertRaises(InvalidAccessTokenError):
            auth_service.logout(self.db, self.login.refresh_token)

    def test_logout_of_user_without_token(self) -> None:
        token = create_access_token(4242, "ROLE_USER")
        with self.assertRaises(RefreshTokenNotFoundError):
            auth_service.logout(self.db, token)


class TestUpdateProfile(AuthServiceTestCase):
    def test_updates_only_provided_fields(self) -> None:
        user = auth_service.sign_up(self.db, _signup())
        updated = auth_service.update_profile(
            self.db, user.id, ProfileUpdateRequest(nickname="alice2")
        )
        self.assertEqual(updated.nickname, "alice2")
        self.assertEqual(updated.introduction, "hi")
        self.assertEqual(updated.email, "alice@example.com")

    def test_null_nickname_is_ignored_and_introduction_cleared(self) -> None:
        user = auth_service.sign_up(self.db, _signup())
        updated = auth_service.update_profile(
            self.db, user.id, ProfileUpdateRequest(nickname=None, introduction=None)
        )
        self.assertEqual(updated.nickname, "alice")
        self.assertIsNone(updated.introduction)

    def test_unknown_user(self) -> None:
        with self.assertRaises(UserNotFoundError):
            auth_service.update_profile(self.db, 123, ProfileUpdateRequest(nickname="x"))


if __name__ == "__main__":
    unittest.main()
