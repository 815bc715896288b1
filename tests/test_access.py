"""Unit tests for app.core.access: path prefix to allowed-role mapping."""

import unittest

from app.core.access import required_roles

ALL_ROLES = {"ROLE_USER", "ROLE_MANAGER", "ROLE_ADMIN"}


class TestRequiredRoles(unittest.TestCase):
    def test_user_paths_allow_every_role(self) -> None:
        self.assertEqual(required_roles("/api/v1/auth/user/me", "/api/v1"), ALL_ROLES)

    def test_manager_paths_allow_manager_and_admin(self) -> None:
        self.assertEqual(
            required_roles("/api/v1/auth/manager/users/3", "/api/v1"),
            {"ROLE_MANAGER", "ROLE_ADMIN"},
        )

    def test_admin_paths_allow_admin_only(self) -> None:
        self.assertEqual(required_roles("/api/v1/auth/admin/users", "/api/v1"), {"ROLE_ADMIN"})

    def test_prefix_itself_is_gated(self) -> None:
        self.assertEqual(required_roles("/api/v1/auth/admin", "/api/v1"), {"ROLE_ADMIN"})

    def test_matching_is_by_path_segment(self) -> None:
        self.assertIsNone(required_roles("/api/v1/auth/administrators", "/api/v1"))
        self.assertIsNone(required_roles("/api/v1/auth/username", "/api/v1"))

    def test_other_paths_are_public(self) -> None:
        for path in ("/api/v1/auth/login", "/api/v1/feeds/bundles", "/api/v1/health/", "/api/v1"):
            with self.subTest(path=path):
                self.assertIsNone(required_roles(path, "/api/v1"))

    def test_paths_outside_api_prefix_are_public(self) -> None:
        self.assertIsNone(required_roles("/docs", "/api/v1"))
        self.assertIsNone(required_roles("/auth/admin/users", "/api/v1"))

    def test_without_api_prefix(self) -> None:
        self.assertEqual(required_roles("/auth/admin/users"), {"ROLE_ADMIN"})


if __name__ == "__main__":
    unittest.main()
