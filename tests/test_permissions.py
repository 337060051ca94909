"""Unit tests for the permission bitmask: capability checks and per-user storage."""

import unittest
import uuid

from app.core.errors import NotFoundError, ValidationError
from app.models import Permission, PermissionLevel
from app.services import permissions
from tests.helpers import make_session_factory, make_settings, make_user

READ = PermissionLevel.READ
WRITE = PermissionLevel.WRITE
APPROVE = PermissionLevel.APPROVE
MODERATE = PermissionLevel.MODERATE


class TestPermissionLevel(unittest.TestCase):
    def test_bit_values(self) -> None:
        self.assertEqual([READ.value, WRITE.value, APPROVE.value, MODERATE.value], [1, 2, 4, 8])
        self.assertEqual(PermissionLevel.all().value, 15)
        self.assertEqual(PermissionLevel.none().value, 0)

    def test_flags_combine_with_bitwise_or(self) -> None:
        self.assertEqual((READ | WRITE).value, 3)
        self.assertIn(WRITE, READ | WRITE)
        self.assertNotIn(APPROVE, READ | WRITE)

    def test_arithmetic_addition_is_not_supported(self) -> None:
        with self.assertRaises(TypeError):
            READ + WRITE  # noqa: B018

    def test_from_mask_accepts_every_combination(self) -> None:
        for mask in range(16):
            with self.subTest(mask=mask):
                self.assertEqual(permissions.from_mask(mask).value, mask)

    def test_from_mask_rejects_unknown_bits(self) -> None:
        for mask in (16, 17, -1):
            with self.subTest(mask=mask):
                with self.assertRaises(ValidationError):
                    permissions.from_mask(mask)


class TestHasCapability(unittest.TestCase):
    def test_any_shared_bit_grants_access(self) -> None:
        for user_mask in range(16):
            for required_mask in range(1, 16):
                with self.subTest(user=user_mask, required=required_mask):
                    self.assertEqual(
                        permissions.has_capability(user_mask, required_mask),
                        (user_mask & required_mask) != 0,
                    )

    def test_write_only_user_passes_read_write_route(self) -> None:
        self.assertTrue(permissions.has_capability(WRITE, READ | WRITE))

    def test_read_only_user_fails_write_route(self) -> None:
        self.assertFalse(permissions.has_capability(READ, WRITE))

    def test_no_permissions_never_passes(self) -> None:
        self.assertFalse(permissions.has_capability(PermissionLevel.none(), PermissionLevel.all()))


class TestDefaultLevel(unittest.TestCase):
    def test_open_sign_up_gets_read_write(self) -> None:
        self.assertEqual(permissions.default_level(make_settings()), READ | WRITE)

    def test_enforced_email_gets_read_only(self) -> None:
        self.assertEqual(permissions.default_level(make_settings(ENFORCE_EMAIL=True)), READ)


class TestSetPermission(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_inserts_when_missing_then_updates(self) -> None:
        user = make_user(self.db, "perm-user")
        row = permissions.set_permission(self.db, user.id, APPROVE)
        self.assertEqual(row.permission, APPROVE)

        row = permissions.set_permission(self.db, user.id, MODERATE | READ)
        self.assertEqual(row.permission, MODERATE | READ)
        self.assertEqual(self.db.query(Permission).filter(Permission.user_id == user.id).count(), 1)

    def test_unknown_user_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            permissions.set_permission(self.db, uuid.uuid4(), READ)

    def test_get_without_row_is_not_found(self) -> None:
        user = make_user(self.db, "no-perms")
        with self.assertRaises(NotFoundError):
            permissions.get_by_user_id(self.db, user.id)

    def test_stored_mask_survives_reload(self) -> None:
        user = make_user(self.db, "reload", level=WRITE | APPROVE)
        self.db.expire_all()
        self.assertEqual(permissions.get_by_user_id(self.db, user.id).permission.value, 6)


if __name__ == "__main__":
    unittest.main()
