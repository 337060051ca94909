"""Tests for tag taxonomy: slug normalization, category/tag services and routes."""

import unittest
import uuid

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models import PermissionLevel, TagCategory
from app.schemas.common import PagedQuery
from app.schemas.tag import CategoryCreate, CategoryUpdate, TagCreate, TagListParams, TagUpdate
from app.services import tags
from app.services.slugs import normalize_slug, sluggify
from tests.helpers import (
    bearer,
    make_client,
    make_session_factory,
    make_settings,
    make_user,
    reset_overrides,
)

PREFIX = "/api/v1"


class TestSluggify(unittest.TestCase):
    def test_cases(self) -> None:
        cases = [
            ("test", "test"),
            ("test spaces", "test_spaces"),
            ("test spaces with__double_underscores", "test_spaces_with_double_underscores"),
            ("Mixed CASE", "mixed_case"),
            ("kirisame marisa (touhou)", "kirisame_marisa_(touhou)"),
            ("what?! #1", "what_1"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(sluggify(value), expected)

    def test_normalize_rejects_empty_result(self) -> None:
        for value in ("", "   ", "!!!"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    normalize_slug(value)

    def test_normalize_trims(self) -> None:
        self.assertEqual(normalize_slug("  Blue Sky  "), "blue_sky")


class TestTagServices(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.user = make_user(self.db, "curator", level=PermissionLevel.all(), admin=True)
        self.category = tags.create_category(
            self.db, CategoryCreate(slug="Character", name="Character"), self.user.id
        )

    def tearDown(self) -> None:
        self.db.close()

    def test_category_slug_is_normalized_and_audited(self) -> None:
        self.assertEqual(self.category.slug, "character")
        self.assertEqual(tags.category_response(self.category).created_by.name, "curator")

    def test_duplicate_category_is_conflict(self) -> None:
        with self.assertRaises(ConflictError):
            tags.create_category(self.db, CategoryCreate(slug="character"), self.user.id)

    def test_tag_slug_unique_per_category(self) -> None:
        other = tags.create_category(self.db, CategoryCreate(slug="copyright"), self.user.id)
        tags.create_tag(self.db, TagCreate(slug="touhou", category_id=self.category.id), self.user.id)
        tags.create_tag(self.db, TagCreate(slug="touhou", category_id=other.id), self.user.id)
        with self.assertRaises(ConflictError):
            tags.create_tag(self.db, TagCreate(slug="Touhou", category_id=self.category.id), self.user.id)

    def test_tag_requires_existing_category(self) -> None:
        with self.assertRaises(NotFoundError):
            tags.create_tag(self.db, TagCreate(slug="orphan", category_id=uuid.uuid4()), self.user.id)

    def test_tag_response_includes_category(self) -> None:
        tag = tags.create_tag(
            self.db, TagCreate(slug="hakurei reimu", name="Hakurei Reimu", category_id=self.category.id),
            self.user.id,
        )
        response = tags.tag_response(tag)
        self.assertEqual(response.slug, "hakurei_reimu")
        self.assertEqual(response.category_slug, "character")
        self.assertEqual(tags.get_tag_by_slug(self.db, "hakurei_reimu").id, tag.id)

    def test_update_and_soft_delete(self) -> None:
        tag = tags.create_tag(self.db, TagCreate(slug="old", category_id=self.category.id), self.user.id)
        updated = tags.update_tag(self.db, TagUpdate(id=tag.id, slug="new name"), self.user.id)
        self.assertEqual(updated.slug, "new_name")
        self.assertEqual(updated.updated_by_id, self.user.id)

        tags.delete_tag(self.db, tag.id, self.user.id)
        with self.assertRaises(NotFoundError):
            tags.get_tag(self.db, tag.id)

    def test_update_category(self) -> None:
        updated = tags.update_category(
            self.db, CategoryUpdate(id=self.category.id, name="Characters"), self.user.id
        )
        self.assertEqual(updated.name, "Characters")
        self.assertEqual(updated.slug, "character")

    def test_deleted_category_leaves_listing(self) -> None:
        tags.delete_category(self.db, self.category.id, self.user.id)
        rows, total = tags.list_categories(self.db, PagedQuery())
        self.assertEqual((rows, total), ([], 0))
        row = self.db.get(TagCategory, self.category.id)
        self.assertEqual(row.deleted_by_id, self.user.id)

    def test_list_tags_filters_by_category(self) -> None:
        other = tags.create_category(self.db, CategoryCreate(slug="general"), self.user.id)
        for slug in ("b_tag", "a_tag"):
            tags.create_tag(self.db, TagCreate(slug=slug, category_id=self.category.id), self.user.id)
        tags.create_tag(self.db, TagCreate(slug="c_tag", category_id=other.id), self.user.id)

        rows, total = tags.list_tags(self.db, TagListParams(category_id=self.category.id))
        self.assertEqual(total, 2)
        self.assertEqual([t.slug for t in rows], ["a_tag", "b_tag"])


class TestTagRoutes(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.settings = make_settings()
        self.client = make_client(self.factory, self.settings)
        db = self.factory()
        try:
            admin = make_user(db, "curator", level=PermissionLevel.all(), admin=True)
            member = make_user(db, "member", level=PermissionLevel.all())
            self.admin_headers = bearer(admin, self.settings)
            self.member_headers = bearer(member, self.settings)
        finally:
            db.close()

    def tearDown(self) -> None:
        reset_overrides()

    def test_writes_need_admin_reads_are_public(self) -> None:
        payload = {"slug": "artist", "name": "Artist"}
        denied = self.client.post(f"{PREFIX}/tag-categories", json=payload, headers=self.member_headers)
        self.assertEqual(denied.status_code, 401)

        created = self.client.post(f"{PREFIX}/tag-categories", json=payload, headers=self.admin_headers)
        self.assertEqual(created.status_code, 200, created.text)
        category_id = created.json()["data"]["id"]

        tag = self.client.post(
            f"{PREFIX}/tags",
            json={"slug": "Some Artist", "category_id": category_id},
            headers=self.admin_headers,
        )
        self.assertEqual(tag.status_code, 200, tag.text)

        by_name = self.client.get(f"{PREFIX}/tags/name/some_artist")
        self.assertEqual(by_name.status_code, 200)
        self.assertEqual(by_name.json()["data"]["category_slug"], "artist")

        listing = self.client.get(f"{PREFIX}/tag-categories", params={"keywords": "ART"})
        self.assertEqual(listing.json()["data"]["meta"]["total"], 1)

    def test_duplicate_category_is_409(self) -> None:
        payload = {"slug": "meta"}
        self.client.post(f"{PREFIX}/tag-categories", json=payload, headers=self.admin_headers)
        again = self.client.post(f"{PREFIX}/tag-categories", json=payload, headers=self.admin_headers)
        self.assertEqual(again.status_code, 409)
        self.assertEqual(again.json()["status"], 409)

    def test_unknown_tag_is_404(self) -> None:
        self.assertEqual(self.client.get(f"{PREFIX}/tags/{uuid.uuid4()}").status_code, 404)
        self.assertEqual(self.client.get(f"{PREFIX}/tags/name/nothing").status_code, 404)


if __name__ == "__main__":
    unittest.main()
