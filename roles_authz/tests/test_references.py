"""Unit tests for resolving permission references to primary keys."""

from types import SimpleNamespace

from ddt import data, ddt, unpack
from django.test import TestCase

from roles_authz.engine.references import InvalidPermissionReference, PermissionKey, PermissionKeySource
from roles_authz.models import Permission


@ddt
class TestPermissionKey(TestCase):
    """Test cases for PermissionKey.from_reference."""

    @data(
        (7, 7, PermissionKeySource.IDENTIFIER),
        ("7", "7", PermissionKeySource.IDENTIFIER),
        ({"id": 7}, 7, PermissionKeySource.MAPPING),
        ({"id": "7", "name": "edit"}, "7", PermissionKeySource.MAPPING),
    )
    @unpack
    def test_resolves_identifiers_and_mappings(self, reference, expected_value, expected_source):
        """Test that bare identifiers and mappings resolve to their key."""
        key = PermissionKey.from_reference(reference)

        self.assertEqual(key.value, expected_value)
        self.assertEqual(key.source, expected_source)

    def test_resolves_saved_model_instance(self):
        """Test that a saved Permission resolves to its primary key."""
        permission = Permission.objects.create(name="edit")

        key = PermissionKey.from_reference(permission)

        self.assertEqual(key, PermissionKey(value=permission.pk, source=PermissionKeySource.ENTITY))

    def test_resolved_key_is_returned_unchanged(self):
        """Test that resolving a PermissionKey returns the same key."""
        key = PermissionKey(value=3, source=PermissionKeySource.MAPPING)

        self.assertIs(PermissionKey.from_reference(key), key)

    @data(
        None,
        True,
        False,
        3.5,
        ["7"],
        {"pk": 7},
        {"id": None},
        {"id": [7]},
        SimpleNamespace(id=7),
    )
    def test_rejects_malformed_references(self, reference):
        """Test that references of any other shape raise InvalidPermissionReference."""
        with self.assertRaises(InvalidPermissionReference):
            PermissionKey.from_reference(reference)

    def test_rejects_unsaved_model_instance(self):
        """Test that an unsaved Permission has no key to resolve."""
        with self.assertRaises(InvalidPermissionReference):
            PermissionKey.from_reference(Permission(name="edit"))

    def test_invalid_reference_is_a_value_error(self):
        """Test that callers catching ValueError also catch malformed references."""
        self.assertTrue(issubclass(InvalidPermissionReference, ValueError))
