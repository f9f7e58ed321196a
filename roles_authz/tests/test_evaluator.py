"""Unit tests for the permission evaluator.

The evaluator is tested against a mocked permission cache, so no database or
cache backend is involved.
"""

from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import Mock

from ddt import data, ddt, unpack

from roles_authz.engine.evaluator import PermissionEvaluator


def make_permission(name: str) -> SimpleNamespace:
    return SimpleNamespace(name=name)


@ddt
class TestPermissionEvaluator(TestCase):
    """Test cases for single-name and list permission checks."""

    def setUp(self):
        """Set up an 'editor' role holding the 'edit' and 'publish' permissions."""
        self.cache = Mock()
        self.cache.get.return_value = [make_permission("edit"), make_permission("publish")]
        self.evaluator = PermissionEvaluator(cache=self.cache)
        self.role = Mock()

    @data(
        ("edit", True),
        ("publish", True),
        ("archive", False),
        ("Edit", False),
        ("edit ", False),
        ("", False),
    )
    @unpack
    def test_single_name_uses_exact_match(self, name, expected):
        """Test that a single name matches only a permission with exactly that name.

        Expected Result:
        - Names present in the role's permissions return True.
        - Case or whitespace differences return False.
        """
        self.assertEqual(self.evaluator.has_permission(self.role, name), expected)
        self.cache.get.assert_called_once_with(self.role)

    @data(
        (["edit", "archive"], False, True),
        (["edit", "archive"], True, False),
        (["edit", "publish"], True, True),
        (["edit", "publish"], False, True),
        (["archive", "delete"], False, False),
        (["archive", "delete"], True, False),
        (["archive", "publish"], False, True),
    )
    @unpack
    def test_list_of_names(self, names, require_all, expected):
        """Test any/all semantics for lists of names.

        Expected Result:
        - With require_all=False, True if any name is held.
        - With require_all=True, True only if every name is held.
        """
        self.assertEqual(self.evaluator.has_permission(self.role, names, require_all=require_all), expected)

    @data(True, False)
    def test_empty_list_returns_require_all(self, require_all):
        """Test that an empty list returns require_all without reading the cache."""
        self.assertEqual(self.evaluator.has_permission(self.role, [], require_all=require_all), require_all)
        self.cache.get.assert_not_called()

    def test_any_stops_at_first_held_permission(self):
        """Test that ANY checks stop reading the cache once a name is found."""
        self.assertTrue(self.evaluator.has_permission(self.role, ["edit", "archive", "delete"]))
        self.assertEqual(self.cache.get.call_count, 1)

    def test_all_stops_at_first_missing_permission(self):
        """Test that ALL checks stop reading the cache once a name is missing."""
        self.assertFalse(self.evaluator.has_permission(self.role, ["archive", "edit", "publish"], require_all=True))
        self.assertEqual(self.cache.get.call_count, 1)

    def test_each_name_reads_the_cache(self):
        """Test that every evaluated name re-reads the role's cached permissions."""
        self.assertTrue(self.evaluator.has_permission(self.role, ["edit", "publish"], require_all=True))
        self.assertEqual(self.cache.get.call_count, 2)

    def test_accepts_any_iterable_of_names(self):
        """Test that tuples and generators are treated like lists."""
        self.assertTrue(self.evaluator.has_permission(self.role, ("archive", "publish")))
        self.assertFalse(self.evaluator.has_permission(self.role, (name for name in ["edit", "x"]), require_all=True))

    def test_role_without_permissions(self):
        """Test that a role with no permissions holds nothing."""
        self.cache.get.return_value = []

        self.assertFalse(self.evaluator.has_permission(self.role, "edit"))
        self.assertFalse(self.evaluator.has_permission(self.role, ["edit"]))
        self.assertFalse(self.evaluator.has_permission(self.role, ["edit"], require_all=True))

    def test_defaults_to_the_role_permission_cache(self):
        """Test that an evaluator without an injected cache uses the role's own cache."""
        role = Mock()
        role.get_permission_cache.return_value = self.cache

        self.assertTrue(PermissionEvaluator().has_permission(role, "publish"))
        role.get_permission_cache.assert_called_once_with()
        self.cache.get.assert_called_once_with(role)

    def test_cache_errors_propagate(self):
        """Test that a failing cache read is raised instead of granting or denying."""
        self.cache.get.side_effect = ConnectionError("cache unavailable")

        with self.assertRaises(ConnectionError):
            self.evaluator.has_permission(self.role, "edit")


@ddt
class TestCombine(TestCase):
    """Test cases for the any/all combination helper."""

    @data(
        ([], False, False),
        ([], True, True),
        ([True], False, True),
        ([False], True, False),
        ([False, True], False, True),
        ([True, False], True, False),
        ([True, True], True, True),
    )
    @unpack
    def test_combine(self, results, require_all, expected):
        """Test combining precomputed check results."""
        names = [str(index) for index in range(len(results))]
        check = dict(zip(names, results)).__getitem__

        self.assertEqual(PermissionEvaluator.combine(names, check, require_all), expected)
