from django.test import SimpleTestCase

from googlemapfield.conf import DEFAULT_OPTIONS
from googlemapfield.options import get_path, merge_options, replace_recursive, set_path


class MergeOptionsTest(SimpleTestCase):
    """Test the construction-time option merge"""

    def test_nested_override_keeps_siblings(self):
        merged = merge_options({"show_search_box": False, "map": {"zoom": 8}}, {"map": {"zoom": 12}})
        self.assertEqual(merged, {"show_search_box": False, "map": {"zoom": 12}})

    def test_scalar_override_replaces(self):
        merged = merge_options({"show_search_box": False, "map": {"zoom": 8}}, {"show_search_box": True})
        self.assertEqual(merged, {"show_search_box": True, "map": {"zoom": 8}})

    def test_non_mapping_default_fully_replaced(self):
        merged = merge_options({"api_key": None, "coords": [1, 2]}, {"coords": [3]})
        self.assertEqual(merged["coords"], [3])

    def test_merge_is_one_level_deep(self):
        defaults = {"map": {"styles": {"color": "red", "weight": 2}}}
        merged = merge_options(defaults, {"map": {"styles": {"color": "blue"}}})
        self.assertEqual(merged["map"]["styles"], {"color": "blue"})

    def test_unknown_keys_ignored(self):
        with self.assertLogs("googlemapfield.options", level="WARNING"):
            merged = merge_options({"map": {"zoom": 8}}, {"colour": "red"})
        self.assertNotIn("colour", merged)

    def test_none_override_keeps_default(self):
        merged = merge_options({"show_search_box": True}, {"show_search_box": None})
        self.assertTrue(merged["show_search_box"])

    def test_defaults_not_mutated(self):
        merged = merge_options(DEFAULT_OPTIONS, {"map": {"zoom": 12}})
        merged["field_names"]["Latitude"] = "lat"

        self.assertEqual(DEFAULT_OPTIONS["map"]["zoom"], 4)
        self.assertEqual(DEFAULT_OPTIONS["field_names"]["Latitude"], "Latitude")


class ReplaceRecursiveTest(SimpleTestCase):
    """Test the payload merge used for client settings"""

    def test_recurses_through_nested_mappings(self):
        base = {"map": {"zoom": 3, "mapTypeId": "ROADMAP"}, "coords": [1.0, 2.0]}
        result = replace_recursive(base, {"map": {"styles": {"marker": {"color": "red"}}}})

        self.assertEqual(
            result,
            {
                "map": {"zoom": 3, "mapTypeId": "ROADMAP", "styles": {"marker": {"color": "red"}}},
                "coords": [1.0, 2.0],
            },
        )

    def test_replacement_wins(self):
        result = replace_recursive({"map": {"zoom": 3}}, {"map": {"zoom": 9}, "api_key": "abc"})
        self.assertEqual(result, {"map": {"zoom": 9}, "api_key": "abc"})


class PathTest(SimpleTestCase):
    """Test dot-path access"""

    def setUp(self):
        self.options = {"map": {"zoom": 8}, "show_search_box": False}

    def test_get_existing_path(self):
        self.assertEqual(get_path(self.options, "map.zoom"), 8)
        self.assertFalse(get_path(self.options, "show_search_box"))

    def test_get_missing_path_returns_none(self):
        self.assertIsNone(get_path(self.options, "map.center.lat"))
        self.assertIsNone(get_path(self.options, "missing"))
        self.assertIsNone(get_path(self.options, "show_search_box.nested"))

    def test_set_creates_intermediate_levels(self):
        set_path(self.options, ["newsection", "deeper", "key"], "v")
        self.assertEqual(self.options["newsection"], {"deeper": {"key": "v"}})

    def test_set_replaces_scalar_in_the_way(self):
        set_path(self.options, ["show_search_box", "key"], "v")
        self.assertEqual(get_path(self.options, "show_search_box.key"), "v")
