# Overview: Pytest coverage for repair label resolution and warranty policy texts.

import pytest

from repairdesk.services.policies import POLICY_TYPES, get_policy_text
from repairdesk.services.repair_catalog import (
    catalog_as_dict,
    describe_repair_item,
    describe_repair_items,
    known_ids,
    label_path,
)


class TestLabelPath:
    @pytest.mark.parametrize("node_id, expected", [
        ("screen_repair", "Screen Repair"),
        ("incell_120hz", "Screen Repair > aftermaket incell > 120hz"),
        ("hard_120hz", "Screen Repair > aftermaket hard > 120hz"),
        ("oem", "Screen Repair > oem"),
        ("rear_camera", "Accessory Repair > camera > rear"),
        ("camera_glass", "Accessory Repair > glass > camera"),
        ("none", "None"),
    ])
    def test_known_ids(self, node_id, expected):
        assert label_path(node_id) == expected

    @pytest.mark.parametrize("node_id", ["", None, "flux_capacitor"])
    def test_unknown_or_empty_is_blank(self, node_id):
        assert label_path(node_id) == ""

    def test_every_known_id_resolves(self):
        for node_id in known_ids():
            assert label_path(node_id)


class TestDescribe:
    def test_custom_tag_strips_prefix(self):
        assert describe_repair_item("custom:  Face ID flex ") == "Face ID flex"

    def test_unknown_tags_are_skipped(self):
        tags = ["bluetooth", "no_such_repair", "", "custom:Lens"]

        assert describe_repair_items(tags) == [
            "Accessory Repair > sensor > bluetooth",
            "Lens",
        ]

    def test_empty_custom_tag_is_skipped(self):
        assert describe_repair_items(["custom:", "custom:   "]) == []


def test_catalog_tree_shape():
    tree = catalog_as_dict()

    assert [n["id"] for n in tree] == ["none", "screen_repair", "accessory_repair"]
    screen = tree[1]
    assert screen["label"] == "Screen Repair"
    assert screen["children"][0]["children"][1] == {"id": "incell_120hz", "label": "120hz", "children": []}


class TestPolicies:
    @pytest.mark.parametrize("policy_type, heading", [
        ("standard", "Standard Repair Warranty"),
        ("water", "Water Damage Repair Policy"),
        ("mainboard", "Motherboard / IC / Micro-Soldering Repair Policy"),
        ("sale", "Device Sales Warranty"),
    ])
    def test_templates(self, policy_type, heading):
        assert get_policy_text(policy_type).startswith(heading)

    def test_custom_uses_given_text(self):
        assert get_policy_text("custom", "No warranty on cosmetic work.") == "No warranty on cosmetic work."
        assert get_policy_text("custom") == ""

    @pytest.mark.parametrize("policy_type", [None, "", "lifetime"])
    def test_missing_or_unknown_is_none(self, policy_type):
        assert get_policy_text(policy_type) is None

    def test_policy_type_set(self):
        assert POLICY_TYPES == {"standard", "water", "mainboard", "sale", "custom"}
