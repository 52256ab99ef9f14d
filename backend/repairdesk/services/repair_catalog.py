# Overview: Static repair-category taxonomy and label resolution for invoices and search.

"""
Repair category taxonomy.

Each selectable repair is a node id in a fixed tree. Records store only the
selected ids (or free-form "custom:<text>" tags); display code resolves them
to a " > "-joined label path from the root, e.g.
"Screen Repair > aftermaket incell > 120hz".
"""
from __future__ import annotations

from typing import Iterable, NamedTuple

CUSTOM_PREFIX = "custom:"
NONE_ID = "none"


class RepairNode(NamedTuple):
    id: str
    label: str
    children: tuple["RepairNode", ...] = ()


def _leaf(node_id: str, label: str) -> RepairNode:
    return RepairNode(node_id, label)


REPAIR_TREE: tuple[RepairNode, ...] = (
    _leaf("none", "None"),
    RepairNode("screen_repair", "Screen Repair", (
        RepairNode("aftermaket_incell", "aftermaket incell", (
            _leaf("incell_80_90hz", "80-90hz"),
            _leaf("incell_120hz", "120hz"),
            _leaf("standard_aftermaket_incell", "standard aftermaket"),
        )),
        RepairNode("aftermaket_hard", "aftermaket hard", (
            _leaf("hard_80_90hz", "80-90hz"),
            _leaf("hard_120hz", "120hz"),
            _leaf("standard_aftermaket_hard", "standard aftermaket"),
        )),
        _leaf("aftermaket_soft_120hz", "aftermaket soft 120hz"),
        _leaf("service_pack", "service pack"),
        _leaf("oem", "oem"),
    )),
    RepairNode("accessory_repair", "Accessory Repair", (
        RepairNode("camera", "camera", (
            _leaf("front_camera", "front"),
            _leaf("rear_camera", "rear"),
        )),
        RepairNode("charging_port", "charging port", (
            _leaf("microphone", "microphone"),
            _leaf("barometer", "barometer"),
        )),
        RepairNode("sensor", "sensor", (
            _leaf("wifi", "wifi"),
            _leaf("bluetooth", "bluetooth"),
            _leaf("light", "light"),
        )),
        RepairNode("battery", "battery", (
            _leaf("aftermaket_battery", "aftermaket"),
            _leaf("sp_battery", "sp"),
        )),
        RepairNode("glass", "glass", (
            _leaf("back_glass", "back"),
            _leaf("camera_glass", "camera"),
        )),
        RepairNode("speaker", "speaker", (
            _leaf("loud_speaker", "loud"),
            _leaf("front_speaker", "front"),
        )),
    )),
)


def _parent_chain(node_id: str, nodes: Iterable[RepairNode]) -> list[str]:
    for node in nodes:
        if node.id == node_id:
            return [node.label]
        if node.children:
            chain = _parent_chain(node_id, node.children)
            if chain:
                return [node.label, *chain]
    return []


def label_path(node_id: str | None) -> str:
    """Full label path for a category id; "" when the id is empty or unknown."""
    if not node_id:
        return ""
    if node_id == NONE_ID:
        return "None"
    return " > ".join(_parent_chain(node_id, REPAIR_TREE))


def is_custom(tag: str) -> bool:
    return tag.startswith(CUSTOM_PREFIX)


def describe_repair_item(tag: str | None) -> str:
    """Custom tags are shown verbatim without their prefix; ids resolve to a path."""
    if not tag:
        return ""
    if is_custom(tag):
        return tag[len(CUSTOM_PREFIX):].strip()
    return label_path(tag)


def describe_repair_items(tags: Iterable[str] | None) -> list[str]:
    """Resolved descriptions for the selected tags, skipping ones that resolve to nothing."""
    descriptions = []
    for tag in tags or ():
        text = describe_repair_item(tag)
        if text:
            descriptions.append(text)
    return descriptions


def known_ids() -> set[str]:
    """Every id in the taxonomy, leaves and branches alike."""
    ids: set[str] = set()
    stack = list(REPAIR_TREE)
    while stack:
        node = stack.pop()
        ids.add(node.id)
        stack.extend(node.children)
    return ids


def catalog_as_dict(nodes: Iterable[RepairNode] = REPAIR_TREE) -> list[dict]:
    """Tree in JSON-friendly form for the item selector."""
    return [
        {
            "id": node.id,
            "label": node.label,
            "children": catalog_as_dict(node.children) if node.children else [],
        }
        for node in nodes
    ]
