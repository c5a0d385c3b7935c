"""
Page Relay — Block Transform Unit Tests
=========================================

What:  Tests for the descriptor <-> upstream block mapping.
How:   Pure functions; no mocks needed.

What we test:
    ✅ Per-type outbound shapes, including the bulleted_list alias
    ✅ Unsupported types are dropped, order is preserved
    ✅ Content survives map-then-extract for every supported type
    ✅ Extraction never raises on missing or null fields
"""

import pytest

from pagerelay.schemas.block import BlockDescriptor
from pagerelay.services.block_transform import (
    BlockType,
    content_update_payload,
    extract_blocks,
    extract_content,
    map_blocks,
    to_descriptor,
    to_upstream_block,
)

SUPPORTED = [t.value for t in BlockType]


class TestOutboundMapping:
    """Tests for to_upstream_block / map_blocks."""

    @pytest.mark.parametrize("block_type", ["paragraph", "heading_1", "heading_2", "heading_3"])
    def test_text_block_shape(self, block_type):
        block = to_upstream_block({"type": block_type, "content": "Hello"})
        assert block == {
            "type": block_type,
            block_type: {"rich_text": [{"text": {"content": "Hello"}}]},
        }

    @pytest.mark.parametrize("block_type", ["image", "video"])
    def test_media_block_shape(self, block_type):
        url = "https://example.com/media"
        block = to_upstream_block(BlockDescriptor(type=block_type, content=url))
        assert block == {
            "type": block_type,
            block_type: {"type": "external", "external": {"url": url}},
        }

    def test_bulleted_list_alias(self):
        block = to_upstream_block({"type": "bulleted_list", "content": "item"})
        assert block["type"] == "bulleted_list_item"
        assert block["bulleted_list_item"]["rich_text"][0]["text"]["content"] == "item"

    def test_missing_content_degrades_to_empty_string(self):
        block = to_upstream_block({"type": "paragraph"})
        assert block["paragraph"]["rich_text"][0]["text"]["content"] == ""

    def test_null_content_on_model_degrades_to_empty_string(self):
        descriptor = BlockDescriptor(type="heading_2", content=None)
        assert descriptor.content == ""
        block = to_upstream_block(descriptor)
        assert block["heading_2"]["rich_text"][0]["text"]["content"] == ""

    def test_unsupported_type_maps_to_none(self):
        assert to_upstream_block({"type": "table", "content": "x"}) is None
        assert to_upstream_block({"content": "no type"}) is None

    def test_malformed_descriptor_fields_degrade(self):
        untyped = BlockDescriptor.model_validate({"type": None, "content": "x", "id": {"a": 1}})
        assert untyped.type is None
        assert untyped.id is None
        assert to_upstream_block(untyped) is None

        numeric = BlockDescriptor.model_validate({"type": "image", "content": 5})
        assert numeric.content == ""
        assert to_upstream_block(numeric)["image"]["external"]["url"] == ""

    def test_scenario_mixed_list(self):
        """heading_1, unknown, legacy bulleted_list → two blocks, unknown dropped."""
        blocks = map_blocks([
            {"type": "heading_1", "content": "Title"},
            {"type": "foo", "content": "x"},
            {"type": "bulleted_list", "content": "item"},
        ])
        assert len(blocks) == 2
        assert blocks[0]["type"] == "heading_1"
        assert blocks[0]["heading_1"]["rich_text"][0]["text"]["content"] == "Title"
        assert blocks[1]["type"] == "bulleted_list_item"
        assert blocks[1]["bulleted_list_item"]["rich_text"][0]["text"]["content"] == "item"

    def test_each_unsupported_entry_shrinks_output_by_one(self):
        descriptors = [
            {"type": "paragraph", "content": "a"},
            {"type": "toggle", "content": "b"},
            {"type": "callout", "content": "c"},
            {"type": "video", "content": "https://v"},
        ]
        assert len(map_blocks(descriptors)) == len(descriptors) - 2

    def test_order_is_preserved(self):
        order = ["video", "heading_3", "paragraph", "image", "bulleted_list_item", "heading_1", "heading_2"]
        descriptors = [{"type": t, "content": f"c{i}"} for i, t in enumerate(order)]
        mapped = map_blocks(descriptors)
        assert [b["type"] for b in mapped] == order
        assert [extract_content(b) for b in mapped] == [f"c{i}" for i in range(len(order))]

    def test_empty_and_none_input(self):
        assert map_blocks([]) == []
        assert map_blocks(None) == []


class TestRoundTrip:
    """Content survives outbound mapping then inbound extraction."""

    @pytest.mark.parametrize("block_type", SUPPORTED)
    def test_content_round_trip(self, block_type):
        content = "https://example.com/x.png" if block_type in ("image", "video") else "Some text ✓"
        block = to_upstream_block({"type": block_type, "content": content})
        assert extract_content(block) == content


class TestInboundExtraction:
    """Tests for extract_content / to_descriptor."""

    def test_prefers_plain_text(self):
        block = {
            "type": "paragraph",
            "paragraph": {"rich_text": [{"plain_text": "shown", "text": {"content": "raw"}}]},
        }
        assert extract_content(block) == "shown"

    def test_image_falls_back_to_file_url(self):
        block = {"type": "image", "image": {"type": "file", "file": {"url": "https://s3/img.png"}}}
        assert extract_content(block) == "https://s3/img.png"

    def test_video_ignores_file_url(self):
        block = {"type": "video", "video": {"type": "file", "file": {"url": "https://s3/v.mp4"}}}
        assert extract_content(block) == ""

    @pytest.mark.parametrize("block", [
        {"type": "paragraph"},
        {"type": "paragraph", "paragraph": None},
        {"type": "heading_1", "heading_1": {"rich_text": []}},
        {"type": "heading_2", "heading_2": {"rich_text": [None]}},
        {"type": "bulleted_list_item", "bulleted_list_item": {"rich_text": "oops"}},
        {"type": "image", "image": {"external": None}},
        {"type": "video", "video": {}},
        {},
        None,
        "not a block",
    ])
    def test_missing_fields_return_empty_string(self, block):
        assert extract_content(block) == ""

    def test_unsupported_block_is_flagged(self):
        extracted = to_descriptor({"id": "b9", "type": "table", "table": {"table_width": 2}})
        assert extracted.id == "b9"
        assert extracted.upstream_id == "b9"
        assert extracted.type == "table"
        assert extracted.content == ""
        assert extracted.supported is False

    def test_extract_blocks_keeps_order(self):
        blocks = [
            {"id": "1", "type": "heading_1", "heading_1": {"rich_text": [{"plain_text": "A"}]}},
            {"id": "2", "type": "divider", "divider": {}},
            {"id": "3", "type": "image", "image": {"external": {"url": "https://i"}}},
        ]
        extracted = extract_blocks(blocks)
        assert [b.id for b in extracted] == ["1", "2", "3"]
        assert [b.content for b in extracted] == ["A", "", "https://i"]
        assert [b.supported for b in extracted] == [True, False, True]


class TestContentUpdatePayload:

    def test_text_type(self):
        assert content_update_payload("heading_3", "New") == {
            "heading_3": {"rich_text": [{"text": {"content": "New"}}]}
        }

    def test_alias_resolves(self):
        assert "bulleted_list_item" in content_update_payload("bulleted_list", "x")

    @pytest.mark.parametrize("block_type", ["image", "video", "table", None])
    def test_non_text_types_rejected(self, block_type):
        assert content_update_payload(block_type, "x") is None
