"""
Page Relay — Block Transform
==============================

What:  Pure, stateless mapping between the flat BlockDescriptor shape and the
       upstream's nested per-type block JSON, in both directions.
Who:   Called by PageService (append, create, reconcile) and the content route.

Outbound (descriptor → upstream):
    paragraph / heading_1..3   {type, <type>: {rich_text: [{text: {content}}]}}
    image / video              {type, <type>: {type: "external", external: {url}}}
    bulleted_list_item         {type, bulleted_list_item: {rich_text: [...]}}
    bulleted_list (alias)      same as bulleted_list_item
    anything else              dropped

Inbound (upstream → content string):
    text types   rich_text[0].plain_text  (then rich_text[0].text.content)
    image        external.url, then file.url
    video        external.url
    other        "" and flagged unsupported

Both directions are total: missing or null fields never raise, and list
order is preserved exactly.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pagerelay.schemas.block import BlockDescriptor, ExtractedBlock

DescriptorLike = Union[BlockDescriptor, Mapping[str, Any]]


class BlockType(str, Enum):
    """Closed set of block types the relay can write and read back."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    IMAGE = "image"
    VIDEO = "video"
    BULLETED_LIST_ITEM = "bulleted_list_item"

    @property
    def is_text(self) -> bool:
        return self in TEXT_TYPES

    @property
    def is_media(self) -> bool:
        return self in MEDIA_TYPES

    @classmethod
    def resolve(cls, value: Any) -> Optional["BlockType"]:
        """
        Resolve a raw type string (or alias) to a BlockType.

        Returns None for anything unsupported, including non-string input.
        """
        if isinstance(value, BlockType):
            return value
        if not isinstance(value, str):
            return None
        value = TYPE_ALIASES.get(value, value)
        try:
            return cls(value)
        except ValueError:
            return None


TEXT_TYPES = frozenset({
    BlockType.PARAGRAPH,
    BlockType.HEADING_1,
    BlockType.HEADING_2,
    BlockType.HEADING_3,
    BlockType.BULLETED_LIST_ITEM,
})
MEDIA_TYPES = frozenset({BlockType.IMAGE, BlockType.VIDEO})

# Legacy names the create form still sends
TYPE_ALIASES = {"bulleted_list": BlockType.BULLETED_LIST_ITEM.value}


# ══════════════════════════════════════════════════════════════════════════
# Outbound: descriptor → upstream block
# ══════════════════════════════════════════════════════════════════════════

def _field(descriptor: DescriptorLike, name: str) -> Any:
    if isinstance(descriptor, BlockDescriptor):
        return getattr(descriptor, name, None)
    if isinstance(descriptor, Mapping):
        return descriptor.get(name)
    return None


def rich_text(content: Optional[str]) -> List[Dict[str, Any]]:
    """Single-run rich text array in the shape the upstream accepts on write."""
    return [{"text": {"content": content or ""}}]


def to_upstream_block(descriptor: DescriptorLike) -> Optional[Dict[str, Any]]:
    """
    Map one descriptor to its upstream block JSON.

    Returns None when the descriptor's type is unsupported.
    """
    block_type = BlockType.resolve(_field(descriptor, "type"))
    if block_type is None:
        return None

    content = _field(descriptor, "content")
    if not isinstance(content, str):
        content = ""

    if block_type.is_media:
        payload = {"type": "external", "external": {"url": content}}
    else:
        payload = {"rich_text": rich_text(content)}

    return {"type": block_type.value, block_type.value: payload}


def map_blocks(descriptors: Optional[Iterable[DescriptorLike]]) -> List[Dict[str, Any]]:
    """
    Map an ordered descriptor sequence to upstream blocks.

    Unsupported entries are dropped; the kept entries keep their relative order.
    """
    blocks = []
    for descriptor in descriptors or ():
        block = to_upstream_block(descriptor)
        if block is not None:
            blocks.append(block)
    return blocks


def content_update_payload(block_type: Any, text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Body for an in-place text update of an existing block.

    Only text types can be updated this way; returns None for anything else.
    """
    resolved = BlockType.resolve(block_type)
    if resolved is None or not resolved.is_text:
        return None
    return {resolved.value: {"rich_text": rich_text(text)}}


# ══════════════════════════════════════════════════════════════════════════
# Inbound: upstream block → content
# ══════════════════════════════════════════════════════════════════════════

def _dig(obj: Any, *path: Union[str, int]) -> Any:
    """Follow a key/index path, returning None at the first missing step."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(obj, list) or len(obj) <= step:
                return None
        elif not isinstance(obj, Mapping):
            return None
        obj = obj[step] if isinstance(step, int) else obj.get(step)
        if obj is None:
            return None
    return obj


def _first_str(*values: Any) -> str:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return ""


def extract_content(block: Any) -> str:
    """
    Return a block's display content as a plain string.

    Never raises: an absent or malformed field yields "".
    """
    block_type = BlockType.resolve(_dig(block, "type"))
    if block_type is None:
        return ""

    payload = _dig(block, block_type.value)

    if block_type.is_text:
        return _first_str(
            _dig(payload, "rich_text", 0, "plain_text"),
            _dig(payload, "rich_text", 0, "text", "content"),
        )
    if block_type is BlockType.IMAGE:
        return _first_str(
            _dig(payload, "external", "url"),
            _dig(payload, "file", "url"),
        )
    return _first_str(_dig(payload, "external", "url"))


def is_supported(block: Any) -> bool:
    return BlockType.resolve(_dig(block, "type")) is not None


def to_descriptor(block: Any) -> ExtractedBlock:
    """Wrap an upstream block into the inbound view used by the UI."""
    raw_type = _dig(block, "type")
    block_id = _dig(block, "id")
    if not isinstance(block_id, str):
        block_id = None
    return ExtractedBlock(
        id=block_id,
        upstream_id=block_id,
        type=raw_type if isinstance(raw_type, str) else "unsupported",
        content=extract_content(block),
        supported=is_supported(block),
    )


def extract_blocks(blocks: Optional[Iterable[Any]]) -> List[ExtractedBlock]:
    """Inbound view of an ordered upstream block list, order preserved."""
    return [to_descriptor(block) for block in blocks or ()]
