"""Tokenizers and stack matchers for markup tags and template actions."""

from .actions import (
    Action,
    ActionKind,
    find_action,
    list_blocks,
    list_placeholder_slots,
    scan_actions,
)
from .tags import Tag, TagKind, find_tag, list_tags, match_tags, scan_tags

__all__ = [
    "Action",
    "ActionKind",
    "Tag",
    "TagKind",
    "find_action",
    "find_tag",
    "list_blocks",
    "list_placeholder_slots",
    "list_tags",
    "match_tags",
    "scan_actions",
    "scan_tags",
]
