"""Renderer package."""

from .json_codec import RecordDecodeError, dump_record, load_record
from .markdown_renderer import MarkdownRenderer

__all__ = ["MarkdownRenderer", "RecordDecodeError", "dump_record", "load_record"]
