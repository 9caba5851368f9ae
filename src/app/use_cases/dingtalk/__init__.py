"""Use cases específicos de DingTalk."""

from .inbound_context import (
    assign_media_fields_to_context,
    build_file_context_message,
    build_inbound_context,
    build_rich_text_body,
)
from .process_inbound_media import InboundMediaProcessor

__all__ = [
    "InboundMediaProcessor",
    "assign_media_fields_to_context",
    "build_file_context_message",
    "build_inbound_context",
    "build_rich_text_body",
]
