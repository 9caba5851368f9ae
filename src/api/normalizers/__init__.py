"""Normalizers por canal: conversão de payloads externos para modelos internos.

Estrutura:
- dingtalk/: normalizer do robô DingTalk (envelope, mídia única, richText)

Cada canal tem seu próprio extractor e normalizer, mantendo SRP.
"""

from .dingtalk import (
    extract_file_from_message,
    join_text_parts,
    normalize_message,
    parse_rich_text_message,
)

__all__ = [
    "extract_file_from_message",
    "join_text_parts",
    "normalize_message",
    "parse_rich_text_message",
]
