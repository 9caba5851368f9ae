"""Normalizer DingTalk: extração e normalização de mensagens do robô.

Responsabilidades:
- Normalizar o envelope do callback Stream para DingtalkMessageContext
- Extrair descritor de mídia única (picture, video, audio, file)
- Separar mensagens richText em textos, imagens e menções

Payloads podem chegar como objeto ou string JSON; nenhuma função daqui
levanta exceção para entrada malformada (retorna None).
"""

from .extractor import extract_file_from_message
from .normalizer import join_text_parts, normalize_message
from .rich_text import parse_rich_text_message

__all__ = [
    "extract_file_from_message",
    "join_text_parts",
    "normalize_message",
    "parse_rich_text_message",
]
