"""Formatters de logging estruturado.

Logs JSON com campos obrigatórios:
- correlation_id (id da mensagem inbound em processamento)
- service
- channel
- timestamp (asctime)
- level
- logger (name)
- message

Nunca registrar corpo de mensagem, transcrições ou download codes.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado, na ordem de saída
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
    "channel",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-18 10:30:00,120",
            "level": "INFO",
            "logger": "app.use_cases.dingtalk.process_inbound_media",
            "message": "dingtalk_media_downloaded",
            "correlation_id": "msg-abc123",
            "service": "dingtalk-inbound",
            "channel": "dingtalk"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
