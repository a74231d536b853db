"""Formatters de logging.

JSON estruturado (padrão) com campos obrigatórios e um formato texto
legível para desenvolvimento local (LOG_FORMAT=text).
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(service)s] %(name)s cid=%(correlation_id)s %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Campos passados via `extra` (ex: `operation`, `latency_ms`) são
    anexados ao objeto JSON automaticamente.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.dispatch.orchestrator",
            "message": "dispatch_completed",
            "correlation_id": "abc-123",
            "service": "whatsapp-gateway"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Cria formatter texto para leitura humana (dev)."""
    return logging.Formatter(TEXT_FORMAT)
