"""Configuração do pytest para o gateway de sessão WhatsApp."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import WhatsAppSettings  # noqa: E402


@pytest.fixture
def whatsapp_settings() -> WhatsAppSettings:
    """Settings com DDI 62 e tronco 0 (valores padrão)."""
    return WhatsAppSettings()
