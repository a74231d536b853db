"""Agregador de settings do gateway.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Engine settings
from config.settings.engine import (
    EngineBackend,
    EngineSettings,
    get_engine_settings,
)

# Server settings
from config.settings.server import (
    ServerSettings,
    get_server_settings,
    port_variable_for,
)

# WhatsApp
from config.settings.whatsapp import (
    MIB,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    "MIB",
    # Base
    "BaseSettings",
    # Engine
    "EngineBackend",
    "EngineSettings",
    "Environment",
    # Server
    "ServerSettings",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_engine_settings",
    "get_server_settings",
    "get_whatsapp_settings",
    "port_variable_for",
]
