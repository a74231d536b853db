"""Settings do servidor HTTP.

A porta é derivada do nome da aplicação: várias instâncias do gateway
podem rodar na mesma máquina, cada uma lendo `<APP_NAME>-APP_PORT`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_APP_NAME = "WA-API"
DEFAULT_PORT = 8000


@dataclass(frozen=True)
class ServerSettings:
    """Configurações do servidor.

    Attributes:
        app_name: Nome da aplicação (afeta o nome da variável de porta)
        host: Interface de escuta
        port: Porta de escuta
    """

    app_name: str = DEFAULT_APP_NAME
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @property
    def port_variable(self) -> str:
        """Nome da variável de ambiente específica da aplicação."""
        return port_variable_for(self.app_name)

    def validate(self) -> list[str]:
        """Valida configurações do servidor."""
        errors: list[str] = []

        if not self.app_name:
            errors.append("APP_NAME não pode ser vazio")

        if not 0 < self.port < 65536:
            errors.append(f"Porta inválida: {self.port}")

        return errors


def port_variable_for(app_name: str) -> str:
    """Retorna o nome da variável de porta derivada do APP_NAME."""
    return f"{app_name}-APP_PORT"


def _resolve_port(app_name: str) -> int:
    raw = (
        os.getenv(port_variable_for(app_name))
        or os.getenv("APP_PORT")
        or str(DEFAULT_PORT)
    )
    return int(raw)


def _load_server_from_env() -> ServerSettings:
    """Carrega ServerSettings de variáveis de ambiente."""
    app_name = os.getenv("APP_NAME", DEFAULT_APP_NAME)
    return ServerSettings(
        app_name=app_name,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_resolve_port(app_name),
    )


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """Retorna instância cacheada de ServerSettings."""
    return _load_server_from_env()
