"""Serviços de aplicação.

Unidades reutilizáveis usadas pelo orquestrador de dispatch e pela
ponte de ciclo de vida. Implementações concretas do engine ficam em
app/infra/.
"""

from app.services.auto_replies import InboundAutoResponder, load_auto_replies
from app.services.media_ingestion import MediaIngestionPipeline, repair_content_type
from app.services.readiness_gate import ReadinessGate
from app.services.registration_checker import RegistrationChecker

__all__ = [
    "InboundAutoResponder",
    "MediaIngestionPipeline",
    "ReadinessGate",
    "RegistrationChecker",
    "load_auto_replies",
    "repair_content_type",
]
