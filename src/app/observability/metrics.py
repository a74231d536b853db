"""Registro de métricas via structured logging.

As métricas são logs estruturados (`metric_type` no extra) e podem ser
agregadas depois pelo backend de logs.

Métricas suportadas:
- Latência: tempo de cada operação de dispatch
- Outcome: resultado de cada dispatch (ok ou código de falha)
- Lifecycle: transições da sessão do engine

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("dispatch", "send_text", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatch", "registration")
        operation: Nome da operação (ex: "send_text", "send_media")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação explícito (opcional)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_dispatch_outcome(
    operation: str,
    ok: bool,
    failure_code: str | None = None,
) -> None:
    """Registra resultado de uma operação de dispatch.

    Args:
        operation: Nome da operação (ex: "send_media")
        ok: True se concluída com sucesso
        failure_code: Nome do tipo de falha (ex: "SendTimeoutError")
    """
    logger.info(
        "metric_dispatch_outcome",
        extra={
            "metric_type": "dispatch_outcome",
            "operation": operation,
            "ok": ok,
            "failure_code": failure_code,
        },
    )


def record_lifecycle_transition(
    from_state: str,
    to_state: str,
    trigger: str,
) -> None:
    """Registra transição de estado da sessão do engine."""
    logger.info(
        "metric_lifecycle_transition",
        extra={
            "metric_type": "lifecycle_transition",
            "from_state": from_state,
            "to_state": to_state,
            "trigger": trigger,
        },
    )
