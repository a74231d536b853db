"""App, coração do gateway: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: tipos de domínio (AddressableId, envelopes de mídia)
- use_cases/: casos de uso de dispatch outbound
- services/: serviços de aplicação (gate, registro, mídia, auto-respostas)
- lifecycle/: ponte de eventos de ciclo de vida e registro de observadores
- infra/: implementações concretas do engine de chat
- protocols/: contratos/interfaces do engine
- observability/: correlation_id e métricas via logs estruturados
- contexts/: respostas fixas configuráveis (YAML)

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
