"""API: camada de borda HTTP e tempo real.

Responsabilidades:
- Receber requests HTTP e conexões WebSocket
- Validar assinaturas e payloads
- Traduzir DispatchResult em respostas HTTP

Subpastas:
- connectors/: adapters de sistemas externos (eventos do engine)
- routes/: endpoints HTTP, WebSocket e health

NÃO PODE conter: FSM, regras de sessão, orquestração de use cases.
"""
