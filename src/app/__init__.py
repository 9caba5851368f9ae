"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (inicialização, wiring)
- use_cases/: casos de uso (montagem do InboundContext, download de mídia)
- infra/: implementações concretas de IO (Open API DingTalk)
- protocols/: contratos/interfaces e modelos compartilhados
- observability/: correlation id e métricas via logs estruturados
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
