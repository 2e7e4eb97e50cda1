"""Relay de alertas TrueNAS -> Gotify.

Este pacote contém:
- constants: nomes de variáveis de ambiente, defaults e marcadores literais
- config: leitura e validação da configuração (Settings)
- metrics: sinks de métricas (Prometheus ou no-op)
- models: InboundAlert e OutboundNotification
- formatters: separação título/mensagem, corte de alertas antigos e banner
- services: envio das notificações para o Gotify
- controller: criação do Flask app e endpoints
"""
