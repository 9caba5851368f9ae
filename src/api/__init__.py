"""API: camada de borda e adapters de canais.

Responsabilidades:
- Decodificar payloads de callbacks externos (objeto ou string JSON)
- Normalizar dados para modelos internos
- Extrair descritores de mídia sem fazer IO

Subpastas:
- normalizers/: conversão de payloads externos → modelos internos

NÃO PODE conter: download de mídia, montagem de contexto, orquestração de use cases.
"""
