# src/atlas_config/core/__init__.py
"""
Core do Atlas Config.

Este pacote contém a implementação canônica do motor de resolução de
configuração em camadas.

Componentes principais:
    - document   → Document imutável (FLAT ou TREE), parser de properties, hashing
    - sources    → localização de fontes em raízes de recurso e diretórios
    - loading    → carregamento de fontes em Documents
    - resolution → resolução de caminhos pontuados e conversão tipada
    - reload     → staleness por mtime e publicação atômica de snapshots
    - handle     → `ConfigHandle`, guarda init-once e registro de handles
    - settings   → settings do próprio motor (arquivos + ambiente)

Princípios fundamentais:
    - Fonte ausente degrada para configuração vazia; fonte malformada é fatal
    - Falhas por chave degradam para o default, sempre com log
    - Leitores nunca observam um Document parcialmente carregado

Limites explícitos:
    - Não grava configuração
    - Não faz polling em background
"""
