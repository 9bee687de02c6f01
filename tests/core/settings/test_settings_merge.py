# tests/core/settings/test_settings_merge.py
"""
Testes da política de deep-merge dos settings do motor.

Os testes asseguram que:
- valores escalares são sobrescritos corretamente
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- conflitos de tipo são rejeitados com o caminho da chave
- objetos de entrada não são mutados durante o merge

Invariantes:
    - O resultado é um novo dicionário
    - A mesma entrada sempre produz a mesma saída
"""

import pytest

try:
    from atlas_config.core.settings import SettingsTypeConflictError, deep_merge
except Exception as e:  # noqa: BLE001
    deep_merge = None
    SettingsTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de settings estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `SettingsTypeConflictError` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing settings merge modules. Implement:\n"
            "- src/atlas_config/core/settings/merge.py (deep_merge)\n"
            "- src/atlas_config/core/settings/errors.py (SettingsTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = deep_merge(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    """
    Verifica que dicionários aninhados são mesclados recursivamente.

    Chaves não sobrescritas são preservadas e apenas as explicitamente
    definidas no override são atualizadas.
    """
    _require_imports()
    base = {"search": {"directories": ["."], "resource_roots": []}}
    override = {"search": {"directories": ["/etc/app"]}}
    out = deep_merge(base, override)
    assert out == {"search": {"directories": ["/etc/app"], "resource_roots": []}}


def test_merge_list_override_total():
    _require_imports()
    base = {"sources": {"property_files": ["db.properties", "app.properties"]}}
    override = {"sources": {"property_files": ["app.properties"]}}
    assert deep_merge(base, override) == {"sources": {"property_files": ["app.properties"]}}


def test_merge_none_overrides():
    _require_imports()
    assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}
    assert deep_merge({"a": None}, {"a": {"b": 1}}) == {"a": {"b": 1}}


def test_merge_type_conflict_raises_with_path():
    _require_imports()
    base = {"access": {"strict": False}}
    override = {"access": {"strict": "yes"}}
    with pytest.raises(SettingsTypeConflictError) as exc:
        deep_merge(base, override)
    assert "access.strict" in str(exc.value)


def test_merge_bool_vs_number_is_conflict():
    _require_imports()
    with pytest.raises(SettingsTypeConflictError):
        deep_merge({"flag": True}, {"flag": 1})


def test_merge_int_and_float_are_compatible():
    _require_imports()
    assert deep_merge({"ratio": 1}, {"ratio": 0.5}) == {"ratio": 0.5}


def test_merge_result_does_not_share_nested_objects():
    _require_imports()
    override = {"sources": {"property_files": ["x.properties"]}}
    out = deep_merge({}, override)
    out["sources"]["property_files"].append("y.properties")
    assert override == {"sources": {"property_files": ["x.properties"]}}
