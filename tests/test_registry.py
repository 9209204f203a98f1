from concurrent.futures import ThreadPoolExecutor

import pytest

from ibancheck.config import RegistryConfig
from ibancheck.errors import RegistryDataError
from ibancheck.rules.compiler import layout_length
from ibancheck.rules.registry import CountryRegistry, CountryRule, default_registry


@pytest.fixture
def registry():
    return CountryRegistry()


def test_loads_shipped_table(registry):
    assert len(registry) == 72
    assert registry.get("NL") == CountryRule(code="NL", length=18, format="U04F10")
    assert registry.get("VG").format == "U04F16"
    # "NO" must not be swallowed by YAML's boolean parsing.
    assert "NO" in registry
    assert registry.get("NO").length == 15


def test_unknown_code(registry):
    assert registry.get("ZZ") is None
    assert "ZZ" not in registry


def test_every_entry_length_matches_layout(registry):
    for rule in registry:
        assert rule.length == 4 + layout_length(rule.layout), rule.code
        registry.matcher(rule.code)  # compiles without RegistryDataError


def test_iteration_is_sorted(registry):
    codes = [rule.code for rule in registry]
    assert codes == sorted(codes) == registry.codes()


def test_matcher_is_compiled_once_and_cached(registry):
    first = registry.matcher("NL")
    assert registry.matcher("NL") is first


def test_concurrent_first_use_yields_one_cached_pattern(registry):
    with ThreadPoolExecutor(max_workers=8) as pool:
        patterns = list(pool.map(lambda _: registry.matcher("DE"), range(32)))
    assert all(p.pattern == patterns[0].pattern for p in patterns)
    assert registry.matcher("DE").fullmatch("370400440532013000")


def test_matcher_unknown_code_raises_key_error(registry):
    with pytest.raises(KeyError):
        registry.matcher("ZZ")


def test_broken_descriptor_surfaces_on_first_use():
    reg = CountryRegistry(extra={"QQ": {"length": 8, "format": "X04"}})
    assert "QQ" in reg  # loading does not compile
    with pytest.raises(RegistryDataError) as exc:
        reg.matcher("QQ")
    assert exc.value.country_code == "QQ"


def test_length_disagreeing_with_layout_is_a_data_error():
    reg = CountryRegistry(extra={"QQ": {"length": 10, "format": "F05"}})
    with pytest.raises(RegistryDataError):
        reg.matcher("QQ")


def test_extra_and_exclude():
    reg = CountryRegistry(extra={"zz": {"length": 10, "format": "F06"}}, exclude=["nl"])
    assert reg.get("ZZ") == CountryRule("ZZ", 10, "F06")
    assert "NL" not in reg


def test_from_config():
    cfg = RegistryConfig(
        extra_countries={"eg": {"length": 29, "format": "F04F04F17"}},
        exclude=["vg"],
    )
    reg = CountryRegistry.from_config(cfg)
    assert reg.get("EG").length == 29
    assert "VG" not in reg


def test_default_registry_is_shared():
    assert default_registry() is default_registry()
