import pytest
from pydantic import ValidationError

from ibancheck.config import IbanCheckConfig, load_config


def test_defaults_without_path():
    cfg = load_config(None)
    assert cfg == IbanCheckConfig()
    assert cfg.registry.extra_countries == {}
    assert cfg.output.mask is False
    assert cfg.output.printable is True


def test_load_yaml(tmp_path):
    path = tmp_path / ".ibancheck.yaml"
    path.write_text(
        "registry:\n"
        "  extra_countries:\n"
        "    eg: {length: 29, format: F04F04F17}\n"
        "  exclude: [vg]\n"
        "output:\n"
        "  mask: true\n"
    )
    cfg = load_config(path)
    assert cfg.registry.extra_countries["EG"].length == 29
    assert cfg.registry.exclude == ["VG"]
    assert cfg.output.mask is True


def test_empty_yaml_file(tmp_path):
    path = tmp_path / ".ibancheck.yaml"
    path.write_text("")
    assert load_config(path) == IbanCheckConfig()


@pytest.mark.parametrize("code", ["E", "EGY", "1A"])
def test_rejects_bad_country_codes(code):
    with pytest.raises(ValidationError):
        IbanCheckConfig(registry={"extra_countries": {code: {"length": 20, "format": "F16"}}})


def test_rejects_impossible_length():
    with pytest.raises(ValidationError):
        IbanCheckConfig(registry={"extra_countries": {"EG": {"length": 40, "format": "F36"}}})
