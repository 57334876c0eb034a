"""Tests for the YAML inventory."""

import textwrap

import pytest

from oltpoll.config import load_config, parse_config
from oltpoll.exceptions import ConfigError
from oltpoll.models import SnmpVersion, Vendor

INVENTORY = textwrap.dedent("""
    defaults:
      community: public
      version: 2c
      timeout: 5
      retries: 1

    olts:
      - name: olt-core-1
        host: 10.20.0.2
        vendor: HUAWEI
      - name: olt-edge-7
        host: 10.20.7.2
        vendor: zte
        community: edge-ro
        version: 1
        port: 1161
""")


@pytest.fixture
def inventory(tmp_path):
    path = tmp_path / "olts.yaml"
    path.write_text(INVENTORY)
    return path


def test_load_and_resolve(inventory) -> None:
    config = load_config(inventory, env={})

    endpoint, vendor = config.endpoint("olt-core-1")

    assert config.names() == ["olt-core-1", "olt-edge-7"]
    assert vendor == Vendor.HUAWEI
    assert endpoint.host == "10.20.0.2"
    assert endpoint.community == "public"
    assert endpoint.version == SnmpVersion.V2C
    assert endpoint.timeout == 5
    assert endpoint.retries == 1
    assert endpoint.port == 161


def test_per_olt_overrides(inventory) -> None:
    config = load_config(inventory, env={})

    endpoint, vendor = config.endpoint("olt-edge-7")

    assert vendor == Vendor.ZTE
    assert endpoint.community == "edge-ro"
    assert endpoint.version == SnmpVersion.V1
    assert endpoint.port == 1161
    assert endpoint.timeout == 5


def test_env_overrides_default_community(inventory) -> None:
    config = load_config(inventory, env={"OLTPOLL_COMMUNITY": "from-env"})

    assert config.endpoint("olt-core-1")[0].community == "from-env"
    # Explicit per-OLT community still wins
    assert config.endpoint("olt-edge-7")[0].community == "edge-ro"


def test_targets_in_file_order(inventory) -> None:
    names = [name for name, _endpoint, _vendor in load_config(inventory, env={}).targets()]

    assert names == ["olt-core-1", "olt-edge-7"]


def test_empty_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")

    config = load_config(path, env={})

    assert config.olts == []
    assert config.defaults.community == "public"


def test_unknown_olt(inventory) -> None:
    with pytest.raises(ConfigError):
        load_config(inventory, env={}).endpoint("nope")


@pytest.mark.parametrize("data", [
    {"olts": [{"name": "a", "host": "10.0.0.1", "vendor": "nokia"}]},
    {"olts": [{"name": "a", "vendor": "zte"}]},
    {"olts": [{"name": "a", "host": "10.0.0.1", "vendor": "zte", "version": "3"}]},
    {"defaults": {"port": 0}},
    {"olts": [
        {"name": "a", "host": "10.0.0.1", "vendor": "zte"},
        {"name": "a", "host": "10.0.0.2", "vendor": "zte"},
    ]},
    ["not", "a", "mapping"],
])
def test_invalid_config(data) -> None:
    with pytest.raises(ConfigError):
        parse_config(data, env={})


def test_missing_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_bad_yaml(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("olts: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(path)
