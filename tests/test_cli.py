"""Tests for the command line interface."""

import json
import textwrap

import pytest

from oltpoll import cli, engine
from oltpoll.exceptions import OltPollError, TransportError
from oltpoll.models import SnmpVersion, Vendor


def test_parser_direct_target() -> None:
    args = cli.create_parser().parse_args(
        ['discover', '10.20.0.2', '--vendor', 'huawei', '-c', 'ro', '--snmp-version', '1', '-t', '3']
    )

    assert args.command == 'discover'
    assert args.target == '10.20.0.2'
    assert args.vendor == 'huawei'
    assert args.community == 'ro'
    assert args.snmp_version == '1'
    assert args.timeout == 3.0


def test_parser_onu_requires_position() -> None:
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args(['onu', '10.20.0.2', '--vendor', 'zte'])


def test_resolve_direct_target() -> None:
    args = cli.create_parser().parse_args(['system', '10.20.0.2', '--vendor', 'zte', '--snmp-version', '1'])

    [(name, endpoint, vendor)] = cli.resolve_targets(args)

    assert name == '10.20.0.2'
    assert vendor == Vendor.ZTE
    assert endpoint.version == SnmpVersion.V1


def test_resolve_needs_vendor() -> None:
    args = cli.create_parser().parse_args(['discover', '10.20.0.2'])

    with pytest.raises(OltPollError):
        cli.resolve_targets(args)


def test_resolve_test_without_vendor() -> None:
    args = cli.create_parser().parse_args(['test', '10.20.0.2'])

    assert cli.resolve_targets(args)[0][2] is None


def test_to_jsonable() -> None:
    assert cli.to_jsonable('test', True) == {'reachable': True}
    assert cli.to_jsonable('count', 12) == {'onu_count': 12}
    assert cli.to_jsonable('system', TransportError('timeout')) == {'error': 'TransportError: timeout'}


def test_main_without_command() -> None:
    assert cli.main([]) == 1


def test_main_missing_vendor() -> None:
    assert cli.main(['count', '10.20.0.2']) == 1


def test_main_count(monkeypatch, capsys) -> None:
    async def fake_count(endpoint, vendor):
        assert vendor == Vendor.ZTE
        return 7

    monkeypatch.setattr(engine, 'get_onu_count', fake_count)

    assert cli.main(['count', '10.20.0.2', '--vendor', 'zte']) == 0
    assert json.loads(capsys.readouterr().out) == {'onu_count': 7}


def test_main_unreachable_exit_code(monkeypatch, capsys) -> None:
    async def fake_test(endpoint, transport=None):
        return False

    monkeypatch.setattr(engine, 'test_connection', fake_test)

    assert cli.main(['test', '10.20.0.2']) == 1
    assert json.loads(capsys.readouterr().out) == {'reachable': False}


def test_main_all_from_config(monkeypatch, tmp_path) -> None:
    inventory = tmp_path / "olts.yaml"
    inventory.write_text(textwrap.dedent("""
        olts:
          - {name: a, host: 10.0.0.1, vendor: huawei}
          - {name: b, host: 10.0.0.2, vendor: zte}
    """))
    output = tmp_path / "out.json"

    async def fake_count(endpoint, vendor):
        if endpoint.host == '10.0.0.2':
            raise TransportError('timeout', host=endpoint.host)
        return 4

    monkeypatch.setattr(engine, 'get_onu_count', fake_count)

    code = cli.main(['count', '--config', str(inventory), '--all', '-o', str(output)])

    assert code == 1
    assert json.loads(output.read_text()) == {
        'a': {'onu_count': 4},
        'b': {'error': 'TransportError: timeout'},
    }
