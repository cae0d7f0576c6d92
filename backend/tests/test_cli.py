"""命令行测试 — purge、add-host 参数处理与输出。"""
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from sqlalchemy.exc import IntegrityError

from pi_monitor import __version__
from pi_monitor.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    def test_no_subcommand_prints_info(self, runner):
        result = runner.invoke(cli, [], obj={})
        assert result.exit_code == 0
        assert f"Pi Monitor API v{__version__}" in result.output

    def test_init_db(self, runner):
        result = runner.invoke(cli, ["init-db"], obj={})
        assert result.exit_code == 0
        assert "Tables created" in result.output


class TestPurge:
    def test_purge_older_than(self, runner):
        with patch("pi_monitor.services.metric.MetricService.purge_older_than", new=AsyncMock(return_value=5)) as purge:
            result = runner.invoke(cli, ["purge", "--older-than", "1700000000"], obj={})

        assert result.exit_code == 0
        assert "Deleted 5 metrics older than 1700000000" in result.output
        purge.assert_awaited_once_with(1700000000)

    def test_purge_days(self, runner):
        with patch("pi_monitor.services.metric.MetricService.purge_older_than", new=AsyncMock(return_value=2)) as purge:
            result = runner.invoke(cli, ["purge", "--days", "7"], obj={})

        assert result.exit_code == 0
        assert "Deleted 2 metrics older than" in result.output
        purge.assert_awaited_once()

    def test_purge_both_options_rejected(self, runner):
        result = runner.invoke(cli, ["purge", "--older-than", "1", "--days", "1"], obj={})
        assert result.exit_code == 2

    def test_purge_non_positive_days(self, runner):
        with patch("pi_monitor.services.metric.MetricService.purge_older_than", new=AsyncMock(return_value=0)) as purge:
            result = runner.invoke(cli, ["purge", "--days", "0"], obj={})

        assert result.exit_code == 2
        purge.assert_not_awaited()

    def test_purge_oversized_cutoff_rejected(self, runner):
        result = runner.invoke(cli, ["purge", "--older-than", str(2 ** 64)], obj={})
        assert result.exit_code == 2


class TestAddHost:
    def test_add_host(self, runner):
        with patch("pi_monitor.services.host.HostService.create_host", new=AsyncMock(return_value=7)) as create:
            result = runner.invoke(cli, ["add-host", "--hostname", "pi-01", "--ip", "10.0.0.5", "--role", "sensor"], obj={})

        assert result.exit_code == 0
        assert "Created host pi-01 with id 7" in result.output
        host = create.await_args.args[0]
        assert (host.hostname, host.ip_address, host.role) == ("pi-01", "10.0.0.5", "sensor")

    def test_add_duplicate_host_fails(self, runner):
        duplicate = IntegrityError("INSERT INTO hosts", {}, Exception("UNIQUE constraint failed: hosts.hostname"))
        with patch("pi_monitor.services.host.HostService.create_host", new=AsyncMock(side_effect=duplicate)):
            result = runner.invoke(cli, ["add-host", "--hostname", "pi-01", "--ip", "10.0.0.5"], obj={})

        assert result.exit_code == 1

    def test_add_host_requires_hostname(self, runner):
        result = runner.invoke(cli, ["add-host", "--ip", "10.0.0.5"], obj={})
        assert result.exit_code == 2
