"""
Pi Monitor 命令行入口模块。

提供 CLI 命令：serve（启动 API 服务）、init-db（建表）、purge（执行一次指标清理）
和 add-host（严格注册主机）。
"""
import asyncio
import logging
import sys

import click

from pi_monitor import __version__
from pi_monitor.core.config import settings
from pi_monitor.schemas import INT64_MAX, INT64_MIN

INT64 = click.IntRange(INT64_MIN, INT64_MAX)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, verbose):
    """Pi Monitor API - 主机资源指标采集服务。"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if ctx.invoked_subcommand is None:
        click.echo(f"Pi Monitor API v{__version__}")
        click.echo(f"Database: {settings.db_path}")
        click.echo("Use --help for available commands")


@cli.command()
@click.option("--host", default=None, help="Bind address (default from HOST)")
@click.option("--port", default=None, type=int, help="Bind port (default from PORT)")
def serve(host, port):
    """以前台模式运行 API 服务。"""
    import uvicorn

    uvicorn.run(
        "pi_monitor.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.command("init-db")
def init_db_command():
    """创建数据库表。"""
    from pi_monitor.core.database import engine, init_db

    async def _run():
        try:
            await init_db()
        finally:
            await engine.dispose()

    asyncio.run(_run())
    click.echo(f"Tables created in {settings.db_path}")


@cli.command()
@click.option("--older-than", type=INT64, default=None, help="Delete metrics with timestamp before this Unix time")
@click.option("--days", type=INT64, default=None, help="Retention period in days (default from METRIC_RETENTION_DAYS)")
def purge(older_than, days):
    """执行一次指标清理。"""
    from pi_monitor.core.database import async_session, engine
    from pi_monitor.core.exceptions import ValidationError
    from pi_monitor.repositories.metric import SqlMetricRepository
    from pi_monitor.services.metric import MetricService

    if older_than is not None and days is not None:
        click.echo("Error: use either --older-than or --days, not both", err=True)
        sys.exit(2)

    async def _run():
        try:
            async with async_session() as db:
                service = MetricService(SqlMetricRepository(db))
                if older_than is not None:
                    return await service.purge_older_than(older_than), older_than
                return await service.purge_expired(days if days is not None else settings.metric_retention_days)
        finally:
            await engine.dispose()

    try:
        deleted, cutoff = asyncio.run(_run())
    except ValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)
    click.echo(f"Deleted {deleted} metrics older than {cutoff}")


@cli.command("add-host")
@click.option("--hostname", required=True, help="Host name")
@click.option("--ip", "ip_address", required=True, help="IP address")
@click.option("--role", default="", help="Host role")
def add_host(hostname, ip_address, role):
    """严格注册一台主机，hostname 或 IP 已存在时报错退出。"""
    from sqlalchemy.exc import IntegrityError

    from pi_monitor.core.database import async_session, engine
    from pi_monitor.core.exceptions import ValidationError
    from pi_monitor.repositories.host import SqlHostRepository
    from pi_monitor.schemas.host import HostCreate
    from pi_monitor.services.host import HostService

    async def _run():
        try:
            async with async_session() as db:
                service = HostService(SqlHostRepository(db))
                return await service.create_host(HostCreate(hostname=hostname, ip_address=ip_address, role=role))
        finally:
            await engine.dispose()

    try:
        host_id = asyncio.run(_run())
    except ValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)
    except IntegrityError as e:
        click.echo(f"Error: host already exists ({e.orig})", err=True)
        sys.exit(1)
    click.echo(f"Created host {hostname} with id {host_id}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
