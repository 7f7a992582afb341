#!/usr/bin/env python3
"""
run_teleport.py - CLI entrypoints for the teleport demo.

Usage:
    python run_teleport.py native-to-usdc
    python run_teleport.py usdc-to-native --amount 0.5 --wait 90

Installed as console scripts:
    teleport-native-to-usdc
    teleport-usdc-to-native

Exit codes: 0 success, 2 settlement check failed, 1 aborted.
"""

import asyncio
import sys
from pathlib import Path
from typing import Callable

import click
from dotenv import load_dotenv

from chains.providers import RPCProvider
from config.teleport import TeleportConfig, load_teleport_config
from core.constants import TeleportDirection
from core.exceptions import ConfigError, TeleportError
from core.logging import get_logger, log_error, set_global_context, setup_logging
from core.models import TeleportResult
from execution.teleport import Sleep, build_teleport_flow
from monitoring.teleport_report import (
    TeleportReport,
    build_teleport_report,
    exit_code_for,
    print_settlement_verdict,
    print_teleport_report,
)

logger = get_logger("teleport")

VERSION = "0.1.0"


async def run_teleport(
    config: TeleportConfig,
    sleep: Sleep = asyncio.sleep,
) -> tuple[TeleportReport, TeleportResult | None]:
    """
    Run one teleport and build its report.

    Faults never escape: they are logged and recorded in the report.
    """
    home = RPCProvider("home", config.home_rpc_url, config.rpc_timeout_seconds)
    remote = RPCProvider("remote", config.remote_rpc_url, config.rpc_timeout_seconds)

    result: TeleportResult | None = None
    error: BaseException | None = None
    try:
        flow = build_teleport_flow(config, home, remote, sleep=sleep)
        result = await flow.run()
    except TeleportError as e:
        log_error(logger, e.code.value, f"Operation failed: {e.message}", details=e.details)
        error = e
    except Exception as e:
        logger.exception(f"Operation failed: {e}")
        error = e
    finally:
        await home.close()
        await remote.close()

    report = build_teleport_report(
        direction=config.direction.value,
        chain_label=config.chain_label,
        config=config.describe(),
        result=result,
        error=error,
        rpc_stats=[home.get_stats_summary(), remote.get_stats_summary()],
    )
    return report, result


def execute(
    direction: TeleportDirection,
    amount: str | None,
    wait: float | None,
    settings: str | None,
    log_level: str,
    json_logs: bool,
    log_file: str | None,
    report_path: str | None,
) -> int:
    """Process entry: load config once, run, render. Returns exit code."""
    load_dotenv()
    setup_logging(level=log_level, json_output=json_logs, log_file=log_file)
    set_global_context(service="teleport", version=VERSION, direction=direction.value)

    try:
        config = load_teleport_config(
            direction,
            settings_path=Path(settings) if settings else None,
            amount=amount,
            wait_seconds=wait,
        )
    except ConfigError as e:
        log_error(logger, e.code.value, f"Error: {e.message}", details=e.details)
        return 1

    logger.info(f"HOME_CHAIN_RPC_URL: {config.home_rpc_url}")
    logger.info(f"REMOTE_CHAIN_RPC_URL: {config.remote_rpc_url}")

    report, result = asyncio.run(run_teleport(config))

    if result is not None:
        print_settlement_verdict(
            result.settlement,
            config.chain_label,
            token_decimals=config.token_decimals,
            native_decimals=config.native_decimals,
        )
        logger.info(f"Teleport complete. Transaction Hash: {result.receipt.tx_hash}")

    print_teleport_report(report)
    if report_path:
        report.save(Path(report_path))

    return exit_code_for(report)


def teleport_options(func: Callable) -> Callable:
    """Options shared by both directions."""
    options = [
        click.option(
            "--amount",
            "-a",
            default=None,
            help="Amount to bridge in display units (default: from config/teleport.yaml)",
        ),
        click.option(
            "--wait",
            "-w",
            default=None,
            type=float,
            help="Seconds to wait before re-reading balances",
        ),
        click.option(
            "--settings",
            "-s",
            default=None,
            type=click.Path(exists=True, dir_okay=False),
            help="Alternative run defaults YAML",
        ),
        click.option(
            "--log-level",
            "-l",
            default="INFO",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
            help="Log level",
        ),
        click.option(
            "--json-logs/--no-json-logs",
            default=False,
            help="Use JSON log format",
        ),
        click.option(
            "--log-file",
            default=None,
            help="Also write JSON logs to this file",
        ),
        click.option(
            "--report",
            "report_path",
            default=None,
            help="Write the JSON teleport report to this path",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _command(direction: TeleportDirection, doc: str) -> click.Command:
    @click.command(help=doc)
    @teleport_options
    def command(**kwargs) -> None:
        sys.exit(execute(direction, **kwargs))

    return command


native_to_usdc = _command(
    TeleportDirection.NATIVE_TO_TOKEN,
    "Teleport native tokens from the L1 to USDC on the C-Chain.",
)
usdc_to_native = _command(
    TeleportDirection.TOKEN_TO_NATIVE,
    "Teleport USDC from the C-Chain to native tokens on the L1.",
)


@click.group()
def main() -> None:
    """Teleport demo: bridge between the C-Chain and an Avalanche L1."""


main.add_command(native_to_usdc, "native-to-usdc")
main.add_command(usdc_to_native, "usdc-to-native")


if __name__ == "__main__":
    main()
