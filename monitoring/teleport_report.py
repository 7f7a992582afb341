# PATH: monitoring/teleport_report.py
"""
Teleport report.

Presentation of a teleport run: a schema-versioned JSON artifact and the
colored console verdict. The flow itself only returns structured values.

SCHEMA CONTRACT (1.0.0):
- schema_version, timestamp, status, direction, chain_label
- config: non-secret run settings
- result: balances before/after, approval, receipt, settlement (or null)
- error: code/message/details of the aborting fault (or null)
- rpc: per-network request stats
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from core.constants import SCHEMA_VERSION, NATIVE_DECIMALS, TOKEN_DECIMALS, SettlementOutcome
from core.exceptions import TeleportError
from core.format_money import format_delta
from core.models import SettlementResult, TeleportResult
from core.time import now_iso

logger = logging.getLogger("monitoring.teleport_report")

STATUS_SUCCESS = "SUCCESS"
STATUS_SETTLEMENT_FAILED = "SETTLEMENT_FAILED"
STATUS_ABORTED = "ABORTED"


@dataclass
class TeleportReport:
    """Serializable record of one teleport run."""
    direction: str
    chain_label: str = ""
    status: str = STATUS_ABORTED
    timestamp: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    result: Optional[Dict[str, Any]] = None
    error: Optional[Dict[str, Any]] = None
    rpc: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = now_iso()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "schema_version": SCHEMA_VERSION,
            "timestamp": self.timestamp,
            "status": self.status,
            "direction": self.direction,
            "chain_label": self.chain_label,
            "config": self.config,
            "result": self.result,
            "error": self.error,
            "rpc": self.rpc,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path) -> None:
        """Save report to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"Teleport report saved: {path}")


def build_teleport_report(
    direction: str,
    chain_label: str = "",
    config: Optional[Dict[str, Any]] = None,
    result: Optional[TeleportResult] = None,
    error: Optional[BaseException] = None,
    rpc_stats: Optional[List[Dict[str, Any]]] = None,
) -> TeleportReport:
    """
    Build a report from a completed result or an aborting error.

    Unclassified exceptions are recorded with code UNKNOWN.
    """
    if result is not None:
        status = STATUS_SUCCESS if result.is_success else STATUS_SETTLEMENT_FAILED
    else:
        status = STATUS_ABORTED

    error_dict = None
    if isinstance(error, TeleportError):
        error_dict = error.to_dict()
    elif error is not None:
        error_dict = {"code": "UNKNOWN", "message": str(error), "details": {"type": type(error).__name__}}

    return TeleportReport(
        direction=direction,
        chain_label=chain_label,
        status=status,
        config=config or {},
        result=result.to_dict() if result is not None else None,
        error=error_dict,
        rpc=rpc_stats or [],
    )


def exit_code_for(report: TeleportReport) -> int:
    """0 success, 2 completed with a failed side, 1 aborted."""
    if report.status == STATUS_SUCCESS:
        return 0
    if report.status == STATUS_SETTLEMENT_FAILED:
        return 2
    return 1


def _verdict_line(label: str, outcome: SettlementOutcome, delta: str, note: str = "") -> None:
    if outcome == SettlementOutcome.SUCCESS:
        click.secho(f"{label} balance change successful: {delta} tokens{note}", fg="green")
    else:
        click.secho(f"{label} balance change failed: {delta} tokens", fg="red")


def print_settlement_verdict(
    settlement: SettlementResult,
    chain_label: str,
    token_decimals: int = TOKEN_DECIMALS,
    native_decimals: int = NATIVE_DECIMALS,
) -> None:
    """Print one colored verdict line per side."""
    token_delta = format_delta(settlement.token_delta, token_decimals)
    native_delta = format_delta(settlement.native_delta, native_decimals)

    if settlement.expected_native_delta is None:
        native_note = " (inclusive of gas spent)"
    else:
        native_note = " (inclusive of tolerance)"

    _verdict_line("C-Chain USDC", settlement.token_outcome, token_delta)
    _verdict_line(f"{chain_label} native", settlement.native_outcome, native_delta, native_note)


def print_teleport_report(report: TeleportReport) -> None:
    """Print the run summary to console."""
    click.echo("\n" + "=" * 60)
    click.echo("TELEPORT REPORT")
    click.echo("=" * 60)
    click.echo(f"Timestamp: {report.timestamp}")
    click.echo(f"Direction: {report.direction} | Chain: {report.chain_label}")

    if report.result is not None:
        receipt = report.result["receipt"]
        click.echo(f"Transaction: {receipt['tx_hash']}")
        click.echo(f"Gas used: {receipt['gas_used']}")
        approval = report.result.get("approval")
        if approval:
            click.echo(f"Approval submitted: {approval['approved']}")

    if report.error is not None:
        click.secho(f"Aborted: [{report.error['code']}] {report.error['message']}", fg="red")

    for stats in report.rpc:
        click.echo(
            f"RPC {stats['network']}: {stats['total_requests']} requests, "
            f"{stats['success_rate'] * 100:.1f}% success, {stats['avg_latency_ms']}ms avg"
        )

    status_color = "green" if report.status == STATUS_SUCCESS else "red"
    click.secho(f"Status: {report.status}", fg=status_color, bold=True)
    click.echo("=" * 60 + "\n")
