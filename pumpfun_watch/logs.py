"""Extraction of token launches from program log lines."""

from __future__ import annotations

from enum import Enum

from .tokens import (
    DEFAULT_LOG_PATH,
    CreateTokenInfo,
    TokenDataError,
    append_to_json_file,
    parse_create_token_data,
)

PUMPFUN_PROGRAM_ID = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"

_INVOKE_MARKER = f"Program {PUMPFUN_PROGRAM_ID} invoke"
_SUCCESS_MARKER = f"Program {PUMPFUN_PROGRAM_ID} success"
_DATA_PREFIX = "Program data: "


class InstructionKind(Enum):
    """Top-level instruction kinds recognised in the logs."""

    CREATE = "create"
    TRADE = "trade"


def _strip_data_prefix(line: str) -> str:
    while line.startswith(_DATA_PREFIX):
        line = line[len(_DATA_PREFIX):]
    return line


def parse_instruction(logs) -> list[CreateTokenInfo]:
    """Return the launches announced by top-level create instructions in ``logs``."""
    current: InstructionKind | None = None
    program_data = ""
    last_data_len = 0
    depth = 0
    launches: list[CreateTokenInfo] = []

    for line in logs:
        if _INVOKE_MARKER in line:
            depth += 1
            if depth == 1:
                current = None
                program_data = ""
                last_data_len = 0
            continue

        if depth == 0:
            continue

        if depth == 1 and "Program log: Instruction:" in line:
            if "Create" in line:
                current = InstructionKind.CREATE
            elif "Buy" in line or "Sell" in line:
                current = InstructionKind.TRADE
            continue

        if line.startswith(_DATA_PREFIX):
            data = _strip_data_prefix(line)
            size = len(data.encode("utf-8"))
            if size > last_data_len:
                program_data = data
                last_data_len = size

        if _SUCCESS_MARKER in line:
            depth -= 1
            if depth == 0 and current is InstructionKind.CREATE and program_data:
                try:
                    launches.append(parse_create_token_data(program_data))
                except TokenDataError:
                    pass

    return launches


def format_launch(token_info: CreateTokenInfo, slot: int) -> str:
    """Render a launch as the console announcement."""
    return (
        "New Pumpfun Launch:\n"
        f"Token Address: {token_info.mint}\n"
        f"Bonding Curve Address: {token_info.bonding_curve}\n"
        f"Name: {token_info.name}\n"
        f"Symbol: {token_info.symbol}\n"
        f"Owner: {token_info.user}\n"
        f"Slot: {slot}\n"
    )


def process_transaction_logs(slot: int, logs, failed=False, path=DEFAULT_LOG_PATH) -> list[CreateTokenInfo]:
    """Announce and record every launch in a transaction's logs.

    Failed transactions are ignored. Returns the launches found.
    """
    if failed:
        return []
    launches = parse_instruction(logs or [])
    for info in launches:
        print(format_launch(info, slot))
        append_to_json_file(info, path)
        print("---")
    return launches