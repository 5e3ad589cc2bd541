"""Trace-driven write-amplification simulation."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from typing import Iterable

from .config import ConfigError, load_config
from .ftl import FlashTranslationLayer

DEFAULT_CONFIG = "./files/2k128k16g204M.txt"
DEFAULT_TRACE = "./files/rawfile0_20G.txt"
DEFAULT_GC_THRESHOLD = 100


@dataclass(frozen=True)
class TraceRequest:
    tag: int
    operation: str
    sector: int
    length: int

    @property
    def is_write(self) -> bool:
        return self.operation.startswith("W")


@dataclass(frozen=True)
class Report:
    host_write_bytes: int
    actual_write_bytes: int

    @property
    def amplification(self) -> float:
        if self.host_write_bytes == 0:
            return math.nan
        return self.actual_write_bytes / self.host_write_bytes

    def format(self) -> str:
        return (
            f"host    write: {self.host_write_bytes} bytes\n"
            f"actual  write: {self.actual_write_bytes} bytes\n"
            f"amplification: {self.amplification:.6f}"
        )


def parse_trace_line(line: str) -> TraceRequest | None:
    """Parse "tag op sector length"; blank lines give None."""
    fields = line.split()
    if not fields:
        return None
    if len(fields) < 4:
        raise ValueError(f"malformed trace line: {line!r}")
    try:
        return TraceRequest(
            tag=int(fields[0]),
            operation=fields[1],
            sector=int(fields[2]),
            length=int(float(fields[3])),
        )
    except ValueError as exc:
        raise ValueError(f"malformed trace line: {line!r}") from exc


def fill_logical_space(ftl: FlashTranslationLayer, sector_count: int | None = None) -> None:
    """Write every logical sector once, without counting device writes."""
    if sector_count is None:
        sector_count = ftl.config.logical_sectors
    ftl.count_actual_writes = False
    for sector in range(sector_count):
        ftl.write_sector(sector)


def replay_trace(
    ftl: FlashTranslationLayer,
    lines: Iterable[str],
    gc_threshold: int = DEFAULT_GC_THRESHOLD,
) -> int:
    """Apply the write requests of a trace; return how many were applied."""
    ftl.count_actual_writes = True
    applied = 0
    bound = ftl.config.logical_sectors
    for line in lines:
        request = parse_trace_line(line)
        if request is None:
            continue
        if request.sector + request.length > bound or request.length == 0:
            continue
        if not request.is_write:
            continue
        sector, remaining = request.sector, request.length
        while True:
            ftl.stats.host_writes += 1
            ftl.write_sector(sector)
            sector += 1
            remaining -= 1
            if ftl.free_block_count <= gc_threshold:
                ftl.collect_garbage()
            if remaining <= 0:
                break
        applied += 1
    return applied


def build_report(ftl: FlashTranslationLayer) -> Report:
    return Report(
        host_write_bytes=ftl.stats.host_writes * ftl.config.sector_size,
        actual_write_bytes=ftl.stats.actual_writes * ftl.config.page_size,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashsim", description="Measure write amplification of a page-mapped FTL."
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="geometry file")
    parser.add_argument("--trace", default=DEFAULT_TRACE, help="trace file")
    parser.add_argument("--gc-threshold", type=int, default=DEFAULT_GC_THRESHOLD)
    parser.add_argument(
        "--fill-sectors", type=int, default=None, help="sectors written before the trace"
    )
    args = parser.parse_args(argv)

    print(f"Initializing {args.config} ...")
    try:
        config = load_config(args.config)
    except (OSError, ConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    ftl = FlashTranslationLayer(config)

    print(f"Fill Logical Block ({config.logical_size} bytes) ...")
    fill_logical_space(ftl, args.fill_sectors)

    print(f"Start {args.trace} ...")
    try:
        with open(args.trace, encoding="utf-8") as trace:
            replay_trace(ftl, trace, args.gc_threshold)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(build_report(ftl).format())
    return 0


if __name__ == "__main__":
    sys.exit(main())