"""Flash geometry configuration: sizes of the device and the derived layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

_KEYS = ("PsizeByte", "LsizeByte", "blockSizeByte", "pageSizeByte", "sectorSizeByte")


class ConfigError(ValueError):
    """Raised when a configuration is malformed or inconsistent."""


@dataclass(frozen=True)
class FlashConfig:
    """Byte sizes of a flash device and the layout derived from them."""

    physical_size: int
    logical_size: int
    block_size: int
    page_size: int
    sector_size: int

    def __post_init__(self) -> None:
        for name in ("physical_size", "logical_size", "block_size", "page_size", "sector_size"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.logical_size % self.block_size:
            raise ConfigError("logical size is not a multiple of the block size")
        if self.physical_size % self.block_size:
            raise ConfigError("physical size is not a multiple of the block size")
        if self.block_size % self.page_size:
            raise ConfigError("block size is not a multiple of the page size")
        if self.page_size % self.sector_size:
            raise ConfigError("page size is not a multiple of the sector size")
        if self.logical_size >= self.physical_size:
            raise ConfigError("logical size must be smaller than physical size")

    @property
    def blocks_in_logical(self) -> int:
        return self.logical_size // self.block_size

    @property
    def blocks_in_physical(self) -> int:
        return self.physical_size // self.block_size

    @property
    def pages_in_block(self) -> int:
        return self.block_size // self.page_size

    @property
    def sectors_in_page(self) -> int:
        return self.page_size // self.sector_size

    @property
    def logical_pages(self) -> int:
        return self.logical_size // self.page_size

    @property
    def logical_sectors(self) -> int:
        return self.logical_size // self.sector_size


def parse_config(lines: Iterable[str] | str) -> FlashConfig:
    """Build a configuration from its five "key value" lines, in fixed order."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    it = iter(lines)
    values = []
    for key in _KEYS:
        line = next(it, None)
        if line is None:
            raise ConfigError(f"missing line for {key}")
        fields = line.split()
        if len(fields) < 2:
            raise ConfigError(f"malformed line for {key}: {line!r}")
        if fields[0] != key:
            raise ConfigError(f"expected {key}, found {fields[0]}")
        try:
            values.append(int(fields[1]))
        except ValueError as exc:
            raise ConfigError(f"{key} is not an integer: {fields[1]!r}") from exc
    return FlashConfig(*values)


def load_config(path: str | Path) -> FlashConfig:
    """Read a configuration file."""
    with open(path, encoding="utf-8") as fh:
        return parse_config(fh)