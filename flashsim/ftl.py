"""Page-mapped flash translation layer with greedy garbage collection."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum

from .config import FlashConfig


class PageState(IntEnum):
    FREE = 0
    VALID = 1
    INVALID = 2


@dataclass
class Page:
    state: PageState = PageState.FREE
    logical_page: int | None = None


@dataclass
class Block:
    """A physical block; free pages are counted as valid until invalidated."""

    pages: list[Page]
    erase_count: int = 0
    valid_pages: int = 0


@dataclass
class MapEntry:
    block_no: int = 0
    page_no: int = 0
    used: bool = False


@dataclass
class Stats:
    actual_writes: int = 0
    host_writes: int = 0


@dataclass
class _State:
    next_page: int = 0
    free: deque = field(default_factory=deque)


class FlashTranslationLayer:
    """Maps logical pages to physical pages and reclaims space greedily."""

    def __init__(self, config: FlashConfig) -> None:
        self.config = config
        per_block = config.pages_in_block
        self.blocks = [
            Block(pages=[Page() for _ in range(per_block)], valid_pages=per_block)
            for _ in range(config.blocks_in_physical)
        ]
        # Full blocks grouped by their valid-page count; dicts keep insertion order.
        self._gc_buckets: list[dict[int, None]] = [{} for _ in range(per_block + 1)]
        self._free: deque[int] = deque(range(config.blocks_in_physical))
        self._next_page = 0
        self._map = [MapEntry() for _ in range(config.logical_pages)]
        self.buffered_page: int | None = None
        self.stats = Stats()
        self.count_actual_writes = False

    @property
    def free_block_count(self) -> int:
        """Blocks in the free list, the one being filled included."""
        return len(self._free)

    @property
    def gc_bucket_sizes(self) -> tuple[int, ...]:
        """Number of full blocks holding 0, 1, ... pages_in_block valid pages."""
        return tuple(len(bucket) for bucket in self._gc_buckets)

    def lookup(self, logical_page: int) -> MapEntry | None:
        """Return the mapping of a logical page, or None if it was never written."""
        if not 0 <= logical_page < len(self._map):
            raise ValueError(f"logical page {logical_page} out of range")
        entry = self._map[logical_page]
        return entry if entry.used else None

    def write_sector(self, sector: int) -> None:
        """Buffer a sector write; a change of page flushes the buffered page."""
        if not 0 <= sector < self.config.logical_sectors:
            raise ValueError(f"sector {sector} out of range")
        logical = sector // self.config.sectors_in_page
        if self.buffered_page is not None and self.buffered_page != logical:
            self.flush_buffer()
        self.buffered_page = logical

    def flush_buffer(self) -> None:
        """Write the buffered logical page to a fresh physical page."""
        logical = self.buffered_page
        if logical is None:
            return
        if self.count_actual_writes:
            self.stats.actual_writes += 1
        entry = self._map[logical]
        if entry.used:
            self.mark_page_invalid(entry)
        block_no, page_no = self.write_new_page()
        self.blocks[block_no].pages[page_no].logical_page = logical
        entry.block_no = block_no
        entry.page_no = page_no
        entry.used = True
        self.buffered_page = None

    def mark_page_invalid(self, entry: MapEntry) -> None:
        """Invalidate the physical page behind a mapping and rebucket its block."""
        block_no = entry.block_no
        block = self.blocks[block_no]
        block.pages[entry.page_no].state = PageState.INVALID
        if self._free and block_no == self._free[0]:
            block.valid_pages -= 1
            return
        del self._gc_buckets[block.valid_pages][block_no]
        block.valid_pages -= 1
        self._gc_buckets[block.valid_pages][block_no] = None

    def write_new_page(self) -> tuple[int, int]:
        """Claim the next free page of the active block; return (block, page)."""
        if not self._free:
            raise RuntimeError("no free block left")
        block_no = self._free[0]
        page_no = self._next_page
        page = self.blocks[block_no].pages[page_no]
        if page.state is not PageState.FREE:
            raise RuntimeError(f"page {page_no} of block {block_no} is not free")
        page.state = PageState.VALID
        self._next_page += 1
        if self._next_page >= self.config.pages_in_block:
            block = self.blocks[block_no]
            self._gc_buckets[block.valid_pages][block_no] = None
            self._free.popleft()
            self._next_page = 0
        return block_no, page_no

    def pick_victim(self) -> int:
        """Remove and return the oldest full block with the fewest valid pages."""
        for bucket in self._gc_buckets:
            if bucket:
                block_no = next(iter(bucket))
                del bucket[block_no]
                return block_no
        raise RuntimeError("no block is eligible for garbage collection")

    def move_page(self, block_no: int, page_no: int) -> tuple[int, int]:
        """Relocate a valid page and update its mapping; return its new place."""
        if self.count_actual_writes:
            self.stats.actual_writes += 1
        old = self.blocks[block_no].pages[page_no]
        logical = old.logical_page
        old.state = PageState.INVALID
        new_block, new_page = self.write_new_page()
        self.blocks[new_block].pages[new_page].logical_page = logical
        entry = self._map[logical]
        entry.block_no = new_block
        entry.page_no = new_page
        return new_block, new_page

    def collect_garbage(self) -> int:
        """Flush the buffer, reclaim one victim block and return its number."""
        self.flush_buffer()
        victim = self.pick_victim()
        block = self.blocks[victim]
        for page_no, page in enumerate(block.pages):
            if page.state is PageState.VALID:
                self.move_page(victim, page_no)
        block.erase_count += 1
        block.valid_pages = self.config.pages_in_block
        for page in block.pages:
            page.state = PageState.FREE
            page.logical_page = None
        self._free.append(victim)
        return victim