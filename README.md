# flashsim

flashsim simulates a page-mapped flash translation layer (FTL). It replays a
block-I/O trace against a simulated flash device and reports the device's
write amplification.

What it models:

- a one-page write buffer. Consecutive sectors in the same logical page are
  merged into a single page write.
- out-of-place page writes. The old physical page is marked invalid.
- a free-block list, plus garbage-collection buckets that group full blocks by
  their count of valid pages.
- greedy garbage collection. The victim is the oldest full block with the
  fewest valid pages. Its valid pages are moved, and then the block is erased
  and appended to the free list.

## Installation

```
pip install .
```

To install and run the test suite:

```
pip install ".[test]"
pytest
```

## Device configuration

The configuration file has five lines, in this order. Each line holds a key
followed by an integer size in bytes. Any fields after the second are ignored.

```
PsizeByte	17179869184
LsizeByte	16965959680
blockSizeByte	131072
pageSizeByte	2048
sectorSizeByte	512
```

These rules apply:

- All sizes must be positive.
- The logical and physical sizes must be multiples of the block size.
- The block size must be a multiple of the page size.
- The page size must be a multiple of the sector size.
- The logical size must be smaller than the physical size.

`flashsim.config.load_config(path)` reads a file of this form and returns a
`FlashConfig`. `parse_config(lines)` does the same from a string or from an
iterable of lines. Both raise `flashsim.config.ConfigError` when a line is
missing, malformed or out of order, or when a rule is broken.

`FlashConfig` exposes these derived sizes:

- `blocks_in_logical`
- `blocks_in_physical`
- `pages_in_block`
- `sectors_in_page`
- `logical_pages`
- `logical_sectors`

## Trace format

Each trace line holds a tag, an operation, a starting sector and a length in
sectors:

```
0 W 1024 8
1 R 2048 16
```

The length may be written as a decimal number, and it is truncated to an
integer. Blank lines are skipped. A line with fewer than four fields, or with
numbers that cannot be parsed, raises `ValueError`.

Only operations starting with `W` are simulated, and all others are ignored.
Requests of length zero are also ignored, and so are requests that run past
the end of the logical space.

## Running

```
flashsim --config device.txt --trace trace.txt
```

Options:

- `--config PATH`: the geometry file. The default is
  `./files/2k128k16g204M.txt`.
- `--trace PATH`: the trace file. The default is `./files/rawfile0_20G.txt`.
- `--gc-threshold N`: collects one victim block whenever the free-block count
  falls to `N` or below. The default is 100.
- `--fill-sectors N`: the number of sectors written sequentially before the
  trace is replayed. These writes are not counted. The default is the whole
  logical space.

The command prints the host bytes written, the bytes actually written to
flash, and the amplification ratio between them. It prints an error to
standard error and exits with status 1 in these cases:

- the configuration cannot be read or is invalid;
- the trace cannot be read or is malformed;
- the device runs out of free blocks.

## Library use

```python
from flashsim.config import load_config
from flashsim.ftl import FlashTranslationLayer
from flashsim.cli import fill_logical_space, replay_trace, build_report

config = load_config("device.txt")
ftl = FlashTranslationLayer(config)
fill_logical_space(ftl, config.logical_sectors)
with open("trace.txt") as trace:
    replay_trace(ftl, trace, 100)
print(build_report(ftl).format())
```

`FlashTranslationLayer` has these members:

- `write_sector(sector)`, `flush_buffer()` and `collect_garbage()`
- `lookup(logical_page)`: returns the `MapEntry` of a written logical page, or
  `None` if the page was never written.
- `free_block_count`
- `gc_bucket_sizes`
- `stats`: the `host_writes` and `actual_writes` counters.
- `blocks`: a list of `Block` objects, each with its pages, its erase count and
  its valid-page count.

`replay_trace` returns the number of write requests it applied.
`build_report` returns a `Report` with these members:

- `host_write_bytes`
- `actual_write_bytes`
- `amplification`
- `format()`

## Limits

Reads are never simulated, and nothing models timing or latency. Flash
contents are not stored: only the mappings and the page states are tracked.