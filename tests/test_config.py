import pytest

from flashsim.config import ConfigError, FlashConfig, load_config, parse_config

LINES = [
    "PsizeByte\t65536\n",
    "LsizeByte\t32768\n",
    "blockSizeByte 8192\n",
    "pageSizeByte 2048\n",
    "sectorSizeByte 512\n",
]


def test_parse_config_reads_sizes():
    cfg = parse_config(LINES)
    assert cfg.physical_size == 65536
    assert cfg.logical_size == 32768
    assert cfg.block_size == 8192
    assert cfg.page_size == 2048
    assert cfg.sector_size == 512


def test_derived_geometry_is_consistent():
    cfg = parse_config(LINES)
    assert cfg.blocks_in_physical * cfg.block_size == cfg.physical_size
    assert cfg.blocks_in_logical * cfg.block_size == cfg.logical_size
    assert cfg.pages_in_block * cfg.page_size == cfg.block_size
    assert cfg.sectors_in_page * cfg.sector_size == cfg.page_size
    assert cfg.logical_pages * cfg.page_size == cfg.logical_size
    assert cfg.logical_sectors * cfg.sector_size == cfg.logical_size
    assert cfg.blocks_in_logical < cfg.blocks_in_physical


def test_parse_config_accepts_string():
    assert parse_config("".join(LINES)) == parse_config(LINES)


def test_wrong_key_order_rejected():
    swapped = [LINES[1], LINES[0], *LINES[2:]]
    with pytest.raises(ConfigError):
        parse_config(swapped)


def test_missing_line_rejected():
    with pytest.raises(ConfigError):
        parse_config(LINES[:4])


def test_non_integer_rejected():
    bad = [*LINES[:4], "sectorSizeByte lots\n"]
    with pytest.raises(ConfigError):
        parse_config(bad)


def test_line_without_value_rejected():
    bad = ["PsizeByte\n", *LINES[1:]]
    with pytest.raises(ValueError):
        parse_config(bad)


@pytest.mark.parametrize(
    "sizes",
    [
        (65536, 30000, 8192, 2048, 512),
        (65000, 32768, 8192, 2048, 512),
        (65536, 32768, 8192, 3000, 512),
        (65536, 32768, 8192, 2048, 500),
        (32768, 32768, 8192, 2048, 512),
        (32768, 65536, 8192, 2048, 512),
        (65536, 32768, 8192, 2048, 0),
    ],
)
def test_inconsistent_sizes_rejected(sizes):
    with pytest.raises(ConfigError):
        FlashConfig(*sizes)


def test_load_config_round_trip(tmp_path):
    path = tmp_path / "geometry.txt"
    path.write_text("".join(LINES), encoding="utf-8")
    assert load_config(path) == parse_config(LINES)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / "absent.txt")