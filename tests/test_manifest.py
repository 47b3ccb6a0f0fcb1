import json
from datetime import datetime, timezone

import pytest

from tileslicer import __version__
from tileslicer.errors import ManifestError
from tileslicer.manifest import TOOL_NAME, build_manifest, parse_manifest
from tileslicer.models import Mode, Tile

WHEN = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def _doc(tiles=(), **config):
    base = {"tileSize": 8, "mode": "original", "width": 8, "height": 8}
    base.update(config)
    return json.dumps({
        "info": {"tool": "x", "version": "1", "generatedAt": "t"},
        "config": base,
        "tiles": list(tiles),
    })


def _tiles():
    return [Tile(id=i, x=i * 16, y=0, is_solid=i in (1, 2)) for i in range(4)]


def test_document_shape():
    text = build_manifest(tile_size=16, mode=Mode.OPTIMIZED, width=64, height=16, tiles=_tiles(), generated_at=WHEN)
    doc = json.loads(text)
    assert list(doc) == ["info", "config", "tiles"]
    assert doc["info"] == {"tool": TOOL_NAME, "version": __version__, "generatedAt": "2024-05-01T12:30:00.000Z"}
    assert doc["config"] == {"tileSize": 16, "mode": "optimized", "width": 64, "height": 16}
    assert doc["tiles"] == [
        {"id": 0, "collision": False},
        {"id": 1, "collision": True},
        {"id": 2, "collision": True},
        {"id": 3, "collision": False},
    ]


def test_output_is_stable_and_ordered_by_id():
    shuffled = list(reversed(_tiles()))
    a = build_manifest(tile_size=16, mode="original", width=64, height=16, tiles=shuffled, generated_at=WHEN)
    b = build_manifest(tile_size=16, mode=Mode.ORIGINAL, width=64, height=16, tiles=_tiles(), generated_at=WHEN)
    assert a == b
    assert a.endswith("}\n")
    assert '\n  "info": {' in a


def test_naive_timestamp_is_treated_as_utc():
    text = build_manifest(tile_size=8, mode=Mode.ORIGINAL, width=8, height=8, tiles=[], generated_at=datetime(2024, 1, 2))
    assert json.loads(text)["info"]["generatedAt"] == "2024-01-02T00:00:00.000Z"


def test_roundtrip():
    tiles = _tiles()
    parsed = parse_manifest(
        build_manifest(tile_size=16, mode=Mode.OPTIMIZED, width=64, height=16, tiles=tiles, generated_at=WHEN)
    )
    assert parsed.tile_count == len(tiles)
    assert parsed.collisions == {t.id: t.is_solid for t in tiles}
    assert parsed.mode is Mode.OPTIMIZED
    assert parsed.columns == 4
    assert parsed.generated_at == "2024-05-01T12:30:00.000Z"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"info": {}, "config": {}, "tiles": []}',
        json.dumps({
            "info": {"tool": "x", "version": "1", "generatedAt": "t"},
            "config": {"tileSize": 8, "mode": "sideways", "width": 8, "height": 8},
            "tiles": [],
        }),
        json.dumps({
            "info": {"tool": "x", "version": "1", "generatedAt": "t"},
            "config": {"tileSize": 8, "mode": "original", "width": 8, "height": 8},
            "tiles": [{"id": 0, "collision": True}, {"id": 0, "collision": False}],
        }),
        _doc(tiles=[{"id": 0, "collision": "false"}]),
        _doc(tiles=[{"id": 0, "collision": 1}]),
        _doc(tiles=[{"id": 1.7, "collision": True}]),
        _doc(tiles=[{"id": "3", "collision": True}]),
        _doc(tiles=[{"id": -1, "collision": True}]),
        _doc(tileSize=0),
        _doc(tileSize=-8),
        _doc(tileSize=32, width=16),
        _doc(tileSize=32, width=64, height=16),
        _doc(tileSize="8"),
        _doc(width=True),
    ],
)
def test_malformed_manifest(text):
    with pytest.raises(ManifestError):
        parse_manifest(text)


def test_collision_flags_are_taken_literally():
    parsed = parse_manifest(_doc(tiles=[{"id": 0, "collision": False}, {"id": 1, "collision": True}]))
    assert parsed.collisions == {0: False, 1: True}
