from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from memorymatch.engine.game import MemoryGame
from memorymatch.engine.types import ConfigurationError
from memorymatch.paths import get_paths
from memorymatch.services.content import ContentError, ContentService


def _content() -> ContentService:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir)


def _copy_content(tmp_path: Path) -> tuple[Path, Path]:
    paths = get_paths()
    data_dir = tmp_path / "data"
    shutil.copytree(paths.data_dir, data_dir)
    return data_dir, data_dir / "schemas"


def test_content_schemas_validate() -> None:
    _content().validate_all()


def test_catalog_matches_setup_choices() -> None:
    catalog = _content().load_catalog()
    assert set(catalog.themes) == {"numbers", "icons"}
    assert catalog.grid("4x4").pairs == 8
    assert catalog.grid("6x6").pairs == 18
    assert catalog.default_players == 1


@pytest.mark.parametrize("theme_id", ["numbers", "icons"])
@pytest.mark.parametrize("grid_id", ["4x4", "6x6"])
def test_every_preset_deals(theme_id: str, grid_id: str) -> None:
    catalog = _content().load_catalog()
    config = catalog.make_config(theme_id, grid_id, player_count=4)
    game = MemoryGame(seed=7)
    game.reset(config)
    grid = catalog.grid(grid_id)
    assert len(game.state.cards) == grid.size * grid.size
    assert game.state.scores == [0, 0, 0, 0]


def test_unknown_ids_raise_content_error() -> None:
    catalog = _content().load_catalog()
    with pytest.raises(ContentError):
        catalog.make_config("animals", "4x4", 1)
    with pytest.raises(ContentError):
        catalog.make_config("numbers", "5x5", 1)


def test_player_count_is_checked_by_the_engine() -> None:
    config = _content().load_catalog().make_config("numbers", "4x4", 5)
    with pytest.raises(ConfigurationError):
        MemoryGame().reset(config)


def test_missing_file_raises(tmp_path: Path) -> None:
    service = ContentService(tmp_path, tmp_path)
    with pytest.raises(ContentError, match="Missing content file"):
        service.validate_all()


def test_invalid_json_raises(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    (data_dir / "themes.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        ContentService(data_dir, schema_dir).load_catalog()


def test_schema_violation_raises(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    path = data_dir / "themes.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["defaults"]["players"] = 5
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError, match="Schema validation failed"):
        ContentService(data_dir, schema_dir).load_catalog()


def test_theme_too_small_for_grid_raises(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    path = data_dir / "themes.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["themes"][0]["faces"] = raw["themes"][0]["faces"][:10]
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError, match="needs 18"):
        ContentService(data_dir, schema_dir).load_catalog()


def test_broken_schema_raises_content_error(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    (schema_dir / "themes.schema.json").write_text(json.dumps({"type": 5}), encoding="utf-8")
    with pytest.raises(ContentError, match="Broken schema"):
        ContentService(data_dir, schema_dir).load_catalog()


def test_unreadable_file_raises_content_error(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    (data_dir / "themes.json").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(ContentError):
        ContentService(data_dir, schema_dir).load_catalog()


def test_duplicate_grid_id_raises(tmp_path: Path) -> None:
    data_dir, schema_dir = _copy_content(tmp_path)
    path = data_dir / "themes.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["grids"].append(dict(raw["grids"][0]))
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError, match="Duplicate grid id: 4x4"):
        ContentService(data_dir, schema_dir).load_catalog()
