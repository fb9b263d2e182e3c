from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, UnknownType

from memorymatch.engine.types import FaceValue, GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ContentError(f"Cannot read content file {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    try:
        Draft202012Validator.check_schema(schema)
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    except (SchemaError, UnknownType) as e:
        raise ContentError(f"Broken schema for {context}: {e}") from e
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    faces: tuple[FaceValue, ...]


@dataclass(frozen=True)
class GridPreset:
    id: str
    name: str
    size: int  # cards per row and per column
    pairs: int


@dataclass(frozen=True)
class ContentCatalog:
    themes: dict[str, Theme]
    grids: dict[str, GridPreset]
    default_theme: str
    default_grid: str
    default_players: int

    def theme(self, theme_id: str) -> Theme:
        try:
            return self.themes[theme_id]
        except KeyError as e:
            raise ContentError(f"Unknown theme: {theme_id}") from e

    def grid(self, grid_id: str) -> GridPreset:
        try:
            return self.grids[grid_id]
        except KeyError as e:
            raise ContentError(f"Unknown grid: {grid_id}") from e

    def make_config(self, theme_id: str, grid_id: str, player_count: int) -> GameConfig:
        """Build the engine configuration for a setup-screen selection.

        Player count is not checked here; ``MemoryGame.reset`` rejects it.
        """
        theme = self.theme(theme_id)
        grid = self.grid(grid_id)
        return GameConfig(alphabet=theme.faces, pair_count=grid.pairs, player_count=player_count)


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_catalog(self) -> ContentCatalog:
        path = self._data_dir / "themes.json"
        schema = _load_json(self._schema_dir / "themes.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("themes.json must be an object")

        themes: dict[str, Theme] = {}
        for item in raw.get("themes", []):
            if not isinstance(item, dict):
                continue
            faces = item.get("faces")
            if not isinstance(faces, list):
                raise ContentError("theme.faces must be a list")
            theme = Theme(id=_require_str(item, "id"), name=_require_str(item, "name"), faces=tuple(faces))
            if theme.id in themes:
                raise ContentError(f"Duplicate theme id: {theme.id}")
            themes[theme.id] = theme

        grids: dict[str, GridPreset] = {}
        for item in raw.get("grids", []):
            if not isinstance(item, dict):
                continue
            grid = GridPreset(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                size=_require_int(item, "size"),
                pairs=_require_int(item, "pairs"),
            )
            if grid.size * grid.size != 2 * grid.pairs:
                raise ContentError(f"Grid {grid.id}: {grid.size}x{grid.size} cannot hold {grid.pairs} pairs")
            if grid.id in grids:
                raise ContentError(f"Duplicate grid id: {grid.id}")
            grids[grid.id] = grid

        # Every theme must be able to fill every board.
        for theme in themes.values():
            for grid in grids.values():
                if len(theme.faces) < grid.pairs:
                    raise ContentError(
                        f"Theme {theme.id} has {len(theme.faces)} faces, grid {grid.id} needs {grid.pairs}"
                    )

        defaults = raw.get("defaults")
        if not isinstance(defaults, dict):
            raise ContentError("themes.json.defaults must be an object")
        catalog = ContentCatalog(
            themes=themes,
            grids=grids,
            default_theme=_require_str(defaults, "theme"),
            default_grid=_require_str(defaults, "grid"),
            default_players=_require_int(defaults, "players"),
        )
        catalog.theme(catalog.default_theme)
        catalog.grid(catalog.default_grid)
        return catalog

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_catalog()
