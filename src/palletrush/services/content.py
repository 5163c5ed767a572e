from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from palletrush.engine.topology import Direction

Color = tuple[int, int, int]


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_obj(obj: Mapping[str, object], key: str) -> Mapping[str, object]:
    v = obj.get(key)
    if not isinstance(v, dict):
        raise ContentError(f"Expected object for {key}")
    return v


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


def _require_color(obj: Mapping[str, object], key: str) -> Color:
    v = obj.get(key)
    if not isinstance(v, list) or len(v) != 3 or not all(isinstance(c, int) for c in v):
        raise ContentError(f"Expected [r, g, b] for {key}")
    return (v[0], v[1], v[2])


@dataclass(frozen=True)
class BoardGeometry:
    cell_size: int
    margin_x: int
    margin_y: int
    marker_radius: int


@dataclass(frozen=True)
class Palette:
    background: Color
    grid: Color
    cell: Color
    selected: Color
    legal: Color
    text: Color
    error: Color
    players: dict[str, Color]


@dataclass(frozen=True)
class Theme:
    title: str
    width: int
    height: int
    board: BoardGeometry
    colors: Palette
    direction_keys: dict[str, Direction]  # key name -> direction
    undo_key: str
    reset_key: str


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_theme(self) -> Theme:
        path = self._data_dir / "theme.json"
        schema = _load_schema(self._schema_dir / "theme.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("theme.json must be an object")

        window = _require_obj(raw, "window")
        board = _require_obj(raw, "board")
        colors = _require_obj(raw, "colors")
        players_raw = _require_obj(colors, "players")
        keys = _require_obj(raw, "keys")

        direction_keys: dict[str, Direction] = {}
        for d in Direction:
            key_name = _require_str(keys, d.value)
            if key_name in direction_keys:
                raise ContentError(f"Key {key_name!r} bound to more than one direction")
            direction_keys[key_name] = d

        return Theme(
            title=_require_str(raw, "title"),
            width=_require_int(window, "width"),
            height=_require_int(window, "height"),
            board=BoardGeometry(
                cell_size=_require_int(board, "cell_size"),
                margin_x=_require_int(board, "margin_x"),
                margin_y=_require_int(board, "margin_y"),
                marker_radius=_require_int(board, "marker_radius"),
            ),
            colors=Palette(
                background=_require_color(colors, "background"),
                grid=_require_color(colors, "grid"),
                cell=_require_color(colors, "cell"),
                selected=_require_color(colors, "selected"),
                legal=_require_color(colors, "legal"),
                text=_require_color(colors, "text"),
                error=_require_color(colors, "error"),
                players={name: _require_color(players_raw, name) for name in ("A", "B")},
            ),
            direction_keys=direction_keys,
            undo_key=_require_str(keys, "undo"),
            reset_key=_require_str(keys, "reset"),
        )

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_theme()
