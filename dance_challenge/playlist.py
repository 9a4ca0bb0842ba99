"""Playlist files: loading, saving and the bundled catalog."""

import json
import logging
from pathlib import Path

from .config import DANCES_DIR
from .pose import DanceMove

logger = logging.getLogger(__name__)

CATALOG = {
    "dancing_queen": DANCES_DIR / "dancing_queen.json",
}


class PlaylistError(ValueError):
    """A playlist file could not be read as a list of dance moves."""


def parse_playlist(text: str) -> list[DanceMove]:
    """Parse a JSON list of ``{"poses": [...]}`` records.

    Records with a missing or unreadable first pose are kept; the sequencer
    skips them at play time.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlaylistError(f"Playlist is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise PlaylistError("Playlist must be a JSON list of dance moves")

    moves = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            logger.warning("Dance move %d is not an object, keeping it empty", i)
            moves.append(DanceMove())
            continue
        moves.append(DanceMove.from_dict(record))
    return moves


def load_playlist(path: str | Path) -> list[DanceMove]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PlaylistError(f"Cannot read playlist {path}: {e}") from e
    moves = parse_playlist(text)
    logger.info("Loaded %d dance moves from %s", len(moves), path)
    return moves


def load_catalog_dance(name: str) -> list[DanceMove]:
    if name not in CATALOG:
        raise PlaylistError(f"Unknown dance {name!r}; choose from {sorted(CATALOG)}")
    return load_playlist(CATALOG[name])


def save_playlist(path: str | Path, moves: list[DanceMove]):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([m.to_dict() for m in moves], f, indent=2)
    logger.info("Saved %d dance moves to %s", len(moves), path)
