from __future__ import annotations

import abc
from dataclasses import dataclass, field

from cairn.environment.tiles import TileMap
from cairn.util.coordinates import Point


@dataclass
class GeneratedDungeon:
    """A container for everything a map generator hands to the world layer."""

    tiles: TileMap
    # Floor tiles free for creature/player placement, sorted row by row.
    open_floor: list[Point] = field(default_factory=list)


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation algorithms."""

    @abc.abstractmethod
    def generate(self) -> GeneratedDungeon:
        """Generate the tile layout."""
        raise NotImplementedError
