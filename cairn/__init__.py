"""Cairn: spatial core of a tile-grid roguelike.

Dungeon generation, symmetric field of view and Dijkstra-map pathfinding over
a sparse tile grid.
"""

__version__ = "0.1.0"
