from .grid import Cell, Grid
from .tiles import Tile, tile_from_code

__all__ = ["Cell", "Grid", "Tile", "tile_from_code"]
