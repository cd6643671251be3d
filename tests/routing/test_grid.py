"""
Tests for the routing grid
"""

from schema_diagram.layout.geometry import Point, Rect
from schema_diagram.routing.grid import Grid, GridCell, SQRT2


class TestGrid:
    """Coordinate conversion, obstacles and neighbors"""

    def test_dimensions_round_up(self):
        grid = Grid(105, 61, resolution=20)
        assert (grid.cols, grid.rows) == (6, 4)

    def test_to_grid_floors(self):
        grid = Grid(200, 200, resolution=20)
        assert grid.to_grid(Point(39.9, 40)) == GridCell(1, 2)

    def test_from_grid_is_cell_corner(self):
        grid = Grid(200, 200, resolution=20)
        assert grid.from_grid(GridCell(3, 4)) == Point(60, 80)

    def test_mark_obstacle_blocks_covered_corners(self):
        grid = Grid(200, 200, resolution=20)
        grid.mark_obstacle(Rect(40, 40, 40, 40))

        assert grid.is_blocked(GridCell(2, 2))
        assert grid.is_blocked(GridCell(4, 4))
        assert not grid.is_blocked(GridCell(1, 2))
        assert not grid.is_blocked(GridCell(5, 4))

    def test_mark_obstacle_with_margin(self):
        grid = Grid(200, 200, resolution=20)
        grid.mark_obstacle(Rect(40, 40, 40, 40), margin=20)
        assert grid.is_blocked(GridCell(1, 1))
        assert grid.is_blocked(GridCell(5, 5))
        assert not grid.is_blocked(GridCell(0, 0))

    def test_obstacle_outside_canvas_is_clipped(self):
        grid = Grid(100, 100, resolution=20)
        grid.mark_obstacle(Rect(-50, -50, 80, 80))
        assert all(grid.is_valid(cell) for cell in grid.blocked)

    def test_is_valid(self):
        grid = Grid(100, 100, resolution=20)
        assert grid.is_valid(GridCell(0, 0))
        assert grid.is_valid(GridCell(4, 4))
        assert not grid.is_valid(GridCell(5, 0))
        assert not grid.is_valid(GridCell(-1, 0))

    def test_open_cell_has_eight_neighbors(self):
        grid = Grid(200, 200, resolution=20)
        neighbors = dict(grid.get_neighbors(GridCell(5, 5)))
        assert len(neighbors) == 8
        assert neighbors[GridCell(5, 4)] == 1.0
        assert neighbors[GridCell(6, 6)] == SQRT2

    def test_corner_cell_neighbors(self):
        grid = Grid(200, 200, resolution=20)
        assert len(grid.get_neighbors(GridCell(0, 0))) == 3

    def test_no_corner_cutting(self):
        grid = Grid(200, 200, resolution=20)
        grid.blocked.add(GridCell(6, 5))
        neighbors = dict(grid.get_neighbors(GridCell(5, 5)))

        assert GridCell(6, 5) not in neighbors
        assert GridCell(6, 4) not in neighbors
        assert GridCell(6, 6) not in neighbors
        assert GridCell(4, 4) in neighbors
