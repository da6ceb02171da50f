# Predictor2D class (3x3 neighbourhood mean on one channel)

"""
Predictor2D: estimates a pixel from its immediate spatial neighbourhood.
The prediction is the floor mean of one fixed channel (default A / red) over
every in-bounds cell of the 3x3 window centred on (x, y), the centre included.
Out-of-bounds offsets are simply skipped, so corners average 4 cells,
edges 6 and interior pixels 9.

The same scalar prediction is applied to all three channels by the
compressor and decompressor.
"""

import numpy as np
from .utils import CHANNEL_A, channel_value, is_valid_pixel

OFFSETS = (-1, 0, 1)

# which grid the predictor reads while a grid is being coded
SOURCE_RESIDUAL = "residual"            # the residual grid itself
SOURCE_RECONSTRUCTED = "reconstructed"  # closed loop: pixels rebuilt so far
PREDICTION_SOURCES = (SOURCE_RESIDUAL, SOURCE_RECONSTRUCTED)


def check_prediction_source(source):
    if source not in PREDICTION_SOURCES:
        raise ValueError(f"prediction_source must be one of {PREDICTION_SOURCES}, got {source!r}")
    return source


class Predictor2D:
    def __init__(self, channel=CHANNEL_A):
        self.channel = channel

    def predict_pixel(self, grid, x, y):
        """
        grid: packed composite grid (H,W), addressed grid[y, x]
        x,y: coordinate to predict, must be inside the grid
        Reads whatever the grid currently holds, centre cell included.
        """
        total = 0
        count = 0
        for dx in OFFSETS:
            for dy in OFFSETS:
                nx, ny = x + dx, y + dy
                if is_valid_pixel(grid, nx, ny):
                    total += channel_value(grid[ny, nx], self.channel)
                    count += 1
        if count == 0:
            return 0
        return total // count

    def predict_image(self, grid):
        """Prediction at every coordinate of a fixed grid (no feedback). Returns (H,W) int array."""
        height, width = grid.shape
        pred = np.zeros((height, width), dtype=np.int32)
        for x in range(width):
            for y in range(height):
                pred[y, x] = self.predict_pixel(grid, x, y)
        return pred
