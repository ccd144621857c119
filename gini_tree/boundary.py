# gini_tree/boundary.py
import numpy as np

from .tree import predict

DATA_WINDOW = (-5.0, 5.0, -5.0, 5.0)  # (x_min, x_max, y_min, y_max)

# RGBA, semi-transparent so the points stay visible on top.
BOUNDARY_COLORS = {
    1: (59, 130, 246, 30),
    0: (239, 68, 68, 30),
}
POINT_COLORS = {
    1: '#3b82f6',
    0: '#ef4444',
}


def pixel_to_data(px, py, width, height, window=DATA_WINDOW):
    x_min, x_max, y_min, y_max = window
    return (
        x_min + (px / width) * (x_max - x_min),
        y_min + (py / height) * (y_max - y_min),
    )


def data_to_pixel(x, y, width, height, window=DATA_WINDOW):
    x_min, x_max, y_min, y_max = window
    return (
        (x - x_min) / (x_max - x_min) * width,
        (y - y_min) / (y_max - y_min) * height,
    )


def _validate_raster_args(width, height, block_size):
    if width < 1 or height < 1:
        raise ValueError(f"Raster size must be positive, got {width}x{height}.")
    if block_size < 1:
        raise ValueError(f"block_size must be >= 1, got {block_size}.")


def prediction_grid(tree, width=600, height=400, block_size=2, window=DATA_WINDOW):
    """
    Samples the tree once per block, at the block's top-left pixel.

    Returns:
        np.ndarray: int array of shape (ceil(height / block_size), ceil(width / block_size)).
    """
    _validate_raster_args(width, height, block_size)
    rows = range(0, height, block_size)
    cols = range(0, width, block_size)
    grid = np.empty((len(rows), len(cols)), dtype=int)
    for i, py in enumerate(rows):
        for j, px in enumerate(cols):
            x, y = pixel_to_data(px, py, width, height, window)
            grid[i, j] = predict(tree, x, y)
    return grid


def rasterize_decision_boundary(tree, width=600, height=400, block_size=2, window=DATA_WINDOW):
    """
    Renders the decision regions of a tree into an RGBA pixel buffer.

    Every block_size x block_size block is filled with the class-tinted color of
    the prediction at its data-space coordinate. Blocks on the right and bottom
    edges are clipped to the buffer.

    Returns:
        np.ndarray: uint8 array of shape (height, width, 4).
    """
    grid = prediction_grid(tree, width, height, block_size, window)
    palette = np.array([BOUNDARY_COLORS[0], BOUNDARY_COLORS[1]], dtype=np.uint8)
    blocks = palette[grid]
    raster = np.repeat(np.repeat(blocks, block_size, axis=0), block_size, axis=1)
    return np.ascontiguousarray(raster[:height, :width])
