# helper functions (packing, clamping, bounds checks, quality figures)

"""
Helper utilities shared by the compressor and decompressor:
 - composite value packing / unpacking (A: bits 16-23, B: bits 8-15, C: bits 0-7)
 - clamping to the 8-bit channel range
 - grid bounds check and input validation
 - conversions between (H,W,3) image arrays and packed grids
 - PSNR / residual magnitude for reporting
"""

import numpy as np
from skimage.metrics import peak_signal_noise_ratio

CHANNEL_A = 0   # red,   bits 16-23
CHANNEL_B = 1   # green, bits 8-15
CHANNEL_C = 2   # blue,  bits 0-7
CHANNEL_SHIFTS = (16, 8, 0)
LANE_MASK = 0xFF


class InvalidGridError(ValueError):
    """Raised when a grid is empty, jagged or not a 2D integer array."""


def clamp(value, low=0, high=255):
    if isinstance(value, np.ndarray):
        return np.clip(value, low, high)
    return max(low, min(high, value))


def pack_rgb(a, b, c):
    """Pack three lanes into one composite value. Each lane is masked to 8 bits."""
    return ((int(a) & LANE_MASK) << 16) | ((int(b) & LANE_MASK) << 8) | (int(c) & LANE_MASK)


def to_signed8(lane):
    lane = int(lane) & LANE_MASK
    return lane - 256 if lane > 127 else lane


def channel_value(value, channel):
    return (int(value) >> CHANNEL_SHIFTS[channel]) & LANE_MASK


def unpack_rgb(value, signed=False):
    """Return (a, b, c) lanes of a composite value; sign-extended when signed=True."""
    lanes = tuple(channel_value(value, ch) for ch in (CHANNEL_A, CHANNEL_B, CHANNEL_C))
    if signed:
        return tuple(to_signed8(v) for v in lanes)
    return lanes


def is_valid_pixel(grid, x, y):
    height, width = grid.shape
    return 0 <= x < width and 0 <= y < height


def validate_grid(grid):
    """
    grid: 2D numpy array or list of rows, indexed grid[y][x].
    Returns an int64 copy of shape (height, width).
    Raises InvalidGridError for empty, jagged or non-integer input.
    """
    try:
        arr = np.array(grid)
    except ValueError as exc:
        # numpy refuses inhomogeneous (jagged) nested lists
        raise InvalidGridError(f"grid rows must all have the same length: {exc}") from exc
    if arr.dtype == object:
        raise InvalidGridError("grid rows must all have the same length")
    if arr.ndim != 2:
        raise InvalidGridError(f"grid must be two-dimensional, got {arr.ndim} dimension(s)")
    height, width = arr.shape
    if width <= 0 or height <= 0:
        raise InvalidGridError(f"grid must be non-empty, got {width}x{height}")
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidGridError(f"grid values must be integers, got dtype {arr.dtype}")
    return arr.astype(np.int64)


def grid_from_rgb_array(arr):
    """(H,W,3) uint8 array -> (H,W) packed composite grid."""
    arr = np.asarray(arr)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise InvalidGridError(f"expected an (H,W,3) RGB array, got shape {arr.shape}")
    rgb = arr.astype(np.int64) & LANE_MASK
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def rgb_array_from_grid(grid):
    """(H,W) packed composite grid -> (H,W,3) uint8 array (lanes read unsigned)."""
    grid = np.asarray(grid, dtype=np.int64)
    out = np.zeros(grid.shape + (3,), dtype=np.uint8)
    for ch, shift in enumerate(CHANNEL_SHIFTS):
        out[..., ch] = (grid >> shift) & LANE_MASK
    return out


def residual_lanes(residual_grid, signed=False):
    """(H,W) residual grid -> (H,W,3) int array of residual lanes."""
    lanes = rgb_array_from_grid(residual_grid).astype(np.int32)
    if signed:
        lanes = np.where(lanes > 127, lanes - 256, lanes)
    return lanes


def mean_abs_residual(residual_grid, signed=False):
    return float(np.abs(residual_lanes(residual_grid, signed=signed)).mean())


def psnr(original, reconstructed):
    """PSNR in dB between two packed grids (peak 255); inf when identical."""
    a = rgb_array_from_grid(original)
    b = rgb_array_from_grid(reconstructed)
    if np.array_equal(a, b):
        return float('inf')
    return float(peak_signal_noise_ratio(a, b, data_range=255))
