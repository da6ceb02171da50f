"""2D predictive coding of RGB images: residual grid compression / decompression."""

from .compressor import Compressor
from .decompressor import Decompressor
from .predictor import Predictor2D
from .utils import InvalidGridError


def compress(source_grid):
    return Compressor().compress(source_grid)


def decompress(residual_grid):
    return Decompressor().decompress(residual_grid)
