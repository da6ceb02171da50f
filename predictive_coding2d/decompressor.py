# Decompressor class - rebuilds pixels from a residual grid

"""
Decompressor: adds the prediction back to every residual lane and clamps to [0,255].
Uses the same Predictor2D as Compressor. With prediction_source='residual' the
predictor reads the (complete) residual grid; with 'reconstructed' it reads the
pixels rebuilt so far, matching Compressor's feed-backward loop.
Can also be built from a .npz file written by Compressor.save_compressed.
"""

import numpy as np
from .predictor import Predictor2D, SOURCE_RECONSTRUCTED, check_prediction_source
from .utils import CHANNEL_A, InvalidGridError, clamp, pack_rgb, unpack_rgb, validate_grid


class Decompressor:
    def __init__(self, prediction_source="residual", signed_residuals=False, channel=CHANNEL_A):
        self.prediction_source = check_prediction_source(prediction_source)
        self.signed_residuals = signed_residuals
        self.channel = channel
        self.residual = None

    @classmethod
    def from_file(cls, meta_npz_path):
        with np.load(meta_npz_path, allow_pickle=False) as data:
            source = str(data['prediction_source'])
            signed = bool(data['signed_residuals'])
            channel = int(data['channel'])
            shape = tuple(int(n) for n in data['shape'])
            residual = data['residual'].astype(np.int64)
        if residual.shape != shape:
            raise InvalidGridError(
                f"archive residual grid has shape {residual.shape}, header says {shape}")
        dec = cls(prediction_source=source, signed_residuals=signed, channel=channel)
        dec.residual = residual
        return dec

    def decompress(self, residual_grid=None):
        """
        residual_grid: (H,W) residual grid from Compressor.compress; defaults to
        the grid loaded by from_file.
        Returns a new (H,W) int64 packed RGB grid.
        """
        if residual_grid is None:
            if self.residual is None:
                raise ValueError("no residual grid given and none loaded from file")
            residual_grid = self.residual
        residual = validate_grid(residual_grid)
        height, width = residual.shape
        pq = Predictor2D(channel=self.channel)

        out = np.zeros((height, width), dtype=np.int64)
        reference = out if self.prediction_source == SOURCE_RECONSTRUCTED else residual

        for x in range(width):
            for y in range(height):
                er, eg, eb = unpack_rgb(residual[y, x], signed=self.signed_residuals)
                p = pq.predict_pixel(reference, x, y)
                out[y, x] = pack_rgb(clamp(p + er), clamp(p + eg), clamp(p + eb))
        return out
