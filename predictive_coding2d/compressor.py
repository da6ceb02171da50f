# Compressor class - builds the residual grid + saves it with its parameters


"""
Compressor - turns a packed RGB grid into a grid of prediction residuals:
 - scans x outer, y inner
 - uses Predictor2D (channel A mean of the 3x3 window) for every pixel
 - subtracts the same scalar prediction from red, green and blue
 - packs the three residuals into 8-bit lanes (masked, so large residuals alias)

prediction_source selects which grid the predictor reads while encoding:
 - 'residual': the residual grid being built (cells not visited yet are 0)
 - 'reconstructed': feed-backward, the encoder rebuilds the pixels the decoder
   will see and predicts from those
"""

import numpy as np
from .predictor import Predictor2D, SOURCE_RECONSTRUCTED, check_prediction_source
from .utils import CHANNEL_A, clamp, pack_rgb, unpack_rgb, validate_grid


class Compressor:
    def __init__(self, prediction_source="residual", signed_residuals=False, channel=CHANNEL_A):
        self.prediction_source = check_prediction_source(prediction_source)
        self.signed_residuals = signed_residuals
        self.channel = channel

    def compress(self, source_grid):
        """
        source_grid: (H,W) packed RGB grid (or list of rows), left untouched
        Returns a new (H,W) int64 residual grid.
        Raises InvalidGridError before producing anything if the grid is malformed.
        """
        source = validate_grid(source_grid)
        height, width = source.shape
        pq = Predictor2D(channel=self.channel)

        residual = np.zeros((height, width), dtype=np.int64)
        # only used in feed-backward mode; mirrors the decoder's output grid
        recon = np.zeros((height, width), dtype=np.int64)
        feedback = self.prediction_source == SOURCE_RECONSTRUCTED
        reference = recon if feedback else residual

        for x in range(width):
            for y in range(height):
                red, green, blue = unpack_rgb(source[y, x])
                p = pq.predict_pixel(reference, x, y)
                packed = pack_rgb(red - p, green - p, blue - p)
                residual[y, x] = packed

                if feedback:
                    # reconstruct exactly as Decompressor will
                    er, eg, eb = unpack_rgb(packed, signed=self.signed_residuals)
                    recon[y, x] = pack_rgb(clamp(p + er), clamp(p + eg), clamp(p + eb))

        return residual

    def compress_file(self, path):
        """Load an image file and compress it. I/O and decoding errors propagate."""
        from .image_io import load_grid
        return self.compress(load_grid(path))

    def save_compressed(self, residual_grid, out_path):
        """
        Save the residual grid to a numpy npz file together with the
        parameters needed to decode it.
        """
        residual = validate_grid(residual_grid)
        np.savez_compressed(
            out_path,
            residual=residual,
            shape=np.array(residual.shape),
            prediction_source=self.prediction_source,
            signed_residuals=self.signed_residuals,
            channel=self.channel,
        )
