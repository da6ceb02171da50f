"""
Scenario checks for the predictive coding transform.
Runnable with pytest or from the menu via run_all().
Each check saves its input / output images into outputs/.
"""

import os
import numpy as np
from .compressor import Compressor
from .decompressor import Decompressor
from .image_io import OUTPUT_DIR, save_grid
from .utils import grid_from_rgb_array, psnr


def save_temp_grid(grid, name):
    """Save packed grid as PNG into outputs/."""
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    path = os.path.join(OUTPUT_DIR, name)
    save_grid(grid, path)
    return path


def gray_grid(arr):
    arr = np.asarray(arr, dtype=np.uint8)
    return grid_from_rgb_array(np.stack([arr, arr, arr], axis=-1))


# -----------------------------------------------------------
# CASE 1 — Smooth grayscale gradient, closed loop (exact)
# -----------------------------------------------------------
def test_smooth_closed_loop():
    arr = np.add.outer(np.arange(8), np.arange(0, 16, 2)) + 10
    grid = gray_grid(arr)
    save_temp_grid(grid, "tc1_smooth.png")

    comp = Compressor(prediction_source="reconstructed", signed_residuals=True)
    residual = comp.compress(grid)
    recon = Decompressor(prediction_source="reconstructed", signed_residuals=True).decompress(residual)
    save_temp_grid(recon, "tc1_smooth_decompressed.png")

    assert recon.shape == grid.shape
    assert np.array_equal(recon, grid)
    assert psnr(grid, recon) == float('inf')


# -----------------------------------------------------------
# CASE 2 — Flat colour, closed loop with signed lanes (exact)
# -----------------------------------------------------------
def test_flat_colour_closed_loop():
    img = np.zeros((12, 10, 3), dtype=np.uint8)
    img[...] = (100, 90, 110)
    grid = grid_from_rgb_array(img)
    save_temp_grid(grid, "tc2_flat.png")

    comp = Compressor(prediction_source="reconstructed", signed_residuals=True)
    recon = Decompressor(prediction_source="reconstructed", signed_residuals=True).decompress(
        comp.compress(grid))
    save_temp_grid(recon, "tc2_flat_decompressed.png")

    assert np.array_equal(recon, grid)


# -----------------------------------------------------------
# CASE 3 — 2x2 grayscale, residual-grid prediction
# -----------------------------------------------------------
def test_two_by_two_residual_mode():
    # (0,0)=10, (1,0)=20, (0,1)=30, (1,1)=40
    grid = gray_grid([[10, 20], [30, 40]])

    residual = Compressor().compress(grid)
    # predictions while encoding (x outer, y inner): 0, 10//4, 38//4, 49//4
    assert residual.tolist() == gray_grid([[10, 11], [28, 28]]).tolist()

    recon = Decompressor().decompress(residual)
    # every cell of a 2x2 grid sees all four residuals: (10+11+28+28)//4 == 19
    assert recon.tolist() == gray_grid([[29, 30], [47, 47]]).tolist()


# -----------------------------------------------------------
# CASE 4 — Random RGB noise, residual-grid prediction
# -----------------------------------------------------------
def test_noise_residual_mode():
    rng = np.random.default_rng(338)
    img = rng.integers(0, 256, (16, 24, 3), dtype=np.uint8)
    grid = grid_from_rgb_array(img)
    save_temp_grid(grid, "tc4_noise.png")

    residual = Compressor().compress(grid)
    recon = Decompressor().decompress(residual)
    save_temp_grid(recon, "tc4_noise_decompressed.png")

    assert residual.shape == grid.shape and recon.shape == grid.shape
    assert residual.min() >= 0 and residual.max() <= 0xFFFFFF
    assert recon.min() >= 0 and recon.max() <= 0xFFFFFF
    assert np.array_equal(Compressor().compress(grid), residual)
    assert np.array_equal(Decompressor().decompress(residual), recon)


# -----------------------------------------------------------
# Run all checks
# -----------------------------------------------------------
def run_all():
    checks = [
        test_smooth_closed_loop,
        test_flat_colour_closed_loop,
        test_two_by_two_residual_mode,
        test_noise_residual_mode,
    ]
    failed = 0

    for t in checks:
        print(f"\nRunning {t.__name__} ...")
        try:
            t()
        except AssertionError as exc:
            failed += 1
            print(f"✗ Failed: {t.__name__} {exc}")
        else:
            print(f"✓ Completed: {t.__name__}")

    print(f"\nAll scenario checks finished ({len(checks) - failed}/{len(checks)} passed). "
          f"Images saved in {OUTPUT_DIR}/\n")
    return failed == 0
