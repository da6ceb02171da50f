# CLI entry point (menu) - integrate everything

import os
from .image_io import load_grid, save_grid, show_and_save_images, OUTPUT_DIR
from .compressor import Compressor
from .decompressor import Decompressor
from .predictor import Predictor2D, PREDICTION_SOURCES
from .utils import mean_abs_residual, psnr, residual_lanes, rgb_array_from_grid


def ask_codec_options():
    print("Prediction sources: 'residual' (default), 'reconstructed'")
    source = input("Choose prediction source [residual]: ").strip()
    source = source if source != "" else "residual"
    if source not in PREDICTION_SOURCES:
        print("Unknown prediction source, using 'residual'.")
        source = "residual"
    signed = input("Read residual lanes as signed? [y/N]: ").strip().lower() == "y"
    return source, signed


def compress_flow():
    path = input("Enter path to image file to compress: ").strip()
    if not os.path.exists(path):
        print("File not found.")
        return
    grid = load_grid(path)
    H, W = grid.shape
    print("Loaded image with size:", f"{W}x{H}")

    source, signed = ask_codec_options()
    compressor = Compressor(prediction_source=source, signed_residuals=signed)
    residual = compressor.compress(grid)

    # Save compressed to outputs/<basename>_compressed.npz
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    base = os.path.splitext(os.path.basename(path))[0]
    out_npz = os.path.join(OUTPUT_DIR, f"{base}_compressed.npz")
    compressor.save_compressed(residual, out_npz)
    print("Residual grid saved to:", out_npz)

    dec = Decompressor.from_file(out_npz)
    recon = dec.decompress()

    # residuals shifted +128 so negative values are visible
    res_vis = residual_lanes(residual, signed=True) + 128
    pred_vis = Predictor2D(channel=compressor.channel).predict_image(grid)
    imgs = [rgb_array_from_grid(grid), pred_vis, res_vis, rgb_array_from_grid(recon)]
    titles = ["Original", "Predicted (channel A)", "Residual +128", "Decompressed"]

    out_name = f"{base}_results.png"
    outpath = show_and_save_images(imgs, titles, out_name=out_name)
    print("Saved visualization to:", outpath)

    print(f"\nMean |residual|: {mean_abs_residual(residual, signed=signed):.3f}")
    print(f"PSNR original vs decompressed: {psnr(grid, recon):.3f} dB")
    print("Note: residuals are stored in 8-bit lanes; values outside the lane range alias.")


def decompress_flow():
    path = input("Enter path to compressed .npz file: ").strip()
    if not os.path.exists(path):
        print("File not found.")
        return
    dec = Decompressor.from_file(path)
    grid = dec.decompress()
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    out_name = os.path.splitext(os.path.basename(path))[0] + "_decompressed.png"
    save_path = os.path.join(OUTPUT_DIR, out_name)
    save_grid(grid, save_path)
    print("Decompressed image saved to:", save_path)


def main_menu():
    while True:
        print("\n2D Predictive Coding Menu")
        print("1) Compress image")
        print("2) Decompress .npz file")
        print("3) Run scenario checks")
        print("4) Exit")
        choice = input("Choose option: ").strip()
        if choice == "1":
            compress_flow()
        elif choice == "2":
            decompress_flow()
        elif choice == "3":
            from . import test_cases
            test_cases.run_all()
        elif choice == "4":
            print("Bye.")
            break
        else:
            print("Invalid choice.")


if __name__ == "__main__":
    main_menu()
