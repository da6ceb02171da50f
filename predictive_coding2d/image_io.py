# load/save/display images

from PIL import Image
import numpy as np
import os
import matplotlib.pyplot as plt
from .utils import grid_from_rgb_array, rgb_array_from_grid

OUTPUT_DIR = "outputs"


def load_image(path):
    """Load image and return numpy array in shape (H,W,3). Alpha is dropped."""
    img = Image.open(path).convert("RGB")
    arr = np.array(img, dtype=np.uint8)
    return arr


def load_grid(path):
    """Load an image file as a packed (H,W) RGB grid."""
    return grid_from_rgb_array(load_image(path))


def grid_to_image(grid):
    """Packed RGB grid -> PIL RGB image (no alpha)."""
    return Image.fromarray(rgb_array_from_grid(grid))


def save_grid(grid, path):
    grid_to_image(grid).save(path)


def show_and_save_images(grid, titles, out_name="result.png", figSize=(12,6), show=True):
    """
    grid: list of numpy images (H,W,3) or (H,W)
    titles: list of strings
    Saves to outputs/out_name and optionally displays using matplotlib.
    """
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    n = len(grid)
    cols = min(3, n)
    rows = (n + cols - 1)//cols
    fig = plt.figure(figsize=figSize)
    for i, (img, title) in enumerate(zip(grid, titles)):
        plt.subplot(rows, cols, i+1)
        if img.ndim == 2:
            plt.imshow(img, cmap='gray', vmin=0, vmax=255)
        else:
            plt.imshow(np.uint8(np.clip(img, 0, 255)))
        plt.title(title)
        plt.axis('off')
    outPath = os.path.join(OUTPUT_DIR, out_name)
    plt.tight_layout()
    plt.savefig(outPath, bbox_inches='tight')
    if show:
        plt.show()
    plt.close(fig)
    return outPath
