# renderer/image.py
from pathlib import Path
import numpy as np
from PIL import Image
from core.errors import ImageFileError

def to_image_array(pixels: np.ndarray) -> np.ndarray:
    """
    Converts a (width, height, 3) frame with y pointing up into the
    (height, width, 3) row-major layout image files use, top row first.
    """
    return np.ascontiguousarray(np.transpose(pixels, (1, 0, 2))[::-1])

def save_image(pixels: np.ndarray, path) -> None:
    """
    Writes 8-bit pixels to `path`; the format follows the file extension
    (.tga when there is none).
    """
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(".tga")

    image = Image.fromarray(to_image_array(pixels.astype(np.uint8)))
    try:
        image.save(path)
    except (OSError, ValueError) as e:
        raise ImageFileError(f"Failed writing image {path}: {e}") from e
