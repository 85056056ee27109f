import numpy as np
from PIL import Image


def gradient_image(width, height, mode='RGB'):
    """Image whose every pixel is distinguishable by its coordinates"""
    ys, xs = np.mgrid[0:height, 0:width]
    channels = [xs % 256, ys % 256, (xs * 7 + ys * 13) % 256]
    if mode == 'RGBA':
        channels.append((xs + ys) % 256)
    arr = np.stack(channels, axis=-1).astype(np.uint8)
    return Image.fromarray(arr)
