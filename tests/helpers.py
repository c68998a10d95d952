"""Colours and image builders shared by the test modules."""

from PIL import Image

OUTER = (255, 0, 0, 255)
INNER = (0, 255, 0, 255)
EDGE_LEFT = (0, 0, 255, 255)
EDGE_TOP = (255, 255, 0, 255)
FILL = (128, 128, 128, 255)
CLEAR = (0, 0, 0, 0)


def solid_image(color, size=(8, 8)):
    return Image.new("RGBA", size, color)


def marked_image(size, tl, tr, bl, br):
    """Square image with one colour per quadrant."""
    img = Image.new("RGBA", (size, size), tl)
    half = size // 2
    img.paste(Image.new("RGBA", (size - half, half), tr), (half, 0))
    img.paste(Image.new("RGBA", (half, size - half), bl), (0, half))
    img.paste(Image.new("RGBA", (size - half, size - half), br), (half, half))
    return img


def region_colors(img, box):
    """Set of colours present in *box* of *img*."""
    return {color for _, color in img.crop(box).getcolors(maxcolors=1 << 16)}
