from dataclasses import dataclass

import numpy as np
from PIL import Image

from unicodeart.sampling import brightness_grid, quantize_grid

PLACEHOLDER = "."


@dataclass
class CharacterGrid:
    dimensions: tuple[int, int]  # (width, height) in character cells
    cells: list[list[str]]  # cells[row][col], one glyph each

    @classmethod
    def filled(cls, dimensions: tuple[int, int], fill: str = PLACEHOLDER) -> "CharacterGrid":
        width, height = dimensions
        return cls(dimensions=dimensions, cells=[[fill] * width for _ in range(height)])

    @classmethod
    def from_image(cls, image: Image.Image, charset: str) -> "CharacterGrid":
        """Build a grid with one cell per pixel of an already resized grayscale image."""
        grid = cls.filled(image.size)
        grid.copy_from(image, charset)
        return grid

    def copy_from(self, image: Image.Image, charset: str) -> None:
        """Overwrite every cell with the glyph matching the brightness of its pixel."""
        assert image.size == self.dimensions, f"Image size {image.size} does not match grid {self.dimensions}"
        if self.width == 0 or self.height == 0:
            return

        glyphs = np.array(list(charset))
        indices = quantize_grid(brightness_grid(image.convert("RGBA")), len(glyphs))
        for y, row in enumerate(glyphs[indices]):
            self.cells[y][:] = row.tolist()

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    def __str__(self) -> str:
        return "".join("".join(row) + "\n" for row in self.cells)
