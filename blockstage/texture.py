"""A fixed-capacity table of loaded textures addressed by index."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

TEXTURE_MAX = 256


class TextureLoadError(OSError):
    """A texture could not be loaded or no slot was free."""


def image_size(filename: str | os.PathLike[str]) -> tuple[int, int]:
    """Width and height in pixels of an image file."""
    try:
        with Image.open(filename) as image:
            return image.size
    except (OSError, UnidentifiedImageError) as exc:
        raise TextureLoadError(f"failed to load texture {os.fspath(filename)!r}") from exc


@dataclass
class _Texture:
    filename: str
    width: int
    height: int


class TextureRegistry:
    """Loads each texture file once and hands out its slot index."""

    def __init__(
        self,
        capacity: int = TEXTURE_MAX,
        loader: Callable[[str], tuple[int, int]] = image_size,
    ) -> None:
        self._slots: list[_Texture | None] = [None] * capacity
        self._loader = loader
        self.current = -1

    def load(self, filename: str | os.PathLike[str]) -> int:
        """Return the slot of ``filename``, loading it into a free slot if new."""
        name = os.fspath(filename)
        for index, texture in enumerate(self._slots):
            if texture is not None and texture.filename == name:
                return index
        for index, texture in enumerate(self._slots):
            if texture is not None:
                continue
            try:
                width, height = self._loader(name)
            except OSError as exc:
                raise TextureLoadError(f"failed to load texture {name!r}") from exc
            self._slots[index] = _Texture(name, width, height)
            return index
        raise TextureLoadError(f"no free texture slot for {name!r}")

    def release_all(self) -> None:
        """Forget every loaded texture."""
        self._slots = [None] * len(self._slots)

    def set_texture(self, tex_id: int) -> None:
        """Make ``tex_id`` the current texture; negative ids are ignored."""
        if tex_id < 0:
            return
        self._entry(tex_id)
        self.current = tex_id

    def _entry(self, tex_id: int) -> _Texture | None:
        if tex_id >= len(self._slots):
            raise IndexError(f"texture id {tex_id} out of range")
        return self._slots[tex_id]

    def width(self, tex_id: int) -> int:
        """Pixel width of a texture; 0 for a negative id or an empty slot."""
        if tex_id < 0:
            return 0
        texture = self._entry(tex_id)
        return texture.width if texture is not None else 0

    def height(self, tex_id: int) -> int:
        """Pixel height of a texture; 0 for a negative id or an empty slot."""
        if tex_id < 0:
            return 0
        texture = self._entry(tex_id)
        return texture.height if texture is not None else 0

    def __len__(self) -> int:
        return sum(texture is not None for texture in self._slots)