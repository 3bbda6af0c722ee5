"""Icon resizer: decode, stretch into a square canvas, encode as PNG."""
import io

from PIL import Image, UnidentifiedImageError

from errors import DecodeError, EncodeError


class IconResizer:
    """Deterministic image transcoding. Holds no state."""

    def _open(self, data: bytes) -> Image.Image:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise DecodeError(f"Not a recognized image: {e}") from e
        return img

    def resize(self, data: bytes, size: int) -> bytes:
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError(f"size must be a positive integer, got {size!r}")
        img = self._open(data).convert("RGBA")
        canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
        scaled = img.resize((size, size), Image.LANCZOS)
        canvas = Image.alpha_composite(canvas, scaled)
        out = io.BytesIO()
        try:
            canvas.save(out, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeError(f"PNG encoding failed: {e}") from e
        return out.getvalue()
