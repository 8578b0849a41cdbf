"""Image optimization with Pillow and scour.

Raster formats Pillow can re-encode are written with the optimizer settings
from global_config; multi-frame images keep every frame. SVGs are cleaned
with scour, keeping element IDs. Anything else is copied verbatim. An
optimized result that is not smaller than the source is discarded in favour
of the original bytes.
"""

from __future__ import annotations

import io
import shutil
from pathlib import Path
from typing import Any
from xml.parsers.expat import ExpatError

from PIL import Image, UnidentifiedImageError
from scour import scour

from ..errors import TransformError
from ..global_config import (
    GIF_INTERLACED,
    JPEG_PROGRESSIVE,
    JPEG_QUALITY,
    PNG_COMPRESS_LEVEL,
)

SAVE_OPTIONS: dict[str, dict[str, Any]] = {
    "JPEG": {"quality": JPEG_QUALITY, "progressive": JPEG_PROGRESSIVE, "optimize": True},
    "PNG": {"optimize": True, "compress_level": PNG_COMPRESS_LEVEL},
    "GIF": {"optimize": True, "interlace": GIF_INTERLACED},
}

JPEG_MODES = frozenset({"RGB", "L", "CMYK"})

SVG_SUFFIX = ".svg"


def _svg_options():
    options = scour.sanitizeOptions()
    options.strip_ids = False
    options.shorten_ids = False
    options.remove_metadata = True
    options.strip_comments = True
    options.strip_xml_prolog = True
    options.indent_type = "none"
    options.newlines = False
    return options


def _encode(img: Image.Image, fmt: str) -> bytes:
    options = dict(SAVE_OPTIONS[fmt])
    if getattr(img, "n_frames", 1) > 1:
        options["save_all"] = True
    if fmt == "JPEG" and img.mode not in JPEG_MODES:
        img = img.convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format=fmt, **options)
    return buf.getvalue()


def _encode_svg(source: Path) -> bytes:
    try:
        text = source.read_text(encoding="utf-8")
        return scour.scourString(text, _svg_options()).encode("utf-8")
    except (ExpatError, UnicodeDecodeError) as exc:
        raise TransformError(f"cannot optimize svg: {exc}", source=str(source)) from exc


def _keep_smaller(source: Path, dest: Path, data: bytes) -> str:
    original = source.read_bytes()
    if len(data) >= len(original):
        dest.write_bytes(original)
        return "copied"
    dest.write_bytes(data)
    return "optimized"


def optimize_image(source: Path, dest: Path) -> str:
    """Write an optimized copy of source to dest.

    Returns:
        "optimized" if re-encoded bytes were written, "copied" otherwise.

    Raises:
        TransformError: If the file is recognized but cannot be decoded.
    """
    source = Path(source)
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)

    if source.suffix.lower() == SVG_SUFFIX:
        return _keep_smaller(source, dest, _encode_svg(source))

    try:
        with Image.open(source) as img:
            fmt = img.format
            if fmt not in SAVE_OPTIONS:
                shutil.copyfile(source, dest)
                return "copied"
            data = _encode(img, fmt)
    except UnidentifiedImageError:
        shutil.copyfile(source, dest)
        return "copied"
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise TransformError(f"cannot optimize image: {exc}", source=str(source)) from exc

    return _keep_smaller(source, dest, data)
