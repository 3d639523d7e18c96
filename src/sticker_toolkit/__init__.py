"""Top-level package for the sticker sheet toolkit.

Provides subpackages:
- sticker_toolkit.core: RasterImage, GridLayout, StickerSlot and error kinds
- sticker_toolkit.extractor: chroma key removal, slicing and the sheet pipeline
- sticker_toolkit.builder: composing stickers back into a sheet
- sticker_toolkit.codec: encoded bytes / data URLs <-> RasterImage
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("sticker-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
