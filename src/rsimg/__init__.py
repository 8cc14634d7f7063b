"""Batch in-place image resizing."""
from .options import AbsoluteSize, FilterKind, ResizeConfig, ScaleFactor, parse
from .resize import run

__version__ = "0.1.0"
