"""Encode files into printable pages of redundant dot blocks."""

from .block import Block
from .errors import (BitmapWriteError, ConfigurationError, GeometryError,
                     InputError, PaperbakError, ResourceError)
from .geometry import PageGeometry, plan_geometry
from .options import PrintOptions
from .prepare import Payload, prepare_bytes, prepare_file
from .printer import PrintJob, Step, encode_file
from .superblock import SuperData

__version__ = "1.0.0"

__all__ = [
    "BitmapWriteError", "Block", "ConfigurationError", "GeometryError",
    "InputError", "PageGeometry", "PaperbakError", "Payload", "PrintJob",
    "PrintOptions", "ResourceError", "Step", "SuperData", "encode_file",
    "plan_geometry", "prepare_bytes", "prepare_file",
]
