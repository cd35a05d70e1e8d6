from .logger import (
    ROTATIONS,
    ColoredFormatter,
    build_file_handler,
    configure_logging,
)

__all__ = [
    "ROTATIONS",
    "ColoredFormatter",
    "build_file_handler",
    "configure_logging",
]
