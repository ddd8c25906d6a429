"""
Image store - raw image bytes on the local filesystem.

Independent of the item backend. There is no transactional link between an
image write and the item insert that references it.
"""

import logging
from pathlib import Path
from typing import Union

from .errors import ImageNotFoundError, StorageError

logger = logging.getLogger(__name__)


def store_image(path: Union[str, Path], data: bytes) -> None:
    """Write `data` to `path`, creating or truncating the file."""
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise StorageError(f"cannot store image {path}: {e}") from e
    logger.info("Stored image %s (%d bytes)", path, len(data))


def read_image(path: Union[str, Path]) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise ImageNotFoundError(path) from e
    except OSError as e:
        raise StorageError(f"cannot read image {path}: {e}") from e
