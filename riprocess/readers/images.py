"""Camera image enumeration.

Images are numbered by the camera, e.g. ``DSC03522.JPG`` or ``IMG_0001.jpg``.
With the default pattern only files with a JPEG extension take part, and a
JPEG without a number is an error. A custom pattern decides on its own which
files are images; names it does not match are ignored.
"""

import logging
import re
from pathlib import Path

from riprocess.errors import FileAccessError, MalformedFilename, NoImagesFound
from riprocess.models import ImageFile
from riprocess.ranges import select_range

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".jpg", ".jpeg"}

# Optional letter/underscore prefix, the image number, then the extension.
IMAGE_FILE_PATTERN = re.compile(r"^[A-Za-z_-]*(?P<image_number>\d+)\.jpe?g$", re.IGNORECASE)


def extract_image_number(file_name: str, pattern: re.Pattern = IMAGE_FILE_PATTERN) -> int | None:
    """Return the image number embedded in ``file_name``, or None if it has none."""
    match = pattern.match(file_name)
    if match is None:
        return None
    return int(match.group("image_number"))


def list_images(
    directory: Path,
    first_index: int | None = None,
    last_index: int | None = None,
    pattern: re.Pattern = IMAGE_FILE_PATTERN,
) -> list[ImageFile]:
    """List the numbered images in ``directory``, sorted by image number.

    ``first_index``/``last_index`` narrow the listing to an inclusive range;
    both must name images that exist. Raises NoImagesFound when nothing is
    left to return.
    """
    directory = Path(directory)
    try:
        directory = directory.resolve(strict=True)
        entries = [p for p in directory.iterdir() if p.is_file()]
    except OSError as e:
        raise FileAccessError(directory, e) from e

    images: list[ImageFile] = []
    seen: dict[int, Path] = {}
    for path in entries:
        index = extract_image_number(path.name, pattern)
        if index is None:
            if pattern is IMAGE_FILE_PATTERN and path.suffix.lower() in IMAGE_SUFFIXES:
                raise MalformedFilename(path, "no image number")
            continue
        if index in seen:
            raise MalformedFilename(path, f"image number {index} already used by {seen[index].name}")
        seen[index] = path
        images.append(ImageFile(index=index, path=path))

    if not images:
        raise NoImagesFound(directory)

    images.sort(key=lambda image: image.index)
    selected = select_range(images, lambda image: image.index, first_index, last_index, kind="image")
    if not selected:
        raise NoImagesFound(directory)

    logger.debug(
        "%s: %d images, %d selected (%s..%s)",
        directory, len(images), len(selected), selected[0].index, selected[-1].index,
    )
    return selected
