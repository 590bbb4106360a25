import logging
import pathlib
from collections.abc import Iterable, Mapping

import chardet

from . import ini
from .exceptions import DestinationUnwritable, SourceUnavailable

DEFAULT_ENCODING = "utf-8"

_log = logging.getLogger(__name__)


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()
    fed = False

    for line in file:
        if detector.done:
            break

        detector.feed(line)
        fed = fed or bool(line)

    result = detector.close()

    # Empty input has no encoding.
    if not fed or not result["confidence"]:
        return None

    if encoding := result["encoding"]:
        return encoding.lower()

    return None


def resolve_encoding(path: str | pathlib.Path, encoding: str | None = None) -> str:
    """Work out which encoding to read a file with.

    Args:
        path: The file to read.
        encoding: The encoding to use. If None, encoding detection is attempted,
            falling back to UTF-8 if it fails (i.e. the file is empty).
            ASCII is widened to UTF-8 so that non-ASCII values can be saved back.

    Returns:
        The encoding.

    Raises:
        SourceUnavailable: The file could not be opened.
    """

    if encoding is not None:
        return encoding

    path = pathlib.Path(path)

    try:
        with path.open("rb") as f:
            detected = detect_encoding(f)
    except OSError as e:
        raise SourceUnavailable(f"cannot read {path}: {e}") from e

    encoding = DEFAULT_ENCODING if detected in (None, "ascii") else detected
    _log.debug("detected encoding %s for %s", encoding, path)

    return encoding


def read(path: str | pathlib.Path, encoding: str | None = None) -> ini.Config:
    """Read and parse an INI file.

    Args:
        path: The file to read.
        encoding: The file encoding. If None, see resolve_encoding().

    Returns:
        See ini.load().

    Raises:
        SourceUnavailable: The file could not be opened or decoded.
        ParseError: See ini.load().
    """

    path = pathlib.Path(path)
    encoding = resolve_encoding(path, encoding)

    try:
        with path.open(encoding=encoding) as f:
            return ini.load(f)

    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise SourceUnavailable(f"cannot read {path}: {e}") from e


def write(
    config: Mapping[str, Mapping[str, ini.Value]],
    path: str | pathlib.Path,
    encoding: str = DEFAULT_ENCODING,
):
    """Serialize sections as INI to a file, replacing its contents.

    Args:
        config: The dictionary of sections mapped to properties.
        path: The file to write to.
        encoding: The file encoding. Defaults to UTF-8.

    Raises:
        DestinationUnwritable: The file could not be opened or written.
    """

    path = pathlib.Path(path)

    try:
        with path.open("w", encoding=encoding) as f:
            ini.dump(config, f)

    except (OSError, UnicodeEncodeError, LookupError) as e:
        raise DestinationUnwritable(f"cannot write {path}: {e}") from e

    _log.debug("wrote %d sections to %s", len(config), path)
