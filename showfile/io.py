"""Reading and writing show files on disk.

The codec itself works on text. These helpers handle the file side:
decoding, keeping the original line endings, and picking the dialect of a
file that does not say which one it uses.
"""

from __future__ import annotations

import logging
from pathlib import Path

from showfile.classifier import iter_lines
from showfile.dialect import DEFAULT_DIALECT, MAGICQ_DIALECT, Dialect
from showfile.models import Showfile
from showfile.parser import parse
from showfile.tokenizer import match_marker
from showfile.writer import serialize

logger = logging.getLogger(__name__)

# Decodes every byte, so unknown bytes survive a read/write cycle
DEFAULT_ENCODING = "latin-1"


def detect_dialect(text: str) -> Dialect:
    """Guess the dialect of show file text from its first non-blank line.

    Examples
    --------
    >>> detect_dialect("\\\\ MagicQ show file\\n").name
    'magicq'
    >>> detect_dialect('V,007d,"MagicQ 1",;\\n').name
    'magicq'
    >>> detect_dialect("Name MyShow\\n$CUESTACK,Intro\\n").name
    'default'
    """
    for _, line in iter_lines(text):
        if not line.strip():
            continue
        if line.startswith(MAGICQ_DIALECT.header_prefix) or match_marker(line, MAGICQ_DIALECT):
            return MAGICQ_DIALECT
        return DEFAULT_DIALECT
    return DEFAULT_DIALECT


def read_showfile(
    path: str | Path,
    *,
    dialect: Dialect | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> Showfile:
    """Read and parse a show file.

    Parameters
    ----------
    path : str | Path
        File to read.
    dialect : Dialect | None
        The file's dialect, detected from its content if None.
    encoding : str
        Text encoding of the file.

    Returns
    -------
    Showfile
        The parsed document.

    Raises
    ------
    MalformedLine
        If the file cannot be parsed.
    """
    path = Path(path)
    # newline="" keeps \r\n so the showfile writes back with the same endings
    with open(path, encoding=encoding, newline="") as f:
        text = f.read()

    if dialect is None:
        dialect = detect_dialect(text)
        logger.debug("Detected %s dialect for %s", dialect.name, path)

    showfile = parse(text, dialect)
    logger.debug(
        "Read %s: %d headers, %d sections",
        path,
        len(showfile.headers),
        len(showfile.sections),
    )
    return showfile


def write_showfile(showfile: Showfile, path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Serialize a showfile and write it to disk.

    Parameters
    ----------
    showfile : Showfile
        The document to write.
    path : str | Path
        Destination file, overwritten if it exists.
    encoding : str
        Text encoding of the file.
    """
    path = Path(path)
    text = serialize(showfile)
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
    logger.debug("Wrote %s (%d characters, %s dialect)", path, len(text), showfile.dialect.name)
