"""Streaming loaders for galaxy dump files.

Two on-disk shapes are supported, each optionally gzip-compressed:

* a JSON array of system objects (the Spansh galaxy dump layout), parsed
  incrementally with ijson so the whole file never sits in memory;
* JSON Lines, one system object per line, parsed with orjson.

The layout is detected from the first significant byte of the document.
Any malformed input aborts the load with :class:`IngestError`.
"""

import logging
import zlib
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import ijson
import orjson

from .compressed_reader import CompressedFileReader
from .records import StarSystem

logger = logging.getLogger(__name__)

LOG_EVERY = 50000
_WHITESPACE = b' \t\r\n'


class IngestError(ValueError):
    """Raised when the input dataset cannot be read or parsed."""


def _first_significant_byte(file_path: Path) -> bytes:
    with CompressedFileReader(file_path) as reader:
        while True:
            chunk = reader.read(4096)
            if not chunk:
                return b''
            stripped = chunk.lstrip(_WHITESPACE)
            if stripped:
                return stripped[:1]


def detect_layout(file_path: Union[str, Path]) -> str:
    """Detect whether a dump is a JSON array or JSON Lines.

    Returns:
        'array' or 'jsonl'

    Raises:
        IngestError: If the file is missing, empty, unreadable or neither layout
    """
    file_path = Path(file_path)
    try:
        first = _first_significant_byte(file_path)
    except FileNotFoundError as e:
        raise IngestError(str(e)) from e
    except (OSError, EOFError, zlib.error) as e:
        raise IngestError(f"Cannot read {file_path}: {e}") from e

    if first == b'[':
        return 'array'
    if first == b'{':
        return 'jsonl'
    if not first:
        raise IngestError(f"Input file is empty: {file_path}")
    raise IngestError(
        f"Input must be a JSON array or JSON Lines of system objects: {file_path}"
    )


def _iter_array(file_path: Path) -> Iterator[Any]:
    with CompressedFileReader(file_path) as reader:
        try:
            yield from ijson.items(reader, 'item', use_float=True)
        except ijson.JSONError as e:
            raise IngestError(f"Malformed JSON in {file_path}: {e}") from e


def _iter_jsonl(file_path: Path) -> Iterator[Any]:
    with CompressedFileReader(file_path) as reader:
        for line_num, line in enumerate(reader, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield orjson.loads(line)
            except orjson.JSONDecodeError as e:
                raise IngestError(f"Malformed JSON on line {line_num} of {file_path}: {e}") from e


def iter_raw_systems(file_path: Union[str, Path]) -> Iterator[Dict[str, Any]]:
    """Stream raw system dictionaries from a dump file.

    Args:
        file_path: Path to a .json/.jsonl file, optionally gzip-compressed

    Yields:
        One dictionary per system, in file order

    Raises:
        IngestError: On missing, unreadable or malformed input
    """
    file_path = Path(file_path)
    layout = detect_layout(file_path)
    records = _iter_array(file_path) if layout == 'array' else _iter_jsonl(file_path)

    logger.info(f"Streaming systems from: {file_path} ({layout})")
    count = 0
    try:
        for record in records:
            if not isinstance(record, dict):
                raise IngestError(
                    f"Record {count + 1} in {file_path} is not an object: {type(record).__name__}"
                )
            count += 1
            yield record

            if count % LOG_EVERY == 0:
                logger.info(f"Read {count:,} systems")
    except (OSError, EOFError, zlib.error) as e:
        raise IngestError(f"Cannot read {file_path}: {e}") from e

    logger.info(f"Finished streaming {count:,} systems")


def iter_systems(file_path: Union[str, Path]) -> Iterator[StarSystem]:
    """Stream typed :class:`StarSystem` records from a dump file.

    Field values are not validated here; a wrongly typed field only keeps
    the system from matching.

    Raises:
        IngestError: On missing, unreadable or malformed input
    """
    for raw in iter_raw_systems(file_path):
        yield StarSystem.from_dict(raw)


def load_systems(file_path: Union[str, Path]) -> List[StarSystem]:
    """Load every system in a dump file into memory."""
    return list(iter_systems(file_path))
