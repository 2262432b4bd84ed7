"""
Compressed file reader for galaxy dumps.
Provides transparent gzip decompression while maintaining streaming capabilities.
"""

import gzip
from pathlib import Path
from typing import BinaryIO, Optional, Union


GZIP_MAGIC = b'\x1f\x8b'


class CompressedFileReader:
    """
    A binary file reader that transparently handles gzip-compressed files.
    Yields raw bytes so streaming JSON parsers can consume it directly.
    """

    def __init__(self, file_path: Union[str, Path], buffer_size: int = 8 * 1024 * 1024):
        """
        Initialize compressed file reader.

        Args:
            file_path: Path to file (compressed or uncompressed)
            buffer_size: Read buffer size for uncompressed files (default: 8MB)
        """
        self.file_path = Path(file_path)
        self.buffer_size = buffer_size
        self.file_handle: Optional[BinaryIO] = None
        self.is_compressed = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _detect_compression(self) -> bool:
        """
        Detect if file is gzip compressed.

        Returns:
            True if file is gzip compressed, False otherwise
        """
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")

        if self.file_path.suffix.lower() == '.gz':
            return True

        # Magic bytes catch compressed dumps that were renamed
        with open(self.file_path, 'rb') as f:
            return f.read(2) == GZIP_MAGIC

    def open(self):
        """Open the file with appropriate decompression."""
        if self.file_handle:
            return

        self.is_compressed = self._detect_compression()

        if self.is_compressed:
            self.file_handle = gzip.open(self.file_path, 'rb')
        else:
            self.file_handle = open(self.file_path, 'rb', buffering=self.buffer_size)

    def close(self):
        """Close the file handle."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def read(self, size: int = -1) -> bytes:
        """Read decompressed bytes from the file."""
        if not self.file_handle:
            raise ValueError("File not open. Use 'with' statement or call open() first.")

        return self.file_handle.read(size)

    def __iter__(self):
        """Iterate over raw lines in the file."""
        if not self.file_handle:
            raise ValueError("File not open. Use 'with' statement or call open() first.")

        return iter(self.file_handle)
