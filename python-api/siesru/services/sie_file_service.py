"""
SIE File Service - Handles reading and decoding of SIE exports.
"""
import base64
import binascii
import logging
from pathlib import Path

from siesru.config import settings

logger = logging.getLogger(__name__)


class FileProcessingError(Exception):
    """Custom exception for file processing errors."""
    pass


class SIEFileService:
    """Handles SIE file decoding and validation."""

    def __init__(self, encoding: str = None, max_size_bytes: int = None):
        self.encoding = encoding or settings.SIE_ENCODING
        self.max_size_bytes = max_size_bytes or settings.max_file_size_bytes

    async def parse_base64_sie(self, file_data: str, filename: str) -> str:
        """Decode base64 encoded SIE file into text."""
        try:
            file_bytes = base64.b64decode(file_data, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Error decoding {filename}: {str(e)}")
            raise FileProcessingError(f"Failed to decode SIE file: {str(e)}")

        text = self.decode(file_bytes, filename)
        logger.info(f"Decoded SIE upload {filename}: {len(file_bytes)} bytes")
        return text

    def read_sie_file(self, path: str) -> str:
        """Read SIE file from disk, keeping CRLF line endings intact."""
        file_path = Path(path)
        if not file_path.is_file():
            raise FileProcessingError(f"SIE file not found: {path}")

        try:
            file_bytes = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading {path}: {str(e)}")
            raise FileProcessingError(f"Failed to read SIE file: {str(e)}")

        text = self.decode(file_bytes, file_path.name)
        logger.info(f"Read SIE file {path}: {len(file_bytes)} bytes")
        return text

    def decode(self, file_bytes: bytes, filename: str) -> str:
        """Validate size and decode bytes with the configured encoding."""
        if not file_bytes:
            raise FileProcessingError(f"SIE file {filename} is empty")

        if len(file_bytes) > self.max_size_bytes:
            raise FileProcessingError(
                f"SIE file {filename} is too large: {len(file_bytes)} bytes "
                f"(max {self.max_size_bytes})"
            )

        try:
            return file_bytes.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise FileProcessingError(f"Failed to decode {filename} as {self.encoding}: {str(e)}")
