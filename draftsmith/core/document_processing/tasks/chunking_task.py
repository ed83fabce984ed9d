"""
Fixed-window text chunking task.

Splits extracted text into overlapping character windows. Windows start
every `chunk_size - chunk_overlap` characters; the last window may be
shorter, and text no longer than one window yields exactly one chunk.

Dependencies: None
System role: Second stage of document ingestion pipeline
"""

from draftsmith.core.exceptions import ConfigurationError


def chunk_text(text: str, chunk_size: int = 500, chunk_overlap: int = 100) -> list[str]:
    """
    Split text into overlapping fixed-size windows.

    Args:
        text: Text to split
        chunk_size: Window length in characters
        chunk_overlap: Characters shared by consecutive windows

    Returns:
        list[str]: Windows in order ([] for empty text)

    Raises:
        ConfigurationError: If chunk_size <= 0 or chunk_overlap is not in [0, chunk_size)
    """
    if chunk_size <= 0:
        raise ConfigurationError("chunk_size must be positive", {"chunk_size": chunk_size})
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ConfigurationError(
            "chunk_overlap must be >= 0 and smaller than chunk_size",
            {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
        )

    step = chunk_size - chunk_overlap
    chunks: list[str] = []
    start = 0
    while start < len(text):
        end = start + chunk_size
        chunks.append(text[start:end])
        if end >= len(text):
            break
        start += step
    return chunks


class ChunkingTask:
    """Split text into chunks with validated window geometry."""

    def __init__(self, chunk_size: int = 500, chunk_overlap: int = 100) -> None:
        """
        Initialize chunking task.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ConfigurationError: When overlap >= size
        """
        # Validate once up front so a bad config fails at startup
        chunk_text("", chunk_size, chunk_overlap)
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def chunk(self, text: str) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text

        Returns:
            list[str]: Ordered windows
        """
        return chunk_text(text, self._chunk_size, self._chunk_overlap)
