"""
Text extraction task for uploaded binaries.

Converts PDF and plain-text uploads into a single whitespace-normalised
string. Unsupported or unreadable input yields an empty string: a failed
extraction only lowers indexing quality, it never aborts an upload.

Dependencies: pypdf
System role: First stage of document ingestion pipeline
"""

import asyncio
import io
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPES = frozenset({"application/pdf"})
TEXT_MEDIA_TYPES = frozenset({"text/plain", "text/markdown"})
SUPPORTED_MEDIA_TYPES = PDF_MEDIA_TYPES | TEXT_MEDIA_TYPES


def normalize_whitespace(text: str) -> str:
    """Collapse all whitespace runs into single spaces."""
    return " ".join(text.split())


class ExtractionTask:
    """Extract plain text from an uploaded binary."""

    async def extract(self, data: bytes, media_type: str) -> str:
        """
        Extract text tokens in document order, single-space separated.

        Args:
            data: Raw uploaded bytes
            media_type: MIME type reported by the client

        Returns:
            str: Extracted text, or "" when unsupported or unreadable
        """
        media_type = (media_type or "").split(";")[0].strip().lower()
        if media_type not in SUPPORTED_MEDIA_TYPES:
            logger.warning(
                f"{__name__}:extract - Unsupported media type, skipping extraction",
                extra={"media_type": media_type, "size_bytes": len(data)},
            )
            return ""

        try:
            if media_type in PDF_MEDIA_TYPES:
                text = await asyncio.to_thread(self._extract_pdf, data)
            else:
                text = data.decode("utf-8", errors="replace")
        except Exception as e:
            logger.warning(
                f"{__name__}:extract - Extraction failed, degrading to empty text",
                extra={
                    "media_type": media_type,
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            return ""

        return normalize_whitespace(text)

    def _extract_pdf(self, data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        return " ".join(page.extract_text() or "" for page in reader.pages)
