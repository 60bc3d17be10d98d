"""Resume text extraction service using pypdf and python-docx."""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from src.extractor.config import ExtractorConfig, get_extractor_config

logger = logging.getLogger(__name__)

MIME_TYPE_EXTENSIONS: dict[str, str] = {
    "application/pdf": ".pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "text/plain": ".txt",
    "text/markdown": ".md",
    "application/rtf": ".rtf",
    "text/rtf": ".rtf",
}

_RTF_DESTINATION_RE = re.compile(
    r"\{\\(?:\*\\)?(?:fonttbl|colortbl|stylesheet|info|pict)[^{}]*(?:\{[^{}]*\}[^{}]*)*\}"
)
_RTF_HEX_RE = re.compile(r"\\'[0-9a-fA-F]{2}")
_RTF_BREAK_RE = re.compile(r"\\(?:par|line)\b ?")
_RTF_CONTROL_RE = re.compile(r"\\[a-zA-Z]+-?\d* ?")
_RTF_SYMBOL_RE = re.compile(r"\\([\\{}])")


class ResumeTextExtractor:
    """Service for turning uploaded resume documents into plain text.

    Extraction never raises for unreadable content: unsupported types,
    oversized documents and parser failures yield an empty string so the
    scoring layer can treat them as degraded input.

    Attributes:
        config: Extractor configuration settings.
    """

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        """Initialize the ResumeTextExtractor.

        Args:
            config: Extractor configuration. If not provided, uses default.
        """
        self.config = config or get_extractor_config()

    def extract_file(self, path: Path | str) -> str:
        """Extract text from a document on disk.

        Args:
            path: Path to the resume document.

        Returns:
            Extracted text, or an empty string on failure.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Resume file not found: {file_path}")
        return self.extract_bytes(file_path.read_bytes(), file_path.name)

    def extract_bytes(self, content: bytes, type_hint: str) -> str:
        """Extract text from document bytes.

        Args:
            content: Raw document bytes.
            type_hint: A MIME type (``application/pdf``) or a filename whose
                extension identifies the format.

        Returns:
            Extracted text, or an empty string on failure.
        """
        extension = self.resolve_extension(type_hint)
        if extension is None or extension not in self.config.supported_extensions:
            logger.warning("Unsupported resume type: %s", type_hint)
            return ""

        if len(content) > self.config.max_file_size_bytes:
            logger.warning(
                "Resume exceeds %.1f MB limit (%d bytes)",
                self.config.max_file_size_mb,
                len(content),
            )
            return ""

        try:
            if extension == ".pdf":
                text = _extract_pdf(content)
            elif extension == ".docx":
                text = _extract_docx(content)
            elif extension == ".rtf":
                text = strip_rtf(_decode(content))
            else:
                text = _decode(content)
        except Exception as e:
            logger.warning("Failed to extract text from %s: %s", type_hint, e)
            return ""

        if not text.strip():
            logger.warning("No extractable text found in %s", type_hint)
        else:
            logger.debug("Extracted %d characters from %s", len(text), type_hint)
        return text

    @staticmethod
    def resolve_extension(type_hint: str) -> str | None:
        """Map a MIME type or filename to a lower-case file extension."""
        hint = type_hint.strip().lower()
        if not hint:
            return None
        mime = hint.split(";", 1)[0].strip()
        if mime in MIME_TYPE_EXTENSIONS:
            return MIME_TYPE_EXTENSIONS[mime]
        suffix = Path(hint).suffix
        return suffix or None


def _decode(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def _extract_pdf(content: bytes) -> str:
    reader = PdfReader(io.BytesIO(content))
    pages = [(page.extract_text() or "").strip() for page in reader.pages]
    return "\n".join(page for page in pages if page)


def _extract_docx(content: bytes) -> str:
    document = Document(io.BytesIO(content))
    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    return "\n".join(paragraphs)


def strip_rtf(raw: str) -> str:
    """Reduce RTF markup to its visible text."""
    text = _RTF_DESTINATION_RE.sub("", raw)
    text = _RTF_HEX_RE.sub("", text)
    text = _RTF_BREAK_RE.sub("\n", text)
    text = _RTF_SYMBOL_RE.sub(lambda m: f"\x00{ord(m.group(1))}\x00", text)
    text = _RTF_CONTROL_RE.sub("", text)
    text = text.replace("{", "").replace("}", "")
    text = re.sub(r"\x00(\d+)\x00", lambda m: chr(int(m.group(1))), text)
    return "\n".join(line.strip() for line in text.splitlines()).strip()
