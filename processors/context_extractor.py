"""Context extraction: uploaded document or topic string → prompt context."""

import io
import logging
import os
from typing import Optional, Tuple

import docx
from pypdf import PdfReader

from config.models import UploadedFile
from config.settings import get_quiz_config
from .errors import ContextExtractionFailed, InvalidRequest, UnsupportedFileType

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


class DocumentExtractor:
    """Reads plain text out of PDF, DOCX and TXT byte streams."""

    def extract(self, data: bytes, filename: str) -> str:
        """Return the text of `data`, dispatching on the extension of `filename`."""
        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileType(filename)

        try:
            if ext == ".pdf":
                return self._extract_pdf(data)
            if ext == ".docx":
                return self._extract_docx(data)
            return data.decode("utf-8", errors="replace")
        except Exception as e:
            logger.error(f"Failed to extract text from {filename}: {e}")
            raise ContextExtractionFailed(f"Could not read {filename}: {e}") from e

    def _extract_pdf(self, data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        texts = []
        for page in reader.pages:
            t = page.extract_text()
            if t:
                texts.append(t.strip())
        return "\n".join(texts)

    def _extract_docx(self, data: bytes) -> str:
        document = docx.Document(io.BytesIO(data))
        return "\n".join(p.text for p in document.paragraphs)


class ContextExtractor:
    """Turns the request's file or topic into the context the AI is asked about."""

    def __init__(
        self,
        document_extractor: Optional[DocumentExtractor] = None,
        max_chars: Optional[int] = None,
    ):
        self.document_extractor = document_extractor or DocumentExtractor()
        self.max_chars = max_chars if max_chars is not None else get_quiz_config().max_context_chars

    def extract_context(
        self, topic: Optional[str] = None, file: Optional[UploadedFile] = None
    ) -> Tuple[str, bool]:
        """
        Return `(context, from_document)`.

        A non-empty file takes precedence over the topic. Document text is
        truncated to `max_chars` characters.
        """
        has_file = file is not None and not file.is_empty
        has_topic = topic is not None and bool(topic.strip())

        if not has_file and not has_topic:
            raise InvalidRequest("a topic or a file must be provided")

        if has_file:
            text = self.document_extractor.extract(file.content, file.filename)
            if len(text) > self.max_chars:
                logger.info(
                    f"Truncating {file.filename} context from {len(text)} to {self.max_chars} chars"
                )
                text = text[: self.max_chars]
            return text, True

        return topic, False
