import threading
import time
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional

from . import config, exceptions, schemas
from .logger import get_logger
from .storage import stem_of

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant. Use only the extracted PDF text to answer "
    "user questions. Do not assume anything beyond that."
)
UPLOAD_MESSAGE = "PDF uploaded and parsed successfully"


class TimestampIdGenerator:
    """Millisecond timestamp tokens, strictly increasing within the process."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            token = max(int(self._clock() * 1000), self._last + 1)
            self._last = token
        return str(token)


def truncate_excerpt(text: str, max_chars: int = config.MAX_CONTEXT_CHARS) -> str:
    return text[:max_chars] if len(text) > max_chars else text


def build_messages(excerpt: str, question: str) -> List[Dict[str, str]]:
    # instruction, then grounding text, then the question
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "system", "content": excerpt},
        {"role": "user", "content": question},
    ]


def read_limited(stream: BinaryIO, limit: int, chunk_size: int = config.READ_CHUNK_BYTES) -> bytes:
    """Read the whole stream, failing as soon as it grows past `limit` bytes."""
    parts = []
    total = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise exceptions.PayloadTooLarge(limit)
        parts.append(chunk)
    return b"".join(parts)


class UploadSlotManager:
    """Keeps at most one document around by purging storage before each upload."""

    def __init__(self, storage):
        self.storage = storage

    def prepare_for_upload(self):
        self.storage.clear_all()


class IngestionPipeline:
    def __init__(self, storage, extractor, id_generator=None, lock=None,
                 max_bytes: int = config.MAX_UPLOAD_BYTES,
                 accepted_media_type: str = config.ACCEPTED_MEDIA_TYPE):
        self.storage = storage
        self.extractor = extractor
        self.slots = UploadSlotManager(storage)
        self.id_generator = id_generator or TimestampIdGenerator()
        self.lock = lock or threading.RLock()
        self.max_bytes = max_bytes
        self.accepted_media_type = accepted_media_type

    def ingest(self, stream: Optional[BinaryIO], declared_media_type: Optional[str],
               original_name: Optional[str]) -> schemas.UploadResponse:
        # Single writer: purge, store and extract run as one unit
        with self.lock:
            self.slots.prepare_for_upload()

            if stream is None:
                raise exceptions.MissingInput()
            if declared_media_type != self.accepted_media_type:
                logger.warning(f"Rejected upload {original_name!r} with media type {declared_media_type!r}")
                raise exceptions.UnsupportedMediaType()

            content = read_limited(stream, self.max_bytes)

            identifier = self.id_generator() + Path(original_name or "").suffix
            self.storage.put_document(identifier, content)
            logger.info(f"Stored {original_name!r} as {identifier} ({len(content)} bytes)")

            try:
                text = self.extractor.extract(content)
            except Exception as e:
                logger.error(f"Text extraction failed for {identifier}: {e}", exc_info=True)
                raise exceptions.ExtractionFailed() from e

            extracted = text.strip()
            self.storage.put_text(stem_of(identifier), extracted)
            logger.info(f"Extracted {len(extracted)} characters from {identifier}")

        return schemas.UploadResponse(filename=identifier, message=UPLOAD_MESSAGE)

    def read_document(self, identifier: str) -> Optional[bytes]:
        with self.lock:
            return self.storage.get_document(identifier)


class QueryPipeline:
    def __init__(self, storage, completer, lock=None, max_chars: int = config.MAX_CONTEXT_CHARS):
        self.storage = storage
        self.completer = completer
        self.lock = lock or threading.RLock()
        self.max_chars = max_chars

    def query(self, question: Optional[str], identifier: Optional[str]) -> schemas.QueryResponse:
        if not question or not identifier:
            raise exceptions.InvalidRequest()

        with self.lock:
            text = self.storage.get_text(stem_of(identifier))
        if text is None:
            raise exceptions.DocumentNotFound(identifier)

        excerpt = truncate_excerpt(text, self.max_chars)
        logger.info(f"Querying {identifier} with {len(excerpt)} of {len(text)} characters")

        try:
            answer = self.completer.complete(build_messages(excerpt, question))
        except Exception as e:
            logger.error(f"Completion failed for {identifier}: {e}")
            raise exceptions.CompletionFailed() from e

        return schemas.QueryResponse(query=question, response=answer)
