from pathlib import Path
from typing import Dict, Optional

from .exceptions import StorageError
from .logger import get_logger

logger = get_logger(__name__)


def stem_of(identifier: str) -> str:
    """Document identifier without its extension, used as the text key."""
    return Path(identifier).stem


class FileSystemStorage:
    """Raw PDFs in one directory, extracted text in another, one file each."""

    def __init__(self, upload_dir: str, text_dir: str):
        self.upload_dir = Path(upload_dir)
        self.text_dir = Path(text_dir)

    def ensure_dirs(self):
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            self.text_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create storage directories: {e}") from e

    def _text_path(self, stem: str) -> Path:
        return self.text_dir / f"{Path(stem).name}.txt"

    def document_path(self, identifier: str) -> Path:
        return self.upload_dir / Path(identifier).name

    def put_document(self, identifier: str, data: bytes) -> Path:
        path = self.document_path(identifier)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Could not write document {identifier}: {e}") from e
        return path

    def get_document(self, identifier: str) -> Optional[bytes]:
        path = self.document_path(identifier)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read document {identifier}: {e}") from e

    def put_text(self, stem: str, text: str):
        try:
            self._text_path(stem).write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write text for {stem}: {e}") from e

    def get_text(self, stem: str) -> Optional[str]:
        path = self._text_path(stem)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read text for {stem}: {e}") from e

    def clear_all(self):
        for directory in (self.upload_dir, self.text_dir):
            if not directory.exists():
                continue
            try:
                for entry in directory.iterdir():
                    if entry.is_file() or entry.is_symlink():
                        entry.unlink()
            except OSError as e:
                raise StorageError(f"Could not clear {directory}: {e}") from e
        logger.info(f"Cleared {self.upload_dir} and {self.text_dir}")


class InMemoryStorage:
    """Dict backed storage with the same interface, for tests."""

    def __init__(self):
        self.documents: Dict[str, bytes] = {}
        self.texts: Dict[str, str] = {}

    def ensure_dirs(self):
        pass

    def put_document(self, identifier: str, data: bytes):
        self.documents[identifier] = data

    def get_document(self, identifier: str) -> Optional[bytes]:
        return self.documents.get(identifier)

    def put_text(self, stem: str, text: str):
        self.texts[stem] = text

    def get_text(self, stem: str) -> Optional[str]:
        return self.texts.get(stem)

    def clear_all(self):
        self.documents.clear()
        self.texts.clear()
