from fastapi import HTTPException
from typing import Any, Dict, Optional

class PDFQAException(HTTPException):
    """Base exception for upload and query errors"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or f"PDFQA_{status_code}"

class MissingInput(PDFQAException):
    """No file in the upload request"""

    def __init__(self, detail: str = "No file uploaded!"):
        super().__init__(status_code=400, detail=detail, error_code="MISSING_INPUT")

class UnsupportedMediaType(PDFQAException):
    """Declared media type is not the accepted one"""

    def __init__(self, detail: str = "Only PDF files are allowed!"):
        super().__init__(status_code=415, detail=detail, error_code="UNSUPPORTED_MEDIA_TYPE")

class PayloadTooLarge(PDFQAException):
    """Upload or request body over the size ceiling"""

    def __init__(self, limit: int):
        super().__init__(
            status_code=413,
            detail=f"Payload exceeds the {limit} byte limit",
            error_code="PAYLOAD_TOO_LARGE"
        )

class ExtractionFailed(PDFQAException):
    """PDF could not be parsed (malformed or encrypted)"""

    def __init__(self, detail: str = "Failed to process PDF"):
        super().__init__(status_code=500, detail=detail, error_code="EXTRACTION_FAILED")

class InvalidRequest(PDFQAException):
    """Query request validation errors"""

    def __init__(self, detail: str = "Missing 'query' or 'filename' in request"):
        super().__init__(status_code=400, detail=detail, error_code="INVALID_REQUEST")

class DocumentNotFound(PDFQAException):
    """No extracted text stored for the requested document"""

    def __init__(self, filename: str = None):
        super().__init__(
            status_code=404,
            detail="Parsed text file not found",
            error_code="DOCUMENT_NOT_FOUND"
        )
        self.filename = filename

class CompletionFailed(PDFQAException):
    """LLM API errors"""

    def __init__(self, detail: str = "OpenAI request failed"):
        super().__init__(status_code=500, detail=detail, error_code="COMPLETION_FAILED")

class StorageError(PDFQAException):
    """Upload or text directory could not be read or written"""

    def __init__(self, detail: str = "Storage operation failed"):
        super().__init__(status_code=500, detail=detail, error_code="STORAGE_ERROR")
