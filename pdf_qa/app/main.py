import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config, exceptions, schemas
from .completion import ChatCompleter
from .extraction import PyMuPDFExtractor
from .logger import configure_logging, get_logger
from .pipeline import IngestionPipeline, QueryPipeline
from .storage import FileSystemStorage

configure_logging(config.LOG_DIR)

app = FastAPI(title="PDF Q&A Service")

# Logger
logger = get_logger(__name__)

# Shared storage; one lock serializes ingestion against reads
storage = FileSystemStorage(config.UPLOAD_DIR, config.TEXT_DIR)
storage_lock = threading.RLock()

ingestion_pipeline = IngestionPipeline(storage, PyMuPDFExtractor(), lock=storage_lock)
query_pipeline = QueryPipeline(
    storage,
    ChatCompleter(
        api_key=config.LLM_API_KEY,
        base_url=config.LLM_BASE_URL,
        model=config.LLM_MODEL,
        timeout=config.LLM_TIMEOUT,
    ),
    lock=storage_lock,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def on_startup():
    storage.ensure_dirs()

def get_ingestion_pipeline() -> IngestionPipeline:
    return ingestion_pipeline

def get_query_pipeline() -> QueryPipeline:
    return query_pipeline

async def read_query_request(request: Request) -> schemas.QueryRequest:
    """Parse the JSON body, enforcing the size limit for chunked bodies too."""
    limit = config.MAX_JSON_BYTES
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise exceptions.PayloadTooLarge(limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise exceptions.PayloadTooLarge(limit)

    try:
        return schemas.QueryRequest.model_validate_json(bytes(body))
    except ValidationError as e:
        logger.error(f"Invalid query body: {e.errors()}")
        raise exceptions.InvalidRequest() from e

def error_response(status_code: int, message: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=schemas.ErrorResponse(error=message, error_code=error_code).model_dump()
    )

# Global exception handlers
@app.exception_handler(exceptions.PDFQAException)
async def pdfqa_exception_handler(request: Request, exc: exceptions.PDFQAException):
    logger.error(f"PDFQA Exception: {exc.error_code} - {exc.detail}")
    return error_response(exc.status_code, exc.detail, exc.error_code)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Request validation failed on {request.url.path}: {exc.errors()}")
    if request.url.path == "/upload":
        # "pdf" was sent but is not a file; purge and reject like a missing file
        pipeline = app.dependency_overrides.get(get_ingestion_pipeline, get_ingestion_pipeline)()
        try:
            pipeline.ingest(None, None, None)
        except exceptions.PDFQAException as rejected:
            return error_response(rejected.status_code, rejected.detail, rejected.error_code)
    invalid = exceptions.InvalidRequest()
    return error_response(invalid.status_code, invalid.detail, invalid.error_code)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail}")
    return error_response(exc.status_code, str(exc.detail), f"HTTP_{exc.status_code}")

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {str(exc)}", exc_info=True)
    return error_response(500, "Internal server error", "INTERNAL_ERROR")


@app.get("/")
def root():
    return {"message": "Server is running"}

# POST /upload - multipart field "pdf"
@app.post("/upload", response_model=schemas.UploadResponse)
def upload_pdf(pdf: Optional[UploadFile] = File(None), pipeline: IngestionPipeline = Depends(get_ingestion_pipeline)):
    if pdf is None:
        logger.info("Upload request without a file")
        return pipeline.ingest(None, None, None)
    logger.info(f"Upload request: {pdf.filename} ({pdf.content_type})")
    return pipeline.ingest(pdf.file, pdf.content_type, pdf.filename)

# GET /pdfs/{filename} - the uploaded PDF, for the viewer
@app.get("/pdfs/{filename}")
def get_pdf(filename: str, pipeline: IngestionPipeline = Depends(get_ingestion_pipeline)):
    content = pipeline.read_document(filename)
    if content is None:
        raise HTTPException(status_code=404, detail="PDF not found")
    return Response(content=content, media_type=config.ACCEPTED_MEDIA_TYPE)

@app.post("/query", response_model=schemas.QueryResponse)
def query_pdf(request: schemas.QueryRequest = Depends(read_query_request), pipeline: QueryPipeline = Depends(get_query_pipeline)):
    logger.info(f"Query request for {request.filename}: {(request.query or '')[:50]}...")
    return pipeline.query(request.query, request.filename)


def run():
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)

if __name__ == "__main__":
    run()
