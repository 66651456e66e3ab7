from pydantic import BaseModel
from typing import Optional

class UploadResponse(BaseModel):
    filename: str
    message: str

# Fields are optional so a missing one maps to InvalidRequest instead of a 422
class QueryRequest(BaseModel):
    query: Optional[str] = None
    filename: Optional[str] = None

class QueryResponse(BaseModel):
    query: str
    response: str

class ErrorResponse(BaseModel):
    error: str
    error_code: str
