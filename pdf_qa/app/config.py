import os
from dotenv import load_dotenv

load_dotenv()

# Storage directories
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
TEXT_DIR = os.getenv("TEXT_DIR", "./pdf_texts")

# Upload and request limits
ACCEPTED_MEDIA_TYPE = "application/pdf"
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
MAX_JSON_BYTES = int(os.getenv("MAX_JSON_BYTES", 5 * 1024 * 1024))
READ_CHUNK_BYTES = 64 * 1024

# Characters of extracted text sent to the model
MAX_CONTEXT_CHARS = int(os.getenv("MAX_CONTEXT_CHARS", 12000))

# LLM endpoint - any OpenAI compatible chat completion server
LLM_API_KEY = os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", 60))

PORT = int(os.getenv("PORT", 3000))
LOG_DIR = os.getenv("LOG_DIR")
