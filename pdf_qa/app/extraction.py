import fitz  # PyMuPDF


class PyMuPDFExtractor:
    """Text extraction from in-memory PDF bytes."""

    def extract(self, content: bytes) -> str:
        doc = fitz.open(stream=content, filetype="pdf")
        try:
            if doc.needs_pass:
                raise ValueError("PDF is encrypted")
            text = ""
            for page in doc:
                text += page.get_text()
        finally:
            doc.close()
        return text
