import fitz
import pytest

from pdf_qa.app.extraction import PyMuPDFExtractor


def create_sample_pdf(text="Hello world.", **save_options):
    """Build a one page PDF with PyMuPDF"""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    content = doc.tobytes(**save_options)
    doc.close()
    return content


def test_extracts_page_text():
    text = PyMuPDFExtractor().extract(create_sample_pdf())

    assert text.strip() == "Hello world."


def test_extracts_all_pages():
    doc = fitz.open()
    for number in range(3):
        doc.new_page().insert_text((72, 72), f"Page {number}")
    content = doc.tobytes()
    doc.close()

    text = PyMuPDFExtractor().extract(content)

    assert "Page 0" in text and "Page 1" in text and "Page 2" in text


def test_malformed_pdf_raises():
    with pytest.raises(Exception):
        PyMuPDFExtractor().extract(b"this is not a pdf")


def test_encrypted_pdf_raises():
    content = create_sample_pdf(
        encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user"
    )

    with pytest.raises(ValueError, match="encrypted"):
        PyMuPDFExtractor().extract(content)
