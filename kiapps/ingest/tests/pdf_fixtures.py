"""Small register PDFs generated with PyMuPDF, one application per page."""

import fitz  # PyMuPDF


def write_register_page(doc: fitz.Document, application_number: str, street: str = "Smith Rd") -> None:
    page = doc.new_page(width=595, height=842)

    def heading(x, y, text):
        page.insert_text((x, y), text, fontsize=10, fontname="helv")

    def value(x, y, text):
        page.insert_text((x, y), text, fontsize=10, fontname="cour")

    heading(40, 100, "Application No")
    value(200, 100, application_number)
    heading(430, 100, "Full Development Approval")
    heading(40, 130, "Application Received")
    value(200, 130, "5/03/2019")
    heading(40, 160, "Development Description")
    value(200, 160, "Erect a")
    value(200, 172, "verandah and carport")
    heading(40, 200, "Relevant Authority")
    value(200, 200, "Delegate")
    heading(40, 240, "House No")
    value(200, 240, "1,234")
    heading(40, 270, "Property Street")
    value(200, 270, street)
    heading(40, 300, "Property Suburb")
    value(200, 300, "KINGSCOTE")


def register_pdf(*numbers: str) -> bytes:
    doc = fitz.open()
    for n in numbers:
        write_register_page(doc, n)
    doc.new_page()  # trailing blank page, no application
    data = doc.tobytes()
    doc.close()
    return data


def tight_register_pdf(application_number: str, gap: float = 3.0) -> bytes:
    """One register page in a single font with every value `gap` points after its heading."""
    doc = fitz.open()
    page = doc.new_page(width=595, height=842)

    def row(y, label, text):
        page.insert_text((40, y), label, fontsize=10, fontname="helv")
        x = 40 + fitz.get_text_length(label, fontname="helv", fontsize=10) + gap
        page.insert_text((x, y), text, fontsize=10, fontname="helv")

    row(100, "Application No", application_number)
    page.insert_text((430, 100), "Full Development Approval", fontsize=10, fontname="helv")
    row(240, "House No", "12")
    row(270, "Property Street", "Dauncey St")
    row(300, "Property Suburb", "KINGSCOTE")
    data = doc.tobytes()
    doc.close()
    return data
