import io
import logging

import fitz
from docx import Document
from docx.oxml.table import CT_Tbl
from docx.oxml.text.paragraph import CT_P
from docx.table import Table
from docx.text.paragraph import Paragraph

from resume_service.errors import UnsupportedFormatError

logger = logging.getLogger("resume-service")

SUPPORTED_FILE_TYPES = ("TXT", "DOCX", "PDF")

_MIME_TYPES = {
    "text/plain": "TXT",
    "application/pdf": "PDF",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
}


def _unsupported(label: str) -> UnsupportedFormatError:
    return UnsupportedFormatError(
        f"Unsupported file type: {label}. Only .txt, .docx and .pdf are supported."
    )


def normalize_file_type(file_type: str | None, filename: str | None = None) -> str:
    """
    Map a MIME type, an extension (".docx" / "docx") or, failing both, the
    filename's extension onto one of SUPPORTED_FILE_TYPES.
    """
    ft = (file_type or "").strip().lower()

    if ft in {"", "application/octet-stream"} and filename and "." in filename:
        ft = filename.rsplit(".", 1)[-1].strip().lower()
    if not ft:
        raise UnsupportedFormatError("fileType is required")

    if "/" in ft:
        mapped = _MIME_TYPES.get(ft.split(";", 1)[0].strip())
        if mapped:
            return mapped
        if "wordprocessingml" in ft:
            return "DOCX"
        if "msword" in ft:
            raise UnsupportedFormatError("Legacy .doc files are not supported. Please upload a .docx file.")
        raise _unsupported(file_type or filename)

    token = ft[1:] if ft.startswith(".") else ft
    if token == "doc":
        raise UnsupportedFormatError("Legacy .doc files are not supported. Please upload a .docx file.")
    if token.upper() in SUPPORTED_FILE_TYPES:
        return token.upper()
    raise _unsupported(file_type or filename)


def _iter_block_items(doc):
    # Paragraphs and tables in body order (doc.paragraphs alone drops tables)
    for child in doc.element.body.iterchildren():
        if isinstance(child, CT_P):
            yield Paragraph(child, doc)
        elif isinstance(child, CT_Tbl):
            yield Table(child, doc)


def _is_list_paragraph(p: Paragraph) -> bool:
    ppr = p._p.pPr
    if ppr is not None and ppr.numPr is not None:
        return True
    style_name = (p.style.name or "").lower() if p.style is not None else ""
    return "list" in style_name or "bullet" in style_name


def _docx_to_text(data: bytes) -> str:
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        raise UnsupportedFormatError("Could not read the .docx file") from e

    lines: list[str] = []
    for block in _iter_block_items(doc):
        if isinstance(block, Paragraph):
            txt = (block.text or "").replace("\t", " ").strip()
            if not txt:
                lines.append("")
                continue
            prefix = "- " if _is_list_paragraph(block) else ""
            lines.append(prefix + txt)
        else:
            # Tables are flattened row by row; layout is not reconstructed
            for row in block.rows:
                cells = [" ".join(cp.text.strip() for cp in cell.paragraphs if cp.text.strip()) for cell in row.cells]
                row_line = " | ".join(c for c in cells if c)
                if row_line:
                    lines.append(row_line)
            lines.append("")

    return "\n".join(lines).strip()


def _pdf_to_text(data: bytes, max_pages: int) -> str:
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise UnsupportedFormatError("Could not read the .pdf file") from e

    page_texts: list[str] = []
    with doc:
        for idx, page in enumerate(doc):
            if idx >= max_pages:
                logger.info("PDF truncated to %d pages (of %d)", max_pages, doc.page_count)
                break
            txt = (page.get_text("text") or "").strip()
            if txt:
                page_texts.append(txt)
    return "\n\n".join(page_texts)


def extract_text(data: bytes, file_type: str | None, filename: str | None = None, max_pages: int = 50) -> str:
    ft = normalize_file_type(file_type, filename)

    if ft == "DOCX":
        return _docx_to_text(data)
    if ft == "PDF":
        return _pdf_to_text(data, max_pages)
    return data.decode("utf-8-sig", errors="replace")
