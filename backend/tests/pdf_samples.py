"""Synthetic PDF byte strings for extraction tests.

These are not valid PDFs as far as a real reader is concerned (no xref
table); they only carry the content-stream idioms the byte scanners look for.
"""

import zlib


def pdf_with_stream(content: bytes, *, compress: bool = False) -> bytes:
    data = zlib.compress(content) if compress else content
    filter_entry = b" /Filter /FlateDecode" if compress else b""
    return b"".join([
        b"%PDF-1.4\n",
        b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n",
        b"4 0 obj\n<< /Length ", str(len(data)).encode(), filter_entry, b" >>\n",
        b"stream\r\n", data, b"\r\nendstream\nendobj\n",
        b"trailer\n<< /Root 1 0 R >>\n%%EOF\n",
    ])


def literal_pdf(lines: list[str]) -> bytes:
    ops = [b"BT /F1 12 Tf 72 712 Td"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        ops.append(b"(" + escaped.encode("latin-1") + b") Tj T*")
    ops.append(b"ET")
    return pdf_with_stream(b"\n".join(ops))


def hex_pdf(lines: list[str]) -> bytes:
    ops = [b"BT /F1 12 Tf 72 712 Td"]
    for line in lines:
        ops.append(b"<" + line.encode("latin-1").hex().upper().encode() + b"> Tj T*")
    ops.append(b"ET")
    return pdf_with_stream(b"\n".join(ops))


def flate_pdf(text: str) -> bytes:
    # words only, no show-text operators, so only the stream scanner sees it
    return pdf_with_stream(text.encode("latin-1"), compress=True)


PROSE = [
    "Quarterly operations report for the northern region",
    "Revenue grew steadily across every product line this year",
    "The board approved the new maintenance schedule in March",
]

FLATE_PROSE = (
    "The quarterly report describes revenue growth across several regions "
    "and highlights operational improvements planned for the coming year"
)
