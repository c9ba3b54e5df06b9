"""Builds small, valid PDF files in memory for tests.

Each page is a list of text lines drawn top to bottom in Helvetica.
An empty list produces a page without any content stream.
"""


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _content_stream(lines: list[str]) -> bytes:
    operations = ["BT", "/F1 12 Tf", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            operations.append("0 -18 Td")
        operations.append(f"({_escape(line)}) Tj")
    operations.append("ET")
    return "\n".join(operations).encode("latin-1")


def build_pdf(pages: list[list[str]], title: str | None = None) -> bytes:
    """Return the bytes of a PDF with the given pages.

    Args:
        pages: Text lines for each page. ``[]`` gives a zero-page document.
        title: Optional document title stored in the info dictionary.
    """
    objects: dict[int, bytes] = {}
    font_number = 3
    next_number = 4
    kids: list[str] = []

    objects[font_number] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    for lines in pages:
        page_number = next_number
        next_number += 1
        page = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 {font_number} 0 R >> >>"
        )
        if lines:
            content_number = next_number
            next_number += 1
            data = _content_stream(lines)
            objects[content_number] = (
                f"<< /Length {len(data)} >>\nstream\n".encode("latin-1")
                + data
                + b"\nendstream"
            )
            page += f" /Contents {content_number} 0 R"
        objects[page_number] = (page + " >>").encode("latin-1")
        kids.append(f"{page_number} 0 R")

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[2] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(kids)} >>".encode(
        "latin-1"
    )

    info = ""
    if title is not None:
        info_number = next_number
        next_number += 1
        objects[info_number] = f"<< /Title ({_escape(title)}) >>".encode("latin-1")
        info = f" /Info {info_number} 0 R"

    output = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for number in sorted(objects):
        offsets[number] = len(output)
        output += f"{number} 0 obj\n".encode("latin-1") + objects[number] + b"\nendobj\n"

    xref_offset = len(output)
    size = max(objects) + 1
    output += f"xref\n0 {size}\n".encode("latin-1")
    output += b"0000000000 65535 f \n"
    for number in range(1, size):
        output += f"{offsets[number]:010d} 00000 n \n".encode("latin-1")
    output += (
        f"trailer\n<< /Size {size} /Root 1 0 R{info} >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(output)
