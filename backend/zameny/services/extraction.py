"""Plain-text extraction from downloaded bulletin documents."""

from __future__ import annotations

import io
import logging
import os
import re
import shutil
import subprocess
import tempfile
import zipfile
from typing import List, Optional
from xml.etree import ElementTree as ET

from zameny import config
from zameny.errors import ExtractionError


LOGGER = logging.getLogger(__name__)

OLE_SIGNATURE = b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1"
ZIP_SIGNATURE = b"PK\x03\x04"
TEXT_ENCODINGS = ("utf-8-sig", "cp1251")

_NS_W = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def looks_like_doc_ole_bytes(content: bytes) -> bool:
    # OLE Compound File (legacy .doc)
    return (content or b"")[:8] == OLE_SIGNATURE


def looks_like_docx_bytes(content: bytes) -> bool:
    return (content or b"")[:4] == ZIP_SIGNATURE


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def doc_bytes_to_text(doc_bytes: bytes, command: Optional[str] = None) -> str:
    """Run ``antiword`` over a legacy Word document."""

    executable = shutil.which(command or config.antiword_command())
    if executable is None:
        raise ExtractionError("antiword is not available to extract legacy .doc")

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=".doc") as tmp:
            tmp.write(doc_bytes)
            tmp_path = tmp.name

        proc = subprocess.run(
            [executable, "-m", "UTF-8.txt", "-w", "0", tmp_path],
            capture_output=True,
            check=False,
        )
        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ExtractionError(f"antiword failed ({proc.returncode}): {stderr}")
        return proc.stdout.decode("utf-8", errors="replace")
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)


def docx_bytes_to_text(docx_bytes: bytes) -> str:
    try:
        with zipfile.ZipFile(io.BytesIO(docx_bytes)) as zf:
            xml_bytes = zf.read("word/document.xml")
    except (zipfile.BadZipFile, KeyError) as exc:
        raise ExtractionError(f"Failed to read DOCX: {exc}") from exc

    try:
        root = ET.fromstring(xml_bytes)
    except ET.ParseError as exc:
        raise ExtractionError(f"Failed to parse DOCX XML: {exc}") from exc

    # Каждый абзац (в том числе в ячейках таблиц) становится отдельной строкой.
    lines: List[str] = []
    for paragraph in root.iter(_NS_W + "p"):
        parts: List[str] = []
        for node in paragraph.iter():
            name = node.tag.rsplit("}", 1)[-1]
            if name == "t" and node.text:
                parts.append(node.text)
            elif name == "tab":
                parts.append("\t")
            elif name in {"br", "cr"}:
                parts.append("\n")
        lines.append("".join(parts))
    return "\n".join(lines)


def decode_text_bytes(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ExtractionError("Unable to decode text payload")


def extract_plain_text(content: bytes) -> str:
    """Return the text of a bulletin given the raw downloaded bytes.

    Supports legacy ``.doc`` (through ``antiword``), ``.docx`` and plain
    text payloads. Line endings are normalised to ``\\n``.
    """

    if not content:
        raise ExtractionError("Empty document")

    if looks_like_doc_ole_bytes(content):
        LOGGER.info("Извлечение текста из .doc")
        text = doc_bytes_to_text(content)
    elif looks_like_docx_bytes(content):
        LOGGER.info("Извлечение текста из .docx")
        text = docx_bytes_to_text(content)
    else:
        text = decode_text_bytes(content)

    text = normalize_line_endings(text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    LOGGER.info("Текст успешно извлечен, первые 200 символов: %s", text[:200])
    return text


__all__ = [
    "decode_text_bytes",
    "doc_bytes_to_text",
    "docx_bytes_to_text",
    "extract_plain_text",
    "looks_like_doc_ole_bytes",
    "looks_like_docx_bytes",
    "normalize_line_endings",
]
