from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import DocumentRenderError, ServiceUnavailableError
from .renderer import PdfRenderer
from .schemas import DocumentFields
from .template import fill_template

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent / "templates" / "works.template.html"


@dataclass(frozen=True)
class GeneratedDocument:
    filename: str
    content: bytes


class DocumentService:
    def __init__(self, renderer: PdfRenderer, *, template_path: Path = DEFAULT_TEMPLATE_PATH):
        self._renderer = renderer
        self._template_path = Path(template_path)

    @property
    def template_name(self) -> str:
        return self._template_path.name

    def is_ready(self) -> bool:
        return self._template_path.is_file()

    def ensure_ready(self) -> None:
        if not self.is_ready():
            raise ServiceUnavailableError("PDF service is not ready: template missing")

    def generate(self, fields: DocumentFields) -> GeneratedDocument:
        self.ensure_ready()
        html = fill_template(self._template_path.read_text(encoding="utf-8"), fields)
        content = self._renderer.render(html)
        if not content:
            raise DocumentRenderError("PDF generation returned an empty document.")

        filename = f"document-{_slug(fields.unit_name)}-{int(time.time() * 1000)}.pdf"
        logger.info("Generated %s (%d bytes)", filename, len(content))
        return GeneratedDocument(filename=filename, content=content)


def _slug(unit_name: str) -> str:
    return re.sub(r"\s+", "-", unit_name or "unit").lower()
