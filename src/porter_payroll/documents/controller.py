from __future__ import annotations

import io

from flask import Flask, send_file

from ..common.http import json_body, ok
from ..container import Container
from ..core.enums import Action
from .schemas import parse_document_fields


def register(app: Flask, container: Container) -> None:
    require = container.require
    documents = container.document_service

    @app.route("/api/documents/health", methods=["GET"], endpoint="documents_health")
    def documents_health():
        documents.ensure_ready()
        return ok({"template": documents.template_name}, message="PDF service is ready")

    @app.route("/api/documents/generate-pdf", methods=["POST"], endpoint="documents_generate_pdf")
    @require(Action.GENERATE_DOCUMENT)
    def documents_generate_pdf():
        doc = documents.generate(parse_document_fields(json_body()))
        response = send_file(
            io.BytesIO(doc.content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=doc.filename,
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response
