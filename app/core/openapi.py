"""OpenAPI metadata and customization utilities.

Adds tags metadata to the generated schema and documents the fixed CORS
headers every visit response carries. Kept apart from the app factory so
documentation concerns don't leak into wiring.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from app.core.responses import CORS_HEADERS

TAGS_METADATA = [
    {
        "name": "Visits",
        "description": "Record a visit for an allow-listed origin and return the monthly count.",
    },
    {
        "name": "Health",
        "description": "Liveness check; never touches storage.",
    },
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and header docs."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        cors_docs = {name: {"schema": {"type": "string", "example": value}} for name, value in CORS_HEADERS.items()}
        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                for response in method_obj.get("responses", {}).values():
                    response.setdefault("headers", {}).update(cors_docs)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
