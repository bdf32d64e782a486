import asyncio
import logging
import os

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import Response
from pydantic import BaseModel

from doc_delivery import __version__
from doc_delivery.artifacts import conversion_source, resolve
from doc_delivery.config import load_settings
from doc_delivery.conversion import (
    ConfigurationError,
    ConversionError,
    ConversionService,
    EmptyDocumentError,
    ExtractionError,
    ProtocolError,
    RemoteJobError,
    TransportError,
)
from doc_delivery.conversion.adapters import CloudConvertGateway
from doc_delivery.logging_setup import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Document Delivery Service",
    version=os.getenv("DOC_DELIVERY_VERSION", __version__),
    description=(
        "Converts HTML documents to PDF through a remote conversion service "
        "and resolves which stored document a user may download."
    ),
)

SERVICE: ConversionService | None = None


class ConvertRequest(BaseModel):
    html: str


class ResolveRequest(BaseModel):
    pdf_url: str | None = None
    generated_url: str | None = None


def _error_code(exc: ConversionError) -> str:
    if isinstance(exc, TransportError):
        return "transport_error"
    if isinstance(exc, ProtocolError):
        return "protocol_error"
    if isinstance(exc, RemoteJobError):
        return "job_failed"
    if isinstance(exc, ExtractionError):
        return "no_output"
    return "conversion_failed"


@app.on_event("startup")
async def _startup() -> None:
    global SERVICE
    settings = load_settings()
    configure_logging(settings.log_level)
    gateway = CloudConvertGateway(settings.api_url, timeout=settings.timeout_sec)
    SERVICE = ConversionService(gateway)
    if not (settings.api_key or "").strip():
        logger.warning("CLOUDCONVERT_API_KEY is not set; conversions will be rejected")


@app.get("/health")
def health() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.post("/conversions/pdf", response_class=Response)
async def convert_to_pdf(body: ConvertRequest) -> Response:
    """Convert the posted HTML document and return the PDF bytes.

    The remote job is synchronous, so the request blocks until the conversion
    service has finished or failed.
    """
    global SERVICE
    assert SERVICE is not None
    try:
        pdf = await asyncio.to_thread(SERVICE.convert, body.html)
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail={"code": "not_configured", "message": str(e)})
    except EmptyDocumentError as e:
        raise HTTPException(status_code=422, detail={"code": "invalid_html", "message": str(e)})
    except ConversionError as e:
        logger.error("PDF conversion failed: %s", e)
        raise HTTPException(status_code=502, detail={"code": _error_code(e), "message": str(e)})
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="document.pdf"'},
    )


@app.post("/artifacts/resolve", status_code=status.HTTP_200_OK)
def resolve_artifacts(body: ResolveRequest) -> dict:
    resolution = resolve(body.pdf_url, body.generated_url)
    source = conversion_source(body.pdf_url, body.generated_url) if resolution.conversion_eligible else None
    return {
        "artifacts": [a.to_dict() for a in resolution.artifacts],
        "pdf_available": resolution.pdf_available,
        "conversion_eligible": resolution.conversion_eligible,
        "conversion_source": (
            {"url": source.url, "relocate_to_generated_slot": source.relocate_to_generated_slot}
            if source
            else None
        ),
    }


def run() -> None:
    """Run a development ASGI server using uvicorn.

    Exposes the app at host:port (default 0.0.0.0:8080). Set PORT env var to override.
    """
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))
    # Enable reload in dev unless explicitly disabled
    reload = os.getenv("RELOAD", "true").lower() in {"1", "true", "yes", "on"}

    uvicorn.run("doc_delivery.webapi:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    run()
