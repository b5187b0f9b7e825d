"""
FastAPI app for the handbag verification service.

Endpoints:
- GET /
- GET /health
- POST /verify (alias: POST /authenticate)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .engine.images import UploadedImage
from .engine.pipeline import verify_batch
from .engine.verdict import REASON_SERVER_ERROR, error_result
from .engine.views import parse_labels
from .errors import LabelsError, UploadError
from .ocr.client import OcrClient, build_ocr_client
from .schemas import HealthResponse, LivenessResponse, VerdictResult

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Handbag Verification API"

app = FastAPI(
    title=SERVICE_NAME,
    version="0.1.0",
    description="Rule-based authenticity screening for batches of handbag photographs.",
)

# The upload form is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Attach the OCR client to app state for reuse.
app.state.ocr = build_ocr_client()


async def load_uploads(uploads: List[UploadFile]) -> List[UploadedImage]:
    """Read the uploaded files, enforcing count, media type and size."""
    if len(uploads) > config.MAX_IMAGES:
        raise UploadError(f"too many images (max {config.MAX_IMAGES})")

    images: List[UploadedImage] = []
    for upload in uploads:
        filename = upload.filename or ""
        mime_type = upload.content_type or ""
        if not mime_type.startswith("image/"):
            raise UploadError(f"{filename or 'file'} is not an image")

        # Reject on the declared size before buffering the file.
        if upload.size is not None and upload.size > config.MAX_IMAGE_BYTES:
            raise UploadError(f"{filename} exceeds {config.MAX_IMAGE_BYTES} bytes")

        content = await upload.read()
        if len(content) > config.MAX_IMAGE_BYTES:
            raise UploadError(f"{filename} exceeds {config.MAX_IMAGE_BYTES} bytes")

        images.append(UploadedImage.from_bytes(filename, content, mime_type))
    return images


@app.get("/", response_model=LivenessResponse)
async def root() -> LivenessResponse:
    """Liveness check for the upload form's host."""
    return LivenessResponse(status="ok", service=SERVICE_NAME)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Simple health-check endpoint."""
    return HealthResponse(status="ok")


@app.post("/verify", response_model=VerdictResult)
@app.post("/authenticate", response_model=VerdictResult)
async def verify(
    images: Optional[List[UploadFile]] = File(default=None),
    labels: Optional[str] = Form(default=None),
) -> VerdictResult:
    """
    Screen a batch of handbag photos.

    Business outcomes, bad uploads and internal failures all come back as
    a 200 with a `VerdictResult`; bad input and errors are reported as
    `Inconclusive` with confidence 0.
    """
    try:
        label_map = parse_labels(labels)
        uploads = await load_uploads(images or [])
        ocr: OcrClient = app.state.ocr
        return await verify_batch(uploads, label_map, ocr)
    except LabelsError as exc:
        logger.info("rejected labels: %s", exc)
        return error_result(f"Invalid labels: {exc}")
    except UploadError as exc:
        logger.info("rejected upload: %s", exc)
        return error_result(f"Invalid upload: {exc}")
    except Exception:
        logger.exception("verification failed")
        return error_result(REASON_SERVER_ERROR)


def run() -> None:
    """
    Convenience entrypoint if you want to run via:

        python -m bag_verifier.main

    or via the `bag-verifier` console_script defined in pyproject.toml.
    """
    import uvicorn

    uvicorn.run(
        "bag_verifier.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=False,
    )


if __name__ == "__main__":
    run()
