from __future__ import annotations

import logging
import re
import shutil
import time
from pathlib import Path
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from zinepress.constants import DEFAULT_ARTIFACT_DIR, DEFAULT_ARTIFACT_RETENTION_SECONDS
from zinepress.events import log_event
from zinepress.imposition.errors import ImpositionError, LoadError
from zinepress.imposition.formats import FormatRegistry, build_default_registry
from zinepress.imposition.pdf_writer import deterministic_output_filename
from zinepress.imposition.pipeline import ProgressEvent, impose_document

_REQUEST_ID_PATTERN = re.compile(r"^[a-f0-9]{32}$")
_EXPIRED_ARTIFACT_MESSAGE = "This download link has expired after cleanup. Regenerate the PDF to create a new link."
_LOGGER = logging.getLogger("zinepress.web")
_DEFAULT_FORMAT_ID = "saddle-stitch"


def _log_event(level: int, event_name: str, **event_fields: Any) -> None:
    log_event(_LOGGER, level, event_name, **event_fields)


def _cleanup_stale_artifacts(
    artifact_dir: Path,
    *,
    retention_seconds: int,
    now: float | None = None,
) -> int:
    """Remove request directories older than the retention window.

    Only entries named like a request id are swept; anything else sharing the
    artifact directory is left alone. A negative retention disables cleanup.
    """
    if retention_seconds < 0:
        return 0

    cutoff = (time.time() if now is None else now) - retention_seconds
    removed = 0
    for request_dir in artifact_dir.iterdir():
        if _REQUEST_ID_PATTERN.fullmatch(request_dir.name) is None or not request_dir.is_dir():
            continue
        try:
            modified = request_dir.stat().st_mtime
        except FileNotFoundError:
            continue
        if modified >= cutoff:
            continue

        shutil.rmtree(request_dir, ignore_errors=True)
        removed += 1

    return removed


def _upload_source_name(file: UploadFile | None) -> str:
    if file is None or not file.filename:
        raise LoadError("Upload a PDF file to continue.")

    source_name = Path(file.filename).name
    if Path(source_name).suffix.lower() != ".pdf":
        raise LoadError("Only .pdf uploads are supported.")
    return source_name


def _impose_payload(
    *,
    payload: bytes,
    source_name: str,
    format_id: str,
    registry: FormatRegistry,
    artifact_dir: Path,
    artifact_retention_seconds: int,
    job_id: str | None = None,
) -> tuple[dict[str, Any] | None, str | None]:
    def record_progress(event: ProgressEvent) -> None:
        _log_event(
            logging.DEBUG,
            "impose.job.progress",
            job_id=job_id,
            stage=event.stage,
            percent=round(event.percent, 1),
            message=event.message,
        )

    try:
        imposed = impose_document(payload, format_id, registry=registry, progress=record_progress)
        removed = _cleanup_stale_artifacts(artifact_dir, retention_seconds=artifact_retention_seconds)

        request_id = uuid4().hex
        output_name = deterministic_output_filename(source_name, imposed.format.output_suffix)
        output_path = artifact_dir / request_id / output_name
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(imposed.payload)
    except ImpositionError as exc:
        _log_event(
            logging.WARNING,
            "impose.job.rejected",
            job_id=job_id,
            source_name=source_name,
            format_id=format_id,
            kind=exc.kind,
            error=str(exc),
        )
        return None, str(exc)
    except Exception:
        _LOGGER.exception(
            "impose.job.unexpected_failure",
            extra={
                "event_name": "impose.job.unexpected_failure",
                "event_fields": {"job_id": job_id, "source_name": source_name, "format_id": format_id},
            },
        )
        return None, "Imposition failed unexpectedly. Retry and check server logs for the associated job."

    _log_event(
        logging.INFO,
        "impose.job.completed",
        job_id=job_id,
        request_id=request_id,
        source_name=source_name,
        format_id=imposed.format.id,
        source_pages=imposed.source_pages,
        padded_pages=imposed.plan.padded_pages,
        output_pages=imposed.output_pages,
        stale_artifacts_removed=removed,
    )

    return {
        "status": "success",
        "message": "Imposition complete.",
        "format_id": imposed.format.id,
        "format_name": imposed.format.name,
        "print_instructions": imposed.format.print_instructions,
        "download_url": f"/download/{request_id}/{output_name}",
        "output_filename": output_name,
        "source_pages": imposed.source_pages,
        "padded_pages": imposed.plan.padded_pages,
        "sheets": len(imposed.plan.sheets),
        "output_pages": imposed.output_pages,
    }, None


def _resolve_request_artifact_path(
    artifact_dir: Path,
    request_id: str,
    filename: str,
    *,
    expired_message: str = _EXPIRED_ARTIFACT_MESSAGE,
) -> Path:
    if _REQUEST_ID_PATTERN.fullmatch(request_id) is None:
        _log_event(logging.WARNING, "download.request.invalid_request_id", request_id=request_id, filename=filename)
        raise HTTPException(status_code=400, detail="Invalid request id")

    # Artifacts are always a single generated PDF directly inside the request directory.
    if "/" in filename or "\\" in filename or filename.startswith(".") or not filename.endswith(".pdf"):
        _log_event(logging.WARNING, "download.request.invalid_filename", request_id=request_id, filename=filename)
        raise HTTPException(status_code=400, detail="Invalid filename")

    request_artifact_dir = artifact_dir / request_id
    if not request_artifact_dir.is_dir():
        _log_event(logging.WARNING, "download.request.expired", request_id=request_id, filename=filename)
        raise HTTPException(status_code=410, detail=expired_message)

    file_path = request_artifact_dir / filename
    if not file_path.is_file():
        _log_event(logging.WARNING, "download.request.missing_file", request_id=request_id, filename=filename)
        raise HTTPException(status_code=404, detail="File not found")

    return file_path


def create_app(
    artifact_dir: Path | None = None,
    artifact_retention_seconds: int = DEFAULT_ARTIFACT_RETENTION_SECONDS,
    registry: FormatRegistry | None = None,
) -> FastAPI:
    app = FastAPI(title="Zinepress", version="0.1.0")

    base_dir = Path(__file__).resolve().parent
    templates = Jinja2Templates(directory=str(base_dir / "templates"))
    app.mount("/static", StaticFiles(directory=str(base_dir / "static")), name="static")

    target_artifact_dir = artifact_dir or (Path.cwd() / DEFAULT_ARTIFACT_DIR)
    target_artifact_dir.mkdir(parents=True, exist_ok=True)
    app.state.artifact_dir = target_artifact_dir
    app.state.artifact_retention_seconds = artifact_retention_seconds
    app.state.registry = registry if registry is not None else build_default_registry()
    app.state.templates = templates

    def render_index(
        request: Request,
        *,
        result: dict[str, Any] | None = None,
        format_id: str = _DEFAULT_FORMAT_ID,
        status_code: int = 200,
    ) -> HTMLResponse:
        return templates.TemplateResponse(
            request=request,
            name="index.html",
            context={
                "result": result,
                "formats": list(app.state.registry),
                "form": {"format_id": format_id},
            },
            status_code=status_code,
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> HTMLResponse:
        return render_index(request)

    @app.get("/formats")
    def formats() -> list[dict[str, object]]:
        return [definition.metadata() for definition in app.state.registry]

    @app.post("/impose", response_class=HTMLResponse)
    async def impose(
        request: Request,
        file: UploadFile | None = File(default=None),
        format_id: str = Form(_DEFAULT_FORMAT_ID),
    ) -> HTMLResponse:
        job_id = uuid4().hex
        normalized_format_id = format_id.strip().lower()
        _log_event(
            logging.INFO,
            "impose.request.received",
            job_id=job_id,
            format_id=normalized_format_id,
            has_upload=file is not None and bool(file.filename),
        )

        try:
            source_name = _upload_source_name(file)
        except LoadError as exc:
            _log_event(logging.WARNING, "impose.request.upload_validation_failed", job_id=job_id, error=str(exc))
            return render_index(
                request,
                result={"status": "error", "message": str(exc)},
                format_id=normalized_format_id,
                status_code=400,
            )

        payload = await file.read()
        result, impose_error = _impose_payload(
            payload=payload,
            source_name=source_name,
            format_id=normalized_format_id,
            registry=app.state.registry,
            artifact_dir=app.state.artifact_dir,
            artifact_retention_seconds=app.state.artifact_retention_seconds,
            job_id=job_id,
        )
        if impose_error is not None or result is None:
            message = impose_error or "Imposition failed."
            _log_event(logging.WARNING, "impose.request.failed", job_id=job_id, source_name=source_name, error=message)
            return render_index(
                request,
                result={"status": "error", "message": message},
                format_id=normalized_format_id,
                status_code=400,
            )

        _log_event(
            logging.INFO,
            "impose.request.succeeded",
            job_id=job_id,
            source_name=source_name,
            output_filename=result["output_filename"],
            output_pages=result["output_pages"],
            download_url=result["download_url"],
        )
        return render_index(request, result=result, format_id=normalized_format_id)

    @app.get("/download/{request_id}/{filename:path}")
    def download_request_artifact(request: Request, request_id: str, filename: str) -> Response:
        try:
            file_path = _resolve_request_artifact_path(app.state.artifact_dir, request_id, filename)
        except HTTPException as exc:
            if exc.status_code == 410 and "text/html" in request.headers.get("accept", ""):
                return render_index(
                    request,
                    result={"status": "error", "message": _EXPIRED_ARTIFACT_MESSAGE},
                    status_code=410,
                )
            raise

        return FileResponse(path=file_path, media_type="application/pdf", filename=file_path.name)

    return app


app = create_app()
