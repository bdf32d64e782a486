import json
import logging
from dataclasses import dataclass
from typing import Callable

from ..config import Settings, load_settings
from ..errors import EmptyDocumentError, ExtractionError, ProtocolError, RemoteJobError
from .interfaces import DEFAULT_OPTIONS, ConversionOptions, JobGateway, TaskOperation

logger = logging.getLogger(__name__)

IMPORT_TASK = "import-html"
CONVERT_TASK = "convert-to-pdf"
EXPORT_TASK = "export-pdf"


class JobStatus:
    WAITING = "waiting"
    PROCESSING = "processing"
    FINISHED = "finished"
    ERROR = "error"


def build_task_graph(html: str, options: ConversionOptions = DEFAULT_OPTIONS) -> dict[str, object]:
    """Build the import -> convert -> export job body for one HTML document."""
    return {
        "tasks": {
            IMPORT_TASK: {
                "operation": TaskOperation.IMPORT,
                "file": html,
                "filename": options.input_filename,
            },
            CONVERT_TASK: {
                "operation": TaskOperation.CONVERT,
                "input": IMPORT_TASK,
                "input_format": "html",
                "output_format": "pdf",
                "engine": options.engine,
                "engine_version": options.engine_version,
                "filename": options.output_filename,
                "page_width": options.page_width,
                "page_height": options.page_height,
                "margin_top": options.margin_top,
                "margin_bottom": options.margin_bottom,
                "margin_left": options.margin_left,
                "margin_right": options.margin_right,
                "print_background": options.print_background,
                "display_header_footer": options.display_header_footer,
            },
            EXPORT_TASK: {
                "operation": TaskOperation.EXPORT,
                "input": CONVERT_TASK,
            },
        }
    }


def normalize_tasks(tasks: object) -> list[dict[str, object]]:
    """Return the task collection as a list whether it arrived as a list or a name->task map."""
    if isinstance(tasks, dict):
        out = []
        for name, task in tasks.items():
            if isinstance(task, dict):
                out.append({"name": name, **task} if "name" not in task else task)
        return out
    if isinstance(tasks, list):
        return [t for t in tasks if isinstance(t, dict)]
    return []


def _output_files(task: dict[str, object]) -> list[object]:
    result = task.get("result")
    if not isinstance(result, dict):
        return []
    files = result.get("files")
    return files if isinstance(files, list) else []


def describe_tasks(tasks: list[dict[str, object]]) -> list[dict[str, object]]:
    return [
        {
            "name": t.get("name"),
            "operation": t.get("operation"),
            "status": t.get("status"),
            "message": t.get("message"),
            "code": t.get("code"),
            "has_files": bool(_output_files(t)),
        }
        for t in tasks
    ]


@dataclass
class JobResult:
    data: dict[str, object]

    @classmethod
    def from_response(cls, payload: object) -> "JobResult":
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise ProtocolError("conversion service response has no job data", payload=payload)
        return cls(data)

    @property
    def id(self) -> str:
        return str(self.data.get("id", ""))

    @property
    def status(self) -> str:
        return str(self.data.get("status", ""))

    @property
    def tasks(self) -> list[dict[str, object]]:
        return normalize_tasks(self.data.get("tasks"))

    def failed_task(self) -> dict[str, object] | None:
        for t in self.tasks:
            if t.get("status") == JobStatus.ERROR:
                return t
        return None

    def export_url(self) -> str | None:
        for t in self.tasks:
            if t.get("operation") == TaskOperation.EXPORT and t.get("status") == JobStatus.FINISHED:
                files = _output_files(t)
                first = files[0] if files else None
                url = first.get("url") if isinstance(first, dict) else None
                return str(url) if url else None
        return None


class ConversionService:
    """Converts HTML into PDF bytes through a remote synchronous job.

    One call submits one job and downloads its single exported file. Nothing
    is retried; any failure aborts the call with a `ConversionError`.
    """

    def __init__(
        self,
        gateway: JobGateway,
        *,
        options: ConversionOptions = DEFAULT_OPTIONS,
        settings_loader: Callable[[], Settings] = load_settings,
    ) -> None:
        self._gateway = gateway
        self._options = options
        self._settings_loader = settings_loader

    @property
    def options(self) -> ConversionOptions:
        return self._options

    def convert(self, html: str) -> bytes:
        if not html or not html.strip():
            raise EmptyDocumentError("html content is empty")
        api_key = self._settings_loader().require_api_key()

        job = build_task_graph(html, self._options)
        logger.info("Submitting conversion job with tasks %s", ", ".join(job["tasks"]))
        payload = self._gateway.submit_job(job, api_key=api_key)
        result = JobResult.from_response(payload)
        logger.info("Conversion job %s returned status %s", result.id or "?", result.status)

        if result.status == JobStatus.ERROR:
            task = result.failed_task()
            message = str(task.get("message") or "unknown error") if task else "unknown error"
            logger.error("Conversion job %s failed: %s", result.id or "?", message)
            raise RemoteJobError(f"conversion job failed: {message}", task=task)

        url = result.export_url()
        if not url:
            summary = describe_tasks(result.tasks)
            logger.error("No exported file in conversion job %s: %s", result.id or "?", summary)
            raise ExtractionError(
                "no finished export task with a file url; tasks: " + json.dumps(summary, ensure_ascii=False),
                tasks=result.tasks,
            )

        pdf = self._gateway.download(url)
        logger.info("Downloaded converted pdf (%d bytes)", len(pdf))
        return pdf
