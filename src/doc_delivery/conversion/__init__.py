"""
Domain layer for HTML to PDF conversion.
Provides the gateway interface and a service that drives a remote
import/convert/export job, so HTTP handlers and scripts share the same
core logic.
"""

from ..errors import (
    ConfigurationError,
    ConversionError,
    EmptyDocumentError,
    ExtractionError,
    ProtocolError,
    RemoteJobError,
    TransportError,
)
from .interfaces import DEFAULT_OPTIONS, ConversionOptions, JobGateway, TaskOperation
from .service import ConversionService, JobResult, JobStatus, build_task_graph, normalize_tasks
