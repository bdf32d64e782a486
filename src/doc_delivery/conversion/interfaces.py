from dataclasses import dataclass
from typing import Protocol


class TaskOperation:
    IMPORT = "import/raw"
    CONVERT = "convert"
    EXPORT = "export/url"


class JobGateway(Protocol):
    def submit_job(self, job: dict[str, object], *, api_key: str) -> dict[str, object]:
        """Submit a task graph to the synchronous job endpoint.

        Returns the decoded JSON body. Blocks until the remote job has
        finished or errored.
        """

    def download(self, url: str) -> bytes:
        ...


@dataclass(frozen=True)
class ConversionOptions:
    # A4 in inches
    page_width: float = 8.27
    page_height: float = 11.69
    margin_top: float = 0
    margin_bottom: float = 0
    margin_left: float = 0
    margin_right: float = 0
    print_background: bool = True
    display_header_footer: bool = False
    engine: str = "chrome"
    engine_version: str = "132"
    input_filename: str = "document.html"
    output_filename: str = "document.pdf"


DEFAULT_OPTIONS = ConversionOptions()
