import logging

import requests

from ..config import DEFAULT_API_URL
from ..errors import ProtocolError, TransportError
from .interfaces import JobGateway

logger = logging.getLogger(__name__)


class CloudConvertGateway(JobGateway):
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: float | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def submit_job(self, job: dict[str, object], *, api_key: str) -> dict[str, object]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = requests.post(f"{self._api_url}/jobs", json=job, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"failed to reach conversion service: {e}", status_code=None, stage="submit") from e
        if not resp.ok:
            # Body is kept raw; error responses are not guaranteed to be job JSON.
            raise TransportError(
                f"failed to create conversion job: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
                stage="submit",
            )
        try:
            return resp.json()
        except ValueError as e:
            raise ProtocolError("conversion service returned a non-JSON body", payload=resp.text) from e

    def download(self, url: str) -> bytes:
        try:
            resp = requests.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"failed to download converted file: {e}", status_code=None, stage="download") from e
        if not resp.ok:
            raise TransportError(
                f"failed to download converted file: {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
                stage="download",
            )
        logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return resp.content
