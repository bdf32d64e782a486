"""
Document Delivery package.

Converts HTML documents into PDFs through a remote job-based conversion
service and decides which stored document artifact a user may download.
The FastAPI application exposing both lives in `doc_delivery.webapi`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
