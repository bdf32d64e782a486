"""
Delivery-artifact resolution.
Decides from stored document URLs alone which file a user is offered and
whether a PDF still needs to be generated.
"""

from .resolver import (
    ConversionSource,
    DownloadableArtifact,
    FileInfo,
    FileKind,
    Resolution,
    can_generate_pdf,
    classify_url,
    conversion_source,
    file_info,
    has_pdf_available,
    label_for,
    resolve,
)
