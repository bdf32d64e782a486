from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit


class FileKind(str, Enum):
    PDF = "pdf"
    WORD = "word-like"
    UNKNOWN = "unknown"


_LABELS = {
    FileKind.PDF: "PDF",
    FileKind.WORD: "Word",
    FileKind.UNKNOWN: "File",
}

_SUFFIX_KINDS = (
    (".pdf", FileKind.PDF),
    (".docx", FileKind.WORD),
    (".doc", FileKind.WORD),
)
_KIND_BY_SUFFIX = dict(_SUFFIX_KINDS)


@dataclass(frozen=True)
class FileInfo:
    kind: FileKind
    mime_type: str
    extension: str


@dataclass(frozen=True)
class DownloadableArtifact:
    url: str
    kind: FileKind
    label: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "kind": self.kind.value, "label": self.label}


@dataclass(frozen=True)
class Resolution:
    artifacts: tuple[DownloadableArtifact, ...] = ()
    pdf_available: bool = False
    conversion_eligible: bool = False

    @property
    def artifact(self) -> DownloadableArtifact | None:
        return self.artifacts[0] if self.artifacts else None


@dataclass(frozen=True)
class ConversionSource:
    url: str
    # Source was found in the PDF slot and belongs in the generated-document slot.
    relocate_to_generated_slot: bool = False


def _match_suffix(value: str, *, allow_query: bool) -> str | None:
    # A trailing extension beats one followed by a query separator.
    for suffix, _ in _SUFFIX_KINDS:
        if value.endswith(suffix):
            return suffix
    if allow_query:
        for suffix, _ in _SUFFIX_KINDS:
            if f"{suffix}?" in value:
                return suffix
    return None


def _present(url: str | None) -> str | None:
    return url if url and url.strip() else None


def _suffix_of(url: str | None) -> str | None:
    if not url:
        return None
    lowered = url.strip().lower()
    try:
        parts = urlsplit(lowered)
    except ValueError:
        parts = None
    if parts is not None and parts.scheme and parts.netloc:
        return _match_suffix(parts.path, allow_query=False)
    return _match_suffix(lowered, allow_query=True)


def classify_url(url: str | None) -> FileKind:
    """Classify a document URL by the extension at the end of its path.

    Absolute URLs are parsed and only the path is inspected, so signed query
    strings never hide the extension. Anything that does not parse as an
    absolute URL (storage keys, relative paths) falls back to checking the raw
    string, where `.pdf?`-style matches are also accepted.
    """
    suffix = _suffix_of(url)
    return _KIND_BY_SUFFIX.get(suffix, FileKind.UNKNOWN)


def label_for(kind: FileKind) -> str:
    return _LABELS[kind]


def file_info(url: str | None) -> FileInfo:
    suffix = _suffix_of(url)
    if suffix == ".pdf":
        return FileInfo(FileKind.PDF, "application/pdf", suffix)
    if suffix == ".docx":
        return FileInfo(FileKind.WORD, "application/vnd.openxmlformats-officedocument.wordprocessingml.document", suffix)
    if suffix == ".doc":
        return FileInfo(FileKind.WORD, "application/msword", suffix)
    return FileInfo(FileKind.UNKNOWN, "application/octet-stream", "")


def _artifact(url: str, kind: FileKind) -> DownloadableArtifact:
    return DownloadableArtifact(url=url, kind=kind, label=label_for(kind))


def resolve(pdf_slot_url: str | None = None, generated_slot_url: str | None = None) -> Resolution:
    """Pick the single artifact a user should be offered for a document record.

    A confirmed PDF in the PDF slot always wins. Otherwise any populated
    generated-document slot is offered with its own kind, even when the kind
    is unknown. A Word file stored in the PDF slot is offered last, labelled
    as Word. Blank slots count as absent. Never raises.
    """
    pdf_slot_url = _present(pdf_slot_url)
    generated_slot_url = _present(generated_slot_url)
    pdf_kind = classify_url(pdf_slot_url)

    if pdf_slot_url and pdf_kind is FileKind.PDF:
        chosen = _artifact(pdf_slot_url, FileKind.PDF)
    elif generated_slot_url:
        chosen = _artifact(generated_slot_url, classify_url(generated_slot_url))
    elif pdf_slot_url and pdf_kind is FileKind.WORD:
        chosen = _artifact(pdf_slot_url, FileKind.WORD)
    else:
        chosen = None

    artifacts = (chosen,) if chosen else ()
    pdf_available = any(a.kind is FileKind.PDF for a in artifacts)
    has_word_source = bool(generated_slot_url) or pdf_kind is FileKind.WORD
    return Resolution(
        artifacts=artifacts,
        pdf_available=pdf_available,
        conversion_eligible=not pdf_available and has_word_source,
    )


def has_pdf_available(pdf_slot_url: str | None, generated_slot_url: str | None) -> bool:
    return resolve(pdf_slot_url, generated_slot_url).pdf_available


def can_generate_pdf(pdf_slot_url: str | None, generated_slot_url: str | None) -> bool:
    return resolve(pdf_slot_url, generated_slot_url).conversion_eligible


def conversion_source(pdf_slot_url: str | None, generated_slot_url: str | None) -> ConversionSource | None:
    """Locate the editable document a PDF should be generated from."""
    pdf_slot_url = _present(pdf_slot_url)
    generated_slot_url = _present(generated_slot_url)
    if generated_slot_url:
        return ConversionSource(generated_slot_url)
    if pdf_slot_url and classify_url(pdf_slot_url) is FileKind.WORD:
        return ConversionSource(pdf_slot_url, relocate_to_generated_slot=True)
    return None
