from pydantic import BaseModel, ConfigDict, Field, field_validator

from cuinotes.constants import (
    BORDER_ROWS,
    CACHE_LINES,
    DEFAULT_VIEWPORT,
    LARGE_FILE_THRESHOLD,
    NOTES_DIR,
    PAGE_OVERLAP,
)


class ViewerConfig(BaseModel):
    """Viewer settings read from cuinotes.yml.

    Sizes are deployment policy: the large-file threshold decides which files
    go through the windowed cache, and the cache width bounds memory use per
    open file.
    """

    model_config = ConfigDict(extra="allow")

    notes_dir: str = NOTES_DIR
    large_file_threshold: int = Field(default=LARGE_FILE_THRESHOLD, ge=0)
    cache_lines: int = Field(default=CACHE_LINES, ge=2)
    default_viewport: int = Field(default=DEFAULT_VIEWPORT, ge=1)
    border_rows: int = Field(default=BORDER_ROWS, ge=0)
    page_overlap: int = Field(default=PAGE_OVERLAP, ge=0)
    # 0 keeps the linear rescan; K > 0 records every Kth line start offset.
    index_stride: int = Field(default=0, ge=0)
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject codecs Python does not know about."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {v}") from exc
        return v
