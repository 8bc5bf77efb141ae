"""Error kinds raised at the file boundary (decode, output dir, encode)."""

from __future__ import annotations

from pathlib import Path


class DitherError(Exception):
    """Base class for failures reading sources or writing results."""

    code = "DITHER_ERROR"
    action = "process"

    def __init__(self, path: str | Path, cause: BaseException | str | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        message = f"Failed to {self.action} {self.path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SourceUnreadable(DitherError):
    code = "SOURCE_UNREADABLE"
    action = "open"


class SourceUndecodable(DitherError):
    code = "SOURCE_UNDECODABLE"
    action = "decode"


class OutputDirUnavailable(DitherError):
    code = "OUTPUT_DIR_UNAVAILABLE"
    action = "create output directory"


class EncodeFailed(DitherError):
    """Raised after all outputs were attempted and at least one failed.

    ``written`` lists outputs that were saved; ``failures`` holds every
    (path, cause) pair that was not.
    """

    code = "ENCODE_FAILED"
    action = "save"

    def __init__(
        self,
        path: str | Path,
        cause: BaseException | str | None = None,
        written: list[Path] | None = None,
        failures: list[tuple[Path, BaseException]] | None = None,
    ) -> None:
        super().__init__(path, cause)
        self.written = list(written or [])
        self.failures = list(failures or [])
