"""Domain exceptions for reader sessions and CLI diagnostics."""

from __future__ import annotations


class ReaderError(RuntimeError):
    """Raised when a specific reader stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped reader error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class InvalidInputError(ReaderError):
    """Raised when a user-supplied reading position cannot be fetched."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        super().__init__(stage="input", detail=detail, hint=hint)


class ContentResolutionError(ReaderError):
    """Raised when verse content retrieval fails or returns a malformed payload."""

    def __init__(
        self,
        detail: str,
        *,
        failure_kind: str = "unknown",
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize resolution error metadata for notice rendering."""

        super().__init__(stage="content", detail=detail, hint=hint)
        self.failure_kind = failure_kind
        self.status_code = status_code


class PlaybackError(ReaderError):
    """Raised when a narration resource cannot be fetched or decoded."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        super().__init__(stage="playback", detail=detail, hint=hint)
