"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses raised by the site builder: configuration problems,
markup helper misuse, forbidden server markup in rendered pages, and the
failure modes of each pipeline step (staging reset, page generation, asset
copy, deploy-config rewrite and transfer).

Fatal pipeline errors (``StagingResetFailed``, ``ConfigRewriteFailed``) are
raised and abort the run. Recoverable ones (``FileGenerationFailed``,
``AssetCopyFailed``, ``TransferFailed``) are constructed by the runner and
collected in the run report instead of being raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'STAGING_RESET_FAILED'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.
    transient : bool
        True if the error is transient.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class UnsupportedTagCall(AppError):
    """Raised when a tag is built with an arity the builder does not handle.

    Parameters
    ----------
    tag_name : str
        Name of the tag that was requested.
    arg_count : int
        Number of positional arguments supplied.
    """

    def __init__(self, tag_name: str, arg_count: int) -> None:
        super().__init__(
            "UNSUPPORTED_TAG_CALL",
            f"Can't build <{tag_name}> from {arg_count} arguments",
            context={"tag": tag_name, "arg_count": arg_count},
        )
        self.tag_name = tag_name
        self.arg_count = arg_count


class ForbiddenMarkupError(AppError):
    """Raised when rendered content contains server-side markup.

    Parameters
    ----------
    snippet : str
        The matched text, bounded by the guard's snippet limit.
    kind : str
        Which check fired: ``'pair'``, ``'open'`` or ``'close'``.
    """

    def __init__(self, snippet: str, kind: str) -> None:
        labels = {
            "pair": "Found",
            "open": "Found open server tag:",
            "close": "Found closing server tag:",
        }
        super().__init__(
            "FORBIDDEN_MARKUP",
            f"{labels.get(kind, 'Found')} '{snippet}'",
            context={"snippet": snippet, "kind": kind},
        )
        self.snippet = snippet
        self.kind = kind


class StagingResetFailed(AppError):
    """Raised when the staging directory cannot be deleted or recreated."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "STAGING_RESET_FAILED", message, context=context, transient=False
        )


class FileGenerationFailed(AppError):
    """Recorded when one source file could not be rendered or written.

    Parameters
    ----------
    source : Path
        The source file being generated.
    cause : BaseException
        The underlying error.
    """

    def __init__(self, source: Path, cause: BaseException) -> None:
        super().__init__(
            "FILE_GENERATION_FAILED",
            f"Could not generate {source.name}: {cause}",
            context={"source": str(source), "cause": type(cause).__name__},
        )
        self.source = source
        self.cause = cause


class AssetCopyFailed(AppError):
    """Recorded when an auxiliary asset pattern could not be copied."""

    def __init__(
        self, pattern: str, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        merged = {"pattern": pattern, **dict(context or {})}
        super().__init__("ASSET_COPY_FAILED", message, context=merged)
        self.pattern = pattern


class ConfigRewriteFailed(AppError):
    """Raised when the deploy configuration cannot be written to staging."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIG_REWRITE_FAILED", message, context=context, transient=False
        )


class TransferFailed(AppError):
    """Recorded when the transfer command fails to launch or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(
            "TRANSFER_FAILED", message, context=context, transient=transient
        )
