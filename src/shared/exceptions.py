"""Custom exception hierarchy for DCP inspection.

All package-assembly exceptions inherit from DCPPackageError,
enabling consistent error handling and structured error output.

Exception hierarchy:
    DCPPackageError (base)
    ├── MalformedDocumentError
    ├── AssetNotFoundError
    │   └── AssetMapNotFoundError
    ├── SizeMismatchError
    └── AssetReadError
"""

from typing import Any


class DCPPackageError(Exception):
    """Base exception for all DCP errors.

    Provides structured error information suitable for logging
    and machine-readable CLI output.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for filtering
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize package error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (e.g., 'SIZE_MISMATCH')
            details: Additional context for debugging
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with error_code, error_message, and details.
            Note: Uses 'error_message' instead of 'message' to avoid conflicts
            with Python's logging module which reserves 'message' internally.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class MalformedDocumentError(DCPPackageError):
    """Raised when an asset map, CPL or PKL cannot be decoded.

    This covers:
    - Malformed XML syntax
    - Numeric elements that are not non-negative integers
    - Dates that are not ISO 8601 timestamps

    Missing elements are not an error; they decode to type defaults.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "MALFORMED_DOCUMENT", details)


class AssetNotFoundError(DCPPackageError):
    """Raised when a file referenced by the asset map is absent on disk."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "NOT_FOUND", details)


class AssetMapNotFoundError(AssetNotFoundError):
    """Raised when a DCP root directory holds no asset map file."""

    def __init__(self, root_dir: str) -> None:
        """Initialize asset map lookup error.

        Args:
            root_dir: Directory that was scanned
        """
        super().__init__(
            f"Unable to find an assetmap file in {root_dir}",
            {"root_dir": root_dir},
        )
        # Override error code for more specific filtering
        self.error_code = "ASSET_MAP_NOT_FOUND"


class SizeMismatchError(DCPPackageError):
    """Raised when a file's on-disk length differs from its declared length.

    This usually indicates a truncated copy or an incomplete ingest.
    """

    def __init__(self, expected: int, actual: int, file_path: str) -> None:
        """Initialize size mismatch error.

        Args:
            expected: Length declared by the asset map chunk
            actual: Length reported by the filesystem
            file_path: Path to the file that failed the check
        """
        details = {
            "expected_size": expected,
            "actual_size": actual,
            "file_path": file_path,
        }
        message = f"File size for {file_path} is incorrect: expected {expected}, got {actual}"
        super().__init__(message, "SIZE_MISMATCH", details)


class AssetReadError(DCPPackageError):
    """Raised for read or stat failures other than a missing file.

    Examples are permission errors, or a path that names something
    that cannot be read as a regular file.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize read error.

        Args:
            message: Error description
            original_error: The underlying OSError
            details: Additional context
        """
        error_details = details or {}
        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["original_error_type"] = type(original_error).__name__

        super().__init__(message, "IO_ERROR", error_details)
        self.original_error = original_error
