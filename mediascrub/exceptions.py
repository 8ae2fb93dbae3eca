"""Custom exceptions for mediascrub operations."""


class MediaScrubError(Exception):
    """Base exception for mediascrub errors."""
    pass


class ProcessingError(MediaScrubError):
    """Raised when a file cannot be turned into a storable record.
    
    Metadata stripping never raises this; it is reserved for failures the
    upload must not continue past (key derivation, digest computation).
    """
    pass


class KeyDerivationError(ProcessingError):
    """Raised when the clock, randomness or digest step of key derivation fails."""
    pass


class IdentityError(MediaScrubError):
    """Raised when no usable identity is available for an upload."""
    pass


class UploadRejectedError(MediaScrubError):
    """Raised when an upload batch is refused before any file is processed."""
    pass


class StorageError(MediaScrubError):
    """Base exception for object store errors."""
    pass


class StorageAPIError(StorageError):
    """Exception raised when a remote object store rejects a request.
    
    Attributes:
        message: Error message
        status_code: HTTP status code
        response: Response body text (if available)
    """
    
    def __init__(self, message: str, status_code: int = None, response: str = None):
        """Initialize object store API error.
        
        Args:
            message: Error message
            status_code: HTTP status code
            response: Response body text
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
    
    def __str__(self) -> str:
        """Return string representation of error."""
        if self.status_code:
            return f"Object store error ({self.status_code}): {self.message}"
        return f"Object store error: {self.message}"


class StorageNotFoundError(StorageAPIError):
    """Exception raised when an object does not exist (404)."""
    pass
