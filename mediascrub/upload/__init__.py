"""Upload orchestration."""

from .service import UploadService, UploadResult, UploadBatchResult

__all__ = ["UploadService", "UploadResult", "UploadBatchResult"]
