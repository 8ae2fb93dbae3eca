"""Processing module: models and the file processing pipeline."""

from .models import UploadFile, ProcessedRecord
from .processor import FileProcessor, process_file

__all__ = ["UploadFile", "ProcessedRecord", "FileProcessor", "process_file"]
