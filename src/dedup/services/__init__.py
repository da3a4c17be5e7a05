"""File actions applied to confirmed duplicates."""
from .file_service import FileService

__all__ = ["FileService"]
