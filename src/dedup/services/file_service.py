"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Actions applied to confirmed duplicates: print (dry run), remove, or move to the system trash.
Every action takes a path and raises on failure.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from send2trash import send2trash

from dedup.core.interfaces import DuplicateHandler
from dedup.core.models import Action

logger = logging.getLogger(__name__)


class FileService:
    """
    File actions for duplicate handling.
    """

    @staticmethod
    def print_path(file_path: str, stream: Optional[TextIO] = None) -> None:
        """Dry run: write the path to stdout, one per line."""
        print(file_path, file=stream or sys.stdout)

    @staticmethod
    def remove_file(file_path: str) -> None:
        """Permanently removes a file."""
        logger.info(f"Removing file: {file_path}")
        os.remove(file_path)

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        logger.info(f"Moving file to trash: {file_path}")
        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def handler_for(cls, action: Action) -> DuplicateHandler:
        """Map an Action onto its handler."""
        handlers = {
            Action.DRY_RUN: cls.print_path,
            Action.REMOVE: cls.remove_file,
            Action.TRASH: cls.move_to_trash,
        }
        try:
            return handlers[action]
        except KeyError:
            raise ValueError(f"Unknown action: {action!r}")
