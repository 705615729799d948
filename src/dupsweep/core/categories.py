"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/categories.py
Maps file extensions to broad file-type categories for listings.
"""

from enum import Enum


class FileCategory(Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    AUDIO = "audio"
    CODE = "code"
    ARCHIVE = "archive"
    APPLICATION = "application"
    SYSTEM = "system"
    OTHER = "other"


_CATEGORY_EXTENSIONS = {
    FileCategory.IMAGE: {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg", ".webp", ".tiff"},
    FileCategory.DOCUMENT: {".pdf", ".doc", ".docx", ".txt", ".md", ".rtf", ".pages"},
    FileCategory.VIDEO: {".mp4", ".avi", ".mov", ".mkv", ".wmv", ".flv", ".webm"},
    FileCategory.AUDIO: {".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a"},
    FileCategory.CODE: {".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c", ".html", ".css"},
    FileCategory.ARCHIVE: {".zip", ".rar", ".7z", ".tar", ".gz"},
    FileCategory.APPLICATION: {".app", ".exe", ".dmg", ".pkg", ".msi"},
}


_SYSTEM_FILES = {".ds_store", "thumbs.db", "desktop.ini"}


def category_for(extension: str, name: str = "") -> FileCategory:
    """
    Returns the category of a file extension (with leading dot, any case).
    Known OS metadata files are matched by name; other files without an
    extension count as documents.
    """
    if name.lower() in _SYSTEM_FILES:
        return FileCategory.SYSTEM
    if not extension:
        return FileCategory.DOCUMENT

    ext = extension.lower()
    for category, extensions in _CATEGORY_EXTENSIONS.items():
        if ext in extensions:
            return category
    return FileCategory.OTHER
