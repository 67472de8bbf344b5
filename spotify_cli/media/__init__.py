"""
Media Processing Layer.

This package is responsible for all audio file operations, including
fetching encrypted files, decrypting them, and rewriting their metadata.
"""

from .decryptor import AudioDecryptor
from .downloader import CdnStream, Downloader
from .tagger import CommentHeader, Tagger, strip_container_preamble

__all__ = [
    "AudioDecryptor",
    "CdnStream",
    "CommentHeader",
    "Downloader",
    "Tagger",
    "strip_container_preamble",
]
