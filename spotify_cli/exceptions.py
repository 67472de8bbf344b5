"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SpotifyCliError(Exception):
    """Base exception for all application-specific errors."""


class AuthenticationError(SpotifyCliError):
    """Raised when the login to the streaming service fails."""


class ConfigurationError(SpotifyCliError):
    """Raised for issues related to configuration loading or validation."""


class PathTemplateError(ConfigurationError):
    """Raised when the output template does not produce a path with a directory."""


class DirectoryCreationError(ConfigurationError):
    """Raised when the destination folder of a track cannot be created."""


class MetadataFetchError(SpotifyCliError):
    """Raised when a track, album, playlist or artist record cannot be fetched."""


class NoSuitableTrackError(SpotifyCliError):
    """
    Raised when neither a track nor any of its alternatives offers a Vorbis file.
    """


class AudioKeyError(SpotifyCliError):
    """Raised when the decryption key for an audio file cannot be obtained."""


class StreamError(SpotifyCliError):
    """Raised when the encrypted audio stream cannot be opened or read."""


class DecryptionError(SpotifyCliError):
    """Raised when the encrypted audio cannot be decrypted."""


class TagWriteError(SpotifyCliError):
    """Raised when the comment header of the audio container cannot be rewritten."""


class OutputWriteError(SpotifyCliError):
    """Raised when the final audio file cannot be written to disk."""
