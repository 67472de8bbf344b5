"""
Streaming Service Layer.

This package declares the collaborator interfaces used by the core. The
librespot-backed implementation lives in `spotify_cli.api.client` and is
imported on demand, since it requires the optional `librespot` package.
"""

from .protocols import EncryptedStream, KeyProvider, MetadataProvider, StreamProvider

__all__ = ["EncryptedStream", "KeyProvider", "MetadataProvider", "StreamProvider"]
