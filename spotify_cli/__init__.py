"""
spotify-cli: resolve Spotify references into tracks and save them as tagged Ogg Vorbis files.
"""

__version__ = "0.3.0"
