"""
Core application engine for orchestrating the download process.

This package contains the primary logic. The `DownloadManager` resolves the
input references into a set of tracks with the `TrackSetResolver`, picks a
playable file for each with the `FormatResolver`, and delegates saving it to
the `TrackProcessor`.
"""
