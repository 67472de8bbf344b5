"""
Classification of user input lines into catalog references.
"""

import re
from typing import Optional

from spotify_cli.models.track import Reference, ResourceKind, SpotifyId

_URI_TEMPLATE = r"spotify:{kind}:(?P<id>[0-9A-Za-z]{{22}})"
_URL_TEMPLATE = r"(?:https?://)?open\.spotify\.com/{kind}/(?P<id>[0-9A-Za-z]{{22}})"

_PATTERNS = {
    kind: (
        re.compile(_URI_TEMPLATE.format(kind=kind.value)),
        re.compile(_URL_TEMPLATE.format(kind=kind.value)),
    )
    for kind in ResourceKind
}


def parse_reference(line: str) -> Optional[Reference]:
    """
    Classifies a line as a track, playlist, album or artist reference.

    Both the URI form (``spotify:album:<id>``) and the URL form
    (``https://open.spotify.com/album/<id>``) are accepted. The whole line has
    to match. Returns None for anything unrecognized.
    """
    for kind, patterns in _PATTERNS.items():
        for pattern in patterns:
            if match := pattern.fullmatch(line):
                id_str = match.group("id")
                return Reference(kind=kind, id=SpotifyId(id_str), matched=id_str)
    return None
