"""Tests for reference classification"""

import pytest

from spotify_cli.models.track import ResourceKind, SpotifyId
from spotify_cli.utils.reference import parse_reference

ID = "4uLU6hMCjMI75M1A2tKUQC"


@pytest.mark.parametrize("kind", list(ResourceKind))
def test_uri_and_url_forms_agree(kind):
    forms = [
        f"spotify:{kind.value}:{ID}",
        f"https://open.spotify.com/{kind.value}/{ID}",
        f"http://open.spotify.com/{kind.value}/{ID}",
        f"open.spotify.com/{kind.value}/{ID}",
    ]
    parsed = [parse_reference(form) for form in forms]
    assert all(ref is not None for ref in parsed)
    assert {(ref.kind, ref.id) for ref in parsed} == {(kind, SpotifyId(ID))}
    assert all(ref.matched == ID for ref in parsed)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "hello",
        f"spotify:show:{ID}",
        f"spotify:track:{ID[:-1]}",
        f"spotify:track:{ID}X",
        f"https://open.spotify.com/track/{ID}?si=abc",
        f"xspotify:track:{ID}",
        f" spotify:track:{ID}",
        f"https://example.com/track/{ID}",
        f"spotify:track:{ID[:-1]}-",
        f"spotify:track:{ID}\n",
        f"https://open.spotify.com/album/{ID}\n",
    ],
)
def test_unrecognized_lines(line):
    assert parse_reference(line) is None


def test_kind_is_not_confused_with_other_kinds():
    ref = parse_reference(f"spotify:playlist:{ID}")
    assert ref.kind is ResourceKind.PLAYLIST
