"""Tests for choosing a playable file through the alternatives graph"""

import pytest

from conftest import sid
from spotify_cli.core.format_resolver import FormatResolver
from spotify_cli.exceptions import MetadataFetchError, NoSuitableTrackError
from spotify_cli.models.track import AudioFormat


async def test_high_bitrate_wins(catalog):
    catalog.add_track(
        "t1", formats=(AudioFormat.OGG_VORBIS_96, AudioFormat.OGG_VORBIS_320)
    )
    track, audio_file = await FormatResolver(catalog).resolve_playable(sid("t1"))
    assert track.id == sid("t1")
    assert audio_file.format is AudioFormat.OGG_VORBIS_320


async def test_medium_bitrate_before_low(catalog):
    catalog.add_track(
        "t1", formats=(AudioFormat.OGG_VORBIS_96, AudioFormat.OGG_VORBIS_160)
    )
    _, audio_file = await FormatResolver(catalog).resolve_playable(sid("t1"))
    assert audio_file.format is AudioFormat.OGG_VORBIS_160


async def test_falls_back_to_alternative(catalog):
    catalog.add_track("t1", formats=(), alternatives=[sid("alt")])
    catalog.add_track("alt", formats=(AudioFormat.OGG_VORBIS_160,))

    track, audio_file = await FormatResolver(catalog).resolve_playable(sid("t1"))

    assert track.id == sid("alt")
    assert audio_file.format is AudioFormat.OGG_VORBIS_160


async def test_non_vorbis_formats_trigger_fallback(catalog):
    catalog.add_track("t1", formats=(AudioFormat.MP3_320,), alternatives=[sid("alt")])
    catalog.add_track("alt", formats=(AudioFormat.OGG_VORBIS_96,))
    track, _ = await FormatResolver(catalog).resolve_playable(sid("t1"))
    assert track.id == sid("alt")


async def test_search_is_breadth_first(catalog):
    catalog.add_track("t1", formats=(), alternatives=[sid("a"), sid("b")])
    catalog.add_track("a", formats=(), alternatives=[sid("deep")])
    catalog.add_track("b", formats=(AudioFormat.OGG_VORBIS_96,))
    catalog.add_track("deep", formats=(AudioFormat.OGG_VORBIS_320,))

    track, _ = await FormatResolver(catalog).resolve_playable(sid("t1"))

    assert track.id == sid("b")
    assert sid("deep") not in [i for _, i in catalog.fetched]


async def test_exhausted_search_fails(catalog):
    catalog.add_track("t1", formats=(), alternatives=[sid("a")])
    catalog.add_track("a", formats=())
    with pytest.raises(NoSuitableTrackError):
        await FormatResolver(catalog).resolve_playable(sid("t1"))


async def test_cyclic_alternatives_terminate(catalog):
    catalog.add_track("t1", formats=(), alternatives=[sid("a")])
    catalog.add_track("a", formats=(), alternatives=[sid("t1"), sid("a")])
    with pytest.raises(NoSuitableTrackError):
        await FormatResolver(catalog).resolve_playable(sid("t1"))
    assert len(catalog.fetched) == 2


async def test_fetch_failure_aborts_immediately(catalog):
    catalog.add_track("t1", formats=(), alternatives=[sid("missing"), sid("ok")])
    catalog.add_track("ok", formats=(AudioFormat.OGG_VORBIS_160,))
    with pytest.raises(MetadataFetchError):
        await FormatResolver(catalog).resolve_playable(sid("t1"))
    assert ("track", sid("ok")) not in catalog.fetched
