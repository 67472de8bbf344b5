"""Tests for fetching encrypted files over HTTP"""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from spotify_cli.exceptions import StreamError
from spotify_cli.media.downloader import CdnStream, Downloader, close_connection_pool


@pytest.fixture
async def cdn():
    hits = {"missing": 0}

    async def audio(request):
        return web.Response(body=b"\x01\x02" * 100_000)

    async def missing(request):
        hits["missing"] += 1
        return web.Response(status=404)

    app = web.Application()
    app.router.add_get("/audio", audio)
    app.router.add_get("/missing", missing)
    server = TestServer(app)
    await server.start_server()
    server.hits = hits
    yield server
    await close_connection_pool()
    await server.close()


async def test_reads_whole_body(cdn):
    stream = CdnStream(str(cdn.make_url("/audio")), Downloader(base_delay=0))
    data = await stream.read()
    assert data == b"\x01\x02" * 100_000


async def test_http_error_retries_then_fails(cdn):
    downloader = Downloader(max_attempts=2, base_delay=0)
    with pytest.raises(StreamError):
        await downloader.fetch_bytes(str(cdn.make_url("/missing")))
    assert cdn.hits["missing"] == 2


async def test_closed_stream_cannot_be_read(cdn):
    stream = CdnStream(str(cdn.make_url("/audio")), Downloader())
    await stream.close()
    with pytest.raises(StreamError):
        await stream.read()
