"""Tests for the WebSocket live preview server."""

import asyncio
import base64
import json
import urllib.error
import urllib.request

import pytest
from websockets.asyncio.client import connect
from websockets.asyncio.server import serve

from folioforge.particles import ParticleSystem, render_frame
from folioforge.preview_server import PreviewServer


@pytest.fixture
def system(particle_config, rng):
    system = ParticleSystem(particle_config, rng=rng)
    system.resize(40, 30)
    return system


@pytest.fixture
def server(system):
    """Create a PreviewServer with test ports."""
    return PreviewServer(system, http_port=0, ws_port=0, fps=10)


class TestFrameMessage:
    def test_frame_is_png_data_url(self, system):
        message = PreviewServer.frame_message(render_frame(system))
        assert message["type"] == "frame"
        prefix = "data:image/png;base64,"
        assert message["image"].startswith(prefix)
        png = base64.b64decode(message["image"][len(prefix):])
        assert png.startswith(b"\x89PNG")

    def test_publish_without_clients_is_noop(self, server, system):
        server._publish_frame(render_frame(system))
        assert server.client_count == 0


class TestHTTPHandler:
    """Tests for the HTTP server serving preview.html."""

    def test_http_serves_html(self, server):
        server._start_http_server()
        try:
            port = server._http_server.server_address[1]
            with urllib.request.urlopen(f"http://localhost:{port}") as resp:
                body = resp.read().decode()
                assert resp.status == 200
                assert "FolioForge particle preview" in body
        finally:
            server._http_server.shutdown()

    def test_http_404_for_other_paths(self, server):
        server._start_http_server()
        try:
            port = server._http_server.server_address[1]
            with pytest.raises(urllib.error.HTTPError) as excinfo:
                urllib.request.urlopen(f"http://localhost:{port}/nonexistent")
            assert excinfo.value.code == 404
        finally:
            server._http_server.shutdown()


class TestWebSocket:
    @pytest.mark.asyncio
    async def test_client_receives_hello_then_frames(self, server, system):
        async with serve(server._ws_handler, "localhost", 0) as ws_server:
            port = ws_server.sockets[0].getsockname()[1]
            async with connect(f"ws://localhost:{port}") as client:
                hello = json.loads(await asyncio.wait_for(client.recv(), timeout=2.0))
                assert hello == {"type": "hello", "width": 40, "height": 30, "style": "circles"}
                assert server.client_count == 1

                system.step()
                server._publish_frame(render_frame(system))
                msg = json.loads(await asyncio.wait_for(client.recv(), timeout=2.0))
                assert msg["type"] == "frame"
                assert msg["frame"] == system.frame

    @pytest.mark.asyncio
    async def test_disconnect_unregisters_client(self, server):
        async with serve(server._ws_handler, "localhost", 0) as ws_server:
            port = ws_server.sockets[0].getsockname()[1]
            async with connect(f"ws://localhost:{port}") as client:
                await asyncio.wait_for(client.recv(), timeout=2.0)
            for _ in range(50):
                if server.client_count == 0:
                    break
                await asyncio.sleep(0.01)
        assert server.client_count == 0
