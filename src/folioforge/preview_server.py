"""WebSocket live preview server for the particle background."""

from __future__ import annotations

import asyncio
import base64
import http.server
import json
import logging
import threading
import webbrowser
from pathlib import Path
from typing import TYPE_CHECKING, Any

from websockets.asyncio.server import ServerConnection, broadcast, serve

from folioforge.particles.loop import FrameLoop
from folioforge.particles.render import encode_png

if TYPE_CHECKING:
    from PIL import Image

    from folioforge.particles.engine import ParticleSystem

logger = logging.getLogger(__name__)

_TEMPLATE_PATH = Path(__file__).parent / "templates" / "preview.html"


class _HTMLHandler(http.server.BaseHTTPRequestHandler):
    """Serves the preview HTML page."""

    ws_port: int = 8766

    def do_GET(self) -> None:
        if self.path == "/" or self.path.startswith("/?"):
            html = _TEMPLATE_PATH.read_text()
            self.send_response(200)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.end_headers()
            self.wfile.write(html.encode())
        else:
            self.send_error(404)

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        pass  # suppress console noise


class PreviewServer:
    """Runs an HTTP + WebSocket server streaming particle frames to a browser."""

    def __init__(
        self,
        system: ParticleSystem,
        *,
        http_port: int = 8765,
        ws_port: int = 8766,
        fps: int = 30,
        background: str | None = None,
    ) -> None:
        self.http_port = http_port
        self.ws_port = ws_port
        self.loop = FrameLoop(system, self._publish_frame, fps=fps, background=background)
        self._clients: set[ServerConnection] = set()
        self._http_server: http.server.HTTPServer | None = None

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def broadcast(self, message: dict[str, Any]) -> None:
        """Send a JSON message to all connected WebSocket clients."""
        broadcast(self._clients, json.dumps(message))

    @staticmethod
    def frame_message(frame: Image.Image) -> dict[str, Any]:
        b64 = base64.b64encode(encode_png(frame)).decode("ascii")
        return {"type": "frame", "image": f"data:image/png;base64,{b64}"}

    def _publish_frame(self, frame: Image.Image) -> None:
        if not self._clients:
            return
        message = self.frame_message(frame)
        message["frame"] = self.loop.system.frame
        self.broadcast(message)

    async def _ws_handler(self, websocket: ServerConnection) -> None:
        """Handle a single WebSocket connection."""
        self._clients.add(websocket)
        await websocket.send(json.dumps({
            "type": "hello",
            "width": self.loop.system.width,
            "height": self.loop.system.height,
            "style": self.loop.system.config.style.value,
        }))
        try:
            async for _message in websocket:
                pass  # we only send, never receive meaningful data
        finally:
            self._clients.discard(websocket)

    def _start_http_server(self) -> None:
        """Start the HTTP server in a daemon thread."""
        handler_class = type(
            "_BoundHTMLHandler",
            (_HTMLHandler,),
            {"ws_port": self.ws_port},
        )
        self._http_server = http.server.HTTPServer(
            ("", self.http_port), handler_class
        )
        thread = threading.Thread(target=self._http_server.serve_forever, daemon=True)
        thread.start()

    async def run(self, open_browser: bool = True) -> None:
        """Start servers and the frame loop, and wait for shutdown."""
        self._start_http_server()
        try:
            async with serve(self._ws_handler, "localhost", self.ws_port):
                if open_browser:
                    webbrowser.open(
                        f"http://localhost:{self.http_port}?ws={self.ws_port}"
                    )
                if not self.loop.start():
                    logger.warning("Particle system is disabled; serving a blank preview")
                # Hold server open until cancelled (Ctrl+C)
                await asyncio.Future()
        finally:
            await self.loop.stop()
            if self._http_server:
                self._http_server.shutdown()
