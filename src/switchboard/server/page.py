"""Built-in control page served to plain HTTP requests.

Requests without a WebSocket upgrade that reach the server port are
answered here: ``GET /`` returns the control page, anything else 404.
"""

from __future__ import annotations

from http import HTTPStatus

from websockets.asyncio.server import ServerConnection
from websockets.http11 import Request, Response

INDEX_PATH = "/"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

INDEX_HTML = """<!doctype html>
<html>
<head>
<meta charset="utf-8"/>
<meta name="viewport" content="width=device-width,initial-scale=1"/>
<title>Switchboard</title>
<style>
body{font-family:system-ui,sans-serif;margin:2rem}
#state{font-weight:bold}
button{padding:.6rem 1rem;margin-right:.5rem}
#log{border:1px solid #ccc;padding:.75rem;height:220px;overflow:auto;white-space:pre-wrap}
input[type=text]{width:16rem;padding:.5rem}
</style>
</head>
<body>
<h1>Switchboard</h1>
<p>Status: <span id="st">connecting</span> | LED: <span id="state">unknown</span></p>
<p>
<button onclick="send({cmd:'led', state:'on'})">LED ON</button>
<button onclick="send({cmd:'led', state:'off'})">LED OFF</button>
</p>
<p>
<input id="msg" type="text" placeholder="say something"/>
<button onclick="send({cmd:'echo', msg:document.getElementById('msg').value})">Send</button>
</p>
<pre id="log"></pre>
<script>
const st = document.getElementById('st');
const led = document.getElementById('state');
const log = m => {
  const d = document.getElementById('log');
  d.textContent += m + "\\n";
  d.scrollTop = d.scrollHeight;
};
const ws = new WebSocket(`ws://${location.host}/`);
ws.onopen = () => { st.textContent = "connected"; };
ws.onclose = () => { st.textContent = "closed"; };
ws.onmessage = e => {
  try {
    const msg = JSON.parse(e.data);
    if (msg.event === 'led') { led.textContent = msg.value === true ? 'ON' : 'OFF'; }
  } catch (_) {}
  log(e.data);
};
function send(obj) { if (ws.readyState === 1) { ws.send(JSON.stringify(obj)); } }
</script>
</body>
</html>
"""


def is_upgrade(request: Request) -> bool:
    """Whether a request asks for a WebSocket upgrade."""
    return request.headers.get("Upgrade", "").lower() == "websocket"


def serve_page(connection: ServerConnection, request: Request) -> Response | None:
    """``process_request`` hook answering plain HTTP requests.

    Returns None for WebSocket upgrades so the handshake proceeds.
    """
    if is_upgrade(request):
        return None

    path = request.path.split("?", 1)[0]
    if path != INDEX_PATH:
        return connection.respond(HTTPStatus.NOT_FOUND, "Not found")

    response = connection.respond(HTTPStatus.OK, INDEX_HTML)
    del response.headers["Content-Type"]
    response.headers["Content-Type"] = HTML_CONTENT_TYPE
    return response
