from .ws_server import WebSocketComponent
