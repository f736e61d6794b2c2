"""Development server.

Starts a pounce ASGI server with a live ResourceApp object.
"""

from __future__ import annotations


def run_dev_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Start a pounce server for *app*.

    Pounce's ``run()`` takes an import string, but callers here hold a
    live ASGI callable, so ``pounce.Server`` is used directly.

    Requires the ``server`` extra (``pip install roost[server]``).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app)
    server.run()
