"""
Live fan-out of new donations to connected viewers.

Viewers hold a plain WebSocket open at /api/ws and get one JSON text frame
per accepted donation. Delivery is at-most-once: a viewer that is not
connected when a donation lands misses that update and picks up the current
state on its next reload. There is no replay and no ordering guarantee
between viewers.
"""
import json
import threading

from simple_websocket import ConnectionClosed

from tracker import app, sock


class ViewerRegistry:
    """The set of currently open viewer sockets."""

    def __init__(self):
        self._sockets = set()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._sockets)

    def __contains__(self, ws):
        with self._lock:
            return ws in self._sockets

    def add(self, ws):
        with self._lock:
            self._sockets.add(ws)

    def remove(self, ws):
        with self._lock:
            self._sockets.discard(ws)

    def clear(self):
        with self._lock:
            self._sockets.clear()

    def attach(self, ws):
        """ Keep a viewer registered until its socket closes. Anything it sends is ignored. """

        self.add(ws)
        app.logger.info("Client connected")
        try:
            while True:
                ws.receive()
        except ConnectionClosed:
            pass
        finally:
            self.remove(ws)
            app.logger.info("Client disconnected")

    def broadcast(self, message):
        """ Send one message to every open viewer and return how many were reached. """

        data = json.dumps(message)

        # Iterate over a copy so connects and disconnects can carry on meanwhile
        with self._lock:
            sockets = list(self._sockets)

        sent = 0
        for ws in sockets:
            if not ws.connected:
                continue
            try:
                ws.send(data)
            except Exception:
                app.logger.exception("Failed to push update to a viewer")
                continue
            sent += 1

        return sent


def viewers():
    return app.extensions['viewers']


@sock.route('/api/ws')
def live_updates(ws):
    viewers().attach(ws)
