import json
import os
import tempfile
import threading

import pandas as pd

from db_helpers import df_query_db
from helpers import haversine

NEARBY_RADIUS_KM = 10
NEARBY_LIMIT = 20


class NgoRegistry:
    """
    Process-local snapshot of the ngos table, mirrored to a JSON file.

    The snapshot is rebuilt wholesale after every registration and read without
    hitting the store. Each rebuild produces a new DataFrame and only then
    replaces the published one, so readers always see a complete snapshot.
    Writes from other processes are not seen until the next refresh.
    """

    def __init__(self, db, path):
        self.db = db
        self.path = path
        self._frame = pd.DataFrame()
        self._lock = threading.Lock()
        # Held for a whole rebuild so reloads publish in the order they read the table
        self._refresh_lock = threading.Lock()

    def refresh(self):
        """ Reload every NGO from the store, rewrite the file mirror and publish the new snapshot. """

        with self._refresh_lock:
            frame = df_query_db(self.db, "SELECT * FROM ngos ORDER BY created_at DESC, id DESC")
            frame = self._normalise(frame)
            self._write_file(frame)

            with self._lock:
                self._frame = frame

        return frame

    def snapshot(self):
        """ Return the current snapshot, rebuilding it on a cold start. """

        with self._lock:
            frame = self._frame
        if not frame.empty:
            return frame

        frame = self._normalise(self._read_file())
        if frame.empty:
            return self.refresh()

        # A refresh may have landed while the file was being read
        with self._lock:
            if self._frame.empty:
                self._frame = frame
            return self._frame

    def clear(self):
        with self._lock:
            self._frame = pd.DataFrame()

    def nearby(self, lat, lon, radius_km=NEARBY_RADIUS_KM, limit=NEARBY_LIMIT):
        """ Return the closest NGOs within radius_km of (lat, lon), nearest first, with a distance column. """

        frame = self.snapshot()
        if frame.empty:
            return []

        df = frame.copy()
        df['distance'] = haversine(lat, lon, df['lat'], df['lon'])
        df = df[df['distance'] < radius_km].sort_values('distance', kind='stable').head(limit)

        return json.loads(df.to_json(orient='records', date_format='iso'))

    @staticmethod
    def _normalise(frame):
        # Numeric columns come back as Decimal from some drivers
        if not frame.empty:
            frame = frame.copy()
            frame['lat'] = frame['lat'].astype(float)
            frame['lon'] = frame['lon'].astype(float)
        return frame

    def _read_file(self):
        if not os.path.exists(self.path):
            return pd.DataFrame()
        return pd.read_json(self.path, orient='records', dtype=False, convert_dates=False)

    def _write_file(self, frame):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        # Write beside the target then swap it in
        fd, tmp_path = tempfile.mkstemp(dir=directory or ".", prefix=os.path.basename(self.path), suffix=".tmp")
        os.close(fd)
        try:
            frame.to_json(tmp_path, orient="records", date_format="iso", indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            os.remove(tmp_path)
            raise
