import numpy as np
import requests

from flask import jsonify

EARTH_RADIUS_KM = 6371

NOMINATIM_URL = 'https://nominatim.openstreetmap.org/reverse'


def apology(message, code=400):
    """Return message as a JSON error response."""
    return jsonify({"error": message}), code


def missing_fields(data, required):
    """ Return the required keys that are absent, null or blank in the request body. """
    missing = []
    for field in required:
        value = data.get(field)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            missing.append(field)
    return missing


def parse_coordinates(lat, lon):
    """ Convert a lat/lon pair to floats, raising ValueError if either is not a finite number. """
    lat, lon = float(lat), float(lon)
    if not (np.isfinite(lat) and np.isfinite(lon)):
        raise ValueError("coordinates must be finite")
    return lat, lon


def haversine(lat1, lon1, lat2, lon2):
    """
    Great-circle distance in km between two points.

    Works element-wise, so either side can be a numpy array or pandas Series.
    """
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    # Rounding can push a fraction above 1 for antipodal points
    a = np.clip(a, 0.0, 1.0)

    return 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(a))


def reverse_geocode(lat, lon):
    """ Look up a human readable address for a coordinate via OpenStreetMap. """

    params = {'format': 'json', 'lat': lat, 'lon': lon}
    headers = {'User-Agent': 'help-hunger/0.1'}

    # Request the URL and parse the JSON for the returned place
    place = requests.get(NOMINATIM_URL, params=params, headers=headers, timeout=10)
    place.raise_for_status() # raise exception if invalid response
    details = place.json()

    return details.get('display_name')
