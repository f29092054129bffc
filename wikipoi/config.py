# config.py
# Environment-driven settings. Every value can be overridden per instance.

import os

WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php")
WIKIPEDIA_PAGE_URL = os.getenv("WIKIPEDIA_PAGE_URL", "https://en.wikipedia.org/wiki?curid={pageid}")
USER_AGENT = os.getenv("WIKIPEDIA_USER_AGENT", "Signal K Wikipedia Plugin")

RING_RADIUS_KM = float(os.getenv("RING_RADIUS_KM", "20"))
GEOSEARCH_RADIUS_M = int(os.getenv("GEOSEARCH_RADIUS_M", "10000"))   # upstream cap is 10 km
GEOSEARCH_LIMIT = int(os.getenv("GEOSEARCH_LIMIT", "100"))

POLL_INTERVAL_MIN = float(os.getenv("POLL_INTERVAL_MIN", "15"))
STARTUP_DELAY_S = float(os.getenv("STARTUP_DELAY_S", "8"))
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")

POI_KEY = "pointsOfInterest.wikipedia"
