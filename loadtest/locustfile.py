# locustfile.py
import math
import os
import random

from locust import HttpUser, task, between

# ------------------- Config -------------------
BASE_LAT = float(os.getenv("BASE_LAT", 47.6062))        # Seattle
BASE_LON = float(os.getenv("BASE_LON", -122.3321))
SPEED_KN = float(os.getenv("VESSEL_SPEED_KN", 12))      # knots
TICK_S = float(os.getenv("TICK_S", 60))                 # simulated seconds per position update
TURN_PROB = float(os.getenv("TURN_PROB", 0.1))
REFRESH_PROB = float(os.getenv("REFRESH_PROB", 0.2))

KM_PER_NM = 1.852


def step(lat, lon, heading_deg, km):
    # flat-earth step; good enough at these distances
    dlat = km * math.cos(math.radians(heading_deg)) / 110.574
    dlon = km * math.sin(math.radians(heading_deg)) / (111.320 * max(0.01, math.cos(math.radians(lat))))
    return lat + dlat, lon + dlon


print("[INIT] Locustfile loaded")


class VesselUser(HttpUser):
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.lat = BASE_LAT + random.uniform(-0.05, 0.05)
        self.lon = BASE_LON + random.uniform(-0.05, 0.05)
        self.heading = random.uniform(0, 360)
        self.client.put("/navigation/position",
                        json={"latitude": self.lat, "longitude": self.lon},
                        name="PUT /navigation/position (seed)")

    @task(3)
    def move(self):
        if random.random() < TURN_PROB:
            self.heading = (self.heading + random.uniform(-45, 45)) % 360
        km = SPEED_KN * KM_PER_NM * TICK_S / 3600
        self.lat, self.lon = step(self.lat, self.lon, self.heading, km)
        r = self.client.put("/navigation/position",
                            json={"latitude": self.lat, "longitude": self.lon},
                            name="PUT /navigation/position (move)")
        if r.status_code >= 300:
            print(f"[MOVE][ERR] status={r.status_code} body={r.text[:160]}")
        if random.random() < REFRESH_PROB:
            self.client.post("/refresh", name="POST /refresh")

    @task(2)
    def list_pois(self):
        self.client.get("/pois", name="GET /pois")

    @task(1)
    def stats(self):
        self.client.get("/stats", name="GET /stats")
