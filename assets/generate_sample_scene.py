"""Writes sample_scene.json: a handful of asteroids on tilted elliptical orbits (raw units: AU)."""
import json

import numpy as np

N_POINTS = 64

# name, semi-major axis [AU], eccentricity, inclination [deg], phase [deg], size
ASTEROIDS = [
    ("Ceres", 2.77, 0.08, 10.6, 40.0, 0.47),
    ("Pallas", 2.77, 0.23, 34.8, 200.0, 0.26),
    ("Juno", 2.67, 0.26, 13.0, 110.0, 0.12),
    ("Vesta", 2.36, 0.09, 7.1, 300.0, 0.26),
    ("Eros", 1.46, 0.22, 10.8, 160.0, 0.02),
    ("Hygiea", 3.14, 0.11, 3.8, 250.0, 0.22),
]


def orbit_points(a, e, inc_deg, n=N_POINTS):
    theta = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    r = a * (1.0 - e ** 2) / (1.0 + e * np.cos(theta))
    x = r * np.cos(theta)
    y = r * np.sin(theta)
    inc = np.radians(inc_deg)
    # Ecliptic in XZ, inclination tilts the path toward +Y
    return np.column_stack([x, y * np.sin(inc), y * np.cos(inc)])


asteroids = []
for i, (name, a, e, inc, phase, size) in enumerate(ASTEROIDS, start=1):
    pts = orbit_points(a, e, inc)
    idx = int(round(phase / 360.0 * N_POINTS)) % N_POINTS
    asteroids.append({
        "id": f"{i:04d}",
        "name": name,
        "position": [round(float(v), 4) for v in pts[idx]],
        "size": size,
        "orbit": [[round(float(v), 4) for v in p] for p in pts],
    })

scene = {
    "asteroids": asteroids,
    "metadata": {"count": len(asteroids), "coordinate_system": "heliocentric ecliptic (AU)"},
}

with open("sample_scene.json", "w", encoding="utf-8") as f:
    json.dump(scene, f, indent=2)
