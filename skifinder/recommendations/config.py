from __future__ import annotations

MIN_HEIGHT_CM = 100
MAX_HEIGHT_CM = 220

# Recommended ski length is the skier's height minus this many centimetres.
LENGTH_OFFSET_CM = 15

MAX_RESULTS = 3

# Progress-bar gradient, from a 0% match (amber) to a 100% match (emerald).
LOW_COLOR = (245, 158, 11)
HIGH_COLOR = (16, 185, 129)

# Ordered wizard steps. Option values are what the wizard posts and what the
# catalog tags are compared against (case- and whitespace-insensitive).
WIZARD_STEPS: list[dict] = [
    {"step": 1, "key": "gender", "options": ["male", "female", "unisex"]},
    {"step": 2, "key": "ability", "options": ["beginner", "intermediate", "advanced", "expert"]},
    {"step": 3, "key": "piste", "options": ["on-piste", "all-mountain", "off-piste"]},
    {"step": 4, "key": "speed", "options": ["slow", "moderate", "fast"]},
    {"step": 5, "key": "turns", "options": ["short", "medium", "long"]},
    {"step": 6, "key": "price", "options": ["0-300", "300-500", "500-800", "800-1200"]},
    {"step": 7, "key": "height", "min": MIN_HEIGHT_CM, "max": MAX_HEIGHT_CM, "unit": "cm"},
]
