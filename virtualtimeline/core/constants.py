"""System-wide constants for the virtual timeline."""

# Navigation margin (seconds) used when skipping between cut points, so a
# skip issued right on a boundary does not land on that same boundary
NAVIGATION_MARGIN_SECONDS = 0.5

# Default poll cadence for the playback loop (~one display frame)
DEFAULT_POLL_INTERVAL_SECONDS = 1.0 / 60.0

DEFAULT_TAG_COLOR = "#9e9e9e"
