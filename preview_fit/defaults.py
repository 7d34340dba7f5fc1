"""
Shared default values for preview_fit.

Keep this module free of heavy imports; config and geometry both read it.
"""

# Largest preview the Camera2 pipeline guarantees to stream.
MAX_PREVIEW_WIDTH = 1920
MAX_PREVIEW_HEIGHT = 1080
MAX_PREVIEW_SIZE = (MAX_PREVIEW_WIDTH, MAX_PREVIEW_HEIGHT)

DEFAULT_SKIP_FRONT_FACING = True
DEFAULT_LOG_LEVEL = "info"
LOG_LEVEL_NAMES = ("critical", "error", "warning", "info", "debug")

# Config-file section holding the preview settings.
PREFERENCE_SCOPE = "preview"
