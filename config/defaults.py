# Live-update panels
DEFAULT_UPDATE_INTERVAL_SECONDS = 30
DEFAULT_UPDATE_MINUTES = 15
MAX_UPDATE_MINUTES = 60
MIN_UPDATE_SPACING_SECONDS = 10

# Classrooms
DEFAULT_GROUP_COUNT = 1
MAX_GROUP_COUNT = 10
GROUP_BUTTONS_PER_ROW = 5
THREAD_AUTO_ARCHIVE_MINUTES = 1440

# Embeds
STATUS_COLOUR = 0x0099FF
LAB_PANEL_COLOUR = 0x00FF00
