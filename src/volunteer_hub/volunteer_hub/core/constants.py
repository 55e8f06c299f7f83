"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ADMIN_USER_ID = "admin"
ADMIN_NAME = "Admin User"
DEFAULT_ADMIN_PASSWORD = "admin"

USER_ID_PREFIX = "user"
EVENT_ID_PREFIX = "event"
PHOTO_ID_PREFIX = "photo"
MESSAGE_ID_PREFIX = "msg"

MIN_PASSWORD_LENGTH = 1
