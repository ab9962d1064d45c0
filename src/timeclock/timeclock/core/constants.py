"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

SESSION_KEY = "employeeToken"

DEFAULT_HTTP_TIMEOUT = 15
DEFAULT_CAMERA_WIDTH = 640
DEFAULT_CAMERA_HEIGHT = 480
PHOTO_CONTENT_TYPE = "image/jpeg"

MSG_MISSING_CREDENTIALS = "Please provide both email and password."
MSG_LOGIN_OK = "Login successful"
MSG_LOGIN_FAILED = "Login failed"
MSG_LOGGED_OUT = "Logged out"
MSG_NOT_LOGGED_IN = "Please log in first."
MSG_SESSION_EXPIRED = "Your session has expired. Please log in again."
MSG_NO_RECORDS = "No attendance records found"
MSG_HISTORY_FAILED = "Could not load attendance history"
MSG_BUSY = "Another action is still in progress."
MSG_INVALID_TOKEN = "Invalid token"
