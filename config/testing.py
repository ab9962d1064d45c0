import os
import tempfile
from pathlib import Path

SECRET_KEY = "test-secret"

API_BASE_URL = "http://backend.test/api/employee"

UPLOAD_URL = "http://images.test/upload"
UPLOAD_PRESET = "test-preset"

SESSION_FILE = os.getenv("SESSION_FILE", str(Path(tempfile.gettempdir()) / "timeclock-test" / "session.json"))

CAMERA_INDEX = 0
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480

HTTP_TIMEOUT = 2.0

PANEL_HOST = "127.0.0.1"
PANEL_PORT = 8080

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_FILE = None
