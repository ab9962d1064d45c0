import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Backend attendance/auth API (employee routes)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api/employee")

# Image host: unsigned upload with a fixed preset
UPLOAD_URL = os.getenv("UPLOAD_URL", "https://api.cloudinary.com/v1_1/demo/image/upload")
UPLOAD_PRESET = os.getenv("UPLOAD_PRESET", "attendance_selfies")

SESSION_FILE = os.getenv("SESSION_FILE", str(Path.home() / ".timeclock" / "session.json"))

CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
CAMERA_WIDTH = int(os.getenv("CAMERA_WIDTH", "640"))
CAMERA_HEIGHT = int(os.getenv("CAMERA_HEIGHT", "480"))

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

PANEL_HOST = os.getenv("PANEL_HOST", "127.0.0.1")
PANEL_PORT = int(os.getenv("PANEL_PORT", "8080"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
