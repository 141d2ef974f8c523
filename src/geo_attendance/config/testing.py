import os

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PHOTO_STORAGE_DIR = os.getenv("PHOTO_STORAGE_DIR", "/tmp/geo_attendance_selfies")

AUTO_INIT_DB = False
AUTO_SEED_DB = False
