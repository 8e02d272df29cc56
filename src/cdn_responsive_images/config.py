"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("CDN_IMAGES_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

DB_PATH = PROJECT_ROOT / "cdn_responsive_images.duckdb"
UPLOADS_DIR = Path(os.environ.get("CDN_IMAGES_UPLOADS_DIR", PROJECT_ROOT / "uploads"))

LOG_LEVEL = os.environ.get("CDN_IMAGES_LOG_LEVEL", "ERROR")

# Cloudinary API
CLOUDINARY_CLOUD_NAME = os.environ.get("CLOUDINARY_CLOUD_NAME", "")
CLOUDINARY_API_KEY = os.environ.get("CLOUDINARY_API_KEY", "")
CLOUDINARY_API_SECRET = os.environ.get("CLOUDINARY_API_SECRET", "")
CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"

# Path segment every delivery URL of an uploaded image contains;
# transformations are inserted right after it.
CDN_UPLOAD_MARKER = "/image/upload"

# Responsive breakpoints requested at upload time
BREAKPOINT_SETTINGS: dict[str, int | bool] = {
    "create_derived": False,
    "bytes_step": 20000,
    "min_width": 200,
    "max_width": 1000,
    "max_images": 20,
}

# Built-in intermediate sizes and their site-wide default options.
# Widths/heights of 0 leave that dimension unconstrained.
DEFAULT_SIZE_NAMES = ["thumbnail", "medium", "medium_large", "large"]
DEFAULT_SIZE_OPTIONS: dict[str, int] = {
    "thumbnail_size_w": 150,
    "thumbnail_size_h": 150,
    "thumbnail_crop": 1,
    "medium_size_w": 300,
    "medium_size_h": 300,
    "medium_large_size_w": 768,
    "medium_large_size_h": 0,
    "large_size_w": 1024,
    "large_size_h": 1024,
}
