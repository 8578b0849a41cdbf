"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Paths are relative to the current working directory, which is the project
being built (the directory holding `src/`).
"""

from pathlib import Path

# Core Names
PACKAGE_NAME = "frontbuild"

# Source and output trees
SRC_DIR = "src/"
DIST_DIR = "dist/"

# Logs directories
LOGS_DIR: Path = Path("logs")

# Dev server
SERVER_HOST = "localhost"
SERVER_PORT = 3000
LIVERELOAD_PORT = 35729

# Autoprefixer
AUTOPREFIXER_BROWSERS = "last 10 version"
AUTOPREFIXER_GRID = "autoplace"

# Image optimization
JPEG_QUALITY = 75
JPEG_PROGRESSIVE = True
PNG_COMPRESS_LEVEL = 9
GIF_INTERLACED = True

# Styles are concatenated into a single bundle
STYLES_BUNDLE_NAME = "main.min.css"

# Babel
BABEL_PRESET = "@babel/preset-env"
