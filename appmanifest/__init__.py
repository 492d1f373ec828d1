"""
appmanifest
Build Apple software-update app manifests (chunked MD5 plists) for .pkg files.
"""

import os

__version__ = "0.1.0"

# Resolved once at startup; release builds inject these through the environment.
VERSION = os.environ.get("APPMANIFEST_VERSION", __version__)
GIT_HASH = os.environ.get("APPMANIFEST_GIT_HASH", "unknown")
