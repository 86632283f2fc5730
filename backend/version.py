"""
Cosmic Garden Version Management
"""

VERSION = "1.0.0"
BUILD_NUMBER = "1"
CODENAME = "FirstBloom"

__version__ = VERSION


def get_version_info():
    """Version details reported by the health probe"""
    return {
        "version": VERSION,
        "build": BUILD_NUMBER,
        "codename": CODENAME,
        "full_version": f"{VERSION}.{BUILD_NUMBER}",
        "display_name": f"Cosmic Garden v{VERSION} '{CODENAME}'",
    }
