"""
InternList-specific constants.
"""

BASE_URL = "https://www.intern-list.com/"

# Only completed files with this suffix in DOWNLOAD_DIR count as an export
EXPORT_SUFFIX = ".csv"
PARTIAL_SUFFIXES = (".crdownload", ".part", ".tmp", ".download")

# Fraction of the visible grid height scrolled per iteration; < 1 keeps an
# overlap so rows straddling the fold are seen whole at least once
SCROLL_STEP_RATIO = 0.8
WHEEL_FALLBACK_PX = 800
