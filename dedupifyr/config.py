"""
Configuration constants for dedupifyr.

This module contains all configurable settings including:
- Recognized image extensions
- Default comparison options
- Console commands and the request separator
"""

import os

# Image extensions considered during directory enumeration (lower-case)
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Other formats Pillow can decode
    '.ico', '.heic', '.heif', '.avif',
    '.pbm', '.pgm', '.ppm', '.pnm',
    '.tga', '.pcx', '.sgi',
}

# Extensions only readable when pillow-heif is installed
HEIF_EXTENSIONS = {'.heic', '.heif'}

# Default bias when neither the caller nor a prior session supplied one.
# The console help advertises 90.
DEFAULT_BIAS_PERCENT = 1 / 8

# Bias factor accepted from the user, as a percentage
BIAS_FACTOR_MIN = 0.0
BIAS_FACTOR_MAX = 100.0

# Only the first 1/16th of a file's bytes feed its digest
DIGEST_PREFIX_DIVISOR = 1 << 4

# Default number of parallel workers for loading and comparing
DEFAULT_WORKERS = 4

# Pixel difference calculator settings
PIXEL_SAMPLE_SIZE = 16
PIXEL_TOLERANCE = 3

# Perceptual hash size (16 -> 256-bit hash)
PHASH_SIZE = 16

# Flag names understood by the options builder
SEARCH_DEPTH_FLAG = 'search_depth'
BIAS_FACTOR_FLAG = 'bias_factor'

# Separates the two paths of a Single or Pair request
REQUEST_SEPARATOR = ','

# Console commands (compared lower-cased and trimmed)
TERMINATION_COMMANDS = {'quit', 'exit', 'q'}
HELP_COMMANDS = {'help', 'h', '?'}
OPTIONS_COMMANDS = {'options', 'o'}

PROMPT = 'dedupifyr> '

# User configuration file location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.dedupifyr')
