"""codestyle: opinionated style checks and fixes for Rust source trees."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
