"""kilo: a small terminal text editor."""

import logging

__version__ = "0.0.1"

logging.getLogger(__name__).addHandler(logging.NullHandler())
