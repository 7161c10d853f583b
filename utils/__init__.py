"""
Terminal helpers shared by the TextScape command-line tools.
"""

from utils.spinner import Spinner

__all__ = ["Spinner"]
