"""GVT - minimal local version tracking.

Tracks files of a working directory as an append-only chain of
full-content versions that can be checked out at any time.
"""

__version__ = "1.0.0"
