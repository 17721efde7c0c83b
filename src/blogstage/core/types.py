"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/posts/2014-07-16-bem/")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
