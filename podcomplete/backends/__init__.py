"""
Query backends for podcomplete.
"""

from .podman import PodmanBackend
