"""Combinators - merging time streams by absolute time."""

# Import stream_ext to register TimeStream.merge and TimeStream.merge_join
from . import stream_ext  # noqa: F401
from .ops import merge, merge_all, merge_join
from .stream_ext import merge_join_streams, merge_streams

__all__ = [
    "merge",
    "merge_join",
    "merge_all",
    "merge_streams",
    "merge_join_streams",
]
