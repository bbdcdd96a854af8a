"""Ports implemented by transports and media sources."""

from .transport import ITransportClient, TransportResponse
from .video_source import (
    AudioTrack,
    BaseVideoSource,
    DrmSchemeInfo,
    Restrictions,
    TextTrack,
    VideoTrack,
)

__all__ = [
    "AudioTrack",
    "BaseVideoSource",
    "DrmSchemeInfo",
    "ITransportClient",
    "Restrictions",
    "TextTrack",
    "TransportResponse",
    "VideoTrack",
]
