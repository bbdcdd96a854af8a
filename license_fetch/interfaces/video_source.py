"""Abstract contract for media sources that feed a playback sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Restrictions:
    """Upper bounds on selectable video tracks. ``None`` means unrestricted."""

    max_width: Optional[int] = None
    max_height: Optional[int] = None
    max_bandwidth: Optional[int] = None

    def allows(self, track: "VideoTrack") -> bool:
        checks = (
            (self.max_width, track.width),
            (self.max_height, track.height),
            (self.max_bandwidth, track.bandwidth),
        )
        return all(limit is None or value <= limit for limit, value in checks)


@dataclass
class DrmSchemeInfo:
    """Everything a player needs to know about a source's DRM scheme."""

    key_system: str
    license_server_url: str
    with_credentials: bool = False
    restrictions: Restrictions = field(default_factory=Restrictions)


@dataclass
class VideoTrack:
    id: int
    bandwidth: int
    width: int
    height: int
    active: bool = False


@dataclass
class AudioTrack:
    id: int
    bandwidth: int
    lang: str
    active: bool = False


@dataclass
class TextTrack:
    id: int
    lang: str
    active: bool = False
    enabled: bool = False


class BaseVideoSource(ABC):
    """Contract for manifest-backed, offline or other media sources.

    Sources may use :class:`license_fetch.LicenseRequest` internally to fetch
    license responses; it is a collaborator, not a base class.
    """

    @abstractmethod
    def destroy(self) -> None:
        """Release every resource held by the source."""

    @abstractmethod
    async def attach(self, player: Any, video: Any) -> None:
        """Attach to a playback sink. Only valid after :meth:`load` completed."""

    @abstractmethod
    def get_drm_scheme_info(self) -> Optional[DrmSchemeInfo]:
        """Return DRM metadata, or ``None`` for unencrypted sources."""

    @abstractmethod
    async def load(self, preferred_language: str) -> None:
        """Load intermediate material such as manifests.

        ``preferred_language`` is an IETF RFC 5646 language tag.
        """

    @abstractmethod
    def get_video_tracks(self) -> List[VideoTrack]:
        ...

    @abstractmethod
    def get_audio_tracks(self) -> List[AudioTrack]:
        ...

    @abstractmethod
    def get_text_tracks(self) -> List[TextTrack]:
        ...

    @abstractmethod
    def get_resume_threshold(self) -> float:
        """Seconds of buffered data needed to resume after a stall."""

    @abstractmethod
    def select_video_track(self, track_id: int, immediate: bool) -> bool:
        """Select a video track by id; return ``True`` when it exists."""

    @abstractmethod
    def select_audio_track(self, track_id: int, immediate: bool) -> bool:
        """Select an audio track by id; return ``True`` when it exists."""

    @abstractmethod
    def select_text_track(self, track_id: int, immediate: bool) -> bool:
        """Select a text track by id; return ``True`` when it exists."""

    @abstractmethod
    def enable_text_track(self, enabled: bool) -> None:
        ...

    @abstractmethod
    def enable_adaptation(self, enabled: bool) -> None:
        ...

    @abstractmethod
    def set_restrictions(self, restrictions: Restrictions) -> None:
        """Ignore video tracks that exceed any of ``restrictions``."""
