"""Derive a comparison-ready identity from a catalog track."""

from dataclasses import dataclass

from song_recommender.schemas import CatalogTrack


@dataclass(slots=True, frozen=True)
class CanonicalIdentity:
    artist: str
    album: str
    track: str

    @property
    def query_string(self) -> str:
        """Search string used against the secondary catalog."""

        return f"{self.track} {self.artist} {self.album}"


def extract_canonical_identity(track: CatalogTrack) -> CanonicalIdentity:
    """Return the identity of ``track`` using its first listed artist."""

    return CanonicalIdentity(
        artist=track.artists[0].name,
        album=track.album.name,
        track=track.name,
    )
