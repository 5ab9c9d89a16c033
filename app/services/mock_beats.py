"""Synthetic catalog for development (GET /beats?mock=N outside prod)."""

from datetime import UTC, datetime, timedelta

from app.schemas.catalog import BeatItem

GENRES = ("Trap", "Reggaeton", "Drill", "R&B", "Afro", "House")
TYPES = ("Premium", "Exclusive", "Standard")
INSTRUMENTS = ("Piano", "Guitar", "Synth", "Strings", "808", "Pads")
KEYS = ("Am", "Bm", "Cm", "Dm", "Em", "Fm", "Gm", "A#m")
MOODS = ("Dark", "Smooth", "Aggressive", "Chill", "Cinematic", "Bounce")


def make_mock_beats(count: int, now: datetime | None = None) -> list[BeatItem]:
    """
    Deterministic beats, newest first: beat i is created i days before now,
    bpm cycles through 80..170 and the attributes cycle through fixed lists.
    """
    now = now or datetime.now(UTC)
    return [
        BeatItem(
            id=f"mock_{i + 1}",
            title=f"Verlein Drop {i + 1:02d}",
            bpm=80 + (i * 7) % 91,
            genre=GENRES[i % len(GENRES)],
            type=TYPES[i % len(TYPES)],
            instrument=INSTRUMENTS[i % len(INSTRUMENTS)],
            key=KEYS[i % len(KEYS)],
            mood=MOODS[i % len(MOODS)],
            preview_url=None,
            created_at=now - timedelta(days=i),
        )
        for i in range(count)
    ]
