"""Unit tests for app.services.catalog (in-memory filter/sort) and the mock beat generator."""

import unittest
from datetime import UTC, datetime, timedelta

from app.schemas.catalog import BeatItem, CatalogFilters
from app.services.catalog import (
    apply_catalog_filters,
    facet_options,
    filter_beats,
    sort_beats,
)
from app.services.mock_beats import make_mock_beats

NOW = datetime(2026, 10, 1, tzinfo=UTC)


def _beat(beat_id: str, title: str = "Beat", **kwargs: object) -> BeatItem:
    """Build a minimal BeatItem for tests."""
    defaults: dict[str, object] = {"created_at": NOW}
    defaults.update(kwargs)
    return BeatItem(id=beat_id, title=title, **defaults)


class TestSpecExamples(unittest.TestCase):
    """Two beats: Trap at 80 bpm and House at 170 bpm."""

    def setUp(self) -> None:
        self.trap = _beat("1", bpm=80, genre="Trap")
        self.house = _beat("2", bpm=170, genre="House")
        self.beats = [self.trap, self.house]

    def test_bpm_min(self) -> None:
        out = apply_catalog_filters(self.beats, CatalogFilters(bpm_min=100))
        self.assertEqual(out, [self.house])

    def test_genre(self) -> None:
        out = apply_catalog_filters(self.beats, CatalogFilters(genre="Trap"))
        self.assertEqual(out, [self.trap])

    def test_bpm_desc(self) -> None:
        out = apply_catalog_filters(self.beats, CatalogFilters(sort="bpmDesc"))
        self.assertEqual(out, [self.house, self.trap])

    def test_no_filters_keeps_everything_in_order(self) -> None:
        self.assertEqual(apply_catalog_filters(self.beats, CatalogFilters()), self.beats)


class TestFilterBeats(unittest.TestCase):
    def setUp(self) -> None:
        self.a = _beat("a", "Night Ride", bpm=140, genre="Drill", type="Premium",
                       instrument="808", key="Am", mood="Dark")
        self.b = _beat("b", "Sunset", bpm=95, genre="R&B", type="Standard",
                       instrument="Piano", key="Cm", mood="Smooth")
        self.c = _beat("c", "No Tempo", bpm=None, genre="Afro")
        self.beats = [self.a, self.b, self.c]

    def test_query_is_case_insensitive_across_fields(self) -> None:
        self.assertEqual(filter_beats(self.beats, CatalogFilters(q="night")), [self.a])
        self.assertEqual(filter_beats(self.beats, CatalogFilters(q="SMOOTH")), [self.b])
        self.assertEqual(filter_beats(self.beats, CatalogFilters(q="piano")), [self.b])
        self.assertEqual(filter_beats(self.beats, CatalogFilters(q="am")), [self.a])

    def test_filters_are_anded(self) -> None:
        out = filter_beats(self.beats, CatalogFilters(genre="Drill", key="Cm"))
        self.assertEqual(out, [])
        out = filter_beats(self.beats, CatalogFilters(genre="R&B", type="Standard", instrument="Piano"))
        self.assertEqual(out, [self.b])

    def test_exact_match_for_select_fields(self) -> None:
        self.assertEqual(filter_beats(self.beats, CatalogFilters(genre="drill")), [])

    def test_missing_bpm_compares_as_zero(self) -> None:
        self.assertEqual(filter_beats(self.beats, CatalogFilters(bpm_max=50)), [self.c])
        self.assertNotIn(self.c, filter_beats(self.beats, CatalogFilters(bpm_min=1)))

    def test_bpm_range_inclusive(self) -> None:
        out = filter_beats(self.beats, CatalogFilters(bpm_min=95, bpm_max=140))
        self.assertEqual(out, [self.a, self.b])

    def test_zero_bpm_bound_is_unset(self) -> None:
        self.assertEqual(filter_beats(self.beats, CatalogFilters(bpm_min=0)), self.beats)


class TestSortBeats(unittest.TestCase):
    def test_asc_is_stable_and_missing_bpm_first(self) -> None:
        x = _beat("x", bpm=100)
        y = _beat("y", bpm=None)
        z = _beat("z", bpm=100)
        self.assertEqual(sort_beats([x, y, z], "bpmAsc"), [y, x, z])

    def test_desc_is_stable(self) -> None:
        x = _beat("x", bpm=100)
        z = _beat("z", bpm=100)
        w = _beat("w", bpm=120)
        self.assertEqual(sort_beats([x, z, w], "bpmDesc"), [w, x, z])

    def test_new_and_unknown_keep_input_order(self) -> None:
        beats = [_beat("1", bpm=170), _beat("2", bpm=80)]
        self.assertEqual(sort_beats(beats, "new"), beats)
        self.assertEqual(sort_beats(beats, "title"), beats)

    def test_input_not_mutated(self) -> None:
        beats = [_beat("1", bpm=170), _beat("2", bpm=80)]
        sort_beats(beats, "bpmAsc")
        self.assertEqual([b.id for b in beats], ["1", "2"])


class TestFacetOptions(unittest.TestCase):
    def test_distinct_sorted_non_empty(self) -> None:
        beats = [
            _beat("1", genre="Trap", key="Am"),
            _beat("2", genre="House", key="Am", type="Premium"),
            _beat("3", genre="Trap", instrument=""),
        ]
        options = facet_options(beats)
        self.assertEqual(options.genres, ["House", "Trap"])
        self.assertEqual(options.keys, ["Am"])
        self.assertEqual(options.types, ["Premium"])
        self.assertEqual(options.instruments, [])


class TestMockBeats(unittest.TestCase):
    def test_shape_and_order(self) -> None:
        beats = make_mock_beats(14, now=NOW)
        self.assertEqual(len(beats), 14)
        self.assertEqual(beats[0].id, "mock_1")
        self.assertEqual(beats[0].title, "Verlein Drop 01")
        self.assertEqual(beats[13].title, "Verlein Drop 14")
        self.assertEqual(beats[0].bpm, 80)
        self.assertEqual(beats[1].bpm, 87)
        self.assertEqual(beats[13].bpm, 80 + (13 * 7) % 91)
        self.assertEqual(beats[0].genre, "Trap")
        self.assertEqual(beats[6].genre, "Trap")
        self.assertEqual(beats[3].created_at, NOW - timedelta(days=3))
        self.assertTrue(all(b.preview_url is None for b in beats))

    def test_bpm_stays_in_range(self) -> None:
        bpms = [b.bpm for b in make_mock_beats(200, now=NOW)]
        self.assertGreaterEqual(min(bpms), 80)
        self.assertLessEqual(max(bpms), 170)


if __name__ == "__main__":
    unittest.main()
