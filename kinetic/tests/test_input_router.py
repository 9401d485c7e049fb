import unittest

import pygame

from kinetic.input_router import InputRouter
from kinetic.settings import DemoCfg
from kinetic.ui.list_view import ListView
from kinetic.ui.scrollbar import Scrollbar


class TestListView(unittest.TestCase):
    def setUp(self):
        self.view = ListView(DemoCfg(row_height=50, row_count=40, control_every=10), pygame.Rect(0, 100, 300, 500))

    def test_content_height(self):
        self.assertEqual(self.view.content_height(), 2000)

    def test_row_at_follows_offset(self):
        self.assertEqual(self.view.row_at((10, 100)), 0)
        self.assertEqual(self.view.row_at((10, 149)), 0)
        self.assertEqual(self.view.row_at((10, 150)), 1)
        self.view.offset = 450
        self.assertEqual(self.view.row_at((10, 100)), 9)
        self.assertIsNone(self.view.row_at((10, 50)))

    def test_overscrolled_gap_has_no_row(self):
        self.view.offset = -30
        self.assertIsNone(self.view.row_at((10, 110)))

    def test_control_rows(self):
        self.assertFalse(self.view.hit_test((10, 100)))
        # row 9 is the first control
        self.assertTrue(self.view.hit_test((10, 100 + 9 * 50 + 5)))


class TestInputRouter(unittest.TestCase):
    def setUp(self):
        self.view = ListView(DemoCfg(row_height=50, row_count=40, control_every=10), pygame.Rect(0, 0, 300, 500))
        self.router = InputRouter(container=self.view, controls=self.view)

    def test_press_on_content_scrolls(self):
        self.assertTrue(self.router.interaction_allowed((20, 20)))

    def test_press_on_control_is_suppressed(self):
        pos = (20, 9 * 50 + 10)
        self.assertTrue(self.router.on_control(pos))
        self.assertFalse(self.router.interaction_allowed(pos))

    def test_press_outside_container(self):
        self.assertFalse(self.router.interaction_allowed((400, 20)))

    def test_no_collaborators(self):
        router = InputRouter()
        self.assertFalse(router.interaction_allowed((0, 0)))
        self.assertFalse(router.on_control((0, 0)))


class TestScrollbarGeometry(unittest.TestCase):
    def test_no_overflow_fills_track(self):
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 300, 0, 0, 24), (0, 400))

    def test_thumb_tracks_offset(self):
        # a quarter of the content is visible
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, 0, 1500, 24), (0, 100))
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, 1500, 1500, 24), (300, 100))
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, 750, 1500, 24), (150, 100))

    def test_overscroll_shrinks_thumb(self):
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, -40, 1500, 24), (0, 60))
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, 1540, 1500, 24), (340, 60))
        self.assertEqual(Scrollbar.thumb_geometry(400, 500, 2000, -500, 1500, 24), (0, 24))


if __name__ == "__main__":
    unittest.main()
