from __future__ import annotations

import unittest

from lazydu.controller.selection import SelectionSet
from lazydu.controller.viewport import ViewportState


class SelectionSetTests(unittest.TestCase):
    def test_toggle_adds_then_removes(self) -> None:
        selection = SelectionSet()
        self.assertTrue(selection.toggle("a", ViewportState(1, 0)))
        self.assertTrue(selection.is_selected("a"))
        self.assertEqual(selection.count(), 1)
        self.assertFalse(selection.toggle("a", ViewportState(1, 0)))
        self.assertFalse(selection.is_selected("a"))
        self.assertEqual(len(selection), 0)

    def test_snapshot_is_a_copy_of_the_viewport(self) -> None:
        selection = SelectionSet()
        viewport = ViewportState(4, 2)
        selection.toggle("x", viewport)
        viewport.cursor = 9
        self.assertEqual(selection.snapshot("x"), ViewportState(4, 2))

    def test_keys_keep_selection_order_and_clear_empties(self) -> None:
        selection = SelectionSet()
        for key in ("c", "a", "b"):
            selection.toggle(key, ViewportState())
        self.assertEqual(selection.keys(), ["c", "a", "b"])
        self.assertIn("a", selection)
        selection.discard("a")
        self.assertEqual(list(selection), ["c", "b"])
        selection.clear()
        self.assertEqual(selection.count(), 0)


if __name__ == "__main__":
    unittest.main()
