"""
Tests for the editable eraser layer stack.
"""

import unittest

from PIL import Image

from IS_Libs.EraserLib.eraser_models import EraserLayer, ProcessingParams
from IS_Libs.EraserLib.layer_stack import LayerStack


class TestLayerStack(unittest.TestCase):
    """Test layer management."""

    def setUp(self):
        self.stack = LayerStack()

    def test_starts_with_single_default_layer(self):
        self.assertEqual(len(self.stack), 1)
        self.assertEqual(self.stack.active_layer_id, "1")
        self.assertEqual(self.stack.active_layer, EraserLayer(id="1"))

    def test_add_layer_selects_it(self):
        layer = self.stack.add_layer()

        self.assertEqual(len(self.stack), 2)
        self.assertEqual(self.stack.active_layer_id, layer.id)
        self.assertNotEqual(layer.id, "1")

    def test_added_layers_have_unique_ids(self):
        ids = {self.stack.add_layer().id for _ in range(5)}
        self.assertEqual(len(ids), 5)

    def test_remove_active_selects_last(self):
        first = self.stack.add_layer()
        second = self.stack.add_layer()
        self.stack.select_layer(first.id)

        self.stack.remove_layer(first.id)

        self.assertEqual([layer.id for layer in self.stack.layers], ["1", second.id])
        self.assertEqual(self.stack.active_layer_id, second.id)

    def test_remove_inactive_keeps_selection(self):
        extra = self.stack.add_layer()
        self.stack.select_layer("1")

        self.stack.remove_layer(extra.id)

        self.assertEqual(self.stack.active_layer_id, "1")

    def test_remove_last_layer_resets(self):
        self.stack.update_layer("1", color=(1, 2, 3), tolerance=60)

        self.stack.remove_layer("1")

        self.assertEqual(self.stack.layers, [EraserLayer(id="1")])
        self.assertEqual(self.stack.active_layer_id, "1")

    def test_remove_unknown_raises(self):
        with self.assertRaises(KeyError):
            self.stack.remove_layer("missing")

    def test_update_layer(self):
        updated = self.stack.update_layer("1", tolerance=45, feather=0)

        self.assertEqual(updated.tolerance, 45)
        self.assertEqual(updated.feather, 0)
        self.assertEqual(self.stack.active_layer, updated)

    def test_update_layer_validates(self):
        with self.assertRaises(ValueError):
            self.stack.update_layer("1", tolerance=150)
        with self.assertRaises(ValueError):
            self.stack.update_layer("1", id="other")

    def test_pick_color_sets_active_layer(self):
        image = Image.new("RGB", (4, 4), (12, 34, 56))
        self.stack.add_layer()

        layer = self.stack.pick_color(image, 2, 2)

        self.assertEqual(layer.color, (12, 34, 56))
        self.assertIsNone(self.stack.layers[0].color)

    def test_to_params(self):
        self.stack.update_active_layer(color=(0, 0, 0))

        params = self.stack.to_params(choke=2)

        self.assertIsInstance(params, ProcessingParams)
        self.assertEqual(params.choke, 2)
        self.assertEqual(len(params.active_layers), 1)

    def test_stale_selection_falls_back_to_first(self):
        self.stack.active_layer_id = "gone"
        self.assertEqual(self.stack.active_layer.id, "1")

    def test_init_from_layers(self):
        stack = LayerStack([EraserLayer(id="a"), EraserLayer(id="b")])
        self.assertEqual(stack.active_layer_id, "a")


if __name__ == "__main__":
    unittest.main()
