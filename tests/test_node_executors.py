"""
Tests for Node Executors Registry.

Tests cover:
- Registration, lookup and unregistration
- Input count checks on execution
- Tag filtering
- Default registry with the eraser nodes
"""

import unittest

from PIL import Image

from IS_Libs.NodesLib.alpha_choke_node import create_alpha_choke_node
from IS_Libs.ProjStoreLib.node_executors import (
    NodeExecutorRegistry,
    NodeSpec,
    get_default_registry,
    register_default_executors,
)


def _first_input(node, inputs):
    return inputs[0]


class TestNodeExecutorRegistry(unittest.TestCase):
    """Test NodeExecutorRegistry basic functionality."""

    def setUp(self):
        """Create a fresh registry for each test."""
        self.registry = NodeExecutorRegistry()

    def test_registry_starts_empty(self):
        self.assertEqual(self.registry.list_node_types(), [])

    def test_register_returns_spec(self):
        spec = self.registry.register(
            "Invert Alpha", _first_input, description="Flip alpha", tags=["Alpha", "alpha", " Filter "]
        )

        self.assertIsInstance(spec, NodeSpec)
        self.assertEqual(spec.input_count, 1)
        self.assertEqual(spec.tags, ("alpha", "filter"))
        self.assertIs(self.registry.get_spec("Invert Alpha"), spec)
        self.assertIs(self.registry.get_executor("Invert Alpha"), _first_input)

    def test_register_strips_whitespace(self):
        self.registry.register("  Choke  ", _first_input)
        self.assertTrue(self.registry.has_executor("Choke"))

    def test_register_empty_node_type_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register("   ", _first_input)

    def test_register_non_callable_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register("BadNode", "not callable")

    def test_register_negative_input_count_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register("BadNode", _first_input, input_count=-1)

    def test_register_duplicate_node_type_raises_error(self):
        self.registry.register("Node", _first_input)
        with self.assertRaises(RuntimeError):
            self.registry.register("Node", _first_input)

    def test_get_nonexistent_spec_lists_available(self):
        self.registry.register("Alpha Choke", _first_input)

        with self.assertRaises(KeyError) as ctx:
            self.registry.get_spec("Missing")
        self.assertIn("Alpha Choke", str(ctx.exception))

    def test_unregister(self):
        self.registry.register("ToRemove", _first_input)

        self.assertTrue(self.registry.unregister("ToRemove"))
        self.assertFalse(self.registry.has_executor("ToRemove"))
        self.assertFalse(self.registry.unregister("ToRemove"))

    def test_list_node_types_sorted(self):
        for name in ("Zebra", "Alpha", "Beta"):
            self.registry.register(name, _first_input)

        self.assertEqual(self.registry.list_node_types(), ["Alpha", "Beta", "Zebra"])

    def test_filter_by_tag_case_insensitive(self):
        self.registry.register("Eraser", _first_input, tags=["ALPHA", "Eraser"])
        self.registry.register("Blur", _first_input, tags=["filter"])

        self.assertEqual(self.registry.filter_by_tag("alpha"), ["Eraser"])
        self.assertEqual(self.registry.filter_by_tag("FILTER"), ["Blur"])
        self.assertEqual(self.registry.filter_by_tag("auto"), [])


class TestNodeExecution(unittest.TestCase):
    """Test dispatching through the registry."""

    def setUp(self):
        self.registry = NodeExecutorRegistry()
        self.registry.register("Passthrough", _first_input)

    def test_execute_passes_node_and_inputs(self):
        def scale(node, inputs):
            return node["factor"] * inputs[0]

        self.registry.register("Scale", scale)

        self.assertEqual(self.registry.execute("Scale", {"factor": 3}, [4]), 12)

    def test_execute_checks_input_count(self):
        with self.assertRaises(ValueError):
            self.registry.execute("Passthrough", {}, [])
        with self.assertRaises(ValueError):
            self.registry.execute("Passthrough", {}, ["a", "b"])

    def test_input_count_check_runs_before_executor(self):
        calls = []
        self.registry.register("Recorder", lambda node, inputs: calls.append(inputs))

        with self.assertRaises(ValueError):
            self.registry.execute("Recorder", {}, [])
        self.assertEqual(calls, [])

    def test_zero_input_node(self):
        self.registry.register("Source", lambda node, inputs: "made", input_count=0)
        self.assertEqual(self.registry.execute("Source", {}, []), "made")

    def test_execute_missing_executor_raises_error(self):
        with self.assertRaises(KeyError):
            self.registry.execute("Missing", {}, [1])

    def test_execute_node_uses_type_field(self):
        result = self.registry.execute_node({"id": "n1", "type": "Passthrough"}, ["image"])
        self.assertEqual(result, "image")

    def test_execute_node_without_type(self):
        with self.assertRaises(KeyError):
            self.registry.execute_node({"id": "n1"}, ["image"])


class TestDefaultRegistry(unittest.TestCase):
    """Test default registry singleton and built-in nodes."""

    def test_get_default_registry_singleton(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_register_default_executors(self):
        registry = NodeExecutorRegistry()
        register_default_executors(registry)

        self.assertEqual(
            registry.list_node_types(),
            ["Alpha Choke", "Magic Eraser", "Perimeter Background Removal"],
        )

    def test_eraser_nodes_tagged(self):
        registry = NodeExecutorRegistry()
        register_default_executors(registry)

        self.assertEqual(
            registry.filter_by_tag("eraser"),
            ["Magic Eraser", "Perimeter Background Removal"],
        )
        self.assertEqual(len(registry.filter_by_tag("alpha")), 3)

    def test_every_eraser_node_takes_one_image(self):
        registry = NodeExecutorRegistry()
        register_default_executors(registry)

        for node_type in registry.list_node_types():
            self.assertEqual(registry.get_spec(node_type).input_count, 1)

    def test_execute_alpha_choke_node(self):
        registry = NodeExecutorRegistry()
        register_default_executors(registry)
        image = Image.new("RGBA", (5, 5), (255, 0, 0, 255))
        image.putpixel((2, 2), (255, 0, 0, 0))

        result = registry.execute_node(create_alpha_choke_node("c", radius=1), [image])

        self.assertEqual(result.getpixel((1, 1))[3], 0)
        self.assertEqual(result.getpixel((0, 0))[3], 255)

    def test_eraser_node_rejects_two_images(self):
        registry = NodeExecutorRegistry()
        register_default_executors(registry)
        image = Image.new("RGBA", (2, 2))

        with self.assertRaises(ValueError):
            registry.execute_node(create_alpha_choke_node("c"), [image, image])


if __name__ == "__main__":
    unittest.main()
