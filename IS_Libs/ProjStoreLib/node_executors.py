"""
Node Executors Registry.

Maps eraser node types ("Magic Eraser", "Alpha Choke", ...) to the functions
that execute them. Every node takes a fixed number of input images, which the
registry checks before dispatching, so executors only ever see well-formed
input lists.

Classes:
    NodeSpec: Executor plus description, input arity and tags of one node type
    NodeExecutorRegistry: Registry for node executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register the built-in eraser node executors
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import logging

from IS_Libs.constants import (
    NODE_TYPE_ALPHA_CHOKE,
    NODE_TYPE_MAGIC_ERASER,
    NODE_TYPE_PERIMETER_REMOVAL,
)

logger = logging.getLogger(__name__)

# Executors take (node_dict, inputs) and return the processed image
ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]


@dataclass(frozen=True)
class NodeSpec:
    """A registered node type.

    Attributes:
        node_type: Name stored in the node dict's "type" field
        executor: Callable accepting (node_dict, inputs)
        description: Human-readable description
        input_count: Exact number of input images the node consumes
        tags: Lowercase grouping tags (e.g. "alpha", "eraser")
    """
    node_type: str
    executor: ExecutorFunction
    description: str = ""
    input_count: int = 1
    tags: Tuple[str, ...] = ()


class NodeExecutorRegistry:
    """
    Registry for eraser node executors.

    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Magic Eraser", execute_magic_eraser_node, tags=["eraser"])
        >>> result = registry.execute_node(create_magic_eraser_node("e1"), [image])
    """

    def __init__(self):
        self._specs: Dict[str, NodeSpec] = {}

    def register(
        self,
        node_type: str,
        executor: ExecutorFunction,
        description: str = "",
        input_count: int = 1,
        tags: Optional[Sequence[str]] = None,
    ) -> NodeSpec:
        """
        Register a node executor.

        Raises:
            ValueError: If node_type is empty, executor is not callable or
                        input_count is negative
            RuntimeError: If node_type is already registered
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")
        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")
        if input_count < 0:
            raise ValueError(f"input_count must be >= 0, got {input_count}")
        if node_type in self._specs:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        spec = NodeSpec(
            node_type=node_type,
            executor=executor,
            description=str(description),
            input_count=int(input_count),
            tags=tuple(sorted({str(t).strip().lower() for t in tags or ()})),
        )
        self._specs[node_type] = spec
        logger.debug(f"Registered executor for node type: {node_type}")
        return spec

    def unregister(self, node_type: str) -> bool:
        """Remove a node type; False if it was not registered."""
        removed = self._specs.pop(str(node_type).strip(), None)
        if removed is not None:
            logger.debug(f"Unregistered executor for node type: {removed.node_type}")
        return removed is not None

    def has_executor(self, node_type: str) -> bool:
        return str(node_type).strip() in self._specs

    def get_spec(self, node_type: str) -> NodeSpec:
        """
        Look up a registered node type.

        Raises:
            KeyError: If node_type is not registered (lists the known types)
        """
        node_type = str(node_type).strip()
        try:
            return self._specs[node_type]
        except KeyError:
            available = ", ".join(self.list_node_types())
            raise KeyError(
                f"No executor registered for node type '{node_type}'. "
                f"Available types: {available}"
            ) from None

    def get_executor(self, node_type: str) -> ExecutorFunction:
        return self.get_spec(node_type).executor

    def execute(self, node_type: str, node_dict: Dict[str, Any], inputs: List[Any]) -> Any:
        """
        Run a node after checking it received the expected number of inputs.

        Raises:
            KeyError: If node_type is not registered
            ValueError: If len(inputs) differs from the node's input_count
        """
        spec = self.get_spec(node_type)
        inputs = list(inputs)
        if len(inputs) != spec.input_count:
            raise ValueError(
                f"Node type '{spec.node_type}' expects {spec.input_count} "
                f"input(s), got {len(inputs)}"
            )
        return spec.executor(node_dict, inputs)

    def execute_node(self, node_dict: Dict[str, Any], inputs: List[Any]) -> Any:
        """Run a node dict created by one of the create_*_node helpers."""
        if "type" not in node_dict:
            raise KeyError(f"Node {node_dict.get('id', '?')!r} has no 'type'")
        return self.execute(node_dict["type"], node_dict, inputs)

    def list_node_types(self) -> List[str]:
        return sorted(self._specs)

    def filter_by_tag(self, tag: str) -> List[str]:
        """Sorted node types carrying a tag (case-insensitive)."""
        tag = str(tag).strip().lower()
        return sorted(name for name, spec in self._specs.items() if tag in spec.tags)


_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """Global registry holding the built-in eraser nodes, created on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """Register the Magic Eraser, Alpha Choke and Perimeter Background Removal nodes."""
    from IS_Libs.NodesLib.magic_eraser_node import execute_magic_eraser_node
    from IS_Libs.NodesLib.alpha_choke_node import execute_alpha_choke_node
    from IS_Libs.NodesLib.perimeter_removal_node import execute_perimeter_removal_node

    registry.register(
        NODE_TYPE_MAGIC_ERASER,
        execute_magic_eraser_node,
        description="Remove background colors with chroma-key layers and a global choke",
        tags=["alpha", "eraser"],
    )
    registry.register(
        NODE_TYPE_ALPHA_CHOKE,
        execute_alpha_choke_node,
        description="Erode the alpha channel to trim halos and fringes",
        tags=["alpha", "filter"],
    )
    registry.register(
        NODE_TYPE_PERIMETER_REMOVAL,
        execute_perimeter_removal_node,
        description="Detect the border color and make it transparent",
        tags=["alpha", "eraser", "auto"],
    )

    logger.info("Registered default node executors")
