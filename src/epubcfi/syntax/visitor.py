"""Visitor pattern for AST traversal.

Enables consumers to walk a parsed CFI without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name (snake_case).
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Type Parameters:
- ASTVisitor[T] is generic over return type T
- ASTVisitor (no type param) defaults to T=ASTNode

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import Field, fields
from typing import ClassVar

from epubcfi.constants import MAX_TRAVERSAL_DEPTH
from epubcfi.core.depth_guard import DepthGuard

from .ast import ASTNode

__all__ = ["ASTVisitor"]


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing the CFI AST.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Uses class-level dispatch table:
    - Dispatch table built once per class definition via __init_subclass__
    - Falls back to instance-level cache for bound methods

    Example:
        >>> class StepCollector(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.sizes = []
        ...
        ...     def visit_Step(self, node: Step) -> ASTNode:
        ...         self.sizes.append(node.size)
        ...         return self.generic_visit(node)
        ...
        >>> collector = StepCollector()
        >>> collector.visit(parse_fragment("epubcfi(/6/4!/2)"))
        >>> collector.sizes
        [6, 4, 2]
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    # Class-level cache for dataclass fields per node type
    _fields_cache: ClassVar[dict[type, tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                # "visit_Step" -> "Step"
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_TRAVERSAL_DEPTH).
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_TRAVERSAL_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node, dispatching to visit_<NodeType> or generic_visit."""
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        node_type_name = node_type.__name__
        if node_type_name in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[node_type_name])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def _get_node_fields(self, node_type: type) -> tuple[Field[object], ...]:
        """Get cached dataclass fields for a node type."""
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = fields(node_type)
        return ASTVisitor._fields_cache[node_type]

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor (traverses children with depth protection).

        Children are visited in field order, so steps come before the tail
        of a local path and a range's start before its end.

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            for field in self._get_node_fields(type(node)):
                value = getattr(node, field.name)

                if value is None or isinstance(value, (str, int, float, bool)):
                    continue

                # Tuples hold steps or parameters; spatial ranges hold floats
                if isinstance(value, tuple):
                    for item in value:
                        if hasattr(item, "__dataclass_fields__"):
                            self.visit(item)
                elif hasattr(value, "__dataclass_fields__"):
                    self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to ASTNode
