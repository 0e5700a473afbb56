"""CFI AST (Abstract Syntax Tree) node definitions.

Complete node set for the EPUB CFI 1.1 grammar, including ranges,
redirections and all three offset kinds. Every node is frozen and owns its
children outright; the tree is rooted at Fragment.

"Exactly one of" choices are single union-typed fields:
    LocalPath.tail        RedirectedPath | Offset | None
    RedirectedPath.target Offset | Path
    Assertion             ParameterAssertion | ValueAssertion

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Assertions
    "Parameter",
    "ParameterAssertion",
    "ValueAssertion",
    # Offsets
    "CharacterOffset",
    "SpatialOffset",
    "TemporalOffset",
    # Structure
    "Step",
    "LocalPath",
    "RedirectedPath",
    "Path",
    "Range",
    "Fragment",
    # Type aliases
    "Assertion",
    "Offset",
    "ASTNode",
    # Guards
    "is_assertion",
    "is_offset",
]

# ============================================================================
# ASSERTIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Parameter:
    """Assertion parameter: key=value"""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class ParameterAssertion:
    """Assertion made of key=value parameters, in input order.

    Example:
        [type=note;id=note1] → ParameterAssertion((
            Parameter("type", "note"),
            Parameter("id", "note1"),
        ))
    """

    parameters: tuple[Parameter, ...]

    def __post_init__(self) -> None:
        """Validate that at least one parameter is present."""
        if not self.parameters:
            msg = "ParameterAssertion requires at least one parameter"
            raise ValueError(msg)

    @staticmethod
    def guard(node: object) -> TypeIs["ParameterAssertion"]:
        """Type guard for ParameterAssertion."""
        return isinstance(node, ParameterAssertion)

    def get(self, key: str) -> str | None:
        """Value of the first parameter named key, or None."""
        for parameter in self.parameters:
            if parameter.key == key:
                return parameter.value
        return None


@dataclass(frozen=True, slots=True)
class ValueAssertion:
    """Assertion made of a single bare value.

    Example:
        [2] → ValueAssertion("2")
    """

    value: str

    def __post_init__(self) -> None:
        """Validate that the value is not empty."""
        if not self.value:
            msg = "ValueAssertion requires a non-empty value"
            raise ValueError(msg)

    @staticmethod
    def guard(node: object) -> TypeIs["ValueAssertion"]:
        """Type guard for ValueAssertion."""
        return isinstance(node, ValueAssertion)


# ============================================================================
# OFFSETS
# ============================================================================


@dataclass(frozen=True, slots=True)
class CharacterOffset:
    """Character offset: ":" integer [assertion]

    Example:
        :10 → CharacterOffset(10)
    """

    start_at_point: int
    assertion: "Assertion | None" = None

    def __post_init__(self) -> None:
        """Validate that the offset is non-negative."""
        if self.start_at_point < 0:
            msg = f"CharacterOffset must be >= 0, got {self.start_at_point}"
            raise ValueError(msg)

    @staticmethod
    def guard(node: object) -> TypeIs["CharacterOffset"]:
        """Type guard for CharacterOffset."""
        return isinstance(node, CharacterOffset)


@dataclass(frozen=True, slots=True)
class SpatialOffset:
    """Spatial offset: "@" number ":" [number] [assertion]

    Examples:
        @2.5:5.3 → SpatialOffset(2.5, 5.3)
        @2.5:    → SpatialOffset(2.5, None)
    """

    start_at_point: float
    end_at_point: float | None = None
    assertion: "Assertion | None" = None

    @staticmethod
    def guard(node: object) -> TypeIs["SpatialOffset"]:
        """Type guard for SpatialOffset."""
        return isinstance(node, SpatialOffset)


@dataclass(frozen=True, slots=True)
class TemporalOffset:
    """Temporal offset: "~" number ["@" number ":" number] [assertion]

    Examples:
        ~3.7         → TemporalOffset(3.7)
        ~2@0.5:1.5   → TemporalOffset(2.0, (0.5, 1.5))
    """

    start_at: float
    spatial_range: tuple[float, float] | None = None
    assertion: "Assertion | None" = None

    @staticmethod
    def guard(node: object) -> TypeIs["TemporalOffset"]:
        """Type guard for TemporalOffset."""
        return isinstance(node, TemporalOffset)


# ============================================================================
# STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Step:
    """Step: "/" integer [assertion]

    Examples:
        /4          → Step(4)
        /6[2]       → Step(6, ValueAssertion("2"))
        /2[lang=en] → Step(2, ParameterAssertion((Parameter("lang", "en"),)))
    """

    size: int
    assertion: "Assertion | None" = None

    def __post_init__(self) -> None:
        """Validate that the step index is non-negative."""
        if self.size < 0:
            msg = f"Step size must be >= 0, got {self.size}"
            raise ValueError(msg)

    @staticmethod
    def guard(node: object) -> TypeIs["Step"]:
        """Type guard for Step."""
        return isinstance(node, Step)


@dataclass(frozen=True, slots=True)
class LocalPath:
    """Local path: {step} (redirected_path | [offset])

    Examples:
        /4/2       → LocalPath((Step(4), Step(2)))
        /4/2:5     → LocalPath((Step(4), Step(2)), CharacterOffset(5))
        /3/2!/5    → LocalPath((Step(3), Step(2)), RedirectedPath(...))
        :1         → LocalPath((), CharacterOffset(1))  (range endpoint)
    """

    steps: tuple[Step, ...]
    tail: "RedirectedPath | Offset | None" = None

    @property
    def redirected_path(self) -> "RedirectedPath | None":
        """The redirection ending this local path, if any."""
        return self.tail if isinstance(self.tail, RedirectedPath) else None

    @property
    def offset(self) -> "Offset | None":
        """The offset ending this local path, if any."""
        return None if isinstance(self.tail, RedirectedPath) else self.tail

    @property
    def is_empty(self) -> bool:
        """True when there are neither steps nor a tail."""
        return not self.steps and self.tail is None

    @staticmethod
    def guard(node: object) -> TypeIs["LocalPath"]:
        """Type guard for LocalPath."""
        return isinstance(node, LocalPath)


@dataclass(frozen=True, slots=True)
class RedirectedPath:
    """Redirected path: "!" (offset | path)

    Examples:
        !/4/2  → RedirectedPath(Path(Step(4), LocalPath((Step(2),))))
        !:15   → RedirectedPath(CharacterOffset(15))
    """

    target: "Offset | Path"

    @property
    def path(self) -> "Path | None":
        """The path continued after the redirection, if any."""
        return self.target if isinstance(self.target, Path) else None

    @property
    def offset(self) -> "Offset | None":
        """The offset the redirection lands on, if any."""
        return None if isinstance(self.target, Path) else self.target

    @staticmethod
    def guard(node: object) -> TypeIs["RedirectedPath"]:
        """Type guard for RedirectedPath."""
        return isinstance(node, RedirectedPath)


@dataclass(frozen=True, slots=True)
class Path:
    """Path: step local_path

    Examples:
        /4/2/6     → Path(Step(4), LocalPath((Step(2), Step(6))))
        /4/2!/6:5  → Path(Step(4), LocalPath((Step(2),), RedirectedPath(...)))
    """

    step: Step
    local_path: LocalPath

    @staticmethod
    def guard(node: object) -> TypeIs["Path"]:
        """Type guard for Path."""
        return isinstance(node, Path)


@dataclass(frozen=True, slots=True)
class Range:
    """Range: "," local_path "," local_path

    Start and end are independent; no ordering is enforced.
    """

    start: LocalPath
    end: LocalPath

    @staticmethod
    def guard(node: object) -> TypeIs["Range"]:
        """Type guard for Range."""
        return isinstance(node, Range)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Root AST node: "epubcfi(" path [range] ")"

    Example:
        epubcfi(/6/4!/4/10,/2/1:1,/3:4)
            → Fragment(path=..., range=Range(start=..., end=...))
    """

    path: Path
    range: Range | None = None

    @property
    def is_range(self) -> bool:
        """True when the fragment addresses a span rather than a point."""
        return self.range is not None

    @staticmethod
    def guard(node: object) -> TypeIs["Fragment"]:
        """Type guard for Fragment."""
        return isinstance(node, Fragment)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Assertion = ParameterAssertion | ValueAssertion
type Offset = CharacterOffset | SpatialOffset | TemporalOffset

type ASTNode = (
    Fragment
    | Path
    | Range
    | LocalPath
    | RedirectedPath
    | Step
    | CharacterOffset
    | SpatialOffset
    | TemporalOffset
    | ParameterAssertion
    | ValueAssertion
    | Parameter
)


def is_offset(node: object) -> TypeIs[Offset]:
    """Type guard for any of the three offset kinds."""
    return isinstance(node, (CharacterOffset, SpatialOffset, TemporalOffset))


def is_assertion(node: object) -> TypeIs[Assertion]:
    """Type guard for either assertion kind."""
    return isinstance(node, (ParameterAssertion, ValueAssertion))
