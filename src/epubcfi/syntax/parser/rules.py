"""Grammar rules for the CFI parser.

This module provides all parsing rules for CFI grammar constructs:
- Assertions: [value] and [key=value;key=value]
- Offsets: character (:), spatial (@) and temporal (~)
- Steps, local paths, redirected paths and paths
- Ranges and the epubcfi(...) fragment

All grammar rules are co-located in a single module because path,
local path and redirected path are mutually recursive.

Lookahead Patterns:
    Every alternative is selected by its first character:
    - `/` starts a Step (and therefore a Path)
    - `!` starts a RedirectedPath
    - `~`, `@`, `:` start temporal, spatial and character offsets
    - `[` starts an Assertion
    - `,` starts a Range

    Once a discriminator has been seen the rule is committed: a failure
    inside it fails the whole parse instead of silently trying the next
    alternative. The discriminators of each choice point are collected in
    dispatch tables, which refuse to register two alternatives under the
    same character.

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    via deeply nested redirections (e.g., /2!/2!/2!/2!...).
"""

from collections.abc import Callable
from dataclasses import dataclass

from epubcfi.constants import CFI_PREFIX, MAX_CHARACTER_OFFSET, MAX_DEPTH, MAX_STEP_INDEX
from epubcfi.diagnostics import CFIAmbiguousAlternativeError, ErrorTemplate
from epubcfi.syntax.ast import (
    Assertion,
    CharacterOffset,
    Fragment,
    LocalPath,
    Offset,
    Parameter,
    ParameterAssertion,
    Path,
    Range,
    RedirectedPath,
    SpatialOffset,
    Step,
    TemporalOffset,
    ValueAssertion,
)
from epubcfi.syntax.cursor import Cursor, ParseResult
from epubcfi.syntax.parser.primitives import (
    expect_literal,
    get_last_parse_error,
    parse_alphanumeric,
    parse_float,
    parse_unsigned_integer,
    set_parse_error,
)

__all__ = [
    "ParseContext",
    "parse_assertion",
    "parse_character_offset",
    "parse_fragment",
    "parse_local_path",
    "parse_offset",
    "parse_path",
    "parse_range",
    "parse_redirected_path",
    "parse_spatial_offset",
    "parse_step",
    "parse_temporal_offset",
]

# Characters that may begin a float: sign, digit or leading decimal point.
_NUMBER_START: str = "+-.0123456789"


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Passed down every rule instead of global state, so concurrent parses
    never share anything.

    Attributes:
        max_nesting_depth: Maximum allowed number of nested redirections
        max_step_index: Largest step index accepted (8-bit by default)
        current_depth: Current redirection depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    max_step_index: int = MAX_STEP_INDEX
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_redirection(self) -> "ParseContext":
        """Create new context with incremented depth for entering a redirection."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            max_step_index=self.max_step_index,
            current_depth=self.current_depth + 1,
        )


type _Rule = Callable[
    [Cursor, ParseContext],
    ParseResult[Offset] | ParseResult[Path] | ParseResult[RedirectedPath] | None,
]


def _build_dispatch(rule_name: str, *alternatives: tuple[str, _Rule]) -> dict[str, _Rule]:
    """Build a first-character dispatch table for one choice point.

    Alternatives keep their declaration order.

    Raises:
        CFIAmbiguousAlternativeError: If two alternatives share a discriminator
    """
    table: dict[str, _Rule] = {}
    for discriminator, rule in alternatives:
        if discriminator in table:
            raise CFIAmbiguousAlternativeError(
                ErrorTemplate.ambiguous_alternative(rule_name, discriminator)
            )
        table[discriminator] = rule
    return table


# =============================================================================
# Assertion Parsing
# =============================================================================


def _parse_parameter(cursor: Cursor) -> ParseResult[Parameter] | None:
    """Parse parameter: alphanumeric "=" alphanumeric"""
    key = parse_alphanumeric(cursor)
    if key is None:
        return None

    equals = expect_literal(key.cursor, "=")
    if equals is None:
        return None

    value = parse_alphanumeric(equals.cursor)
    if value is None:
        return None

    return ParseResult(Parameter(key=key.value, value=value.value), value.cursor)


def _parse_parameters(cursor: Cursor) -> ParseResult[tuple[Parameter, ...]] | None:
    """Parse one or more parameters separated by ";".

    A ";" that is not followed by a full parameter is left unconsumed.
    """
    first = _parse_parameter(cursor)
    if first is None:
        return None

    parameters = [first.value]
    cursor = first.cursor

    while cursor.peek() == ";":
        following = _parse_parameter(cursor.advance())
        if following is None:
            break
        parameters.append(following.value)
        cursor = following.cursor

    return ParseResult(tuple(parameters), cursor)


def parse_assertion(cursor: Cursor) -> ParseResult[Assertion] | None:
    """Parse assertion: "[" (parameters | value) "]"

    The parameter list is tried first, so "[1key=1value]" is a parameter
    list rather than a bare value. A bare value is any alphanumeric token.

    Examples:
        [2]                  -> ValueAssertion("2")
        [lang=en]            -> ParameterAssertion((Parameter("lang", "en"),))
        [type=note;id=note1] -> ParameterAssertion(two parameters, input order)

    Args:
        cursor: Current position in source (at "[")

    Returns:
        ParseResult(Assertion, cursor after "]"), or None if empty or malformed
    """
    opened = expect_literal(cursor, "[")
    if opened is None:
        return None

    content_start = opened.cursor

    if content_start.peek() == "]":
        set_parse_error(ErrorTemplate.assertion_empty(), content_start.pos)
        return None

    parameters = _parse_parameters(content_start)
    if parameters is not None and parameters.cursor.peek() == "]":
        assertion = ParameterAssertion(parameters=parameters.value)
        return ParseResult(assertion, parameters.cursor.advance())

    if parameters is not None:
        parameters_reached = parameters.cursor.pos
    else:
        failure = get_last_parse_error()
        parameters_reached = failure.position if failure is not None else content_start.pos

    value = parse_alphanumeric(content_start)
    if value is not None and value.cursor.peek() == "]":
        return ParseResult(ValueAssertion(value=value.value), value.cursor.advance())

    # Neither alternative reached "]": report the furthest point either got to
    reached = max(
        parameters_reached,
        value.cursor.pos if value is not None else content_start.pos,
    )
    set_parse_error(
        ErrorTemplate.assertion_invalid(content_start.slice_to(reached)),
        reached,
    )
    return None


def _parse_optional_assertion(cursor: Cursor) -> ParseResult[Assertion | None] | None:
    """Parse an assertion if "[" follows, else succeed with None."""
    if cursor.peek() != "[":
        return ParseResult(None, cursor)

    result = parse_assertion(cursor)
    if result is None:
        return None
    return ParseResult(result.value, result.cursor)


# =============================================================================
# Offset Parsing
# =============================================================================


def parse_character_offset(
    cursor: Cursor, context: ParseContext | None = None  # noqa: ARG001 - dispatch signature
) -> ParseResult[Offset] | None:
    """Parse character offset: ":" integer [assertion]

    Examples:
        :10         -> CharacterOffset(10)
        :10[lang=en] -> CharacterOffset(10, ParameterAssertion(...))
    """
    colon = expect_literal(cursor, ":")
    if colon is None:
        return None

    point = parse_unsigned_integer(colon.cursor, MAX_CHARACTER_OFFSET)
    if point is None:
        return None

    assertion = _parse_optional_assertion(point.cursor)
    if assertion is None:
        return None

    offset = CharacterOffset(start_at_point=point.value, assertion=assertion.value)
    return ParseResult(offset, assertion.cursor)


def parse_spatial_offset(
    cursor: Cursor, context: ParseContext | None = None  # noqa: ARG001 - dispatch signature
) -> ParseResult[Offset] | None:
    """Parse spatial offset: "@" number ":" [number] [assertion]

    The end coordinate is optional; a single-point spatial offset keeps
    the ":" separator ("@2.5:").

    Examples:
        @2.5:5.3 -> SpatialOffset(2.5, 5.3)
        @2.5:    -> SpatialOffset(2.5, None)
    """
    at = expect_literal(cursor, "@")
    if at is None:
        return None

    start = parse_float(at.cursor)
    if start is None:
        return None

    separator = expect_literal(start.cursor, ":")
    if separator is None:
        return None

    cursor = separator.cursor
    end: float | None = None
    if (ch := cursor.peek()) is not None and ch in _NUMBER_START:
        end_result = parse_float(cursor)
        if end_result is None:
            return None
        end = end_result.value
        cursor = end_result.cursor

    assertion = _parse_optional_assertion(cursor)
    if assertion is None:
        return None

    offset = SpatialOffset(
        start_at_point=start.value, end_at_point=end, assertion=assertion.value
    )
    return ParseResult(offset, assertion.cursor)


def parse_temporal_offset(
    cursor: Cursor, context: ParseContext | None = None  # noqa: ARG001 - dispatch signature
) -> ParseResult[Offset] | None:
    """Parse temporal offset: "~" number ["@" number ":" number] [assertion]

    Both coordinates of the spatial sub-range are required once "@" is seen.

    Examples:
        ~3.7                           -> TemporalOffset(3.7)
        ~2@0.5:1.5[type=note;id=note1] -> TemporalOffset(2.0, (0.5, 1.5), ...)
    """
    tilde = expect_literal(cursor, "~")
    if tilde is None:
        return None

    start = parse_float(tilde.cursor)
    if start is None:
        return None

    cursor = start.cursor
    spatial_range: tuple[float, float] | None = None
    if cursor.peek() == "@":
        range_start = parse_float(cursor.advance())
        if range_start is None:
            return None
        separator = expect_literal(range_start.cursor, ":")
        if separator is None:
            return None
        range_end = parse_float(separator.cursor)
        if range_end is None:
            return None
        spatial_range = (range_start.value, range_end.value)
        cursor = range_end.cursor

    assertion = _parse_optional_assertion(cursor)
    if assertion is None:
        return None

    offset = TemporalOffset(
        start_at=start.value, spatial_range=spatial_range, assertion=assertion.value
    )
    return ParseResult(offset, assertion.cursor)


def parse_offset(
    cursor: Cursor, context: ParseContext | None = None
) -> ParseResult[Offset] | None:
    """Parse any offset, dispatching on "~", "@" or ":" (in that order).

    Returns:
        ParseResult(Offset, new_cursor), or None if no offset starts here
    """
    rule = _OFFSET_RULES.get(cursor.peek() or "")
    if rule is None:
        set_parse_error(ErrorTemplate.expected_offset(cursor.describe_current()), cursor.pos)
        return None
    return rule(cursor, context or ParseContext())  # type: ignore[return-value]


# =============================================================================
# Path Parsing
# =============================================================================


def parse_step(cursor: Cursor, context: ParseContext) -> ParseResult[Step] | None:
    """Parse step: "/" integer [assertion]

    The integer may not exceed context.max_step_index (255 by default).

    Examples:
        /6      -> Step(6)
        /28[2]  -> Step(28, ValueAssertion("2"))
    """
    slash = expect_literal(cursor, "/")
    if slash is None:
        return None

    size = parse_unsigned_integer(slash.cursor, context.max_step_index)
    if size is None:
        return None

    assertion = _parse_optional_assertion(size.cursor)
    if assertion is None:
        return None

    return ParseResult(Step(size=size.value, assertion=assertion.value), assertion.cursor)


def parse_local_path(
    cursor: Cursor, context: ParseContext, *, allow_empty: bool = True
) -> ParseResult[LocalPath] | None:
    """Parse local path: {step} (redirected_path | [offset])

    Steps are consumed greedily while "/" follows. The tail is a
    redirection if "!" follows, an offset if "~", "@" or ":" follows,
    and absent otherwise.

    Args:
        cursor: Current position in source
        context: Parse context (depth and width limits)
        allow_empty: Accept a local path with no steps and no tail.
            True after a path's leading step ("/6" alone is a path);
            False for range endpoints, which must address something.

    Returns:
        ParseResult(LocalPath, new_cursor), or None on failure
    """
    steps: list[Step] = []
    while cursor.peek() == "/":
        step = parse_step(cursor, context)
        if step is None:
            return None
        steps.append(step.value)
        cursor = step.cursor

    tail: RedirectedPath | Offset | None = None
    rule = _LOCAL_PATH_TAIL_RULES.get(cursor.peek() or "")
    if rule is not None:
        tail_result = rule(cursor, context)
        if tail_result is None:
            return None
        tail = tail_result.value  # type: ignore[assignment]
        cursor = tail_result.cursor

    local_path = LocalPath(steps=tuple(steps), tail=tail)
    if not allow_empty and local_path.is_empty:
        set_parse_error(ErrorTemplate.empty_local_path(), cursor.pos)
        return None

    return ParseResult(local_path, cursor)


def parse_redirected_path(
    cursor: Cursor, context: ParseContext
) -> ParseResult[RedirectedPath] | None:
    """Parse redirected path: "!" (offset | path)

    Recurses into parse_path; the path alternative always consumes "/"
    first, so the recursion makes progress on every level.

    Examples:
        !/4/1:10 -> RedirectedPath(Path(Step(4), LocalPath((Step(1),), CharacterOffset(10))))
        !:15     -> RedirectedPath(CharacterOffset(15))
    """
    bang = expect_literal(cursor, "!")
    if bang is None:
        return None

    if context.is_depth_exceeded():
        set_parse_error(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth), cursor.pos
        )
        return None

    cursor = bang.cursor
    rule = _REDIRECT_TARGET_RULES.get(cursor.peek() or "")
    if rule is None:
        set_parse_error(
            ErrorTemplate.expected_path_or_offset(cursor.describe_current()), cursor.pos
        )
        return None

    target = rule(cursor, context.enter_redirection())
    if target is None:
        return None

    return ParseResult(RedirectedPath(target=target.value), target.cursor)  # type: ignore[arg-type]


def parse_path(cursor: Cursor, context: ParseContext) -> ParseResult[Path] | None:
    """Parse path: step local_path

    Examples:
        /6/4/2   -> Path(Step(6), LocalPath((Step(4), Step(2))))
        /6       -> Path(Step(6), LocalPath(()))
    """
    step = parse_step(cursor, context)
    if step is None:
        return None

    local_path = parse_local_path(step.cursor, context)
    if local_path is None:
        return None

    return ParseResult(Path(step=step.value, local_path=local_path.value), local_path.cursor)


def parse_range(cursor: Cursor, context: ParseContext) -> ParseResult[Range] | None:
    """Parse range: "," local_path "," local_path

    Example:
        ,/6/4,/6/14 -> Range(LocalPath((Step(6), Step(4))), LocalPath((Step(6), Step(14))))
    """
    first_comma = expect_literal(cursor, ",")
    if first_comma is None:
        return None

    start = parse_local_path(first_comma.cursor, context, allow_empty=False)
    if start is None:
        return None

    second_comma = expect_literal(start.cursor, ",")
    if second_comma is None:
        return None

    end = parse_local_path(second_comma.cursor, context, allow_empty=False)
    if end is None:
        return None

    return ParseResult(Range(start=start.value, end=end.value), end.cursor)


def parse_fragment(cursor: Cursor, context: ParseContext) -> ParseResult[Fragment] | None:
    """Parse fragment: "epubcfi" "(" path [range] ")"

    Stops after the closing ")"; the caller checks that nothing follows.

    Examples:
        epubcfi(/6/2)                   -> Fragment(Path(Step(6), LocalPath((Step(2),))))
        epubcfi(/6/4!/4/10,/2/1:1,/3:4) -> Fragment(path, Range(...))
    """
    prefix = expect_literal(cursor, CFI_PREFIX)
    if prefix is None:
        return None

    opened = expect_literal(prefix.cursor, "(")
    if opened is None:
        return None

    path = parse_path(opened.cursor, context)
    if path is None:
        return None

    cursor = path.cursor
    cfi_range: Range | None = None
    if cursor.peek() == ",":
        range_result = parse_range(cursor, context)
        if range_result is None:
            return None
        cfi_range = range_result.value
        cursor = range_result.cursor

    closed = expect_literal(cursor, ")")
    if closed is None:
        return None

    return ParseResult(Fragment(path=path.value, range=cfi_range), closed.cursor)


# =============================================================================
# Dispatch Tables
# =============================================================================

_OFFSET_ALTERNATIVES: tuple[tuple[str, _Rule], ...] = (
    ("~", parse_temporal_offset),
    ("@", parse_spatial_offset),
    (":", parse_character_offset),
)

_OFFSET_RULES = _build_dispatch("offset", *_OFFSET_ALTERNATIVES)

_LOCAL_PATH_TAIL_RULES = _build_dispatch(
    "local_path", ("!", parse_redirected_path), *_OFFSET_ALTERNATIVES
)

_REDIRECT_TARGET_RULES = _build_dispatch(
    "redirected_path", *_OFFSET_ALTERNATIVES, ("/", parse_path)
)
