from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Sequence

from .. import config
from ..helpers import tag_absent
from ..node import Element, Text
from .embed import embed, partition
from .error import PatternDefinitionError
from .permute import permute
from .search import search_tree

logger = logging.getLogger(__name__)

_Vars = Mapping[str, Any]


def _bind(ctx: _Vars, name: str, value: Any, append: bool) -> _Vars | None:
    """Extend `ctx` with `name` bound to `value`.

    Returns None if `name` is already bound to a different value, i.e. the branch is
    inconsistent and must be dropped.

    """
    if append:
        vals_in_ctx = ctx.get(name, ())

        if not isinstance(vals_in_ctx, tuple):
            raise PatternDefinitionError(
                f'Name <{name}> is already used as a "single" type match variable.'
                " Using the same name to capture a single and multiple values is not allowed"
            )

        return {**ctx, name: (*vals_in_ctx, value)}

    if name in ctx:
        return ctx if ctx[name] == value else None

    return {**ctx, name: value}


def _check_matchers(owner: str, matchers: Any) -> None:
    if not isinstance(matchers, tuple):
        raise PatternDefinitionError(f"{owner} expects a tuple of matchers")

    for m in matchers:
        if not isinstance(m, BaseMatcher):
            raise PatternDefinitionError(
                f"{owner} expects matchers, got <{type(m).__name__}>: {m!r}"
            )


@dataclass(frozen=True, slots=True)
class BaseMatcher(ABC):
    """Base class for all matchers.

    A matcher is the runtime form of a pattern: a tree-shaped value with open slots. Matching
    is non-deterministic, `match` lazily yields every solution (binding of capture names to
    values), and an empty iterator means no match. Use `xcuery.match.builder` to build
    matchers.

    """

    name: str | None = field(default=None, kw_only=True)
    """Name of the matcher.

    If not None, the matcher will capture the matched value under this name in the solution.
    If the name is already bound, the matched value must be equal to the bound one.

    """

    append_to_match: bool = field(default=False, kw_only=True)
    """If True, the matcher will append the matched value to the tuple under the name in the
    solution instead of binding it once."""

    def __post_init__(self) -> None:
        if self.name is not None and (not isinstance(self.name, str) or not self.name):
            raise PatternDefinitionError(f"Capture name must be a non-empty string: {self.name!r}")

    @abstractmethod
    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        """Internal API to be implemented by concrete matchers.

        Yield every solution for `value`. Each solution is `ctx` extended with whatever the
        submatchers captured. There is no need to capture the value of this matcher itself as
        it is done by the caller.

        """
        raise NotImplementedError

    def match(self, value: Any, ctx: _Vars | None = None) -> Iterator[_Vars]:
        """Lazily enumerate all solutions of matching `value` against the pattern."""
        if ctx is None:
            ctx = {}

        for bindings in self._match(value, ctx):
            if self.name is None:
                yield bindings
                continue

            bound = _bind(bindings, self.name, value, self.append_to_match)

            if bound is not None:
                yield bound

    def first(self, value: Any, ctx: _Vars | None = None) -> _Vars | None:
        """Returns the first solution or None if there is none."""
        return next(self.match(value, ctx), None)

    def matches(self, value: Any, ctx: _Vars | None = None) -> bool:
        return self.first(value, ctx) is not None

    def findall(self, value: Any, ctx: _Vars | None = None) -> list[_Vars]:
        """Exhaust the search and return every solution, duplicates included."""
        return list(self.match(value, ctx))


@dataclass(frozen=True, slots=True)
class AnyMatcher(BaseMatcher):
    """Matcher that matches any value: an unconstrained slot."""

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        yield ctx


@dataclass(frozen=True, slots=True)
class ValueMatcher(BaseMatcher):
    """Matcher that matches a value equal to a constant (structural equality for nodes)."""

    value: Any

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if value == self.value:
            yield ctx


@dataclass(frozen=True, slots=True)
class RegexMatcher(BaseMatcher):
    """Matcher that matches the whole string form of a value against a regex."""

    _re_str: str
    pattern: re.Pattern[str] = field(init=False, compare=False)

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)

        try:
            object.__setattr__(self, "pattern", re.compile(self._re_str))
        except re.error as e:
            raise PatternDefinitionError(f"Invalid regex <{self._re_str}>: {e}") from e

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if self.pattern.fullmatch(str(value)) is not None:
            yield ctx


@dataclass(frozen=True, slots=True)
class VarMatcher(BaseMatcher):
    """Matcher that matches a value against the value captured under `var_name`.

    The name is a logic variable shared with the other patterns: if nothing captured it yet
    (e.g. an any-order ordering tries this pattern first), the value is captured here and the
    other occurrences must then be equal to it.

    """

    var_name: str

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        bound = _bind(ctx, self.var_name, value, False)

        if bound is not None:
            yield bound


@dataclass(frozen=True, slots=True)
class TextMatcher(BaseMatcher):
    """Matcher for a text leaf. The content pattern is matched against the string content."""

    content: BaseMatcher = field(default_factory=AnyMatcher)

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if isinstance(value, Text):
            yield from self.content.match(value.content, ctx)


@dataclass(frozen=True, slots=True)
class AttributesMatcher(BaseMatcher):
    """Matcher for an exact attribute list: same length, same names in the same order, each
    value matching its pattern."""

    items: tuple[tuple[str, BaseMatcher], ...]

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)
        _check_matchers("AttributesMatcher", tuple(m for _, m in self.items))

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not isinstance(value, Sequence) or len(value) != len(self.items):
            return

        yield from self._match_from(value, 0, ctx)

    def _match_from(self, value: Sequence[Any], i: int, ctx: _Vars) -> Iterator[_Vars]:
        if i == len(self.items):
            yield ctx
            return

        name, matcher = self.items[i]
        aname, avalue = value[i]

        if aname != name:
            return

        for bindings in matcher.match(avalue, ctx):
            yield from self._match_from(value, i + 1, bindings)


@dataclass(frozen=True, slots=True)
class ElementMatcher(BaseMatcher):
    """Matcher for an element: its tag, attribute list and children list each have a pattern."""

    tag: BaseMatcher = field(default_factory=AnyMatcher)
    attrs: BaseMatcher = field(default_factory=AnyMatcher)
    children: BaseMatcher = field(default_factory=AnyMatcher)

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)
        _check_matchers("ElementMatcher", (self.tag, self.attrs, self.children))

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not isinstance(value, Element):
            return

        for tag_vars in self.tag.match(value.tag, ctx):
            for attr_vars in self.attrs.match(value.attrs, tag_vars):
                yield from self.children.match(value.children, attr_vars)


@dataclass(frozen=True, slots=True)
class _ListMatcher(BaseMatcher, ABC):
    """Base for matchers of a children list by a tuple of element patterns."""

    matchers: tuple[BaseMatcher, ...]

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)
        _check_matchers(self.__class__.__name__, self.matchers)

    @staticmethod
    def _is_list(value: Any) -> bool:
        return isinstance(value, Sequence) and not isinstance(value, str)


@dataclass(frozen=True, slots=True)
class SequenceMatcher(_ListMatcher):
    """Matcher that matches a list exactly, position by position."""

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not self._is_list(value) or len(value) != len(self.matchers):
            return

        yield from _match_positional(self.matchers, value, 0, ctx)


def _match_positional(
    matchers: Sequence[BaseMatcher], value: Sequence[Any], i: int, ctx: _Vars
) -> Iterator[_Vars]:
    if i == len(matchers):
        yield ctx
        return

    for bindings in matchers[i].match(value[i], ctx):
        yield from _match_positional(matchers, value, i + 1, bindings)


@dataclass(frozen=True, slots=True)
class EmbedMatcher(_ListMatcher):
    """Matcher that finds its patterns in a list in the given order, with arbitrary gaps before,
    between and after them.

    One solution per embedding. A pattern that comes before another in `matchers` must match
    an earlier element, the order is never relaxed.

    """

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not self._is_list(value):
            return

        for embedding in embed(self.matchers, value, ctx):
            yield embedding.bindings


@dataclass(frozen=True, slots=True)
class AnyOrderMatcher(_ListMatcher):
    """Matcher that tries every ordering of its patterns.

    With `gaps=False` the list must consist of exactly these elements, in any order. With
    `gaps=True` each ordering is embedded with gaps. Solutions of different orderings are all
    yielded, including equal ones.

    """

    gaps: bool = False

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not self._is_list(value):
            return

        if not self.gaps and len(value) != len(self.matchers):
            return

        for ordering in permute(self.matchers):
            if config.TRACE_LOGGING:
                logger.debug(f"Trying ordering {[type(m).__name__ for m in ordering]}")

            if self.gaps:
                for embedding in embed(ordering, value, ctx):
                    yield embedding.bindings
            else:
                yield from _match_positional(ordering, value, 0, ctx)


@dataclass(frozen=True, slots=True)
class PartitionMatcher(_ListMatcher):
    """Matcher that embeds its patterns like `EmbedMatcher` and captures the unmatched rest.

    The rest ("others") is the exact complement of the matched elements, in original order.
    `without` lists tags that must be absent from the others, which expresses conditions like
    "an entry with a name but no email".

    """

    others: str | None = None
    """Capture name for the tuple of unmatched elements."""

    any_order: bool = False
    without: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _ListMatcher.__post_init__(self)

        if self.others is not None and (not isinstance(self.others, str) or not self.others):
            raise PatternDefinitionError(
                f"Capture name must be a non-empty string: {self.others!r}"
            )

        if isinstance(self.without, str):
            raise PatternDefinitionError("`without` must be a tuple of tags, not a string")

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        if not self._is_list(value):
            return

        orderings = permute(self.matchers) if self.any_order else (self.matchers,)

        for ordering in orderings:
            for part in partition(ordering, value, ctx):
                if not all(tag_absent(t, part.others) for t in self.without):
                    continue

                if self.others is None:
                    yield part.bindings
                    continue

                bound = _bind(part.bindings, self.others, part.others, False)

                if bound is not None:
                    yield bound


@dataclass(frozen=True, slots=True)
class DeepMatcher(BaseMatcher):
    """Matcher that applies its pattern to a node and to every node below it.

    Solutions are yielded in pre-order. The captured value of this matcher itself (if named)
    is the searched root, name the inner pattern to capture the found node.

    """

    matcher: BaseMatcher
    max_depth: int | None = None

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)
        _check_matchers("DeepMatcher", (self.matcher,))

        if self.max_depth is not None and self.max_depth < 0:
            raise PatternDefinitionError(f"Search depth must be >= 0, got {self.max_depth}")

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        yield from search_tree(self.matcher, value, ctx, self.max_depth)


@dataclass(frozen=True, slots=True)
class AlternativeMatcher(BaseMatcher):
    """Matcher that matches a value against a set of alternatives.

    This is a logical OR: solutions of every matching alternative are yielded, in order, even
    when an earlier alternative matched.

    """

    matchers: tuple[BaseMatcher, ...]

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)

        if len(self.matchers) == 0:
            raise PatternDefinitionError("AlternativeMatcher must have at least one matcher.")

        _check_matchers("AlternativeMatcher", self.matchers)

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        for matcher in self.matchers:
            yield from matcher.match(value, ctx)


@dataclass(frozen=True, slots=True)
class GuardMatcher(BaseMatcher):
    """Matcher that keeps only the solutions of its pattern satisfying a predicate.

    The predicate receives the complete solution, so it can inspect anything captured, e.g.
    a list of "others".

    """

    matcher: BaseMatcher
    predicate: Callable[[_Vars], bool] = field(compare=False)

    def __post_init__(self) -> None:
        BaseMatcher.__post_init__(self)
        _check_matchers("GuardMatcher", (self.matcher,))

        if not callable(self.predicate):
            raise PatternDefinitionError("GuardMatcher predicate must be callable")

    def _match(self, value: Any, ctx: _Vars) -> Iterator[_Vars]:
        for bindings in self.matcher.match(value, ctx):
            if self.predicate(bindings):
                yield bindings
