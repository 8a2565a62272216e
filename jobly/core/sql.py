"""Parameterized SQL fragment builders for partial updates and searches.

Both builders are pure: they never touch the database and never mutate their
inputs. Placeholders use the ``$n`` positional style, 1-based and contiguous,
with the Nth placeholder bound to the Nth entry of ``values``.

Column names are inserted as literal identifiers. They must come from code
controlled vocabularies (column maps, filter specs, allow-listed payload
keys), never from raw user input.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from jobly.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class UpdateFragment:
    """``SET`` clause body plus its positional values."""

    set_cols: str
    values: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class SearchFragment:
    """Bare ``AND``-joined condition list plus its positional values.

    ``text`` never contains the ``WHERE`` keyword; it is empty when no filter
    applies.
    """

    text: str = ""
    values: list[Any] = field(default_factory=list)

    def where_clause(self) -> str:
        """Return ``WHERE <text>`` when filters apply, otherwise ``""``."""
        return f"WHERE {self.text}" if self.text else ""


def build_update_fragment(
    data: Mapping[str, Any],
    column_map: Mapping[str, str],
) -> UpdateFragment:
    """Build the ``SET`` portion of an ``UPDATE`` statement.

    Args:
        data: Logical field name to new value, in the order to emit.
        column_map: Logical field name to physical column; names absent from
            the map are used unchanged.

    Returns:
        UpdateFragment such as ``'"first_name"=$1, "age"=$2'`` with values
        ``["Taco", 99]``.

    Raises:
        InvalidInputError: If ``data`` is empty.
    """
    if not data:
        raise InvalidInputError("No data")

    cols = [
        f'"{column_map.get(key, key)}"=${index}'
        for index, key in enumerate(data, start=1)
    ]
    return UpdateFragment(set_cols=", ".join(cols), values=list(data.values()))


class TriState(Enum):
    """Three-valued flag decoded from ``"true"``/``"false"`` query strings."""

    ABSENT = "absent"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def parse(cls, raw: Any) -> "TriState":
        """Decode a raw query value.

        ``None`` is absent. Only the exact strings ``"true"`` and ``"false"``
        (or an existing member) are accepted.

        Raises:
            InvalidInputError: For any other value.
        """
        if raw is None:
            return cls.ABSENT
        if isinstance(raw, cls):
            return raw
        if raw == "true":
            return cls.TRUE
        if raw == "false":
            return cls.FALSE
        raise InvalidInputError(f"Expected 'true' or 'false', got {raw!r}.")


def is_present(value: Any) -> bool:
    """Presence test treating ``0`` and ``False`` as present."""
    return value is not None and not (isinstance(value, str) and value == "")


def _identity(value: Any) -> Any:
    return value


def _substring_pattern(value: Any) -> str:
    return f"%{str(value).lower()}%"


def _zero(_value: Any) -> int:
    return 0


@dataclass(frozen=True)
class FilterSpec:
    """One optional search criterion.

    Attributes:
        key: Criteria key this filter reads.
        predicate: Renders the condition for a given placeholder index.
        value_transform: Maps the raw criterion to the bound value.
        presence_test: Decides whether the criterion contributes a filter.
    """

    key: str
    predicate: Callable[[int], str]
    value_transform: Callable[[Any], Any] = _identity
    presence_test: Callable[[Any], bool] = is_present


def text_match(key: str, column: str) -> FilterSpec:
    """Case-insensitive substring match on ``column``."""
    return FilterSpec(
        key=key,
        predicate=lambda n: f"{column} ILIKE ${n}",
        value_transform=_substring_pattern,
    )


def lower_bound(key: str, column: str) -> FilterSpec:
    """Inclusive numeric lower bound on ``column``."""
    return FilterSpec(key=key, predicate=lambda n: f"{column} >= ${n}")


def upper_bound(key: str, column: str) -> FilterSpec:
    """Inclusive numeric upper bound on ``column``."""
    return FilterSpec(key=key, predicate=lambda n: f"{column} <= ${n}")


def exact_match(key: str, column: str) -> FilterSpec:
    """Equality on ``column`` with the value bound unchanged."""
    return FilterSpec(key=key, predicate=lambda n: f"{column} = ${n}")


def nonzero_flag(key: str, column: str) -> tuple[FilterSpec, FilterSpec]:
    """Tri-state flag: true means ``column > 0``, false means ``column = 0``."""
    return (
        FilterSpec(
            key=key,
            predicate=lambda n: f"{column} > ${n}",
            value_transform=_zero,
            presence_test=lambda raw: TriState.parse(raw) is TriState.TRUE,
        ),
        FilterSpec(
            key=key,
            predicate=lambda n: f"{column} = ${n}",
            value_transform=_zero,
            presence_test=lambda raw: TriState.parse(raw) is TriState.FALSE,
        ),
    )


def build_search_fragment(
    criteria: Mapping[str, Any],
    specs: Sequence[FilterSpec],
) -> SearchFragment:
    """Build an ``AND``-joined condition list from optional criteria.

    Specs are applied in their declared order. Placeholder numbering advances
    only for included filters.

    Args:
        criteria: Filter key to caller-supplied value.
        specs: Ordered filter declarations for one resource.

    Returns:
        SearchFragment; ``text`` is ``""`` when no filter applies.

    Raises:
        InvalidInputError: If a tri-state criterion holds an undecodable value.
    """
    conditions: list[str] = []
    values: list[Any] = []

    for spec in specs:
        raw = criteria.get(spec.key)
        if not spec.presence_test(raw):
            continue
        conditions.append(spec.predicate(len(values) + 1))
        values.append(spec.value_transform(raw))

    return SearchFragment(text=" AND ".join(conditions), values=values)


COMPANY_SEARCH_FILTERS: tuple[FilterSpec, ...] = (
    text_match("nameLike", "name"),
    lower_bound("minEmployees", "num_employees"),
    upper_bound("maxEmployees", "num_employees"),
)

JOB_SEARCH_FILTERS: tuple[FilterSpec, ...] = (
    text_match("title", "title"),
    lower_bound("minSalary", "salary"),
    *nonzero_flag("hasEquity", "equity"),
    exact_match("companyHandle", "company_handle"),
)


__all__ = [
    "COMPANY_SEARCH_FILTERS",
    "FilterSpec",
    "JOB_SEARCH_FILTERS",
    "SearchFragment",
    "TriState",
    "UpdateFragment",
    "build_search_fragment",
    "build_update_fragment",
    "exact_match",
    "is_present",
    "lower_bound",
    "nonzero_flag",
    "text_match",
    "upper_bound",
]
