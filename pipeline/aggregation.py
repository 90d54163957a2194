"""
Participle Atlas - Aggregation Engine

A single fold over participle rows into thirteen independent tables.

Every table is a commutative monoid: counts merge by integer addition and
rate tables merge by pairwise addition of (numerator, total). Partial
Aggregates built over disjoint row sets can therefore be merged in any
order and give the same result as one pass over all rows.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from data.schemas import ParticipleRow, Voice
from observability import get_logger

logger = get_logger(__name__)

MISSING = "?"
NO_PREFIX = "none"
COMBO_SEPARATOR = "+"
QUARTILE_LABELS: Tuple[str, ...] = ("Q1", "Q2", "Q3", "Q4")


def position_quartile(position: int, length: int) -> str:
    """
    Quartile label of a token position within its verse.

    floor(position / length * 4), clamped to the last quartile.
    A zero-length verse is Q1.
    """
    if length <= 0:
        return QUARTILE_LABELS[0]
    index = (max(position, 0) * 4) // length
    return QUARTILE_LABELS[min(index, len(QUARTILE_LABELS) - 1)]


def prefix_combo(chain: Iterable[str]) -> str:
    joined = COMBO_SEPARATOR.join(chain)
    return joined or NO_PREFIX


# =============================================================================
# ACCUMULATORS
# =============================================================================

@dataclass
class Counter1:
    """key -> count"""
    counts: Dict[str, int] = field(default_factory=dict)

    def add(self, key: str, amount: int = 1) -> None:
        self.counts[key] = self.counts.get(key, 0) + amount

    def merge(self, other: "Counter1") -> None:
        for key, value in other.counts.items():
            self.add(key, value)

    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, int]:
        return dict(self.counts)


@dataclass
class Counter2:
    """outer key -> inner key -> count"""
    counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def add(self, outer: str, inner: str, amount: int = 1) -> None:
        bucket = self.counts.setdefault(outer, {})
        bucket[inner] = bucket.get(inner, 0) + amount

    def merge(self, other: "Counter2") -> None:
        for outer, bucket in other.counts.items():
            for inner, value in bucket.items():
                self.add(outer, inner, value)

    def total(self) -> int:
        return sum(sum(bucket.values()) for bucket in self.counts.values())

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {outer: dict(bucket) for outer, bucket in self.counts.items()}


@dataclass
class RateTable:
    """
    key -> (numerator, total).

    numerator_field names the numerator in the serialized form, e.g.
    {"Qal": {"neg": 3, "total": 120}}. total >= numerator >= 0 holds
    for every key because each observation adds 1 to total.
    """
    numerator_field: str
    pairs: Dict[str, List[int]] = field(default_factory=dict)

    def observe(self, key: str, hit: bool) -> None:
        pair = self.pairs.setdefault(key, [0, 0])
        if hit:
            pair[0] += 1
        pair[1] += 1

    def merge(self, other: "RateTable") -> None:
        for key, (numerator, total) in other.pairs.items():
            pair = self.pairs.setdefault(key, [0, 0])
            pair[0] += numerator
            pair[1] += total

    def numerator(self, key: str) -> int:
        return self.pairs.get(key, [0, 0])[0]

    def denominator(self, key: str) -> int:
        return self.pairs.get(key, [0, 0])[1]

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            key: {self.numerator_field: numerator, "total": total}
            for key, (numerator, total) in self.pairs.items()
        }


# =============================================================================
# AGGREGATES
# =============================================================================

@dataclass
class Aggregates:
    """All aggregate tables, updated together one row at a time."""
    by_binyan: Counter2 = field(default_factory=Counter2)
    by_usage: Counter1 = field(default_factory=Counter1)
    by_book_binyan: Counter2 = field(default_factory=Counter2)
    gender_number: Counter2 = field(default_factory=Counter2)
    prefix_context: Counter1 = field(default_factory=Counter1)
    negation_by_binyan: RateTable = field(default_factory=lambda: RateTable("neg"))
    definiteness_by_usage: RateTable = field(default_factory=lambda: RateTable("def"))
    state_by_usage: Counter2 = field(default_factory=Counter2)
    prefix_combo_by_binyan: Counter2 = field(default_factory=Counter2)
    person_distribution: Counter1 = field(default_factory=Counter1)
    relative_by_binyan: RateTable = field(default_factory=lambda: RateTable("rel"))
    et_marker_by_binyan: RateTable = field(default_factory=lambda: RateTable("et"))
    prep_type_by_binyan: Counter2 = field(default_factory=Counter2)
    position_bins: Counter1 = field(default_factory=Counter1)
    following_pos: Counter1 = field(default_factory=Counter1)
    row_count: int = 0

    def add(self, row: ParticipleRow) -> None:
        binyan = row.binyan
        usage = row.usage.value

        self.row_count += 1

        # Both voices present so every binyan serializes as {active, passive}
        bucket = self.by_binyan.counts.setdefault(binyan, {})
        for voice in Voice:
            bucket.setdefault(voice.value, 0)
        self.by_binyan.add(binyan, row.voice.value)

        self.by_usage.add(usage)
        self.by_book_binyan.add(row.book_name, binyan)
        self.gender_number.add(row.gender or MISSING, row.number or MISSING)

        for category in sorted(set(row.chain)):
            self.prefix_context.add(category)

        self.negation_by_binyan.observe(binyan, row.negated)
        self.definiteness_by_usage.observe(usage, row.has_article)
        self.state_by_usage.add(usage, row.state.value)
        self.prefix_combo_by_binyan.add(binyan, prefix_combo(row.chain))
        self.person_distribution.add(row.person.value)
        self.relative_by_binyan.observe(binyan, row.relative_clause)
        self.et_marker_by_binyan.observe(binyan, row.object_marker_before)

        first_prep = (row.prep_letters[0] if row.prep_letters else "") or NO_PREFIX
        self.prep_type_by_binyan.add(binyan, first_prep)

        self.position_bins.add(position_quartile(row.position, row.verse_length))

        if row.next_pdp is not None:
            self.following_pos.add(row.next_pdp)

    def merge(self, other: "Aggregates") -> "Aggregates":
        """Add other's tables into this one and return self."""
        for name in self.table_names():
            getattr(self, name).merge(getattr(other, name))
        self.row_count += other.row_count
        return self

    @staticmethod
    def table_names() -> Tuple[str, ...]:
        return (
            "by_binyan",
            "by_usage",
            "by_book_binyan",
            "gender_number",
            "prefix_context",
            "negation_by_binyan",
            "definiteness_by_usage",
            "state_by_usage",
            "prefix_combo_by_binyan",
            "person_distribution",
            "relative_by_binyan",
            "et_marker_by_binyan",
            "prep_type_by_binyan",
            "position_bins",
            "following_pos",
        )

    def tables(self) -> Dict[str, Dict[str, Any]]:
        """Table name -> JSON-ready document."""
        return {name: getattr(self, name).to_dict() for name in self.table_names()}


def build_aggregates(rows: Iterable[ParticipleRow]) -> Aggregates:
    """Fold rows into a fresh Aggregates."""
    aggregates = Aggregates()
    for row in rows:
        aggregates.add(row)
    logger.debug("Aggregates built", rows=aggregates.row_count)
    return aggregates


def merge_all(parts: Iterable[Aggregates]) -> Aggregates:
    """Merge partial aggregates into one."""
    result = Aggregates()
    for part in parts:
        result.merge(part)
    return result
