"""
Block range planning and per-cycle counters.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BlockRange:
    """Inclusive, contiguous range of block numbers."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid block range {self.start}-{self.end}")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def plan_batches(start: int, end: int, batch_size: int) -> list[BlockRange]:
    """
    Split [start, end] into ascending batches of at most batch_size blocks.

    Examples:
        >>> [str(b) for b in plan_batches(101, 125, 10)]
        ['101-110', '111-120', '121-125']
        >>> plan_batches(11, 10, 10)
        []
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    batches = []
    current = start
    while current <= end:
        batch_end = min(current + batch_size - 1, end)
        batches.append(BlockRange(current, batch_end))
        current = batch_end + 1
    return batches


@dataclass
class BatchStats:
    """Outcome of one batch."""

    block_range: BlockRange
    transfers: int = 0
    kyc_changes: int = 0
    price_updates: int = 0
    duplicates: int = 0
    decode_errors: int = 0
    write_errors: int = 0
    failed_families: list[str] = field(default_factory=list)

    @property
    def stored(self) -> int:
        return self.transfers + self.kyc_changes + self.price_updates


@dataclass
class CycleResult:
    """Outcome of one scan cycle."""

    head: int
    batches: list[BatchStats] = field(default_factory=list)

    @property
    def stored(self) -> int:
        return sum(batch.stored for batch in self.batches)

    @property
    def last_block(self) -> int | None:
        if not self.batches:
            return None
        return self.batches[-1].block_range.end
