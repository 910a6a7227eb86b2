"""
Common interface between file readers and the viewer.

Every supported file type is wrapped in a Reader that reports what
it can do through a Capability bitmask, so the caller can decide
which operations to offer before invoking any of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Dict, Iterator, List, Optional


class Capability(IntFlag):
    """Operations a Reader supports."""
    NONE = 0
    REGIONS = 1       # region-limited queries
    ITER_ROWS = 2     # streaming all records (tables)
    COVERAGE = 4      # coverage track
    PILEUP = 8        # pileup track
    SYMBOLS = 16      # lookup by name (sequence or gene ID)


@dataclass(frozen=True)
class OpenSpec:
    """
    Files needed to open a reader.

    Attributes:
        path: Primary data file
        index: Explicit index path, when not next to the data file
        aux: Any other auxiliary files, by role
    """
    path: str
    index: Optional[str] = None
    aux: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Region:
    """Genomic interval on ref, 1-based with end the last included base."""
    ref: str
    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)


@dataclass(frozen=True)
class Symbol:
    name: str
    length: int


@dataclass(frozen=True)
class Slice:
    """Data returned for a region."""
    sequence: bytes


class Reader(ABC):
    """Interface every file type adapter implements."""

    @abstractmethod
    def open(self, spec: OpenSpec) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    @abstractmethod
    def capabilities(self) -> Capability:
        ...

    @abstractmethod
    def list_symbols(self) -> List[Symbol]:
        ...

    @abstractmethod
    def lookup_symbol(self, sym: str) -> Region:
        ...

    @abstractmethod
    def region(self, reg: Region) -> Slice:
        ...

    @abstractmethod
    def iter_rows(self) -> Iterator[List[str]]:
        ...

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities()

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
