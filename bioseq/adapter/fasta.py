"""
FASTA adapter backed by an indexed reader.
"""

from typing import Iterator, List, Optional

from bioseq.adapter.base import (
    Capability,
    OpenSpec,
    Reader,
    Region,
    Slice,
    Symbol,
)
from bioseq.errors import UnsupportedOperationError
from bioseq.io.indexed import IndexedFastaReader
from bioseq.utils.sequences import check_region


class FastaAdapter(Reader):
    """
    Symbol lookup and region queries over an indexed FASTA file.

    Row iteration is not offered: a FASTA file is a set of named
    sequences, not a table.
    """

    def __init__(self):
        self._reader: Optional[IndexedFastaReader] = None

    @property
    def reader(self) -> IndexedFastaReader:
        if self._reader is None:
            raise RuntimeError("FastaAdapter is not open")
        return self._reader

    def open(self, spec: OpenSpec) -> None:
        self.close()
        self._reader = IndexedFastaReader(spec.path, index_path=spec.index)

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def capabilities(self) -> Capability:
        return Capability.SYMBOLS | Capability.REGIONS

    def list_symbols(self) -> List[Symbol]:
        """All indexed sequences with their lengths, in file order."""
        return [
            Symbol(name=entry.name, length=entry.length)
            for entry in self.reader.index.values()
        ]

    def lookup_symbol(self, sym: str) -> Region:
        """Full extent [1, length] of a sequence."""
        entry = self.reader.entry(sym)
        return Region(ref=sym, start=1, end=entry.length)

    def region(self, reg: Region) -> Slice:
        entry = self.reader.entry(reg.ref)
        check_region(reg.start, reg.end, entry.length, reg.ref)
        record = self.reader.fetch(reg.ref)
        return Slice(sequence=record.slice(reg.start, reg.end))

    def iter_rows(self) -> Iterator[List[str]]:
        raise UnsupportedOperationError(
            "row iteration is not supported by the FASTA adapter"
        )
