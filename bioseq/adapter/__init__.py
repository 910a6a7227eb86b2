"""
Adapters exposing file readers through one capability-driven interface.

Supported formats form a closed set registered in ADAPTERS.
"""

from typing import Dict, Type

from bioseq.adapter.base import (
    Capability,
    OpenSpec,
    Reader,
    Region,
    Slice,
    Symbol,
)
from bioseq.adapter.fasta import FastaAdapter

ADAPTERS: Dict[str, Type[Reader]] = {
    "fasta": FastaAdapter,
}


def open_adapter(spec: OpenSpec, fmt: str = "fasta") -> Reader:
    """
    Create and open the adapter for a file format.

    Args:
        spec: Paths of the files to open
        fmt: Format name, a key of ADAPTERS

    Returns:
        An open Reader

    Raises:
        ValueError: if the format is not supported
    """
    try:
        adapter_cls = ADAPTERS[fmt.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported format '{fmt}'; choose from {sorted(ADAPTERS)}"
        ) from None
    adapter = adapter_cls()
    adapter.open(spec)
    return adapter


__all__ = [
    "Capability",
    "OpenSpec",
    "Reader",
    "Region",
    "Slice",
    "Symbol",
    "FastaAdapter",
    "ADAPTERS",
    "open_adapter",
]
