import gzip
import io

import pytest

from bioseq.errors import BoundaryError, FormatError
from bioseq.io import (
    FastaParser,
    FastaRecord,
    ParserState,
    load_fasta_dict,
    parse_fasta_string,
    read_fasta,
    write_fasta,
)
from bioseq.sequence import SequenceType


def test_parser_reads_records_in_order():
    records = list(parse_fasta_string(">a desc here\nACGT\nAC\n>b\nMEEP\n"))
    assert [r.id for r in records] == ["a", "b"]
    assert records[0].description == "desc here"
    assert records[0].sequence == b"ACGTAC"
    assert records[0].seq_type is SequenceType.DNA
    assert records[1].description is None
    assert records[1].seq_type is SequenceType.PROTEIN


def test_header_split_on_whitespace_run():
    record = next(parse_fasta_string(">id\t  spaced   out \nAC\n"))
    assert record.id == "id"
    assert record.description == "spaced   out"


def test_lines_before_first_header_are_ignored():
    records = list(parse_fasta_string("junk\nmore junk\n>a\nAC\n"))
    assert len(records) == 1
    assert records[0].sequence == b"AC"


def test_end_of_stream_is_idempotent():
    parser = FastaParser(io.BytesIO(b">a\nAC\n"))
    assert parser.next_record().id == "a"
    assert parser.state is ParserState.END
    assert parser.next_record() is None
    assert parser.next_record() is None


def test_empty_stream_returns_none():
    parser = FastaParser(io.BytesIO(b""))
    assert parser.next_record() is None
    assert parser.state is ParserState.END


def test_peeked_header_state():
    parser = FastaParser(io.BytesIO(b">a\nAC\n>b\nGT\n"))
    parser.next_record()
    assert parser.state is ParserState.HAVE_HEADER
    assert parser.next_record().id == "b"


def test_crlf_and_text_mode():
    record = next(FastaParser(io.StringIO(">a\r\nAC\r\nGT\r\n")))
    assert record.sequence == b"ACGT"


def test_record_without_sequence():
    records = list(parse_fasta_string(">a\n>b\nAC"))
    assert records[0].sequence == b""
    assert records[1].sequence == b"AC"


def test_empty_header_is_format_error():
    with pytest.raises(FormatError, match="line 3"):
        list(parse_fasta_string(">a\nAC\n>\nGT\n"))


def test_permissive_by_default():
    record = next(parse_fasta_string(">odd\nACGT12\n"))
    assert record.sequence == b"ACGT12"
    assert not record.validate()


def test_strict_mode_names_record():
    with pytest.raises(FormatError, match="odd"):
        list(parse_fasta_string(">ok\nACGT\n>odd\nACGT12\n", strict=True))


def test_record_slice_and_gc():
    record = FastaRecord("s", None, b"ACGTACGTAC", SequenceType.DNA)
    assert record.slice(3, 7) == b"GTACG"
    assert record.gc_content() == 0.5
    with pytest.raises(BoundaryError):
        record.slice(0, 3)


def test_write_then_read(tmp_path):
    path = tmp_path / "out.fa"
    records = [
        FastaRecord("a", "first", b"A" * 130, SequenceType.DNA),
        FastaRecord("b", None, b"MEEP", SequenceType.PROTEIN),
    ]
    write_fasta(records, path, line_width=60)
    lines = path.read_text().splitlines()
    assert lines[0] == ">a first"
    assert [len(l) for l in lines[1:4]] == [60, 60, 10]
    assert list(read_fasta(path)) == records


def test_read_gzip(tmp_path):
    path = tmp_path / "x.fa.gz"
    with gzip.open(path, "wb") as f:
        f.write(b">g\nACGU\n")
    assert load_fasta_dict(path) == {"g": b"ACGU"}
