import os

import pytest

from bioseq.errors import FormatError
from bioseq.io import FaiEntry, build_index, index_fasta, parse_index


def test_scenario_index(scenario_fasta):
    entries = build_index(scenario_fasta)
    assert list(entries) == ["seq1", "seq2"]
    assert entries["seq1"] == FaiEntry("seq1", 10, 26, 6, 7)
    assert entries["seq2"] == FaiEntry("seq2", 5, 44, 5, 6)


def test_written_index_layout(scenario_fasta):
    path = index_fasta(scenario_fasta)
    assert path.name == "scenario.fa.fai"
    assert path.read_text() == "seq1\t10\t26\t6\t7\nseq2\t5\t44\t5\t6\n"


def test_build_is_idempotent(multi_fasta, tmp_path):
    first = index_fasta(multi_fasta, tmp_path / "one.fai").read_bytes()
    second = index_fasta(multi_fasta, tmp_path / "two.fai").read_bytes()
    assert first == second


def test_crlf_line_bytes(write_file):
    path = write_file("crlf.fa", b">a\r\nACGT\r\nAC\r\n")
    assert build_index(path)["a"] == FaiEntry("a", 6, 4, 4, 6)


def test_no_trailing_newline(write_file):
    path = write_file("nonl.fa", b">a\nACGT\nACGT")
    assert build_index(path)["a"] == FaiEntry("a", 8, 3, 4, 5)


def test_empty_sequence(multi_fasta):
    entry = build_index(multi_fasta)["empty"]
    assert entry.length == 0
    assert entry.line_bases == 0


def test_longer_line_names_sequence(write_file):
    path = write_file("long.fa", ">ok\nACGT\n>bad\nACG\nACGTA\n")
    with pytest.raises(FormatError, match="bad"):
        build_index(path)


def test_data_after_short_line(write_file):
    path = write_file("short.fa", ">bad\nACGT\nAC\nACGT\n")
    with pytest.raises(FormatError, match="bad.*line 4"):
        build_index(path)


def test_blank_line_inside_sequence(write_file):
    path = write_file("gap.fa", ">bad\nACGT\n\nACGT\n")
    with pytest.raises(FormatError, match="bad"):
        build_index(path)


def test_trailing_blank_lines_are_allowed(write_file):
    path = write_file("tail.fa", ">a\nACGT\nAC\n\n\n>b\nGG\n")
    entries = build_index(path)
    assert entries["a"].length == 6
    assert entries["b"] == FaiEntry("b", 2, 16, 2, 3)


def test_blank_line_before_data_moves_offset(write_file):
    path = write_file("lead.fa", ">a\n\nACGT\n")
    assert build_index(path)["a"] == FaiEntry("a", 4, 4, 4, 5)


def test_leading_whitespace_rejected(write_file):
    path = write_file("indent.fa", ">a\n ACGT\n")
    with pytest.raises(FormatError, match="whitespace"):
        build_index(path)


def test_duplicate_names_rejected(write_file):
    path = write_file("dup.fa", ">a\nAC\n>a desc\nGT\n")
    with pytest.raises(FormatError, match="duplicate"):
        build_index(path)


def test_failed_build_publishes_nothing(write_file, tmp_path):
    path = write_file("bad.fa", ">bad\nACG\nACGTA\n")
    with pytest.raises(FormatError):
        index_fasta(path)
    assert not (tmp_path / "bad.fa.fai").exists()
    assert [p.name for p in tmp_path.iterdir()] == ["bad.fa"]


def test_missing_fasta_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        build_index(tmp_path / "missing.fa")


def test_parse_skips_malformed_lines(write_file):
    path = write_file(
        "x.fai",
        "a\t10\t3\t10\t11\n"
        "garbage line\n"
        "b\t1\t2\t3\n"
        "c\tten\t1\t1\t2\n"
        "\n"
        "d\t4\t30\t4\t5\n",
    )
    index = parse_index(path)
    assert list(index) == ["a", "d"]
    assert index["d"] == FaiEntry("d", 4, 30, 4, 5)


def test_parse_last_write_wins(write_file):
    path = write_file("x.fai", "a\t1\t3\t1\t2\na\t2\t9\t2\t3\n")
    assert parse_index(path)["a"].offset == 9


def test_parsed_index_is_read_only(scenario_fasta):
    index = parse_index(index_fasta(scenario_fasta))
    with pytest.raises(TypeError):
        index["seq3"] = index["seq1"]


def test_parse_round_trips_build(multi_fasta):
    built = build_index(multi_fasta)
    parsed = parse_index(index_fasta(multi_fasta))
    assert dict(parsed) == built
    assert list(parsed) == list(built)


@pytest.mark.parametrize("line", [
    "seq\t5\t6\t0\t0\n",
    "seq\t5\t6\t4\t3\n",
    "seq\t-5\t6\t5\t6\n",
    "seq\t5\t-6\t5\t6\n",
])
def test_parse_skips_unusable_geometry(write_file, line):
    path = write_file("x.fai", line + "ok\t4\t30\t4\t5\n")
    assert list(parse_index(path)) == ["ok"]


def test_parse_keeps_empty_sequence(write_file):
    path = write_file("x.fai", "empty\t0\t9\t0\t0\n")
    assert parse_index(path)["empty"].length == 0


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_published_index_follows_umask(scenario_fasta):
    old = os.umask(0o022)
    try:
        path = index_fasta(scenario_fasta)
    finally:
        os.umask(old)
    assert path.stat().st_mode & 0o777 == 0o644


def test_no_temporary_file_left_behind(scenario_fasta, tmp_path):
    index_fasta(scenario_fasta)
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "scenario.fa", "scenario.fa.fai"
    ]
