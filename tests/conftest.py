import pytest


# seq1: 10 bases over two lines (6 + 4), seq2: 5 bases on one line
SCENARIO_FASTA = (
    ">seq1 first test sequence\n"
    "ACGTAC\n"
    "GTAC\n"
    ">seq2\n"
    "TTGCA\n"
)


@pytest.fixture
def write_file(tmp_path):
    """Write bytes or text to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def scenario_fasta(write_file):
    return write_file("scenario.fa", SCENARIO_FASTA)


@pytest.fixture
def multi_fasta(write_file):
    """Several sequences with different widths, lowercase, protein and RNA."""
    return write_file(
        "multi.fa",
        ">chr1 assembled\n"
        "ACGTACGTAC\n"
        "GTACGTACGT\n"
        "ACG\n"
        ">chr2\n"
        "acgtnnnnac\n"
        "gt\n"
        ">prot1 kinase\n"
        "MEEPQSDPSV\n"
        "EPPLSQETFS\n"
        ">rna1\n"
        "ACGUACGU\n"
        ">empty\n"
        ">exact\n"
        "ACGT\n"
        "ACGT\n",
    )
