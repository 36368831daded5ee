"""Tests for sequence normalization."""

import pytest

from genoai.design.normalizer import (
    DEMO_SEQUENCE,
    INVALID_CHARACTERS_MESSAGE,
    normalize,
    normalize_from,
    read_sequence_file,
    strip_fasta_headers,
)
from genoai.models.enums import InputSource


class TestNormalize:
    """Tests for normalize()."""

    def test_invalid_characters_removed_and_flagged(self) -> None:
        result = normalize("atgXc")
        assert result.sequence == "ATGC"
        assert result.was_modified
        assert result.removed_characters == ["X"]
        assert result.message == INVALID_CHARACTERS_MESSAGE

    def test_valid_input_is_unchanged(self) -> None:
        seq = "A" * 20 + "CGG" + "T" * 10
        result = normalize(seq)
        assert result.sequence == seq
        assert not result.was_modified
        assert result.message is None
        assert result.length == 33

    def test_whitespace_is_not_an_invalid_character(self) -> None:
        result = normalize("  atg c\n\tgg\r\n")
        assert result.sequence == "ATGCGG"
        assert not result.was_modified

    def test_removed_characters_are_deduplicated_in_order(self) -> None:
        result = normalize("ANNXTGN-C")
        assert result.sequence == "ATGC"
        assert result.removed_characters == ["N", "X", "-"]

    def test_all_invalid_gives_empty_sequence(self) -> None:
        result = normalize("123 xyz")
        assert result.sequence == ""
        assert result.was_modified

    def test_empty_input(self) -> None:
        result = normalize("")
        assert result.sequence == ""
        assert not result.was_modified

    def test_paste_keeps_header_characters_as_invalid(self) -> None:
        # Header stripping only applies to file input
        result = normalize(">seq\nACGT")
        assert result.sequence == "ACGT"
        assert result.removed_characters == [">", "S", "E", "Q"]

    def test_file_input_strips_fasta_headers(self) -> None:
        text = ">chr1 sample header GATTACA\nACGT\nacgt\n>second\nTTGG\n"
        result = normalize(text, from_file=True)
        assert result.sequence == "ACGTACGTTTGG"
        assert not result.was_modified

    def test_normalize_from_source(self) -> None:
        text = ">h\nACGT"
        assert normalize_from(text, InputSource.FILE).sequence == "ACGT"
        assert normalize_from(text, InputSource.PASTE).was_modified

    def test_output_alphabet(self) -> None:
        result = normalize("the quick brown fox jumps over the lazy dog 0123456789 ACGT")
        assert set(result.sequence) <= set("ATGC")

    def test_demo_sequence_is_canonical(self) -> None:
        assert not normalize(DEMO_SEQUENCE).was_modified


class TestFastaHeaders:
    """Tests for header stripping helper."""

    def test_only_lines_starting_with_gt_are_removed(self) -> None:
        assert strip_fasta_headers(">h1\nAC\n>h2\nGT") == "\nAC\n\nGT"

    def test_crlf_header(self) -> None:
        assert strip_fasta_headers(">h1\r\nAC").strip() == "AC"


class TestReadSequenceFile:
    """Tests for reading sequence files."""

    def test_fasta_file(self, tmp_path) -> None:
        path = tmp_path / "sample.fasta"
        path.write_text(">sample\nACGTN\nGGCC\n")
        result = read_sequence_file(path)
        assert result.sequence == "ACGTGGCC"
        assert result.was_modified
        assert result.removed_characters == ["N"]

    @pytest.mark.parametrize("name", ["sample.fa", "sample.txt", "SAMPLE.FASTA"])
    def test_accepted_suffixes(self, tmp_path, name) -> None:
        path = tmp_path / name
        path.write_text("acgt")
        assert read_sequence_file(path).sequence == "ACGT"

    def test_unsupported_suffix(self, tmp_path) -> None:
        path = tmp_path / "sample.pdf"
        path.write_text("ACGT")
        with pytest.raises(ValueError, match="Unsupported file type"):
            read_sequence_file(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_sequence_file(tmp_path / "missing.fasta")
