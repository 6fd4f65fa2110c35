from __future__ import annotations

from pathlib import Path
from zipfile import ZipFile

import pytest
from click.testing import CliRunner
from pypdf import PdfReader

from pdf_toolkit import PageIndexError, PageOrderManager, ValidationError
from pdf_toolkit.cli import apply_edit_step, cli
from pdf_toolkit.types import InputFile


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _page_count(path: Path) -> int:
    return len(PdfReader(str(path)).pages)


def test_info_command(runner: CliRunner, sample_pdf_path: Path) -> None:
    result = runner.invoke(cli, ["info", str(sample_pdf_path)])
    assert result.exit_code == 0
    assert "Number of Pages" in result.output
    assert "10" in result.output
    assert "Sample" in result.output


def test_split_to_directory(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "parts"
    result = runner.invoke(cli, ["split", str(sample_pdf_path), "-r", "1-3,5", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["sample_page_5.pdf", "sample_pages_1-3.pdf"]
    assert _page_count(out / "sample_pages_1-3.pdf") == 3


def test_split_keeps_repeated_ranges_apart(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "parts"
    result = runner.invoke(cli, ["split", str(sample_pdf_path), "-r", "1-3,2,1-3", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == [
        "sample_page_2.pdf",
        "sample_pages_1-3.pdf",
        "sample_pages_1-3_2.pdf",
    ]
    assert "sample_pages_1-3_2.pdf" in result.output
    assert _page_count(out / "sample_pages_1-3_2.pdf") == 3


def test_split_to_zip(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    archive_path = tmp_path / "parts.zip"
    result = runner.invoke(cli, ["split", str(sample_pdf_path), "-r", "1-2,2-3", "--zip", str(archive_path)])

    assert result.exit_code == 0, result.output
    with ZipFile(archive_path) as archive:
        assert archive.namelist() == ["sample_pages_1-2.pdf", "sample_pages_2-3.pdf"]


def test_split_reports_parse_errors(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["split", str(sample_pdf_path), "-r", "5-3", "-o", str(tmp_path / "x")])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert "5-3" in result.output
    assert not (tmp_path / "x").exists()


def test_burst_selected_pages(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "pages"
    result = runner.invoke(cli, ["burst", str(sample_pdf_path), "-p", "2-4", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert len(list(out.iterdir())) == 3


def test_extract_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["extract", str(sample_pdf_path), "-p", "1,3", "-n", "picked.pdf", "-o", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    assert _page_count(tmp_path / "picked.pdf") == 2


def test_merge_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    other = tmp_path / "other.pdf"
    other.write_bytes(sample_pdf_path.read_bytes())
    out = tmp_path / "merged"

    result = runner.invoke(cli, ["merge", str(sample_pdf_path), str(other), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert _page_count(out / "merged.pdf") == 20


def test_merge_encrypted_input_with_password(
    runner: CliRunner, sample_pdf_path: Path, encrypted_pdf: InputFile, tmp_path: Path
) -> None:
    locked = tmp_path / encrypted_pdf.name
    locked.write_bytes(encrypted_pdf.content)
    out = tmp_path / "merged"

    result = runner.invoke(cli, ["merge", str(sample_pdf_path), str(locked), "-o", str(out)])
    assert result.exit_code == 1
    assert "password protected" in result.output

    result = runner.invoke(
        cli,
        ["merge", str(sample_pdf_path), str(locked), "--password", f"{locked}=secret", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert _page_count(out / "merged.pdf") == 13


def test_merge_rejects_malformed_password(runner: CliRunner, sample_pdf_path: Path) -> None:
    result = runner.invoke(cli, ["merge", str(sample_pdf_path), str(sample_pdf_path), "--password", "secret"])
    assert result.exit_code == 1
    assert "FILENAME=PASSWORD" in result.output


def test_merge_single_file_fails(runner: CliRunner, sample_pdf_path: Path) -> None:
    result = runner.invoke(cli, ["merge", str(sample_pdf_path)])
    assert result.exit_code == 1
    assert "at least 2" in result.output


def test_organize_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path, page_width) -> None:
    result = runner.invoke(
        cli,
        [
            "organize", str(sample_pdf_path),
            "-e", "move 10 1",
            "-e", "remove 2",
            "-e", "rotate 10 180",
            "-o", str(tmp_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "1 page was removed" in result.output
    assert "Page order: 10, 2, 3, 4, 5, 6, 7, 8, 9" in result.output
    reader = PdfReader(str(tmp_path / "sample_reorganized.pdf"))
    assert len(reader.pages) == 9
    assert int(reader.pages[0].mediabox.width) == page_width(9)
    assert reader.pages[0].rotation == 180


def test_organize_rejects_bad_step(runner: CliRunner, sample_pdf_path: Path) -> None:
    result = runner.invoke(cli, ["organize", str(sample_pdf_path), "-e", "shuffle"])
    assert result.exit_code == 1
    assert "Invalid edit step" in result.output


def test_compress_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["compress", str(sample_pdf_path), "-l", "extreme", "-o", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "sample_compressed_extreme.pdf").exists()


def test_compress_estimate(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["compress", str(sample_pdf_path), "--estimate", "-o", str(tmp_path / "none")])
    assert result.exit_code == 0, result.output
    assert "recommended" in result.output
    assert not (tmp_path / "none").exists()


def test_compress_level_from_environment(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["compress", str(sample_pdf_path), "-o", str(tmp_path)],
        env={"PDF_TOOLKIT_COMPRESS_LEVEL": "minimal"},
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "sample_compressed_minimal.pdf").exists()


def test_watermark_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["watermark", str(sample_pdf_path), "-t", "DRAFT", "--color", "#336699", "-o", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    assert "DRAFT" in PdfReader(str(tmp_path / "sample_watermarked.pdf")).pages[0].extract_text()


def test_metadata_command(runner: CliRunner, sample_pdf_path: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["metadata", str(sample_pdf_path), "--title", "New", "--keywords", "a,b", "-o", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    metadata = PdfReader(str(tmp_path / "sample_edited.pdf")).metadata
    assert metadata.get("/Title") == "New"
    assert metadata.get("/Keywords") == "a, b"


def test_metadata_command_requires_a_field(runner: CliRunner, sample_pdf_path: Path) -> None:
    result = runner.invoke(cli, ["metadata", str(sample_pdf_path)])
    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_unlock_command(runner: CliRunner, encrypted_pdf: InputFile, tmp_path: Path) -> None:
    source = tmp_path / encrypted_pdf.name
    source.write_bytes(encrypted_pdf.content)

    wrong = runner.invoke(cli, ["unlock", str(source), "--password", "bad", "-o", str(tmp_path)])
    assert wrong.exit_code == 1
    assert "Incorrect password" in wrong.output

    result = runner.invoke(cli, ["unlock", str(source), "--password", "secret", "-o", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert not PdfReader(str(tmp_path / "locked_unlocked.pdf")).is_encrypted


def test_password_protected_input_needs_password(
    runner: CliRunner, encrypted_pdf: InputFile, tmp_path: Path
) -> None:
    source = tmp_path / encrypted_pdf.name
    source.write_bytes(encrypted_pdf.content)

    result = runner.invoke(cli, ["info", str(source)])
    assert result.exit_code == 1
    assert "password protected" in result.output

    result = runner.invoke(cli, ["info", str(source), "--password", "secret"])
    assert result.exit_code == 0, result.output
    assert "Yes" in result.output


def test_convert_command(
    runner: CliRunner, png_image: InputFile, jpeg_image: InputFile, tmp_path: Path
) -> None:
    paths = []
    for image in (png_image, jpeg_image):
        path = tmp_path / image.name
        path.write_bytes(image.content)
        paths.append(str(path))
    notes = tmp_path / "notes.txt"
    notes.write_text("hello\nworld", encoding="utf-8")
    out = tmp_path / "converted"

    result = runner.invoke(cli, ["convert", *paths, str(notes), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["notes.pdf", "photo.pdf", "picture.pdf"]

    result = runner.invoke(cli, ["convert", *paths, "--combine", "album.pdf", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert _page_count(out / "album.pdf") == 2


def test_version_option(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_apply_edit_steps() -> None:
    pages = PageOrderManager(5)
    for step in ["move 5 1", "down 1", "up 5", "rotate 3", "remove 1"]:
        apply_edit_step(pages, step)
    assert pages.order == [4, 1, 3, 2]
    assert pages.rotation_for(2) == 90

    apply_edit_step(pages, "sort desc")
    assert pages.order == [4, 3, 2, 1]
    apply_edit_step(pages, "reset")
    assert pages.order == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("step", ["", "move 1", "sort sideways", "up x", "reset now"])
def test_apply_edit_step_rejects_invalid(step: str) -> None:
    with pytest.raises(ValidationError):
        apply_edit_step(PageOrderManager(3), step)


def test_apply_edit_step_positions_are_bounds_checked() -> None:
    with pytest.raises(PageIndexError):
        apply_edit_step(PageOrderManager(3), "move 4 1")
    with pytest.raises(PageIndexError):
        apply_edit_step(PageOrderManager(3), "remove 0")
