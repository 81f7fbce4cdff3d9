"""Tests for the command line entry point."""

import pytest

from siesru import cli
from siesru.config import settings
from conftest import MINIMAL_SIE_LINES, to_sie


@pytest.fixture
def sie_file(tmp_path, sample_sie_text):
    path = tmp_path / "bokio.se"
    path.write_bytes(sample_sie_text.encode("iso-8859-1"))
    return path


def test_cli_prints_and_writes(sie_file, tmp_path, capsys):
    out_dir = tmp_path / "out"

    exit_code = cli.main([str(sie_file), "11122", "Stockholm", "--output-dir", str(out_dir)])

    assert exit_code == 0
    printed = capsys.readouterr().out
    assert "#MEDIELEV_SLUT" in printed
    assert "#FIL_SLUT" in printed
    assert (out_dir / "2017" / "INFO.sru").is_file()
    assert (out_dir / "2017" / "BLANKETTER.sru").is_file()


def test_cli_no_write(sie_file, tmp_path):
    out_dir = tmp_path / "out"

    exit_code = cli.main([str(sie_file), "11122", "Stockholm", "--output-dir", str(out_dir), "--no-write"])

    assert exit_code == 0
    assert not out_dir.exists()


def test_cli_lf_line_ending(sie_file, tmp_path):
    out_dir = tmp_path / "out"

    cli.main([str(sie_file), "11122", "Stockholm", "--output-dir", str(out_dir), "--line-ending", "lf"])

    assert b"\r" not in (out_dir / "2017" / "INFO.sru").read_bytes()


def test_cli_parse_error_exits_without_files(tmp_path):
    path = tmp_path / "broken.se"
    lines = [line for line in MINIMAL_SIE_LINES if not line.startswith("#ORGNR")]
    path.write_bytes(to_sie(lines).encode("iso-8859-1"))
    out_dir = tmp_path / "out"

    exit_code = cli.main([str(path), "11122", "Stockholm", "--output-dir", str(out_dir)])

    assert exit_code == 1
    assert not out_dir.exists()


def test_cli_missing_file(tmp_path):
    assert cli.main([str(tmp_path / "missing.se"), "11122", "Stockholm"]) == 1


def test_cli_requires_postal_info(sie_file, monkeypatch):
    monkeypatch.setattr(settings, "POSTAL_CODE", None)
    monkeypatch.setattr(settings, "POSTAL_ADDRESS", None)

    with pytest.raises(SystemExit) as exc:
        cli.main([str(sie_file)])

    assert exc.value.code == 2


def test_cli_postal_info_from_settings(sie_file, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(settings, "POSTAL_CODE", 41101)
    monkeypatch.setattr(settings, "POSTAL_ADDRESS", "Göteborg")

    exit_code = cli.main([str(sie_file), "--no-write"])

    assert exit_code == 0
    assert "#POSTORT Göteborg" in capsys.readouterr().out


def test_cli_unwritable_output_exits_with_error(sie_file, tmp_path, capsys):
    out_dir = tmp_path / "out"
    out_dir.write_text("not a directory")

    exit_code = cli.main([str(sie_file), "11122", "Stockholm", "--output-dir", str(out_dir)])

    assert exit_code == 1
    assert "Sparade" not in capsys.readouterr().out
