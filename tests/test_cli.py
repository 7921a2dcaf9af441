# tests/test_cli.py
from __future__ import annotations

import subprocess
import sys
import uuid
from pathlib import Path

import pytest
import tnefdata

from winmail.cli import main
from winmail.tnef import AttachMethod, AttributeTag, PropertyId


def test_cli_version():
    result = subprocess.run(
        [sys.executable, "-m", "winmail.cli", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "winmail 1.0.0" in result.stdout


def test_cli_dump(message_file: Path):
    result = subprocess.run(
        [sys.executable, "-m", "winmail.cli", "dump", str(message_file)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "key=0x0001" in result.stdout
    assert "[MESSAGE] SUBJECT" in result.stdout
    assert "'Quarterly report'" in result.stdout
    assert "MAPI_PROPERTIES" in result.stdout
    assert "SUBJECT: 'Hello'" in result.stdout
    assert "4096" in result.stdout
    assert "compliance" in result.stdout


def test_cli_dump_embedded_message(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    inner = tnefdata.tnef(
        tnefdata.attribute(0x01, AttributeTag.SUBJECT, b"Inner subject\0")
    )
    outer = tnefdata.mapi_stream(
        tnefdata.prop(
            tnefdata.LONG, PropertyId.ATTACH_METHOD, tnefdata.long(AttachMethod.EMBEDDED_MESSAGE)
        ),
        tnefdata.prop(
            tnefdata.OBJECT,
            PropertyId.ATTACH_DATA,
            tnefdata.variable(uuid.UUID(int=0).bytes_le + inner),
        ),
        tag=AttributeTag.ATTACHMENT,
    )
    f = tmp_path / "embedded.dat"
    f.write_bytes(outer)
    assert main(["dump", str(f)]) == 0
    out = capsys.readouterr().out
    assert "embedded message" in out
    assert "'Inner subject'" in out


def test_cli_dump_missing_file(tmp_path: Path):
    result = subprocess.run(
        [sys.executable, "-m", "winmail.cli", "dump", str(tmp_path / "missing.dat")],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 1
    assert "winmail:" in result.stderr


def test_cli_dump_strict(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "bad.dat"
    f.write_bytes(tnefdata.tnef(signature=0))
    assert main(["dump", "--strict", str(f)]) == 1
    assert "not compliant" in capsys.readouterr().err


def test_cli_dump_loose_reports_status(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "bad.dat"
    f.write_bytes(tnefdata.tnef(signature=0))
    assert main(["dump", str(f)]) == 0
    assert "INVALID_TNEF_SIGNATURE" in capsys.readouterr().out


def test_cli_detect(tmp_path: Path):
    f = tmp_path / "test.txt"
    f.write_bytes(b"Hello world")
    result = subprocess.run(
        [sys.executable, "-m", "winmail.cli", "detect", str(f)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert f"{f}: ascii with confidence 1.0" in result.stdout


def test_cli_detect_minimal(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "test.txt"
    f.write_bytes(b"\xef\xbb\xbfHello")
    assert main(["detect", "--minimal", str(f)]) == 0
    assert capsys.readouterr().out.strip() == "UTF-8-SIG"


def test_cli_detect_multiple_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    good = tmp_path / "a.txt"
    good.write_bytes(b"abc")
    assert main(["detect", str(good), str(tmp_path / "missing.txt")]) == 1
    captured = capsys.readouterr()
    assert "a.txt: ascii" in captured.out
    assert "missing.txt" in captured.err


def test_cli_requires_a_command(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_cli_dump_strict_stops_at_bad_value(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "bad_date.dat"
    f.write_bytes(
        tnefdata.mapi_stream(
            tnefdata.prop(tnefdata.APP_TIME, PropertyId.CREATION_TIME, tnefdata.double(1e300)),
            tnefdata.prop(tnefdata.LONG, 0x0E08, tnefdata.long(4096)),
        )
    )
    assert main(["dump", "--strict", str(f)]) == 1
    captured = capsys.readouterr()
    assert "not compliant" in captured.err
    assert "unreadable" not in captured.out
    assert "4096" not in captured.out


def test_cli_dump_loose_reports_bad_value(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "bad_date.dat"
    f.write_bytes(
        tnefdata.mapi_stream(
            tnefdata.prop(tnefdata.APP_TIME, PropertyId.CREATION_TIME, tnefdata.double(1e300)),
            tnefdata.prop(tnefdata.LONG, 0x0E08, tnefdata.long(4096)),
        )
    )
    assert main(["dump", str(f)]) == 0
    out = capsys.readouterr().out
    assert "4096" in out
    assert "INVALID_DATE" in out
