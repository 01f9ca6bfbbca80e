import json

from click.testing import CliRunner

from hcisnoop.cli.main import cli
from conftest import BASE_TS


def test_info(sample_log_file):
    result = CliRunner().invoke(cli, ["info", str(sample_log_file)])
    assert result.exit_code == 0, result.output
    info = json.loads(result.output)
    assert info["record_count"] == 3
    assert info["link_type"] == "uart"
    assert info["time_range"] == [BASE_TS, BASE_TS + 3000]


def test_dump(sample_log_file):
    result = CliRunner().invoke(cli, ["dump", str(sample_log_file)])
    assert result.exit_code == 0, result.output
    doc = json.loads(result.output)
    assert doc["header"]["link_type_code"] == 1002
    assert [r["hci"]["frame"] for r in doc["records"]] == ["command", "event", "acl"]


def test_dump_limit_and_output(sample_log_file, tmp_path):
    out = tmp_path / "out.json"
    result = CliRunner().invoke(cli, ["dump", str(sample_log_file), "--limit", "1",
                                      "--output", str(out)])
    assert result.exit_code == 0, result.output
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert len(doc["records"]) == 1


def test_dump_reports_bad_header(tmp_path, snoop_header):
    path = tmp_path / "bad.log"
    path.write_bytes(snoop_header(magic=b"XXXXXXXX"))
    result = CliRunner().invoke(cli, ["dump", str(path)])
    assert result.exit_code != 0
    assert "identification pattern" in result.output


def test_dump_strict_rejects_length_mismatch(tmp_path, snoop_header, snoop_record):
    path = tmp_path / "lengths.log"
    path.write_bytes(snoop_header() + snoop_record(b"\x01\x03\x0c\x00", original_length=2))
    assert CliRunner().invoke(cli, ["dump", str(path)]).exit_code == 0
    result = CliRunner().invoke(cli, ["dump", str(path), "--strict"])
    assert result.exit_code != 0
    assert "included_length" in result.output


def test_cli_package_exports_group():
    from hcisnoop.cli import cli as exported
    assert exported is cli
