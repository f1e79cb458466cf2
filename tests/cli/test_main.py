import json

from click.testing import CliRunner
from mountopt.cli import cli


def test_app():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert 'mountopt, parses container mount specifications.' in result.output
    for command in ("parse", "keys", "docker"):
        assert command in result.output


def test_parse():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "parse",
        "-m", "type=bind,source=/a,target=/b,bind-propagation=rshared",
        "--mount", "target=/c,ro,max-bandwidth=1mb",
    ])
    assert result.exit_code == 0, result.output
    assert "TYPE" in result.output
    assert "propagation=rshared" in result.output
    assert "bandwidth=1.0 MiB/s" in result.output
    assert "bind /a /b, volume  /c" in result.output


def test_parse_alias():
    runner = CliRunner()
    result = runner.invoke(cli, ["p", "-m", "target=/c"])
    assert result.exit_code == 0, result.output
    assert "volume  /c" in result.output


def test_parse_json():
    runner = CliRunner()
    result = runner.invoke(cli, [
        "parse", "--json",
        "-m", "type=bind,source=/a,target=/b",
        "-m", "target=/c,volume-label=a=b",
    ])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [item["kind"] for item in data] == ["bind", "volume"]
    assert data[1]["volume_options"]["labels"] == {"a": "b"}


def test_parse_invalid():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "-m", "target=/a", "-m", "target=/b,bogus-key=1"])
    assert result.exit_code == 2
    assert "bogus-key=1" in result.output


def test_parse_requires_mount():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse"])
    assert result.exit_code == 2


def test_unknown_type_warning():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "-m", "type=weird,target=/b"])
    assert result.exit_code == 0
    assert "Unknown mount type 'weird'" in result.output


def test_unknown_type_warning_disabled(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("mount:\n  check_types: false\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(path), "parse", "-m", "type=weird,target=/b"])
    assert result.exit_code == 0
    assert "Unknown mount type" not in result.output


def test_bad_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("mount:\n  check_types: maybe\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(path), "parse", "-m", "target=/b"])
    assert result.exit_code == 1
    assert "check_types" in result.output


def test_keys():
    runner = CliRunner()
    result = runner.invoke(cli, ["keys"])
    assert result.exit_code == 0
    assert "volume-label" in result.output
    assert "rshared" in result.output


def test_docker():
    runner = CliRunner()
    result = runner.invoke(cli, ["docker", "type=bind,source=/a,target=/b,ro"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["Type"] == "bind"
    assert data["ReadOnly"] is True


def test_docker_invalid_spec():
    runner = CliRunner()
    result = runner.invoke(cli, ["docker", "source=/a"])
    assert result.exit_code == 2
    assert "target is required" in result.output


def test_docker_rejected():
    runner = CliRunner()
    result = runner.invoke(cli, ["docker", "type=tmpfs,target=/b,volume-label=a"])
    assert result.exit_code == 1
    assert "Docker rejected mount" in result.output


def test_misspelled_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["prase", "-m", "target=/b"])
    assert result.exit_code == 2
    assert "No such command 'prase', did you mean 'parse'?" in result.output


def test_bandwidth_out_of_range():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "-m", "target=/b,max-bandwidth=" + "9" * 400])
    assert result.exit_code == 2
    assert "invalid value for max-bandwidth" in result.output
