import pytest

import main


@pytest.fixture
def run(tmp_path, reset_logging):
    def _run(*argv):
        return main.main(list(argv) + ["--log-dir", str(tmp_path / "logs")])
    return _run


def test_single_pass(run, fan_xml_path, capsys):
    assert run(fan_xml_path, "--set", "temperature=25") == 0
    assert capsys.readouterr().out.strip() == "fan = 6.66667"


def test_trace_output(run, fan_xml_path, capsys):
    assert run(fan_xml_path, "--set", "temperature=15", "--trace") == 0
    out = capsys.readouterr().out
    assert "R1: W= 0.500 -> low" in out
    assert "R2: W= 0.500 -> high" in out
    assert "fan = 4.43122" in out


def test_batch(run, fan_xml_path, tmp_path, capsys):
    csv_path = tmp_path / "readings.csv"
    csv_path.write_text("temperature\n15\n25\n")
    assert run(fan_xml_path, "--batch", str(csv_path)) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "temperature=15 -> fan = 4.43122",
        "temperature=25 -> fan = 6.66667",
    ]


def test_toml_project_and_export(run, fan_config_path, tmp_path, capsys):
    out_path = tmp_path / "fan.xml"
    assert run(fan_config_path, "--save-fcl", str(out_path)) == 0
    assert out_path.exists()
    assert "Saved project to" in capsys.readouterr().out


def test_no_rule_fired_exits_non_zero(run, fan_config_path, capsys):
    assert run(fan_config_path, "--set", "temperature=-10", "--set", "humidity=200") == 1
    assert "error:" in capsys.readouterr().err


def test_bad_assignment_is_a_usage_error(run, fan_xml_path):
    with pytest.raises(SystemExit):
        run(fan_xml_path, "--set", "temperature")


def test_unknown_console_level_is_reported(run, fan_config_path, tmp_path, capsys):
    with open(fan_config_path, encoding="utf-8") as f:
        text = f.read().replace('CONSOLE_LEVEL = "WARNING"', 'CONSOLE_LEVEL = "FOO"')
    project = tmp_path / "fan_config.toml"
    project.write_text(text, encoding="utf-8")

    assert run(str(project)) == 1
    assert "unknown CONSOLE_LEVEL 'FOO'" in capsys.readouterr().err
