"""
Tests for the command-line entry point.
"""

import logging
from pathlib import Path

import pytest

from power_supply_metrics.__main__ import main

EXAMPLE_CONFIG = Path(__file__).parent.parent / "config.example.conf"


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("power_supply_metrics").handlers.clear()


def write_config(path: Path, sysfs: Path, ignored: str = "^NOMATCH$") -> Path:
    path.write_text(
        f"""
        power_supply {{
            sysfs "{sysfs}";
            ignored_devices "{ignored}";
        }}
        """
    )
    return path


def test_once_prints_records(tmp_path: Path, sysfs_root: Path, make_supply, capsys) -> None:
    make_supply("BAT0", {"status": "Charging", "model_name": "X1"})
    config = write_config(tmp_path / "config.conf", sysfs_root)

    assert main(["--once", "--no-color", str(config)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 11
    assert lines[0].startswith('node_power_supply_alarm{chargeFullDesign="",model="X1",')
    status = [line for line in lines if line.startswith("node_power_supply_status{")]
    assert status[0].endswith(" 1")


def test_once_default_pattern_skips_battery(
    tmp_path: Path, sysfs_root: Path, make_supply, capsys
) -> None:
    make_supply("BAT0", {"status": "Charging"})
    config = write_config(tmp_path / "config.conf", sysfs_root, ignored=r"^(BAT|AC)\d+$")

    assert main(["--once", str(config)]) == 0
    assert capsys.readouterr().out == ""


def test_once_reports_enumeration_failure(tmp_path: Path, capsys) -> None:
    config = write_config(tmp_path / "config.conf", tmp_path / "nosys")

    assert main(["--once", str(config)]) == 1
    assert "Collection failed" in capsys.readouterr().err


def test_validate_example_config(capsys) -> None:
    assert main(["--validate", str(EXAMPLE_CONFIG)]) == 0
    assert "Configuration is valid!" in capsys.readouterr().out


def test_validate_invalid_config(tmp_path: Path, capsys) -> None:
    config = tmp_path / "bad.conf"
    config.write_text('power_supply { ignored_devices "(BAT"; }')

    assert main(["--validate", str(config)]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_invalid_config_on_run(tmp_path: Path) -> None:
    config = tmp_path / "bad.conf"
    config.write_text("mqtt {")

    assert main(["--once", str(config)]) == 1


def test_missing_config_file(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "missing.conf")]) == 1
    assert "not found" in capsys.readouterr().err


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert "power-supply-metrics" in capsys.readouterr().out
