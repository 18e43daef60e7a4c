from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from pwcheck.cli import app

runner = CliRunner()


def test_run_validates_until_exit(project_dir: Path) -> None:
    result = runner.invoke(app, ["run"], input="Password1!\nPASSword1!\nexit\n")

    assert result.exit_code == 0, result.output
    assert ' [✖ INVÁLIDA] "Password1!"' in result.stdout
    assert " - Debe contener al menos dos letras mayúsculas." in result.stdout
    assert ' [✔ VÁLIDA] "PASSword1!"' in result.stdout

    lines = (project_dir / "registro.txt").read_text(encoding="utf-8").splitlines()
    assert sorted(lines) == sorted(['[✖ INVÁLIDA] "Password1!"', '[✔ VÁLIDA] "PASSword1!"'])

    summaries = list((project_dir / "artifacts" / "session_summaries").glob("*_session_summary.json"))
    assert len(summaries) == 1
    payload = json.loads(summaries[0].read_text(encoding="utf-8"))
    assert payload["submitted"] == 2
    assert payload["workers"] == 2
    assert payload["records_written"] == 2
    assert (project_dir / "logs" / "pwcheck.log").exists()


def test_run_from_input_file_with_overrides(project_dir: Path, tmp_path: Path) -> None:
    input_file = tmp_path / "candidates.txt"
    input_file.write_text("".join(f"Cand{idx:02d}xY!\n" for idx in range(20)), encoding="utf-8")
    log_file = tmp_path / "custom" / "out.txt"

    result = runner.invoke(
        app,
        [
            "run",
            "--input-file",
            str(input_file),
            "--workers",
            "3",
            "--max-pending",
            "2",
            "--log-file",
            str(log_file),
            "--no-banner",
            "--no-summary",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Validador" not in result.stdout
    assert len(log_file.read_text(encoding="utf-8").splitlines()) == 20
    assert not (project_dir / "registro.txt").exists()
    assert not (project_dir / "artifacts").exists()


def test_run_missing_input_file(project_dir: Path) -> None:
    result = runner.invoke(app, ["run", "--input-file", str(project_dir / "nope.txt")])

    assert result.exit_code == 2


def test_exit_only_writes_nothing(project_dir: Path) -> None:
    result = runner.invoke(app, ["run", "--no-summary"], input="EXIT\n")

    assert result.exit_code == 0
    assert not (project_dir / "registro.txt").exists()


def test_check_prints_feedback_without_logging(project_dir: Path) -> None:
    result = runner.invoke(app, ["check", "PASSword1!", ""])

    assert result.exit_code == 0
    assert result.stdout.startswith(' [✔ VÁLIDA] "PASSword1!"\n [✖ INVÁLIDA] ""\n')
    assert result.stdout.count(" - ") == 5
    assert not (project_dir / "registro.txt").exists()


def test_rules_lists_messages_in_order() -> None:
    result = runner.invoke(app, ["rules"])

    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "1. Debe tener al menos 8 caracteres de longitud."
    assert result.stdout.splitlines()[4] == "5. Debe contener al menos un dígito."


def test_show_config_renders_yaml(project_dir: Path) -> None:
    result = runner.invoke(app, ["show-config"])

    assert result.exit_code == 0
    assert "workers: 2" in result.stdout
    assert "exit_token: exit" in result.stdout
