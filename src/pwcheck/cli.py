"""Typer CLI entrypoint for pwcheck."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

import typer
import yaml
from pydantic import ValidationError

from pwcheck.config import AppSettings, load_settings
from pwcheck.dispatch.pool import TaskDispatcher
from pwcheck.dispatch.task import ConsoleFeedback
from pwcheck.logging_utils import configure_logging
from pwcheck.results.writer import ResultLogger
from pwcheck.session.driver import SessionDriver
from pwcheck.session.summary import build_session_summary, write_session_summary
from pwcheck.validate.reports import format_feedback
from pwcheck.validate.rules import evaluate, rule_messages

app = typer.Typer(
    add_completion=False,
    help="pwcheck command line interface.",
    no_args_is_help=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    console_level: int | None = None,
) -> tuple[AppSettings, logging.Logger]:
    try:
        settings = load_settings(config_file=config_file)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid settings: {exc}") from exc
    if configure:
        logger = configure_logging(settings.paths.logs_root / "pwcheck.log", console_level=console_level)
    else:
        logger = logging.getLogger("pwcheck")
    return settings, logger


def _apply_overrides(
    settings: AppSettings,
    *,
    workers: int | None,
    max_pending: int | None,
    log_file: Path | None,
) -> AppSettings:
    dispatcher_updates: dict[str, object] = {}
    if workers is not None:
        dispatcher_updates["workers"] = workers
    if max_pending is not None:
        dispatcher_updates["max_pending"] = max_pending
    updates: dict[str, object] = {}
    if dispatcher_updates:
        updates["dispatcher"] = settings.dispatcher.model_copy(update=dispatcher_updates)
    if log_file is not None:
        updates["paths"] = settings.paths.model_copy(update={"result_log_file": log_file.resolve()})
    return settings.model_copy(update=updates) if updates else settings


def _open_input(input_file: Path | None) -> TextIO:
    if input_file is None:
        return typer.get_text_stream("stdin", errors="surrogateescape")
    if not input_file.is_file():
        raise typer.BadParameter(f"input file not found: {input_file}")
    return input_file.open("r", encoding="utf-8", errors="surrogateescape")


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False, allow_unicode=True)
    typer.echo(rendered)


@app.command("rules")
def rules() -> None:
    """List the password rules in evaluation order."""

    for index, message in enumerate(rule_messages(), start=1):
        typer.echo(f"{index}. {message}")


@app.command("check")
def check(
    passwords: list[str] = typer.Argument(..., help="Candidates to evaluate."),
) -> None:
    """Evaluate candidates synchronously and print feedback without logging them."""

    for candidate in passwords:
        typer.echo(format_feedback(candidate, evaluate(candidate)), nl=False)


@app.command("run")
def run(
    input_file: Path | None = typer.Option(
        None,
        "--input-file",
        help="Read candidates from a file instead of stdin.",
        dir_okay=False,
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        min=1,
        help="Worker threads in the validation pool.",
    ),
    max_pending: int | None = typer.Option(
        None,
        "--max-pending",
        min=1,
        help="Block input while this many candidates are queued or running.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Result log path (overrides paths.result_log_file).",
        dir_okay=False,
    ),
    no_banner: bool = typer.Option(
        False,
        "--no-banner",
        help="Skip the startup banner.",
    ),
    no_summary: bool = typer.Option(
        False,
        "--no-summary",
        help="Do not write the session summary JSON.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Validate candidates line by line until 'exit' or end of input."""

    settings, logger = _load_and_optionally_configure_logger(
        config_file,
        configure=True,
        console_level=logging.WARNING,
    )
    settings = _apply_overrides(settings, workers=workers, max_pending=max_pending, log_file=log_file)

    input_stream = _open_input(input_file)
    output_stream = typer.get_text_stream("stdout", errors="backslashreplace")
    try:
        result_logger = ResultLogger(settings.paths.result_log_file, fsync=settings.result_log.fsync)
        dispatcher = TaskDispatcher(
            result_logger,
            ConsoleFeedback(output_stream),
            workers=settings.dispatcher.workers,
            max_pending=settings.dispatcher.max_pending,
            thread_name_prefix=settings.dispatcher.thread_name_prefix,
        )
        driver = SessionDriver(
            dispatcher,
            input_stream,
            exit_token=settings.session.exit_token,
            prompt=settings.session.prompt,
            show_banner=settings.session.show_banner and not no_banner,
            output_stream=output_stream,
        )
        result = driver.run()
    finally:
        if input_file is not None:
            input_stream.close()

    logger.info(
        "run.complete session_id=%s submitted=%s result_log_file=%s",
        result.session_id,
        result.stats.submitted,
        settings.paths.result_log_file,
    )
    if settings.session.write_summary and not no_summary:
        payload = build_session_summary(
            result,
            result_log_file=settings.paths.result_log_file,
            workers=settings.dispatcher.workers,
            max_pending=settings.dispatcher.max_pending,
            records_written=result_logger.records_written,
        )
        summary_path = write_session_summary(payload, settings.paths.artifacts_root)
        logger.info("run.summary_written path=%s", summary_path)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
