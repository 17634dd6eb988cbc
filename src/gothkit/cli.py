"""Command line interface for creating Goth Stack projects."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from pydantic import ValidationError

from .config import TemplateSettings
from .errors import CreateError, InvalidInputError, Stage, TreeIOError
from .fetch import TreeFetcher
from .scaffold import ProjectCreator

ACCOUNT_PROMPT = "Enter your GitHub username: "

_STAGE_MESSAGES = {
    Stage.FETCH_TEMPLATE: "Cloning template repository...",
    Stage.REWRITE_IDENTITY: "Updating module path...",
    Stage.MATERIALIZE: "Copying project files...",
}


def _non_empty(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("project name cannot be empty")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gothkit", description="Bootstrap Goth Stack projects")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every step to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser(
        "create",
        help="create a new Goth Stack project",
        description="Create a new Goth Stack project with the given name in the current directory.",
    )
    create_parser.add_argument("name", type=_non_empty, help="Name of the project directory")
    create_parser.add_argument(
        "--template-url",
        help="Clone the template from this location instead of the default repository",
    )
    create_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Write into the project directory even if it is not empty",
    )

    return parser


def _read_account(stdin: TextIO, stdout: TextIO) -> str:
    stdout.write(ACCOUNT_PROMPT)
    stdout.flush()
    account = stdin.readline().strip()
    if not account:
        raise InvalidInputError("GitHub username cannot be empty")
    return account


def _handle_create(
    args: argparse.Namespace,
    *,
    stdin: TextIO,
    stdout: TextIO,
    cwd: Path,
    environ: Mapping[str, str],
    fetcher: TreeFetcher | None,
) -> int:
    settings = TemplateSettings.from_env(environ, template_url=args.template_url)
    account = _read_account(stdin, stdout)

    def report(stage: Stage) -> None:
        message = _STAGE_MESSAGES.get(stage)
        if message:
            stdout.write(f"{message}\n")

    creator = ProjectCreator(settings, fetcher)
    result = creator.create(args.name, account, cwd, force=args.force, on_stage=report)

    stdout.write(f"Successfully created new {settings.project_label} project '{result.project_name}'!\n")
    stdout.write("Next steps:\n")
    for number, step in enumerate(settings.render_next_steps(result.project_name), start=1):
        stdout.write(f"{number}. {step}\n")
    return 0


def _report_failure(exc: CreateError, stderr: TextIO) -> None:
    stderr.write(f"Error during {exc.stage.value}: {exc}\n")
    # a failed rewrite only touched the scratch tree, which is already gone
    if isinstance(exc, TreeIOError) and exc.partial and exc.stage is Stage.MATERIALIZE:
        stderr.write("Warning: the project directory may be partially written; remove it before retrying\n")


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    cwd: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    fetcher: TreeFetcher | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    if args.command == "create":
        try:
            return _handle_create(
                args,
                stdin=stdin,
                stdout=stdout,
                cwd=Path(cwd) if cwd is not None else Path.cwd(),
                environ=os.environ if environ is None else environ,
                fetcher=fetcher,
            )
        except ValidationError as exc:
            stderr.write(f"Error: invalid settings: {exc}\n")
            return 1
        except CreateError as exc:
            _report_failure(exc, stderr)
            return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
