"""thynkai CLI entry point."""

import json
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from typer.core import TyperGroup

from thynkai import __version__, cli_logger, exit_codes
from thynkai.config import load_settings
from thynkai.digest import compute_digest
from thynkai.errors import format_validation_errors, handle_cli_error
from thynkai.formats import MODALITIES, is_semver
from thynkai.fs import InvalidJsonError
from thynkai.git import is_git_available
from thynkai.publish import DRY_RUN_NOTE, summarize_changes
from thynkai.scaffold import DEFAULT_VERSION, scaffold_model
from thynkai.validate import RegistryValidationError, validate_models

HELP = "Thynkai toolkits - scaffold, validate, digest and publish model registry entries."

EXAMPLES = """\
Examples:
  thynkai init model --modality text --slug my-model --id thynkai/my-model
  thynkai validate models --root .
  thynkai digest --file ./artifact.bin
  thynkai publish --root . --since HEAD~1
"""


class RegistryGroup(TyperGroup):
    """Command group that reports unknown commands with usage and exit code 1.

    A help flag anywhere after an unknown command still shows usage and exits 0.
    """

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Resolve a subcommand, turning "No such command" into a clean usage error."""
        try:
            return super().resolve_command(ctx, args)
        except click.NoSuchOption:
            raise
        except click.UsageError:
            if any(arg in ctx.help_option_names for arg in args):
                click.echo(ctx.get_help())
                raise typer.Exit(exit_codes.SUCCESS) from None
            _fail_unknown_command(ctx, args[0])


def _fail_unknown_command(ctx: click.Context, name: str) -> NoReturn:
    cli_logger.error(f"Unknown command: {name}")
    click.echo(ctx.get_help())
    raise typer.Exit(exit_codes.GENERAL_ERROR)


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    name="thynkai",
    help=HELP,
    epilog=EXAMPLES,
    cls=RegistryGroup,
    context_settings=CONTEXT_SETTINGS,
    add_completion=False,
)
init_app = typer.Typer(name="init", help="Scaffold registry entries.", cls=RegistryGroup)
validate_app = typer.Typer(name="validate", help="Validate registry trees.", cls=RegistryGroup)
app.add_typer(init_app, name="init")
app.add_typer(validate_app, name="validate")

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"thynkai v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show thynkai version and exit.",
    ),
) -> None:
    """Thynkai toolkits - scaffold, validate, digest and publish model registry entries."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        raise typer.Exit(exit_codes.SUCCESS)


@init_app.callback(invoke_without_command=True)
def init_main(ctx: typer.Context) -> None:
    """Scaffold registry entries."""
    if ctx.invoked_subcommand is None:
        _fail_unknown_command(ctx, "init")


@validate_app.callback(invoke_without_command=True)
def validate_main(ctx: typer.Context) -> None:
    """Validate registry trees."""
    if ctx.invoked_subcommand is None:
        _fail_unknown_command(ctx, "validate")


def _usage_error(message: str) -> NoReturn:
    """Report a missing or invalid flag and exit."""
    cli_logger.error(message)
    raise typer.Exit(exit_codes.GENERAL_ERROR)


RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        help="Registry root directory. Defaults to THYNKAI_ROOT or the current directory.",
    ),
]


@init_app.command("model")
def init_model(
    modality: Annotated[
        str | None,
        typer.Option("--modality", help="Model modality: text, vision or multimodal."),
    ] = None,
    slug: Annotated[
        str | None,
        typer.Option("--slug", help="Directory name for the model entry."),
    ] = None,
    model_id: Annotated[
        str | None,
        typer.Option("--id", help="Canonical model id (recommended org/name)."),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Display name. Defaults to the slug."),
    ] = None,
    owner: Annotated[
        str | None,
        typer.Option("--owner", help="Owner contributor id. Defaults to THYNKAI_OWNER."),
    ] = None,
    owner_name: Annotated[
        str | None,
        typer.Option("--owner-name", help="Owner display name. Defaults to THYNKAI_OWNER_NAME."),
    ] = None,
    version: Annotated[
        str,
        typer.Option("--version", help="First version (SemVer)."),
    ] = DEFAULT_VERSION,
    root: RootOption = None,
) -> None:
    """Scaffold a model entry (model.json, first version, PERFORMANCE.md).

    Existing files for the same modality/slug are overwritten.
    """
    if modality not in MODALITIES:
        _usage_error(f"init model: --modality must be one of {'|'.join(MODALITIES)}")
    if not slug:
        _usage_error("init model: --slug is required")
    if not model_id:
        _usage_error("init model: --id is required (recommended org/name)")
    if not is_semver(version):
        _usage_error("init model: --version must be SemVer")

    assert modality is not None and slug is not None and model_id is not None
    settings = load_settings()

    try:
        result = scaffold_model(
            root=root or settings.root,
            modality=modality,
            slug=slug,
            model_id=model_id,
            name=name,
            owner=owner or settings.owner,
            owner_name=owner_name or settings.owner_name,
            version=version,
        )
    except ValidationError as e:
        _usage_error(f"init model: {format_validation_errors(e)}")
    except ValueError as e:
        _usage_error(f"init model: {e}")
    except OSError as e:
        cli_logger.error(f"Failed to scaffold model: {e}")
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e

    cli_logger.success(f"Scaffolded: {result.base_dir}")
    raise typer.Exit(exit_codes.SUCCESS)


@validate_app.command("models")
def validate_models_command(root: RootOption = None) -> None:
    """Validate a models registry tree.

    Stops at the first problem found and reports it.
    """
    target = root or load_settings().root

    try:
        report = validate_models(target)
    except (RegistryValidationError, InvalidJsonError) as e:
        cli_logger.error(str(e))
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e
    except OSError as e:
        cli_logger.error(f"Cannot read registry: {e}")
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e

    cli_logger.success(
        f"OK: models registry validation passed "
        f"({report.models} model(s), {report.versions} version(s))."
    )
    raise typer.Exit(exit_codes.SUCCESS)


@app.command()
def digest(
    file: Annotated[
        Path | None,
        typer.Option("--file", help="File to digest."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON instead of plaintext."),
    ] = False,
) -> None:
    """Compute the sha256 digest of a local file."""
    if file is None:
        _usage_error("digest: --file is required")
    assert file is not None

    try:
        value = compute_digest(file)
    except OSError as e:
        cli_logger.error(f"Cannot read {file}: {e.strerror or e}")
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e

    if json_output:
        print(json.dumps({"file": str(file), "digest": value}, indent=2))
    else:
        print(value)

    raise typer.Exit(exit_codes.SUCCESS)


@app.command()
def publish(
    root: RootOption = None,
    since: Annotated[
        str | None,
        typer.Option("--since", help="Git ref to diff against (e.g. HEAD~1)."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON instead of plaintext."),
    ] = False,
) -> None:
    """Print a dry-run summary of changed files.

    Uses git when available; otherwise lists every file under the root.
    Nothing is written or pushed.
    """
    target = root or load_settings().root

    try:
        summary = summarize_changes(target, since)
    except OSError as e:
        cli_logger.error(f"Cannot list files under {target}: {e.strerror or e}")
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e

    if json_output:
        print(json.dumps(summary.to_dict(), indent=2))
        # stdout stays parseable JSON
        cli_logger.note(DRY_RUN_NOTE)
        raise typer.Exit(exit_codes.SUCCESS)

    console.print(f"Changed files ({summary.count}):", markup=False, highlight=False)
    for path in summary.changed_files:
        console.print(f" - {path}", markup=False, highlight=False, soft_wrap=True)
    if not summary.from_git:
        reason = "git command failed" if is_git_available() else "git not installed"
        cli_logger.dim(f"({reason}; listing every file under {target})")

    print()
    print(f"Note: {DRY_RUN_NOTE}")
    raise typer.Exit(exit_codes.SUCCESS)


def main_cli() -> None:
    """CLI entry point with top-level exception handling.

    Runs the Typer app in non-standalone mode so usage errors and unhandled
    exceptions are reported as clean messages with exit code 1 instead of
    Click's exit code 2 or a raw traceback.
    """
    try:
        result = app(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(exit_codes.GENERAL_ERROR)
    except click.Abort:
        cli_logger.error("Aborted")
        sys.exit(exit_codes.GENERAL_ERROR)
    except Exception as e:
        sys.exit(handle_cli_error(e))

    sys.exit(result if isinstance(result, int) else exit_codes.SUCCESS)


if __name__ == "__main__":
    main_cli()
