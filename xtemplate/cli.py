"""Cyclopts CLI entrypoint for expanding ``<component>`` tags in templates.

The ``xtemplate`` console script translates one template file at a time,
replacing every component tag with the named blocks produced by the
translator, and can list the components a file uses together with whether a
template exists for each of them.

Options are read from the command line, from ``XTEMPLATE_*`` environment
variables, or from an ``xtemplate.yaml`` configuration file.

Examples
--------
Translate a page, printing the result to stdout:

>>> from xtemplate.cli import main
>>> main()  # doctest: +SKIP

List the components used by a page:

>>> from xtemplate.cli import app
>>> app(["components", "templates/index.html"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec
import msgspec.json as msgspec_json
from cyclopts import App, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from ruamel.yaml.error import YAMLError

from ._constants import TYPE_ATTRIBUTE
from .components import ComponentTemplateLoader, direct_slots, list_components
from .config import TranslatorConfig, load_translator_config
from .errors import TranslationError
from .translator import Translator

DEFAULT_CONFIG = Path("xtemplate.yaml")

log = logging.getLogger(__name__)
console = Console(stderr=True)

app = App(name="xtemplate", config=cyclopts.config.Env("XTEMPLATE_", command=False))  # type: ignore[unknown-argument]


class ComponentSummary(msgspec.Struct):
    """One well-formed component reported by ``xtemplate components``."""

    type: str
    props: dict[str, str]
    slots: list[str]
    resolved: bool


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging for the xtemplate CLI.

    Log levels:
    - Normal: only warnings and errors, such as fallback components
    - Verbose (``--verbose``): INFO level
    - Debug (``XTEMPLATE_DEBUG=1``): DEBUG level, every resolved component
    """
    debug = bool(os.environ.get("XTEMPLATE_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("xtemplate")
    package_logger.setLevel(level)
    package_logger.handlers = [handler]
    package_logger.propagate = False


def resolve_config(
    source: Path,
    *,
    config: Path = DEFAULT_CONFIG,
    templates_dir: Path | None = None,
    extension: str | None = None,
) -> TranslatorConfig:
    """Combine the configuration file, if any, with command-line overrides.

    A missing default configuration file is not an error: the templates
    directory then defaults to the folder holding ``source``. An explicitly
    named file must exist.
    """
    if config.exists() or config != DEFAULT_CONFIG:
        base = load_translator_config(config)
        log.info("Loaded configuration from %s", config)
    else:
        base = TranslatorConfig(templates_dir=source.parent)
    return base.with_overrides(templates_dir=templates_dir, extension=extension)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _read_source(source: Path) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        _fail(source, exc)


def _fail(source: Path, exc: Exception) -> typ.NoReturn:
    console.print(f"[red]error:[/red] {escape(f'{source}: {exc}')}", highlight=False)
    raise SystemExit(1) from exc


def _prepare(
    source: Path,
    *,
    config: Path,
    templates_dir: Path | None,
    extension: str | None,
) -> tuple[str, ComponentTemplateLoader]:
    try:
        settings = resolve_config(
            source, config=config, templates_dir=templates_dir, extension=extension
        )
    except (TranslationError, OSError, TypeError, YAMLError) as exc:
        _fail(config, exc)
    text = _read_source(source)
    return text, ComponentTemplateLoader(settings.components_dir, settings.extension)


@app.command(help="Expand component tags in a template file.")
def translate(
    source: typ.Annotated[Path, Parameter(help="Template file to translate")],
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to translator config", env_var="XTEMPLATE_CONFIG")
    ] = DEFAULT_CONFIG,
    templates_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Override the templates directory", env_var="XTEMPLATE_TEMPLATES_DIR"
        ),
    ] = None,
    extension: typ.Annotated[
        str | None,
        Parameter(
            help="Override the component file extension",
            env_var="XTEMPLATE_EXTENSION",
        ),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the result here instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Show progress messages")] = False,
) -> None:
    """Translate ``source`` and write the expanded template.

    Parameters
    ----------
    source : Path
        Template file containing ``<component>`` tags.
    config : Path, optional
        Path to the ``xtemplate.yaml`` configuration file; the default path
        is ignored when it does not exist.
    templates_dir : Path or None, optional
        Directory whose ``_components`` folder holds component templates.
    extension : str or None, optional
        Component template file extension.
    output : Path or None, optional
        Destination file; stdout is used when ``None``.
    verbose : bool, optional
        Log at INFO level.

    Raises
    ------
    SystemExit
        With status 1 when the source cannot be read or translated.
    """
    setup_logging(verbose)
    text, loader = _prepare(
        source, config=config, templates_dir=templates_dir, extension=extension
    )
    translator = Translator(loader)
    try:
        result = translator.translate(text)
    except TranslationError as exc:
        _fail(source, exc)
    log.info("Expanded %d component(s) from %s", translator.resolved, source)

    if output is None:
        sys.stdout.write(result)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="List the components used by a template file as JSON.")
def components(
    source: typ.Annotated[Path, Parameter(help="Template file to inspect")],
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to translator config", env_var="XTEMPLATE_CONFIG")
    ] = DEFAULT_CONFIG,
    templates_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Override the templates directory", env_var="XTEMPLATE_TEMPLATES_DIR"
        ),
    ] = None,
    extension: typ.Annotated[
        str | None,
        Parameter(
            help="Override the component file extension",
            env_var="XTEMPLATE_EXTENSION",
        ),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Show progress messages")] = False,
) -> None:
    """Print a JSON array describing every well-formed component in ``source``.

    Components are listed innermost first. ``resolved`` is ``false`` for
    components that would render the fallback snippet.
    """
    setup_logging(verbose)
    text, loader = _prepare(
        source, config=config, templates_dir=templates_dir, extension=extension
    )
    try:
        summaries = [
            ComponentSummary(
                type=tag.id,
                props={
                    key: value
                    for key, value in tag.attributes.items()
                    if key != TYPE_ATTRIBUTE
                },
                slots=[slot.name for slot in direct_slots(tag)],
                resolved=loader.exists(tag.id),
            )
            for tag in list_components(text)
        ]
    except TranslationError as exc:
        _fail(source, exc)
    print(msgspec_json.format(msgspec_json.encode(summaries), indent=2).decode())


def main() -> None:
    """Invoke the Cyclopts application behind the ``xtemplate`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
