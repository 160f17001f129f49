"""
Command line interface for entity-baker.

Loads entity files and compiles them for every selected target into
every output directory.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .codegen import (
    CompilerCallbacks,
    CompilerOptions,
    EntityFile,
    compile_entities,
    get_registry,
)
from .codegen.core.config import BakerSettings, ConfigError
from .codegen.core.errors import GeneratorError
from .logging_config import get_logger, setup_logging
from .utils import EntityFileError, expand_input_files, load_entity_file

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_TARGET = 4

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="entity-baker",
        description="Generate ORM entity classes from entity descriptions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  entity-baker --doctrine entities.json
  entity-baker --ef --efc -o ./src/Entities "schemas/*.yaml"
  entity-baker -c entity-baker.json
  entity-baker --list-targets
        """.strip(),
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Entity files (JSON, XML or YAML), glob patterns or URLs "
        "(default: entities.json)",
    )

    parser.add_argument(
        "-c",
        "--config",
        action="append",
        default=[],
        metavar="FILE",
        help="Configuration file (JSON, XML or YAML), can be repeated",
    )

    parser.add_argument(
        "-o",
        "--out",
        action="append",
        default=[],
        metavar="DIR",
        help="Output directory, can be repeated (default: ./out)",
    )

    targets_group = parser.add_argument_group("targets")
    targets_group.add_argument(
        "-d", "--d", "--doctrine",
        dest="doctrine",
        action="store_true",
        help="Generate Doctrine entities (PHP)",
    )
    targets_group.add_argument(
        "--ef", "--entity-framework",
        dest="entity_framework",
        action="store_true",
        help="Generate Entity Framework entities (C#)",
    )
    targets_group.add_argument(
        "--efc", "--entity-framework-core",
        dest="entity_framework_core",
        action="store_true",
        help="Generate Entity Framework Core entities (C#)",
    )

    doctrine_group = parser.add_argument_group("Doctrine options")
    doctrine_group.add_argument(
        "--dxo", "--doctrine-xml-out",
        dest="doctrine_xml_out",
        metavar="DIR",
        help="Directory of the XML mapping files, relative to the output directory",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets",
        action="store_true",
        help="List supported targets and exit",
    )
    info_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show written files and warnings per entity",
    )
    info_group.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level (default: $ENTITY_BAKER_LOG_LEVEL or WARNING)",
    )

    return parser


def build_settings(args: argparse.Namespace, cwd: Path) -> BakerSettings:
    """
    Build run settings from config files and command line flags.

    Config files are applied in order, then the flags of the command line.

    Raises:
        ConfigError: If a config file cannot be loaded
    """
    settings = BakerSettings()

    for config_file in args.config:
        path = Path(config_file)
        if not path.is_absolute():
            path = cwd / path
        settings.apply_file(path)

    settings.doctrine = settings.doctrine or args.doctrine
    settings.entity_framework = settings.entity_framework or args.entity_framework
    settings.entity_framework_core = (
        settings.entity_framework_core or args.entity_framework_core
    )

    settings.input_files.extend(args.files)
    settings.out_dirs.extend(args.out)

    if args.doctrine_xml_out and args.doctrine_xml_out.strip():
        settings.doctrine_xml_out_dir = args.doctrine_xml_out.strip()

    return settings


class CLIHandler:
    """Runs the files x output directories x targets loop."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False) -> None:
        self.console = console or Console()
        self.verbose = verbose
        self.classes_ok = 0
        self.classes_failed = 0
        self.files_failed = 0
        logger.debug("CLIHandler initialized")

    def run(self, settings: BakerSettings, cwd: Path) -> int:
        """
        Compile all input files.

        Returns:
            Exit code (0 if everything succeeded, 1 otherwise)
        """
        targets = settings.targets
        if not targets:
            self.console.print("[red]✗ No target selected[/red]")
            return EXIT_NO_TARGET

        files = expand_input_files(settings.effective_input_files(), cwd)
        if not files:
            self.console.print("[red]✗ No input files found[/red]")
            return EXIT_FAILED

        for source in files:
            self._process_file(source, settings, targets, cwd)

        self._print_summary()
        return EXIT_OK if not (self.classes_failed or self.files_failed) else EXIT_FAILED

    def _process_file(
        self, source: str, settings: BakerSettings, targets: List[str], cwd: Path
    ) -> None:
        self.console.print(f"\n📄 [bold]{escape(source)}[/bold]")

        try:
            _, data = load_entity_file(source)
        except EntityFileError as e:
            self.console.print(f"  [red]✗ {escape(str(e))}[/red]")
            self.files_failed += 1
            return

        entity_file = EntityFile.from_dict(data)

        for out_dir in settings.effective_out_dirs():
            for target in targets:
                # Several targets must not write into the same directory
                target_out_dir = Path(out_dir)
                if len(targets) > 1:
                    target_out_dir = target_out_dir / target

                self._compile(entity_file, target, target_out_dir, settings, cwd)

    def _compile(
        self,
        entity_file: EntityFile,
        target: str,
        out_dir: Path,
        settings: BakerSettings,
        cwd: Path,
    ) -> None:
        options = CompilerOptions(
            target=target,
            file=entity_file,
            out_dir=out_dir,
            cwd=cwd,
            callbacks=CompilerCallbacks(
                on_before_generate_class=self._on_before_generate_class,
                on_class_generated=self._on_class_generated,
            ),
            config=settings.generator_config(target),
        )

        try:
            result = compile_entities(options)
        except (GeneratorError, ConfigError) as e:
            self.console.print(f"  [red]✗ {target}: {escape(str(e))}[/red]")
            self.files_failed += 1
            return

        self.console.print(f"  [dim]→ {result.out_dir}[/dim]")

        if self.verbose:
            for entity_result in result.succeeded:
                for path in entity_result.written:
                    self.console.print(f"    [green]+[/green] {path}")
                for path in entity_result.skipped:
                    self.console.print(f"    [dim]= {path} (kept)[/dim]")
                for warning in entity_result.warnings:
                    self.console.print(f"    [yellow]⚠ {warning}[/yellow]")

    def _on_before_generate_class(self, class_name: str, target: str) -> None:
        self.console.print(f"  🔧 {target}: '{class_name}'... ", end="")

    def _on_class_generated(
        self, error: Optional[BaseException], class_name: str, target: str
    ) -> None:
        if error is None:
            self.classes_ok += 1
            self.console.print("[green]✓[/green]")
        else:
            self.classes_failed += 1
            self.console.print(f"[red]✗ {escape(str(error))}[/red]")

    def _print_summary(self) -> None:
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Result", style="bold")
        table.add_column("Count", justify="right")
        table.add_row("[green]Generated classes[/green]", str(self.classes_ok))
        table.add_row("[red]Failed classes[/red]", str(self.classes_failed))
        if self.files_failed:
            table.add_row("[red]Failed files / targets[/red]", str(self.files_failed))

        self.console.print()
        self.console.print(table)


def _list_targets(console: Console) -> int:
    """List supported targets with details."""
    registry = get_registry()

    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Name")
    table.add_column("Language", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for target in registry.list_targets():
        info = registry.get_target_info(target)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {target}", info["name"], info["language"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] entity-baker [cyan]--doctrine[/cyan] [dim]entities.json[/dim]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return EXIT_OK


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """
    Entry point of the command line.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return EXIT_FAILED

    if args.list_targets:
        return _list_targets(console)

    cwd = Path(os.getcwd())

    try:
        settings = build_settings(args, cwd)
    except ConfigError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return EXIT_FAILED

    if not settings.targets:
        console.print("[red]✗ Select at least one target (--doctrine, --ef, --efc)[/red]\n")
        parser.print_help()
        return EXIT_NO_TARGET

    return CLIHandler(console, verbose=args.verbose).run(settings, cwd)