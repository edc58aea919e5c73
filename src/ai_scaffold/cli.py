"""Command-line entrypoint for ai-scaffold."""

from __future__ import annotations

import argparse
import logging
import sys

from ai_scaffold import __version__

_MISSING_DEPENDENCIES = (
    "Runtime dependencies are missing. "
    "Install project dependencies first (pip install -e .)."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-scaffold",
        description=(
            "Generate Laravel migrations and validation rules from a "
            "natural language description."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for ai-scaffold.",
    )
    subparsers.add_parser(
        "healthcheck",
        help="Check PostgreSQL connectivity with a read-only session.",
    )

    migration_parser = subparsers.add_parser(
        "generate-migration",
        help="Create a new migration using AI.",
    )
    migration_parser.add_argument(
        "name", nargs="?", default=None, help="The name of the migration."
    )
    migration_parser.add_argument(
        "-d", "--description", default=None, help="The description of the migration."
    )
    migration_parser.add_argument(
        "-t",
        "--table",
        default=None,
        help="Existing table the migration changes; its columns are sent as context.",
    )
    migration_parser.add_argument(
        "-p",
        "--path",
        default=None,
        help="The location where the migration file should be created.",
    )
    migration_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the prompt without calling the generation service.",
    )

    rule_parser = subparsers.add_parser(
        "generate-rule",
        help="Create a new validation rule using AI.",
    )
    rule_parser.add_argument(
        "name", nargs="?", default=None, help="The name of the rule class."
    )
    rule_parser.add_argument(
        "-d",
        "--description",
        default=None,
        help="The description of the validation rule.",
    )
    rule_parser.add_argument(
        "--implicit",
        action="store_true",
        help="Generate an implicit validation rule.",
    )
    rule_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Create the class even if the rule already exists.",
    )
    rule_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the prompt without calling the generation service.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _ask(question: str) -> str:
    try:
        return input(f"{question}\n> ")
    except EOFError:
        return ""


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "config-check":
        from ai_scaffold.config import ConfigError, load_settings

        try:
            settings = load_settings()
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        redacted = "***" if settings.openai_api_key else "(not set)"
        print("Configuration loaded successfully:")
        print(f"- OPENAI_API_KEY: {redacted}")
        print(f"- OPENAI_MODEL: {settings.openai_model}")
        print(f"- OPENAI_BASE_URL: {settings.openai_base_url}")
        print(f"- POSTGRES_DSN: {settings.postgres_dsn or '(not set)'}")
        print(f"- DEFAULT_SCHEMA: {settings.default_schema}")
        print(f"- MIGRATIONS_PATH: {settings.migrations_path}")
        print(f"- RULES_PATH: {settings.rules_path}")
        print(f"- RULES_NAMESPACE: {settings.rules_namespace}")
        return 0

    if args.command == "healthcheck":
        try:
            from ai_scaffold.config import ConfigError, load_settings
            from ai_scaffold.db.connection import (
                DatabaseConnectionError,
                check_postgres_health,
            )
        except ModuleNotFoundError:
            print(_MISSING_DEPENDENCIES, file=sys.stderr)
            return 2

        try:
            settings = load_settings()
            settings.validate_database_requirements()
            result = check_postgres_health(settings.postgres_dsn)
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2
        except DatabaseConnectionError as exc:
            print(f"Healthcheck failed:\n{exc}", file=sys.stderr)
            return 1

        print("PostgreSQL healthcheck succeeded:")
        print(f"- database: {result.current_database}")
        print(f"- user: {result.current_user}")
        print(f"- server_version: {result.server_version}")
        print(f"- transaction_read_only: {result.transaction_read_only}")
        return 0

    if args.command in ("generate-migration", "generate-rule"):
        try:
            from ai_scaffold.commands import CommandOrchestrator
            from ai_scaffold.config import ConfigError, load_settings
            from ai_scaffold.db.introspect import PostgresSchemaProbe
            from ai_scaffold.inputs import InputResolver
            from ai_scaffold.llm import create_text_generator
        except ModuleNotFoundError:
            print(_MISSING_DEPENDENCIES, file=sys.stderr)
            return 2

        table = getattr(args, "table", None)
        try:
            settings = load_settings()
            if args.command == "generate-migration" and not args.dry_run:
                settings.validate_llm_requirements()
            if table:
                settings.validate_database_requirements()
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        schema_probe = (
            PostgresSchemaProbe(settings.postgres_dsn, settings.default_schema)
            if table
            else None
        )
        orchestrator = CommandOrchestrator(
            create_text_generator(settings),
            settings=settings,
            resolver=InputResolver(_ask),
            schema_probe=schema_probe,
        )

        if args.command == "generate-migration":
            return orchestrator.generate_migration(
                args.name,
                args.description,
                table=table,
                path=args.path,
                dry_run=args.dry_run,
            )
        return orchestrator.generate_rule(
            args.name,
            args.description,
            implicit=args.implicit,
            force=args.force,
            dry_run=args.dry_run,
        )

    print(f"Command '{args.command}' is not implemented.", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
