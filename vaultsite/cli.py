"""CLI entrypoints for vaultsite commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import subprocess
import sys
from pathlib import Path

from .config import ConfigError, VaultSiteConfig, load_config
from .errors import VaultSiteError
from .git.publisher import Publisher
from .logging import configure_logging
from .pipeline import SiteBuilder
from .render import SiteRenderer
from .store.filesystem import FileSystemContentStore
from .writer import SiteWriter


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_vault_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "vault",
        nargs="?",
        default=".",
        help="Path to the vault root (defaults to current directory).",
    )
    parser.add_argument(
        "--site-id",
        help="Only consider the structure document whose marker names this site.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultsite",
        description="Export a Markdown vault to a Docusaurus site from a structure document.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write debug-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Assemble the site model and print it as JSON.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_vault_arguments(build_parser)
    build_parser.add_argument(
        "--output",
        help="Write the JSON to this file instead of stdout.",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Build the site and write it into the export directory.",
    )
    _add_verbose_option(export_parser, suppress_default=True)
    _add_vault_arguments(export_parser)
    export_parser.add_argument("--title", help="Site title.")
    export_parser.add_argument("--url", help="URL of the deployed site.")
    export_parser.add_argument("--repo", help="Git repository the site is exported to.")
    export_parser.add_argument("--path", help="Export directory.")
    export_parser.add_argument(
        "--publish",
        action="store_true",
        help="Commit the exported files in the export directory.",
    )
    export_parser.add_argument(
        "--push",
        action="store_true",
        help="Push after committing (implies --publish).",
    )

    clone_parser = subparsers.add_parser(
        "clone",
        help="Clone the site repository into the export directory.",
    )
    _add_verbose_option(clone_parser, suppress_default=True)
    clone_parser.add_argument(
        "vault",
        nargs="?",
        default=".",
        help="Path to the vault root (defaults to current directory).",
    )
    clone_parser.add_argument("--repo", help="Git repository URL to clone.")

    return parser


def _create_builder(config: VaultSiteConfig) -> SiteBuilder:
    store = FileSystemContentStore(config.root, config.exclude_paths)
    renderer = SiteRenderer(branch=config.publish.branch or "main")
    return SiteBuilder(
        store,
        writer=SiteWriter(store, renderer),
        publisher=Publisher(),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for vaultsite commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.vault))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "build":
        site_config = config.site_config(site_id=args.site_id)
        builder = _create_builder(config)
        try:
            site = asyncio.run(builder.build(site_config))
        except VaultSiteError as exc:
            parser.exit(1, f"vaultsite build failed: {exc}\n")
        payload = json.dumps(site.to_dict(), indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload + "\n", encoding="utf-8")
            print(f"Site model written to {_relativize(Path(args.output))}")
        else:
            print(payload)
    elif args.command == "export":
        site_config = config.site_config(
            title=args.title,
            url=args.url,
            repo=args.repo,
            path=str(Path(args.path).resolve()) if args.path else None,
            site_id=args.site_id,
        )
        publish = config.publish
        if args.publish or args.push:
            publish.enabled = True
            publish.push = publish.push or args.push
        builder = _create_builder(config)
        try:
            outcome = asyncio.run(builder.export(site_config, publish))
        except (VaultSiteError, OSError) as exc:
            parser.exit(1, f"vaultsite export failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Exported {len(outcome.files)} files to {_relativize(Path(outcome.site.path))}")
        if outcome.published:
            print("Changes committed")
    elif args.command == "clone":
        repo = args.repo or config.site.repo
        if not repo:
            parser.exit(1, "No repository configured. Pass --repo or set site.repo.\n")
        destination = Path(config.site_config(repo=repo).path)
        try:
            cloned = Publisher().clone(repo, destination)
        except (subprocess.CalledProcessError, OSError) as exc:
            parser.exit(1, f"vaultsite clone failed: {exc}\n")
        if cloned:
            print(f"Cloned {repo} into {_relativize(destination)}")
        else:
            print(f"Repository already present at {_relativize(destination)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
