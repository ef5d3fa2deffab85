"""Command line access to a content registry.

    registry-cli register greeting --type text --content "hello"
    registry-cli retrieve greeting
    registry-cli contains greeting
    registry-cli deregister greeting

Exit codes: 0 on success, 1 when the item does not exist, 2 for invalid
input, collisions and other registry errors.
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from registry_lib.config import build_registry, load_config
from registry_lib.content import ItemType, create_content
from registry_lib.errors import ItemNotFoundError, RegistryError
from registry_lib.logging_config import configure_logging
from registry_lib.storage import BACKENDS
from registry_lib.storage.serializer import SERIALIZERS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="registry-cli", description="Store and fetch typed content.")
    p.add_argument("--config", type=Path, default=None, help="Path to the registry YAML config")
    p.add_argument("--data-dir", default=None, help="Directory for the file backend")
    p.add_argument("--backend", choices=BACKENDS, default=None, help="Storage backend to use")
    p.add_argument("--serializer", choices=SERIALIZERS, default=None, help="Record format for the file backend")
    p.add_argument("--log-level", default=None, help="Override the configured log level")

    sub = p.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("register", help="Register new content under NAME")
    reg.add_argument("name")
    reg.add_argument("--type", dest="kind", required=True, choices=[t.name.lower() for t in ItemType])
    src = reg.add_mutually_exclusive_group(required=True)
    src.add_argument("--content", help="Raw content string")
    src.add_argument("--file", type=Path, help="Read raw content from a file")

    for cmd, text in (
        ("retrieve", "Print the content stored under NAME"),
        ("deregister", "Remove the item stored under NAME"),
        ("contains", "Exit 0 if NAME is registered, 1 otherwise"),
    ):
        sp = sub.add_parser(cmd, help=text)
        sp.add_argument("name")
    return p


def _run(args: argparse.Namespace) -> int:
    cfg = load_config(
        args.config,
        backend=args.backend,
        data_dir=args.data_dir,
        serializer=args.serializer,
        log_level=args.log_level,
    )
    configure_logging(args.config, level=cfg.log_level)

    registry = build_registry(cfg)
    registry.initialize()

    if args.command == "register":
        raw = args.file.read_text(encoding="utf-8") if args.file else args.content
        registry.register(args.name, create_content(args.kind, raw))
        print(f"Registered '{args.name}'")
        return EXIT_OK

    if args.command == "retrieve":
        content = registry.retrieve(args.name)
        sys.stdout.write(content.raw_content())
        if not content.raw_content().endswith("\n"):
            sys.stdout.write("\n")
        return EXIT_OK

    if args.command == "deregister":
        registry.deregister(args.name)
        print(f"Deregistered '{args.name}'")
        return EXIT_OK

    found = registry.contains(args.name)
    print("true" if found else "false")
    return EXIT_OK if found else EXIT_NOT_FOUND


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    try:
        return _run(args)
    except ItemNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (RegistryError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
