import argparse
import logging
import sys
from pathlib import Path

from design_tokens.components.tokens import build
from design_tokens.rules.loader import load_rules
from design_tokens.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str | None) -> Rules:
    # An explicit --config must exist; the default file is optional.
    if path is not None:
        return load_rules(Path(path))
    if Path(RULES_PATH).exists():
        return load_rules(Path(RULES_PATH))
    return Rules()


def handle_build(args: argparse.Namespace) -> None:
    rules = get_rules(args.config)
    source = Path(args.source) if args.source else None
    out_dir = Path(args.out_dir) if args.out_dir else None

    result = build(rules, source=source, out_dir=out_dir, check_only=args.check)

    if args.check:
        print(f"{result.token_count} valid tokens.")
        return
    print(f"Built {result.token_count} tokens.")
    print(f"Theme: {result.theme_path}")
    print(f"CSS: {result.css_path}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Design token build tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # build
    build_parser = subparsers.add_parser(
        "build", help="Generate the Tailwind theme module and CSS variables"
    )
    build_parser.add_argument("--config", help=f"Rules file (default: {RULES_PATH} if present)")
    build_parser.add_argument("--source", help="Token JSON file, overrides pipeline.source")
    build_parser.add_argument("--out-dir", help="Output directory, overrides pipeline.out_dir")
    build_parser.add_argument(
        "--check", action="store_true", help="Validate tokens without writing output"
    )

    args = parser.parse_args(argv)

    try:
        if args.command == "build":
            handle_build(args)
    except Exception as e:
        logger.error(f"Error building design tokens: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
