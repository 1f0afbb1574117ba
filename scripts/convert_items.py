"""
Convert pasted item definitions into the exported Lua item table.

Reads JSON, a JavaScript object or a Lua table and writes the
`return { ... }` table the game server loads.

Usage:
    python scripts/convert_items.py items.lua
    python scripts/convert_items.py items.json --output shared/items.lua
    cat items.js | python scripts/convert_items.py - --format json
"""

import argparse
import json
import os
import sys

# Allow imports from the project root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(_root_dir, ".env"))

from services.item_import_service import get_item_import_service
from services.item_code_service import get_item_code_service


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Convert item definitions to a Lua item table")
    parser.add_argument("input", help="File with the item definitions, or - for stdin")
    parser.add_argument("--output", "-o", help="Write here instead of stdout")
    parser.add_argument(
        "--format",
        choices=["lua", "json"],
        default="lua",
        help="lua: item table (default); json: parsed items"
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print warnings")
    args = parser.parse_args(argv)

    try:
        content = read_input(args.input)
    except OSError as e:
        print(f"ERROR: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    result = get_item_import_service().process_import(content)

    for error in result.errors:
        print(f"ERROR: {error}", file=sys.stderr)
    if not result.success:
        return 1

    if not args.quiet:
        for warning in result.warnings:
            print(f"  {warning}", file=sys.stderr)

    if args.format == "json":
        output = json.dumps([item.to_dict() for item in result.items], ensure_ascii=False, indent=2)
    else:
        output = get_item_code_service().generate_multiple_items_code(result.items)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        print(f"Wrote {len(result.items)} items to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
