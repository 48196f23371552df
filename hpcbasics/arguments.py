"""List the command-line arguments a program was given."""

from __future__ import annotations

import sys


def describe_arguments(args: list[str]) -> str:
    """Return the report of the given arguments (program name excluded)."""
    if not args:
        return "no arguments were given\n\n"
    plural = "s" if len(args) > 1 else " "
    lines = [f"\nexploring my {len(args)} argument{plural}:\n"]
    lines.extend(f"\targument {number} is : {arg}\n" for number, arg in enumerate(args, 1))
    lines.append("\n")
    return "".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    print(describe_arguments(args), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())