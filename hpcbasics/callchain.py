"""A chain of four nested calls that each flag one bit of a number."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

from .arguments import describe_arguments

DEFAULT_ARG = 1
MAX_LEVEL = 4
_BUFFER_LIMIT = 98

_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


def _wrap32(value: int) -> int:
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    if not match:
        return 0
    digits = match[1]
    if len(digits.lstrip("+-")) > 40:
        value = -(1 << 63) if digits.startswith("-") else (1 << 63) - 1
    else:
        value = max(-(1 << 63), min((1 << 63) - 1, int(digits)))
    return _wrap32(value)


def _rejected(arg: int) -> int:
    return {-1: -2, -2: -1}.get(arg, -3)


@dataclass(frozen=True)
class CallTrace:
    """The outcome of one call chain: its argument, result and printed lines."""

    argument: int
    result: int
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)


class _Chain:
    def __init__(self) -> None:
        self.level = 0
        self.prefix = ""
        self.lines: list[str] = []

    def _put(self, index: int, char: str) -> None:
        self.prefix = self.prefix[:index] + char + self.prefix[index + 1:]

    def _enter(self) -> int:
        self.level += 1
        self._put(self.level, ".")
        pos = len(self.prefix)
        if pos < _BUFFER_LIMIT:
            self.prefix += "\t"
        return pos

    def _say(self, message: str) -> None:
        self.lines.append(f"{self.prefix} {message}")

    def first(self, arg: int) -> int:
        self.prefix = " " * min(_BUFFER_LIMIT, MAX_LEVEL)
        pos = self._enter()
        self._say(f"the function function_1 receives {arg}")
        if arg < 0:
            return _rejected(arg)
        value = _wrap32(arg * 2)
        self._say(
            "now it starts a call stack that you can follow: "
            f"the expected return value is {value | 16 | 32 | 64}"
        )
        self._put(self.level, " ")
        ret = self.second(value)
        self._put(self.level, ".")
        self.lines.append("")
        self._say(f"it obtained the value: {ret}")
        self.prefix = self.prefix[:pos]
        self.level -= 1
        return ret

    def second(self, arg: int) -> int:
        pos = self._enter()
        self._say(f"the function function_2 receives {arg}")
        if arg < 0:
            return _rejected(arg)
        value = arg | 16
        self._say("now it continues the call stack that you can follow")
        self._put(self.level, " ")
        ret = self.third(value)
        self.prefix = self.prefix[:pos]
        self.level -= 1
        return ret

    def third(self, arg: int) -> int:
        self._enter()
        self._say(f"the function function_3 receives {arg}")
        if arg < 0:
            return _rejected(arg)
        value = arg | 32
        self._say("now it continues the calls stack that you can follow")
        self._put(self.level, " ")
        ret = self.fourth(value)
        self.level -= 1
        return ret

    def fourth(self, arg: int) -> int:
        pos = self._enter()
        self._say(f"the function function_4 receives {arg}")
        if arg < 0:
            return _rejected(arg)
        value = arg | 64
        self._say("now it gets back")
        self._put(self.level, " ")
        self.prefix = self.prefix[:pos]
        self.level -= 1
        return value


def call_chain(arg: int) -> CallTrace:
    """Run the four-level call chain on arg and return its trace."""
    chain = _Chain()
    result = chain.first(arg)
    return CallTrace(arg, result, tuple(chain.lines))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        print(describe_arguments(args), end="")
        arg = _atoi(args[0])
    else:
        print(f"no arguments were given, using default: {DEFAULT_ARG}\n")
        arg = DEFAULT_ARG
    trace = call_chain(arg)
    print(trace.text, end="")
    verdict = "looks ok" if trace.result >= 0 else "something pathological happened"
    print(f"main has receveid a return value of {trace.result}: {verdict}")
    return trace.result


if __name__ == "__main__":
    raise SystemExit(main())