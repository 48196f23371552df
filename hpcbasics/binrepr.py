"""Show how a number is laid out in memory, byte by byte and bit by bit."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction

CHAR_BIT = 8
MAX_SIZE = 10

USAGE = (
    "Two argument expected: size(1,2,4,8,10)type(i,f) and string.\n"
    "Examples:\n\n"
    "  ./get_binary 4i 98767643\n"
    "    shows the binary representation of 98767643 using 4Bytes\n\n"
    "  ./get_binary 8f 3.141573\n"
    "    shows the binary representation of the float using 8Bytes\n"
)

_SPACE = " \t\n\v\f\r"
_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1
_ULONG_MAX = (1 << 64) - 1

_INT_RE = re.compile(r"[+-]?\d+")
_SPECIAL_RE = re.compile(r"([+-]?)(inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?)", re.IGNORECASE)
_HEX_RE = re.compile(
    r"([+-]?)0[xX](?=\.?[0-9a-fA-F])([0-9a-fA-F]*)(?:\.([0-9a-fA-F]*))?(?:[pP]([+-]?\d+))?"
)
_DEC_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class SpecError(ValueError):
    """A size/type specifier that cannot be used; carries the exit code."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(frozen=True)
class _FloatFormat:
    exp_bits: int
    frac_bits: int
    explicit_int: bool
    size: int


_FLOAT_FORMATS = {
    4: _FloatFormat(8, 23, False, 4),
    8: _FloatFormat(11, 52, False, 8),
    10: _FloatFormat(15, 63, True, 10),
}


def _strtol(text: str) -> int:
    match = _INT_RE.match(text.lstrip(_SPACE))
    if not match:
        return 0
    digits = match[0]
    if len(digits.lstrip("+-")) > 40:
        return _LONG_MIN - 1 if digits.startswith("-") else _ULONG_MAX + 1
    return int(digits)


def _atoi(text: str) -> int:
    value = max(_LONG_MIN, min(_LONG_MAX, _strtol(text)))
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


def _strtoul(text: str) -> int:
    value = _strtol(text)
    if abs(value) > _ULONG_MAX:
        return _ULONG_MAX
    return value % (1 << 64)


def _parse_real(text: str) -> tuple[bool, Fraction | float]:
    """Parse the leading number of text the way strtod does: (negative, magnitude)."""
    s = text.lstrip(_SPACE)
    match = _SPECIAL_RE.match(s)
    if match:
        word = match[2].lower()
        return match[1] == "-", math.inf if word.startswith("inf") else math.nan
    match = _HEX_RE.match(s)
    if match:
        whole, frac = match[2], match[3] or ""
        digits = (whole + frac).lstrip("0")
        if not digits:
            return match[1] == "-", Fraction(0)
        exponent = int(match[4] or 0) - 4 * len(frac)
        estimate = exponent + 4 * len(digits)
        if estimate > 16500:
            return match[1] == "-", math.inf
        if estimate < -16600:
            return match[1] == "-", Fraction(0)
        return match[1] == "-", Fraction(int(digits, 16)) * Fraction(2) ** exponent
    match = _DEC_RE.match(s)
    if match:
        number = Decimal(match[0])
        negative = match[0].startswith("-")
        if number.is_zero():
            return negative, Fraction(0)
        if number.adjusted() > 4940:
            return negative, math.inf
        if number.adjusted() < -4960:
            return negative, Fraction(0)
        return negative, abs(Fraction(number))
    return False, Fraction(0)


def _floor_log2(value: Fraction) -> int:
    num, den = value.numerator, value.denominator
    exponent = num.bit_length() - den.bit_length()
    if (num << max(-exponent, 0)) < (den << max(exponent, 0)):
        exponent -= 1
    return exponent


def _round_half_even(value: Fraction) -> int:
    quotient, remainder = divmod(value.numerator, value.denominator)
    twice = 2 * remainder
    if twice > value.denominator or (twice == value.denominator and quotient % 2):
        quotient += 1
    return quotient


def _encode_float(fmt: _FloatFormat, negative: bool, magnitude: Fraction | float) -> bytes:
    mbits = fmt.frac_bits + int(fmt.explicit_int)
    max_biased = (1 << fmt.exp_bits) - 1
    bias = (1 << (fmt.exp_bits - 1)) - 1
    infinity_mantissa = (1 << fmt.frac_bits) if fmt.explicit_int else 0

    if isinstance(magnitude, float):
        biased = max_biased
        if math.isnan(magnitude):
            mantissa = (3 if fmt.explicit_int else 1) << (fmt.frac_bits - 1)
        else:
            mantissa = infinity_mantissa
    elif magnitude == 0:
        biased = mantissa = 0
    else:
        emin = 1 - bias
        exponent = max(_floor_log2(magnitude), emin)
        significand = _round_half_even(magnitude / Fraction(2) ** (exponent - fmt.frac_bits))
        if significand >> (fmt.frac_bits + 1):
            significand >>= 1
            exponent += 1
        biased = exponent + bias if significand >> fmt.frac_bits else 0
        if biased >= max_biased:
            biased, mantissa = max_biased, infinity_mantissa
        elif fmt.explicit_int:
            mantissa = significand
        else:
            mantissa = significand & ((1 << fmt.frac_bits) - 1)

    bits = (int(negative) << (fmt.exp_bits + mbits)) | (biased << mbits) | mantissa
    return bits.to_bytes(fmt.size, "little")


def parse_spec(spec: str) -> tuple[int, str]:
    """Split a specifier such as '4i' or '8f' into (size, kind)."""
    if not spec:
        raise SpecError("type specifier is missing; must be either 'i' or 'f'", 1)
    last = spec[-1]
    if last in "0123456789":
        kind, digits = "i", spec
    else:
        kind, digits = last.lower(), spec[:-1]
    if kind not in ("i", "f"):
        raise SpecError(f"type specifier {kind} is not known; must be either 'i' or 'f'", 1)
    size = _atoi(digits)
    if size > MAX_SIZE:
        raise SpecError(f"no types having size {size} are known", 2)
    if kind == "f" and size < 4:
        raise SpecError(f"no float types having size {size} are known", 2)
    return size, kind


def encode(size: int, kind: str, text: str) -> bytes:
    """Return the little-endian bytes that the given type holds for text."""
    if kind not in ("i", "f"):
        raise ValueError(f"unknown kind {kind!r}")
    if size == 1:
        return (_atoi(text) & 0xFF).to_bytes(1, "little")
    if size == 2:
        return (_atoi(text) & 0xFFFF).to_bytes(2, "little")
    if size in (4, 8) and kind == "i":
        return (_strtoul(text) & ((1 << (8 * size)) - 1)).to_bytes(size, "little")
    if size in _FLOAT_FORMATS:
        return _encode_float(_FLOAT_FORMATS[size], *_parse_real(text))
    return bytes(max(size, 0))


def render(data: bytes) -> str:
    """Lay out the bytes as a numbered table with bits least significant first."""
    header = "".join(f"byte {j:2d}  " for j in range(len(data)))
    ruler = " ".join("".join(str(i) for i in range(CHAR_BIT)) for _ in data)
    dashes = " ".join("-" * CHAR_BIT for _ in data)
    bits = "".join(
        "".join(str((byte >> i) & 1) for i in range(CHAR_BIT)) + " " for byte in data
    )
    return f"\n{header}\n{ruler}\n{dashes}\n{bits}\n\n"


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or (len(args) == 1 and args[0] == "-h"):
        print(USAGE, end="")
        return -1
    try:
        size, kind = parse_spec(args[0])
    except SpecError as error:
        print(error)
        return error.exit_code
    if len(args) < 2:
        print(USAGE, end="")
        return -1
    print(render(encode(size, kind, args[1])), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())