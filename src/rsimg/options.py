"""
Option parser: turns the free-form ``-o/--options`` string into a ResizeConfig.

Supported options:

  size (required)
    {width}x{height}   exact target size in pixels, e.g. 200x100
    {percentage}%      scale both sides, e.g. 50%

  filter
    nearest | linear | cubic (default) | gaussian | lanczos3

Example:
  parse("size=200x100,filter=nearest")
    -> ResizeConfig(mode=AbsoluteSize(width=200, height=100), filter=FilterKind.NEAREST)
"""
import re
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from .errors import InvalidSizeError, MalformedOptionError, MissingOptionError

U32_MAX = 2**32 - 1

_PERCENT_RE = re.compile(r"\+?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class FilterKind(Enum):
    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"


FILTER_NAMES: dict[str, FilterKind] = {
    "default": FilterKind.CUBIC,
    "nearest": FilterKind.NEAREST,
    "linear": FilterKind.LINEAR,
    "cubic": FilterKind.CUBIC,
    "gaussian": FilterKind.GAUSSIAN,
    "lanczos3": FilterKind.LANCZOS3,
}


@dataclass(frozen=True)
class AbsoluteSize:
    width: int
    height: int


@dataclass(frozen=True)
class ScaleFactor:
    # Exact, so 29% of 100 px is 29 px and not 28
    scale: Fraction


ResizeMode = AbsoluteSize | ScaleFactor


@dataclass(frozen=True)
class ResizeConfig:
    mode: ResizeMode
    filter: FilterKind = FilterKind.CUBIC


def parse_raw_options(raw: str) -> dict[str, str]:
    """
    Split "k1=v1,k2=v2" into a dict. Later duplicates override earlier ones.
    """
    options = {}
    for option in raw.split(","):
        parts = option.split("=")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise MalformedOptionError(option)
        key, value = parts
        options[key] = value
    return options


def parse_filter(value: str | None) -> FilterKind:
    """
    Map a filter name to a FilterKind. Unknown or missing names give CUBIC.
    """
    if value is None:
        return FilterKind.CUBIC
    return FILTER_NAMES.get(value, FilterKind.CUBIC)


def _parse_u32(value: str, token: str) -> int:
    digits = token[1:] if token.startswith("+") else token
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidSizeError(value, f"{token!r} is not an unsigned integer")
    n = int(digits)
    if n == 0:
        raise InvalidSizeError(value, "width and height must be positive")
    if n > U32_MAX:
        raise InvalidSizeError(value, f"{token} is out of range")
    return n


def parse_size(value: str) -> ResizeMode:
    """
    Interpret a size value as either "WxH" or "N%".

    A value that splits on "x" into exactly two tokens is always treated as
    WxH, so "50x%" fails on the integer parse rather than as a percentage.
    """
    tokens = value.split("x")
    if len(tokens) == 2:
        width = _parse_u32(value, tokens[0])
        height = _parse_u32(value, tokens[1])
        return AbsoluteSize(width, height)

    if value.endswith("%"):
        number = value[:-1]
        if not _PERCENT_RE.fullmatch(number):
            raise InvalidSizeError(value, f"{number!r} is not a percentage")
        if float(number) == float("inf"):
            raise InvalidSizeError(value, "percentage is out of range")
        return ScaleFactor(Fraction(number) / 100)

    raise InvalidSizeError(value, "expected {width}x{height} or {percentage}%")


def parse(raw: str) -> ResizeConfig:
    """
    Parse an options string into a ResizeConfig.

    Raises:
        MalformedOptionError: a comma-separated piece is not key=value.
        MissingOptionError: no size option was given.
        InvalidSizeError: the size option is neither WxH nor N%.
    """
    options = parse_raw_options(raw)
    filter_kind = parse_filter(options.get("filter"))
    if "size" not in options:
        raise MissingOptionError("size")
    mode = parse_size(options["size"])
    return ResizeConfig(mode=mode, filter=filter_kind)
