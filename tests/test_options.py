from fractions import Fraction

import pytest

from rsimg.errors import (
    ConfigError,
    InvalidSizeError,
    MalformedOptionError,
    MissingOptionError,
)
from rsimg.options import (
    AbsoluteSize,
    FilterKind,
    ResizeConfig,
    ScaleFactor,
    parse,
    parse_filter,
    parse_raw_options,
    parse_size,
)


def test_parse_size_and_filter():
    assert parse("size=200x100,filter=nearest") == ResizeConfig(
        AbsoluteSize(200, 100), FilterKind.NEAREST
    )


def test_parse_percentage_defaults_to_cubic():
    assert parse("size=50%") == ResizeConfig(ScaleFactor(0.5), FilterKind.CUBIC)


@pytest.mark.parametrize("w,h", [(1, 1), (128, 128), (1920, 1080), (4294967295, 3)])
def test_absolute_size(w, h):
    assert parse_size(f"{w}x{h}") == AbsoluteSize(w, h)


@pytest.mark.parametrize("n", ["0", "25", "12.5", "100", "250", ".5"])
def test_scale_factor(n):
    assert parse_size(f"{n}%") == ScaleFactor(Fraction(n) / 100)


@pytest.mark.parametrize("n", ["29", "57", "58", "0.29"])
def test_scale_factor_is_exact(n):
    scale = parse_size(f"{n}%").scale
    assert scale == Fraction(n) / 100
    assert int(100 * scale) == int(Fraction(n))


def test_plus_signed_dimensions():
    assert parse_size("+5x+7") == AbsoluteSize(5, 7)


@pytest.mark.parametrize(
    "value",
    ["200", "abc", "1x2x3", "", "50", "x", "200X100", "50 %"],
)
def test_size_without_recognised_form_fails(value):
    with pytest.raises(InvalidSizeError):
        parse_size(value)


@pytest.mark.parametrize(
    "value",
    [
        "0x10",
        "10x0",
        "-1x10",
        "1.5x2",
        "ax10",
        "10x",
        "4294967296x1",
        "50x%",
        "+x5",
        "++5x5",
        "5x-+5",
    ],
)
def test_bad_dimensions_fail(value):
    with pytest.raises(InvalidSizeError):
        parse_size(value)


@pytest.mark.parametrize("value", ["%", "abc%", "-5%", "inf%", "nan%", "1e999%"])
def test_bad_percentage_fails(value):
    with pytest.raises(InvalidSizeError):
        parse_size(value)


def test_missing_size():
    with pytest.raises(MissingOptionError) as exc:
        parse("filter=nearest")
    assert "size" in str(exc.value)


@pytest.mark.parametrize("raw", ["size", "size=", "=10x10", "size=1x1,", "a=b=c", ""])
def test_malformed_options(raw):
    with pytest.raises(MalformedOptionError):
        parse(raw)


def test_config_errors_share_base():
    for raw in ["size", "filter=cubic", "size=big"]:
        with pytest.raises(ConfigError):
            parse(raw)
    assert issubclass(ConfigError, ValueError)


def test_raw_options_last_duplicate_wins():
    assert parse_raw_options("size=1x1,size=2x2,foo=bar") == {
        "size": "2x2",
        "foo": "bar",
    }


@pytest.mark.parametrize(
    "name,kind",
    [
        ("default", FilterKind.CUBIC),
        ("nearest", FilterKind.NEAREST),
        ("linear", FilterKind.LINEAR),
        ("cubic", FilterKind.CUBIC),
        ("gaussian", FilterKind.GAUSSIAN),
        ("lanczos3", FilterKind.LANCZOS3),
        ("bogus", FilterKind.CUBIC),
        ("Nearest", FilterKind.CUBIC),
        (None, FilterKind.CUBIC),
    ],
)
def test_parse_filter(name, kind):
    assert parse_filter(name) is kind


def test_unknown_filter_does_not_fail():
    assert parse("size=10x10,filter=sinc").filter is FilterKind.CUBIC


def test_config_is_immutable():
    config = parse("size=10x10")
    with pytest.raises(AttributeError):
        config.filter = FilterKind.NEAREST
