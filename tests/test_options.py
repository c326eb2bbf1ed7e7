"""Tests for the static option tables, validators and PrintOptions state.

Coverage:
* Every enumeration maps labels to ``-o key=value`` fragments.
* Free-form validators accept good input and reject bad input.
* PrintOptions keeps a flat, ordered argument list.
"""

from __future__ import annotations

import pytest

from lp_menu.core.models import DiscoveredOption, PrintOptions
from lp_menu.core.options import (
    ENUMERATED_OPTIONS,
    MEDIA,
    NUMBER_UP,
    ORIENTATION,
    QUALITY,
    SIDES,
    args_value,
    copies_args,
    normalize_page_ranges,
    page_ranges_args,
    printer_args,
    server_args,
    title_args,
)
from lp_menu.exceptions import InvalidOptionError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TestEnumerations:
    def test_all_tables_registered(self) -> None:
        keys = [spec.key for spec in ENUMERATED_OPTIONS]
        assert keys == ["orientation", "quality", "sides", "media", "number-up"]

    @pytest.mark.parametrize("spec", ENUMERATED_OPTIONS, ids=lambda s: s.key)
    def test_every_choice_is_an_o_flag(self, spec: object) -> None:
        for choice in spec.choices:  # type: ignore[attr-defined]
            assert choice.args[0] == "-o"
            assert len(choice.args) == 2

    def test_orientation_values(self) -> None:
        landscape = next(c for c in ORIENTATION.choices if c.label == "Landscape")
        assert landscape.args == ("-o", "orientation-requested=4")

    def test_quality_values(self) -> None:
        assert [c.args[1] for c in QUALITY.choices] == [
            "print-quality=3",
            "print-quality=4",
            "print-quality=5",
        ]

    def test_sides_values(self) -> None:
        assert ("-o", "sides=two-sided-long-edge") in [c.args for c in SIDES.choices]

    def test_media_contains_a4_and_letter(self) -> None:
        labels = [c.label for c in MEDIA.choices]
        assert "A4" in labels
        assert "Letter" in labels

    def test_number_up_values(self) -> None:
        assert [c.label for c in NUMBER_UP.choices] == ["1", "2", "4", "6", "9", "16"]
        assert NUMBER_UP.choices[1].args == ("-o", "number-up=2")

    def test_find_by_args(self) -> None:
        assert ORIENTATION.find(("-o", "orientation-requested=3")).label == "Portrait"
        assert ORIENTATION.find(("-o", "bogus")) is None
        assert ORIENTATION.find(None) is None


# ---------------------------------------------------------------------------
# Free-form validators
# ---------------------------------------------------------------------------

class TestPrinterAndServer:
    def test_printer(self) -> None:
        assert printer_args("  office ") == ("-d", "office")

    def test_server(self) -> None:
        assert server_args("print.example.com:631") == ("-h", "print.example.com:631")

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_rejected(self, value: str) -> None:
        with pytest.raises(InvalidOptionError, match="must not be empty"):
            printer_args(value)

    def test_whitespace_rejected(self) -> None:
        with pytest.raises(InvalidOptionError) as exc_info:
            server_args("two words")
        assert exc_info.value.hint is not None


class TestPageRanges:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1", "1"),
            ("1-4", "1-4"),
            ("1-4, 7, 9-12", "1-4,7,9-12"),
            (" 3-3 ", "3-3"),
        ],
    )
    def test_valid(self, raw: str, expected: str) -> None:
        assert normalize_page_ranges(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "4-2", "a", "1-", "-3", "1,,2", "1-2-3"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(InvalidOptionError, match="Invalid page range"):
            normalize_page_ranges(raw)

    def test_empty(self) -> None:
        with pytest.raises(InvalidOptionError, match="must not be empty"):
            normalize_page_ranges("  ")

    def test_args(self) -> None:
        assert page_ranges_args("2-3") == ("-P", "2-3")


class TestCopies:
    @pytest.mark.parametrize("value", ["1", " 12 ", 9999, 3])
    def test_valid(self, value: object) -> None:
        assert copies_args(value)[0] == "-n"  # type: ignore[arg-type]

    def test_value_is_normalized(self) -> None:
        assert copies_args(" 07 ") == ("-n", "7")

    @pytest.mark.parametrize("value", ["0", "-1", "10000"])
    def test_out_of_range(self, value: str) -> None:
        with pytest.raises(InvalidOptionError, match="Invalid number of copies"):
            copies_args(value)

    def test_not_a_number(self) -> None:
        with pytest.raises(InvalidOptionError) as exc_info:
            copies_args("two")
        assert exc_info.value.hint == "Enter a whole number."


class TestTitle:
    def test_title_keeps_inner_spaces(self) -> None:
        assert title_args("  Quarterly report ") == ("-t", "Quarterly report")

    def test_empty(self) -> None:
        with pytest.raises(InvalidOptionError):
            title_args("")


class TestArgsValue:
    def test_value(self) -> None:
        assert args_value(("-d", "office")) == "office"

    def test_none_and_short(self) -> None:
        assert args_value(None) is None
        assert args_value(("-o",)) is None


# ---------------------------------------------------------------------------
# PrintOptions
# ---------------------------------------------------------------------------

class TestPrintOptions:
    def test_flags_are_flat_and_ordered(self) -> None:
        options = PrintOptions()
        options.set("printer", ("-d", "office"))
        options.set("copies", ("-n", "2"))
        options.set("fit-to-page", ("-o", "fit-to-page"))
        assert options.flags == ["-d", "office", "-n", "2", "-o", "fit-to-page"]

    def test_reset_keeps_position(self) -> None:
        options = PrintOptions()
        options.set("a", ("-a",))
        options.set("b", ("-b",))
        options.set("a", ("-A",))
        assert options.flags == ["-A", "-b"]

    def test_unset(self) -> None:
        options = PrintOptions({"a": ("-a",), "b": ("-b",)})
        options.unset("a")
        options.unset("missing")
        assert list(options) == ["b"]

    def test_copy_is_independent(self) -> None:
        options = PrintOptions({"a": ("-a",)})
        snapshot = options.copy()
        options.set("b", ("-b",))
        assert "b" not in snapshot
        assert snapshot != options

    def test_equality_and_bool(self) -> None:
        assert PrintOptions() == PrintOptions()
        assert not PrintOptions()
        assert PrintOptions({"a": ("-a",)})
        assert len(PrintOptions({"a": ("-a",)})) == 1

    def test_clear(self) -> None:
        options = PrintOptions({"a": ("-a",)})
        options.clear()
        assert options.flags == []


class TestDiscoveredOption:
    def test_args_and_state_key(self) -> None:
        option = DiscoveredOption(
            key="Duplex",
            label="2-Sided Printing",
            choices=("None", "DuplexNoTumble"),
            default="None",
        )
        assert option.flag == "-o"
        assert option.state_key == "printer:Duplex"
        assert option.args_for("DuplexNoTumble") == ("-o", "Duplex=DuplexNoTumble")
