from __future__ import annotations

from sorbetperf.counters import (
    CLASSES_AND_MODULES,
    COUNT_CEILING,
    CounterFamily,
    extract_aggregate_count,
    extract_file_count,
    extract_method_count,
    extract_snapshot,
    parse_counter_line,
)
from sorbetperf.types import KnownCount, UnknownCount

SAMPLE = [
    "types.input.files 120",
    "garbage line",
    "types.input.classes 300",
    "types.input.modules 50",
]


def test_extracts_files_and_class_module_sum() -> None:
    assert extract_file_count(SAMPLE) == KnownCount(value=120)
    assert extract_aggregate_count(SAMPLE, CLASSES_AND_MODULES) == KnownCount(value=350)


def test_no_matching_lines_is_unknown_not_zero() -> None:
    lines = ["No errors! Great job.", "", "counters.unrelated 7"]
    assert isinstance(extract_file_count(lines), UnknownCount)
    assert isinstance(extract_aggregate_count(lines), UnknownCount)
    assert isinstance(extract_method_count(lines), UnknownCount)
    assert isinstance(extract_file_count([]), UnknownCount)


def test_reported_zero_stays_known() -> None:
    assert extract_method_count(["types.input.methods 0"]) == KnownCount(value=0)


def test_file_count_uses_first_match() -> None:
    lines = ["types.input.files 7", "types.input.files 9"]
    assert extract_file_count(lines) == KnownCount(value=7)


def test_malformed_values_are_skipped() -> None:
    lines = [
        "types.input.classes lots",
        "types.input.classes -4",
        "types.input.classes 12",
        "types.input.modules 3.5",
    ]
    assert extract_aggregate_count(lines) == KnownCount(value=12)
    assert isinstance(extract_method_count(["types.input.methods n/a"]), UnknownCount)


def test_only_malformed_family_lines_is_unknown() -> None:
    assert isinstance(extract_aggregate_count(["types.input.modules ?"]), UnknownCount)


def test_names_match_by_prefix() -> None:
    lines = ["xtypes.input.files 6", "types.input.files.total 5", "types.input.files 8"]
    assert extract_file_count(lines) == KnownCount(value=5)


def test_suffixed_family_counters_are_summed() -> None:
    lines = ["types.input.classes.total 300", "types.input.modules.total 50"]
    assert extract_aggregate_count(lines) == KnownCount(value=350)


def test_parse_counter_line_tolerates_padding_and_colon() -> None:
    parsed = parse_counter_line("  types.input.methods:    4242  ")
    assert parsed is not None
    assert parsed.name == "types.input.methods"
    assert parsed.value == 4242
    assert parse_counter_line("single") is None
    assert parse_counter_line("types.input.files ²") is None


def test_custom_family_sums_every_pattern() -> None:
    family = CounterFamily.of("symbols", r"types\.input\.(classes|modules)", r"types\.input\.sends")
    lines = SAMPLE + ["types.input.sends 25"]
    assert extract_aggregate_count(lines, family) == KnownCount(value=375)


def test_extract_snapshot_from_text_blob() -> None:
    text = "\n".join(SAMPLE) + "\n"
    snapshot = extract_snapshot(text)
    assert snapshot.file_count == KnownCount(value=120)
    assert snapshot.class_module_count == KnownCount(value=350)
    assert isinstance(snapshot.method_count, UnknownCount)


def test_oversized_value_is_clamped_not_raised() -> None:
    lines = ["types.input.classes " + "9" * 5000, "types.input.methods 100"]
    snapshot = extract_snapshot(lines)
    assert snapshot.class_module_count == KnownCount(value=COUNT_CEILING)
    assert snapshot.method_count == KnownCount(value=100)


def test_leading_zeros_do_not_count_towards_the_digit_limit() -> None:
    assert extract_file_count(["types.input.files " + "0" * 5000 + "42"]) == KnownCount(value=42)


def test_replacement_characters_from_bad_utf8_are_skipped() -> None:
    text = b"types.input.files 12\n\xff\xfe junk\ntypes.input.methods 7\xff\n".decode("utf-8", errors="replace")
    snapshot = extract_snapshot(text)
    assert snapshot.file_count == KnownCount(value=12)
    assert isinstance(snapshot.method_count, UnknownCount)
