"""Tests for wren.binding — binding value bags onto dataclasses."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pytest

from wren.binding import SKIP, Unsigned, bind, bind_new, field
from wren.http.forms import FormData
from wren.http.query import QueryParams


@dataclass
class Scalars:
    flag: bool = True
    count: int = 7
    size: Unsigned = 7
    ratio: float = 7.5
    name: str = "unset"
    raw: Any = None


@dataclass
class Stamped:
    at: datetime = datetime(2000, 1, 1)


@dataclass
class Lists:
    nums: list[int] = field(default_factory=lambda: [9])
    tags: list[str] = field(default_factory=lambda: ["keep"])


@dataclass
class Paging:
    page: int = 1
    per_page: int = field(source="n", default=20)


@dataclass
class Search:
    paging: Paging = field(embed=True, default_factory=Paging)
    q: str = ""


@dataclass
class Tagged:
    title: str = field(source="t", default="")
    secret: str = field(source=SKIP, default="original")
    _hidden: str = "private"
    extra: dict[str, str] = field(default_factory=dict)


@dataclass
class Required:
    page: int


@dataclass
class Wrapper:
    inner: Required = field(embed=True, default=None)  # type: ignore[assignment]
    q: str = ""


class TestBooleanCoercion:
    @pytest.mark.parametrize("raw", ["true", "True", "TRUE", "t", "T", "1"])
    def test_truthy_tokens(self, raw: str) -> None:
        assert bind({"flag": raw}, Scalars(flag=False)).flag is True

    @pytest.mark.parametrize("raw", ["false", "False", "0", "f"])
    def test_falsy_tokens(self, raw: str) -> None:
        assert bind({"flag": raw}, Scalars()).flag is False

    def test_nonsense_is_false(self) -> None:
        assert bind({"flag": "nonsense"}, Scalars()).flag is False

    def test_empty_and_absent_are_false(self) -> None:
        assert bind({"flag": ""}, Scalars()).flag is False
        assert bind({}, Scalars()).flag is False

    def test_yes_is_not_a_token(self) -> None:
        assert bind({"flag": "yes"}, Scalars()).flag is False


class TestNumericCoercion:
    def test_int_parses(self) -> None:
        assert bind({"count": "42"}, Scalars()).count == 42
        assert bind({"count": "-3"}, Scalars()).count == -3
        assert bind({"count": "+5"}, Scalars()).count == 5

    def test_int_failure_zeroes_field(self) -> None:
        assert bind({"count": "abc"}, Scalars()).count == 0

    def test_int_rejects_python_only_forms(self) -> None:
        assert bind({"count": "1_000"}, Scalars()).count == 0
        assert bind({"count": " 4"}, Scalars()).count == 0
        assert bind({"count": "4.0"}, Scalars()).count == 0

    def test_int_out_of_64_bit_range_is_zero(self) -> None:
        assert bind({"count": str(2**63)}, Scalars()).count == 0
        assert bind({"count": str(2**63 - 1)}, Scalars()).count == 2**63 - 1

    def test_absent_int_is_zero(self) -> None:
        assert bind({}, Scalars()).count == 0

    def test_unsigned_parses_digits(self) -> None:
        assert bind({"size": "18446744073709551615"}, Scalars()).size == 2**64 - 1

    def test_unsigned_rejects_signs(self) -> None:
        assert bind({"size": "-1"}, Scalars()).size == 0
        assert bind({"size": "+1"}, Scalars()).size == 0

    def test_float_parses(self) -> None:
        assert bind({"ratio": "2.5"}, Scalars()).ratio == 2.5
        assert bind({"ratio": "1e3"}, Scalars()).ratio == 1000.0

    def test_float_failure_zeroes_field(self) -> None:
        result = bind({"ratio": "half"}, Scalars())
        assert result.ratio == 0.0
        assert isinstance(result.ratio, float)

    def test_float_overflow_is_zero(self) -> None:
        assert bind({"ratio": "1e400"}, Scalars()).ratio == 0.0
        assert bind({"ratio": "-1e400"}, Scalars()).ratio == 0.0

    def test_float_explicit_infinity_parses(self) -> None:
        assert bind({"ratio": "inf"}, Scalars()).ratio == math.inf
        assert bind({"ratio": "-Infinity"}, Scalars()).ratio == -math.inf

    def test_float_rejects_non_ascii_digits(self) -> None:
        assert bind({"ratio": "\uff11\uff12"}, Scalars()).ratio == 0.0


class TestStringCoercion:
    def test_string_verbatim(self) -> None:
        assert bind({"name": "  spaced  "}, Scalars()).name == "  spaced  "

    def test_absent_string_is_empty(self) -> None:
        assert bind({}, Scalars()).name == ""

    def test_any_gets_raw_string(self) -> None:
        assert bind({"raw": "42"}, Scalars()).raw == "42"

    def test_first_value_wins(self) -> None:
        assert bind(QueryParams(b"name=first&name=second"), Scalars()).name == "first"


class TestDatetimeCoercion:
    def test_fixed_format_parses(self) -> None:
        result = bind({"at": "2024-03-09 14:05:59"}, Stamped())
        assert result.at == datetime(2024, 3, 9, 14, 5, 59)
        assert result.at.tzinfo is None

    def test_failure_leaves_field_untouched(self) -> None:
        assert bind({"at": "2024-03-09T14:05:59"}, Stamped()).at == datetime(2000, 1, 1)
        assert bind({"at": "2024-3-9 14:05:59"}, Stamped()).at == datetime(2000, 1, 1)
        assert bind({"at": "2024-02-30 00:00:00"}, Stamped()).at == datetime(2000, 1, 1)

    def test_absent_leaves_field_untouched(self) -> None:
        assert bind({}, Stamped()).at == datetime(2000, 1, 1)


class TestSequenceCoercion:
    def test_int_list_zeroes_bad_entries_in_place(self) -> None:
        result = bind(QueryParams(b"nums=1&nums=x&nums=3"), Lists())
        assert result.nums == [1, 0, 3]

    def test_str_list_takes_all_values(self) -> None:
        result = bind(QueryParams(b"tags=a&tags=&tags=b"), Lists())
        assert result.tags == ["a", "", "b"]

    def test_absent_lists_are_assigned_empty(self) -> None:
        result = bind({}, Lists())
        assert result.nums == []
        assert result.tags == []

    def test_plain_mapping_lists(self) -> None:
        result = bind({"nums": ["4", "5"], "tags": "solo"}, Lists())
        assert result.nums == [4, 5]
        assert result.tags == ["solo"]


class TestStructure:
    def test_embedded_fields_share_flat_namespace(self) -> None:
        result = bind(QueryParams(b"page=3&n=50&q=wren"), Search())
        assert result.paging.page == 3
        assert result.paging.per_page == 50
        assert result.q == "wren"

    def test_embedded_none_is_created(self) -> None:
        target = Search(paging=None)  # type: ignore[arg-type]
        bind({"page": "2"}, target)
        assert isinstance(target.paging, Paging)
        assert target.paging.page == 2

    def test_embedded_none_with_required_fields_left_alone(self) -> None:
        result = bind({"page": "2", "q": "x"}, Wrapper())
        assert result.inner is None
        assert result.q == "x"

    def test_source_annotation(self) -> None:
        assert bind({"t": "Hello", "title": "ignored"}, Tagged()).title == "Hello"

    def test_skip_sentinel_never_written(self) -> None:
        result = bind({"secret": "x", "-": "y"}, Tagged())
        assert result.secret == "original"

    def test_unexported_field_skipped(self) -> None:
        assert bind({"_hidden": "exposed"}, Tagged())._hidden == "private"

    def test_unhandled_type_untouched(self) -> None:
        target = Tagged(extra={"k": "v"})
        assert bind({"extra": "x"}, target).extra == {"k": "v"}

    def test_nested_non_embedded_dataclass_untouched(self) -> None:
        @dataclass
        class Outer:
            paging: Paging = field(default_factory=Paging)

        result = bind({"page": "9"}, Outer())
        assert result.paging.page == 1


class TestBindApi:
    def test_returns_target(self) -> None:
        target = Scalars()
        assert bind({}, target) is target

    def test_frozen_dataclass(self) -> None:
        @dataclass(frozen=True, slots=True)
        class Frozen:
            q: str = ""
            page: int = 1

        result = bind_new(Frozen, FormData.from_urlencoded(b"q=hi&page=4"))
        assert result == Frozen(q="hi", page=4)

    def test_bind_new(self) -> None:
        result = bind_new(Paging, {"page": "5"})
        assert result.page == 5
        assert result.per_page == 0

    def test_non_dataclass_target_rejected(self) -> None:
        with pytest.raises(TypeError):
            bind({}, object())
        with pytest.raises(TypeError):
            bind({}, Scalars)


class TestStringAnnotations:
    def test_future_annotations_resolve(self) -> None:
        namespace: dict[str, Any] = {"__name__": "deferred_annotations"}
        exec(
            "from __future__ import annotations\n"
            "from dataclasses import dataclass\n"
            "@dataclass\n"
            "class Deferred:\n"
            "    count: int = 1\n"
            "    flag: bool = False\n",
            namespace,
        )
        result = bind_new(namespace["Deferred"], {"count": "12", "flag": "true"})
        assert result.count == 12
        assert result.flag is True
