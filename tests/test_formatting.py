"""Tests for template validation and rendering."""

import io

import pytest

from durfmt.decomposed import (
    MAX_TOTAL,
    SECS_PER_DAY,
    SECS_PER_HOUR,
    SECS_PER_YEAR,
    DecomposedTime,
    decompose_seconds,
)
from durfmt.errors import (
    DecomposeError,
    RenderError,
    TemplateError,
    UnexpectedDelimiterError,
    UnknownFieldError,
    ValueOutOfRangeError,
)
from durfmt.formatting import (
    FIELDS,
    DurationFormat,
    Template,
    display,
    format_duration,
    make_format,
    validate_template,
)


class BrokenStream:
    def write(self, text):
        raise OSError("disk full")


class TestFormatDuration:
    def test_hours(self):
        assert format_duration("%H hours", 2 * SECS_PER_HOUR) == "02 hours"

    def test_hours_minutes(self):
        assert format_duration("%H:%M", 2.5 * SECS_PER_HOUR) == "02:30"

    def test_sub_seconds(self):
        assert format_duration("%S.%x'%y'%z", 2.5 + 100e-6) == "02.500'100'000"

    def test_full_sub_second_template(self):
        assert format_duration("%M:%S.%x'%y", 90 + 500e-6) == "01:30.000'500"

    def test_unpadded_fields(self):
        time = DecomposedTime(years=3, days=7, hours=4, minutes=5, seconds=6)
        assert format_duration("%Y %D %h %m %s", time) == "3 7 4 5 6"
        assert format_duration("%H %M %S", time) == "04 05 06"

    def test_fractional_seconds(self):
        time = DecomposedTime(fractional_seconds=0.5)
        assert format_duration("%f", time) == "0.5"
        assert format_duration("%F", time) == "0.50000"
        assert format_duration("%f", DecomposedTime()) == "0"
        assert format_duration("%f", DecomposedTime(fractional_seconds=5e-08)) == "0.00000005"

    def test_totals(self):
        secs = SECS_PER_YEAR + 2 * SECS_PER_DAY + 3 * SECS_PER_HOUR + 4 * 60
        assert format_duration("%T:%M", secs) == "8811:04"
        assert format_duration("%U days", secs) == "367 days"

    def test_escaped_delimiter(self):
        assert format_duration("100%% of %S", 7) == "100% of 07"

    def test_literal_text_untouched(self):
        assert format_duration("elapsed: [%m min]", 600) == "elapsed: [10 min]"

    def test_total_overflow(self):
        with pytest.raises(ValueOutOfRangeError) as exc:
            format_duration("%T", DecomposedTime(years=MAX_TOTAL))
        assert exc.value.field == "T"
        with pytest.raises(ValueOutOfRangeError):
            format_duration("%U", DecomposedTime(years=MAX_TOTAL))

    def test_decompose_error_comes_first(self):
        with pytest.raises(DecomposeError):
            format_duration("%Q", float("nan"))

    def test_deterministic(self):
        fmt = make_format("%Y:%D:%H:%M:%S.%x", 123456789.25)
        assert fmt.render() == fmt.render()
        assert str(fmt) == fmt.render()


class TestValidation:
    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as exc:
            validate_template("%Q")
        assert exc.value.field == "Q"
        assert exc.value.position == 0

    def test_trailing_delimiter(self):
        with pytest.raises(UnexpectedDelimiterError) as exc:
            validate_template("abc%")
        assert exc.value.position == 3

    def test_escaped_trailing_delimiter_is_fine(self):
        assert validate_template("abc%%") == ("%",)

    def test_every_known_field_accepted(self):
        template = "".join(f"%{ch}" for ch in "YDHhMmSsxyzfFTU")
        assert validate_template(template) == tuple("YDHhMmSsxyzfFTU")
        assert set(FIELDS) == set("YDHhMmSsxyzfFTU")

    def test_template_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Template("%")
        assert issubclass(TemplateError, ValueError)

    def test_make_format_rejects_invalid_template(self):
        with pytest.raises(UnknownFieldError):
            make_format("%H:%q", 60)

    def test_duration_format_validates_strings(self):
        with pytest.raises(UnexpectedDelimiterError):
            DurationFormat("%H%", DecomposedTime())


class TestTemplateReuse:
    def test_render_many(self):
        template = Template("%H:%M:%S")
        assert template.fields == ("H", "M", "S")
        rendered = [template.render(decompose_seconds(s)) for s in (0, 61, 3661)]
        assert rendered == ["00:00:00", "00:01:01", "01:01:01"]

    def test_make_format_accepts_template(self):
        template = Template("%M:%S")
        fmt = make_format(template, 75)
        assert fmt.template is template
        assert fmt.format_string == "%M:%S"
        assert fmt.render() == "01:15"


class TestWrite:
    def test_write_to_stream(self):
        out = io.StringIO()
        make_format("%H:%M", 5400).write(out)
        assert out.getvalue() == "01:30"

    def test_sink_failure(self):
        with pytest.raises(RenderError):
            make_format("%H:%M", 5400).write(BrokenStream())

    def test_closed_stream(self):
        out = io.StringIO()
        out.close()
        with pytest.raises(RenderError):
            Template("%S").write(DecomposedTime(), out)

    def test_overflow_writes_nothing(self):
        out = io.StringIO()
        with pytest.raises(ValueOutOfRangeError):
            Template("hours: %T").write(DecomposedTime(years=MAX_TOTAL), out)
        assert out.getvalue() == ""


class TestDisplay:
    @pytest.mark.parametrize(
        "secs, expected",
        [
            (2.5 * SECS_PER_YEAR, "2yr 182d 12:00:00"),
            (SECS_PER_YEAR, "1yr 00:00:00"),
            (2 * SECS_PER_DAY, "2d 00:00:00"),
            (600, "10:00"),
            (12.5, "00:12.500"),
            (0.1, "00:00.100"),
            (10 * SECS_PER_DAY + 20 * 60 + 2, "10d 00:20:02"),
            (90 + 500e-6, "01:30.000'500"),
            (0, "00:00"),
        ],
    )
    def test_display(self, secs, expected):
        assert display(decompose_seconds(secs)) == expected

    def test_negative_prefix(self):
        assert display(decompose_seconds(-75)) == "-01:15"
