from __future__ import annotations

import pytest

from campus_attendance.core.exceptions import EmptyInputError
from campus_attendance.imports.csv_parser import parse_table


def test_quoted_field_keeps_comma_and_escaped_quote():
    table = parse_table('Name,Note\nAda,"Hello, ""World"""\n')

    assert table.headers == ["Name", "Note"]
    assert table.rows == [["Ada", 'Hello, "World"']]


def test_blank_lines_are_dropped_and_crlf_accepted():
    table = parse_table("A,B\r\n\r\n1,2\r\n   \r\n3,4\r\n")

    assert table.rows == [["1", "2"], ["3", "4"]]
    assert len(table) == 2


def test_leading_bom_is_stripped_from_first_header():
    table = parse_table("\ufeffName,Code\nMaths,M1\n")

    assert table.headers[0] == "Name"


def test_values_are_not_trimmed_or_converted():
    table = parse_table("A,B\n 007 , x \n")

    assert table.rows == [[" 007 ", " x "]]


def test_short_rows_are_kept_as_is():
    table = parse_table("A,B,C\n1\n")

    assert table.rows == [["1"]]


@pytest.mark.parametrize("content", ["", "   \n\n", "Name,Code\n", "Name,Code\n\n  \n"])
def test_header_only_or_empty_input_is_rejected(content):
    with pytest.raises(EmptyInputError):
        parse_table(content)


def test_each_line_is_one_record_even_with_open_quote():
    table = parse_table('Name,"Note\nmore"\n')

    assert table.headers == ["Name", "Note"]
    assert table.rows == [['more"']]


def test_blank_line_inside_quotes_does_not_merge_records():
    table = parse_table('Name,Note\nAda,"line1\n\nline3"\n')

    assert table.rows == [["Ada", "line1"], ['line3"']]


def test_two_non_blank_lines_always_give_one_data_row():
    table = parse_table('A,"B\n"C",D\n')

    assert len(table) == 1
