from statement_pnl import split_line


def test_plain_field_is_single_value():
    assert split_line("Coffee") == ["Coffee"]


def test_quoted_comma_is_preserved():
    assert split_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_empty_line_yields_one_empty_field():
    assert split_line("") == [""]


def test_trailing_delimiter_emits_empty_last_field():
    assert split_line("a,b,") == ["a", "b", ""]
    assert split_line(",") == ["", ""]


def test_quotes_are_consumed_not_emitted():
    assert split_line('"Transaction Date","Amount"') == ["Transaction Date", "Amount"]


def test_doubled_quotes_are_not_an_escape():
    # Each quote toggles quoted mode; no literal quote survives.
    assert split_line('"She said ""hi""",x') == ["She said hi", "x"]


def test_unbalanced_quote_swallows_rest_of_line():
    assert split_line('a,"b,c') == ["a", "b,c"]


def test_whitespace_is_kept_verbatim():
    assert split_line(" a , b ") == [" a ", " b "]
