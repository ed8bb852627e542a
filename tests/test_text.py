from agentkit.text import first_line_truncated, truncate_chars, truncate_with_ellipsis


def test_ascii_truncation():
    assert truncate_with_ellipsis("hello", 5) == "hello"
    assert truncate_with_ellipsis("hello world", 5) == "hello…"


def test_cjk_boundary():
    s = "中文测试一二三四五六七八九十"
    assert truncate_with_ellipsis(s, 4) == "中文测试…"


def test_first_line_handles_empty():
    assert first_line_truncated("", 10) == ""
    assert first_line_truncated("\n\nfoo", 10) == ""


def test_truncate_chars_has_no_ellipsis():
    assert truncate_chars("hello world", 5) == "hello"
    assert truncate_chars("hi", 5) == "hi"


def test_truncate_chars_multibyte():
    assert truncate_chars("中文测试", 2) == "中文"


def test_first_line_trims_and_truncates():
    assert first_line_truncated("  hello world  \nsecond", 5) == "hello…"
    assert first_line_truncated("short\r\nnext", 10) == "short"