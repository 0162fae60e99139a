"""Documentation truncation tests."""

import pytest

from docchat.chat.truncation import is_important_line, truncate_docs
from docchat.constants.chat import TRUNCATION_MARKER


def _body(result: str) -> str:
    assert result.endswith(TRUNCATION_MARKER)
    return result[: -len(TRUNCATION_MARKER)]


@pytest.mark.parametrize(
    "text",
    ["", "short", "# Models\nUser, Post", "x" * 15000, "line\n" * 100 + "\n\n  "],
)
def test_text_within_budget_is_returned_unchanged(text):
    """Docs at or under the budget come back exactly as given."""
    assert truncate_docs(text, 15000) is text


@pytest.mark.parametrize(
    "line,expected",
    [
        ("# Heading", True),
        ("### User Model", True),
        ("- **Fields**: title", True),
        ("class PostSerializer", True),
        ("PostViewSet handles posts", True),
        ("EmailField on user", True),
        ("plain prose about nothing", False),
        ("  # indented heading", False),
        ("model in lowercase", False),
    ],
)
def test_is_important_line(line, expected):
    """Headings, emphasis and doc keywords mark a line as important."""
    assert is_important_line(line) is expected


def test_truncated_output_respects_budget_and_marker():
    """20000 chars with a 15000 budget stays under budget plus marker."""
    lines = []
    i = 0
    while sum(len(line) + 1 for line in lines) < 19000:
        if i % 10 == 0:
            lines.append(f"## Section {i}")
        else:
            lines.append(f"plain text line number {i:05d}")
        i += 1
    text = "\n".join(lines)
    text = text + "\n" + "z" * (20000 - len(text) - 1)
    assert len(text) == 20000

    result = truncate_docs(text, 15000)

    assert len(result) <= 15000 + len(TRUNCATION_MARKER)
    assert result.count(TRUNCATION_MARKER) == 1
    assert result.endswith(TRUNCATION_MARKER)
    assert result.startswith("## Section 0\n## Section 10\n")


def test_important_lines_come_before_other_lines():
    """Every kept important line precedes every kept other line."""
    lines = []
    for i in range(400):
        lines.append(f"filler paragraph text {i}")
        if i % 7 == 0:
            lines.append(f"### Model {i}")
    text = "\n".join(lines)

    result = truncate_docs(text, 2000)
    kept = _body(result).rstrip("\n").split("\n")

    flags = [is_important_line(line) for line in kept]
    assert True in flags and False in flags
    first_other = flags.index(False)
    assert all(not flag for flag in flags[first_other:])


def test_relative_order_preserved_within_each_class():
    """Important and other lines each keep their original order."""
    lines = [f"## Heading {i}" if i % 3 == 0 else f"body {i}" for i in range(300)]
    text = "\n".join(lines)

    kept = _body(truncate_docs(text, 1200)).rstrip("\n").split("\n")

    important = [line for line in kept if line.startswith("##")]
    other = [line for line in kept if not line.startswith("##")]
    assert important == [line for line in lines if line in important]
    assert other == [line for line in lines if line in other]


def test_important_lines_limited_to_ratio_of_budget():
    """Important lines alone never use more than the ratio share of the budget."""
    text = "\n".join(f"# Heading number {i:04d}" for i in range(500))

    kept = _body(truncate_docs(text, 1000))

    assert len(kept) <= 800
    assert len(kept) > 700


def test_other_lines_fill_remaining_budget():
    """With no important lines, plain lines fill up to the full budget."""
    text = "\n".join(f"plain {i:04d}" for i in range(1000))

    kept = _body(truncate_docs(text, 1000))

    assert 900 < len(kept) <= 1000
    assert kept.startswith("plain 0000\n")


def test_custom_ratio():
    """A zero ratio drops important lines entirely."""
    text = "\n".join(["# Heading"] * 50 + ["plain"] * 200)

    kept = _body(truncate_docs(text, 300, important_ratio=0.0))

    assert "# Heading" not in kept
    assert "plain" in kept
