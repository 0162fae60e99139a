"""Importance-biased truncation of oversized documentation."""

from docchat.constants.chat import (
    EMPHASIS_MARKER,
    HEADING_MARKER,
    IMPORTANT_BUDGET_RATIO,
    IMPORTANT_KEYWORDS,
    TRUNCATION_MARKER,
)


def is_important_line(line: str) -> bool:
    """Return True for headings, emphasized lines and lines naming key doc terms."""
    if line.startswith(HEADING_MARKER) or EMPHASIS_MARKER in line:
        return True
    return any(keyword in line for keyword in IMPORTANT_KEYWORDS)


def truncate_docs(
    text: str,
    max_length: int,
    important_ratio: float = IMPORTANT_BUDGET_RATIO,
) -> str:
    """Bound documentation to max_length characters, keeping important lines first.

    Text that already fits is returned unchanged. Otherwise the result is built
    in two greedy passes over the lines:

    1. Important lines, in original order, until the next one would push the
       total past important_ratio * max_length.
    2. The remaining lines, in original order, until the next one would push
       the total past max_length.

    Each kept line costs its length plus one for the newline. TRUNCATION_MARKER
    is appended once at the end, so the output may exceed max_length by at most
    the marker's length.

    Args:
        text: Documentation body.
        max_length: Character budget.
        important_ratio: Share of the budget available to the first pass.

    Returns:
        The original text, or the truncated text ending in TRUNCATION_MARKER.
    """
    if len(text) <= max_length:
        return text

    lines = text.split("\n")
    important = [line for line in lines if is_important_line(line)]
    important_set = set(important)

    kept: list[str] = []
    current_length = 0

    important_budget = max_length * important_ratio
    for line in important:
        if current_length + len(line) + 1 > important_budget:
            break
        kept.append(line)
        current_length += len(line) + 1

    for line in lines:
        if line in important_set:
            continue
        if current_length + len(line) + 1 > max_length:
            break
        kept.append(line)
        current_length += len(line) + 1

    return "".join(line + "\n" for line in kept) + TRUNCATION_MARKER
