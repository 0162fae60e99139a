"""Chat endpoint configuration.

These settings bound what a caller may send to the chat endpoint and how
oversized documentation is cut down before it reaches the LLM.
"""

# =============================================================================
# Request Limits
# =============================================================================
# MAX_QUESTION_LENGTH rejects questions longer than this many characters.
# MAX_DOCS_LENGTH is the truncation budget in characters (~3k tokens), sized to
# fit comfortably within free-tier tokens-per-minute quotas.

MAX_QUESTION_LENGTH = 500
MAX_DOCS_LENGTH = 15000

# =============================================================================
# Truncation
# =============================================================================
# When documentation exceeds the budget, "important" lines are kept first and
# may use up to IMPORTANT_BUDGET_RATIO of it. A line is important if it starts
# with HEADING_MARKER, contains EMPHASIS_MARKER, or contains one of
# IMPORTANT_KEYWORDS (case-sensitive, matching generated Django docs).

IMPORTANT_BUDGET_RATIO = 0.8
HEADING_MARKER = "#"
EMPHASIS_MARKER = "**"
IMPORTANT_KEYWORDS = ("Model", "Field", "Serializer", "View")
TRUNCATION_MARKER = "\n\n[Content truncated to fit token limits...]"

# =============================================================================
# Logging
# =============================================================================
# Only a preview of the question is logged; documentation is never logged.

LOG_PREVIEW_LENGTH = 100
