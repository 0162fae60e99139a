"""LLM client configuration.

Default parameters for completion calls and the substrings used to classify
provider failures.
"""

# =============================================================================
# Models
# =============================================================================
# The primary model is tried first. The fallback is smaller and cheaper and is
# only called after the primary fails.

DEFAULT_PROVIDER = "groq"
DEFAULT_PRIMARY_MODEL = "llama-3.1-8b-instant"
DEFAULT_FALLBACK_MODEL = "gemma-7b-it"

# =============================================================================
# Generation Defaults
# =============================================================================
# MAX_TOKENS caps response length to stay inside free-tier limits.
# DEFAULT_TEMPERATURE is kept low for focused answers grounded in the docs.
# REQUEST_TIMEOUT_SECONDS bounds each individual provider call.
# TOKENS_PER_CHAR estimates token usage for the usage log.

MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.5
REQUEST_TIMEOUT_SECONDS = 30.0
TOKENS_PER_CHAR = 0.25

EMPTY_RESPONSE_PLACEHOLDER = (
    "I apologize, but I was unable to generate a response. Please try again."
)

# =============================================================================
# Failure Signals
# =============================================================================
# Lowercase substrings matched against provider failure messages. Checked in
# the order timeout, rate limit, too large. These track upstream wording and
# need updating when the provider changes its messages.

TIMEOUT_SIGNALS = ("timeout", "timed out", "etimedout")
RATE_LIMIT_SIGNALS = ("rate limit", "rate_limit_exceeded")
TOO_LARGE_SIGNALS = (
    "request too large",
    "tokens per minute",
    "context_length_exceeded",
    "maximum context length",
)
