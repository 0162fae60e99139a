"""Configuration constants.

Re-exports all config for convenient importing:
    from docchat.constants import MAX_DOCS_LENGTH, MAX_TOKENS
"""

from docchat.constants.chat import *  # noqa: F403
from docchat.constants.llm import *  # noqa: F403
