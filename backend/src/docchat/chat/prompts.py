"""Prompt templates for documentation Q&A."""

from docchat.chat.schemas import PromptPayload

CHAT_SYSTEM_PROMPT = """You are an AI assistant specialized in explaining Django REST API projects.
You have been provided with comprehensive documentation about a Django project including models, serializers, views, and relationships.

Your task is to answer questions about this specific Django project based ONLY on the provided documentation.

Guidelines:
- Be accurate and specific to the provided documentation
- If the documentation doesn't contain enough information to answer the question, say so clearly
- Use technical terms appropriately but explain complex concepts clearly
- Reference specific models, fields, or relationships when relevant
- If asked about code implementation, provide practical examples when possible
- Keep responses concise but comprehensive

The documentation includes:
- Django models with fields, relationships, and methods
- DRF serializers with field configurations
- Views and ViewSets with their functionality
- Database relationships and constraints"""

CHAT_USER_TEMPLATE = """Based on the following Django project documentation, please answer this question:

Question: {question}

Documentation:
{docs}"""


def build_chat_prompt(question: str, docs: str) -> PromptPayload:
    """Combine the fixed system instruction with the question and bounded docs.

    No filtering happens here; docs must already be truncated.
    """
    return PromptPayload(
        system=CHAT_SYSTEM_PROMPT,
        user=CHAT_USER_TEMPLATE.format(question=question, docs=docs),
    )
