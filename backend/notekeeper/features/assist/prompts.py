"""
Text assist prompt templates.
"""

ANALYZE_PROMPT = """Please analyze this note content and provide insights or suggestions for improvement:

{content}

Please provide your analysis in the following format:
1. Summary
2. Key Points
3. Suggestions for Improvement"""


IMPROVE_PROMPT = """Please help improve this note content by making it more clear, concise, and well-structured:

{content}

Please maintain the original meaning while enhancing:
1. Clarity
2. Organization
3. Grammar and style"""


NOTE_IDEAS_PROMPT = """Please suggest some note ideas related to this topic: {topic}

Please provide your suggestions in a numbered list format, with each idea being concise but descriptive."""


def build_analyze_prompt(content: str) -> str:
    return ANALYZE_PROMPT.format(content=content)


def build_improve_prompt(content: str) -> str:
    return IMPROVE_PROMPT.format(content=content)


def build_note_ideas_prompt(topic: str) -> str:
    return NOTE_IDEAS_PROMPT.format(topic=topic)
