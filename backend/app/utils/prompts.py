LENGTH_INSTRUCTIONS = {
    "short": "concise, 1-2 paragraphs",
    "medium": "balanced, 3-4 paragraphs",
    "long": "comprehensive, 5+ paragraphs",
}

SUMMARY_SYSTEM_PROMPT = """You are an expert multilingual content summarizer. Your task is to create a {length} summary of the provided text in {target_language}.{source_context}{file_context}

Follow these guidelines:
1. Preserve all key information, main arguments, and important details
2. Organize the summary in a logical structure with clear paragraphs
3. Keep the writing style formal and professional
4. Ensure the summary is complete and standalone (readers shouldn't need the original text)
5. Focus on factual information rather than opinions
6. Write in {target_language} regardless of the source language

Provide ONLY the summary without any introductory text, explanations, metadata, or additional commentary."""

SECTION_PROMPT = """This is section {index} of {total} of a longer document. Summarize this section on its own; the section summaries will be combined afterwards.

{content}"""

SECTION_SEPARATOR = "\n\n--- NEXT SECTION ---\n\n"

MERGE_SYSTEM_PROMPT = """You are an expert multilingual editor. You receive summaries of consecutive sections of one document, separated by "--- NEXT SECTION ---".

Combine them into one cohesive {length} summary in {target_language}. Remove repetition, keep the document's order and preserve every key fact.

Provide ONLY the final summary without any introductory text or commentary."""


def build_summary_prompt(
        target_language: str,
        summary_length: str,
        source_language: str = None,
        source_type: str = None,
        file_name: str = None,
) -> str:
    """System prompt for a single summarization call."""
    length = LENGTH_INSTRUCTIONS.get(summary_length, "medium-length")

    source_context = ""
    if source_language and source_language not in ("auto", "unknown"):
        source_context = f" The source text is in {source_language}."

    file_context = ""
    if source_type and file_name:
        file_context = f' The content is from a {source_type} file named "{file_name}".'

    return SUMMARY_SYSTEM_PROMPT.format(
        length=length,
        target_language=target_language,
        source_context=source_context,
        file_context=file_context,
    )


def build_merge_prompt(target_language: str, summary_length: str) -> str:
    return MERGE_SYSTEM_PROMPT.format(
        length=LENGTH_INSTRUCTIONS.get(summary_length, "medium-length"),
        target_language=target_language,
    )
