"""Prompt texts for the AI collaborator"""

from aieditor.models import GenerationRequest

generate_system_prompt = """You are a World-Class Fullstack Engineer.
You will be given three web project files (HTML, CSS, and JS).
The user will request modifications.
Analyze the existing code across all files and update them to satisfy the request.

RULES:
1. ALWAYS return FULL content for "html", "css", and "js".
2. If "React Mode" is active, "js" contains JSX/React component code.
3. Use modern, accessible, and responsive practices (Tailwind CSS is available).
4. Ensure cross-file consistency.
5. Output ONLY a valid JSON object matching the schema.
6. If a file is missing or not needed, return it as empty string but keep the key.
7. Language should remain Arabic for UI elements if already in Arabic."""

generate_content_template = """USER REQUEST: "{INSTRUCTION}"
REACT MODE: {MODE}

CURRENT FILES:
{FILES}
"""

explain_system_template = (
    "You are a professional software engineer. "
    "Explain code concisely in {LANGUAGE}. Use markdown."
)

explain_content_template = """Explain the following {KIND} code in {LANGUAGE} clearly. Focus on functionality. Code:

{CODE}"""

# Response schema for the generation call: three string-valued files, all required
FILES_SCHEMA = {
    "type": "object",
    "properties": {
        "html": {"type": "string"},
        "css": {"type": "string"},
        "js": {"type": "string"},
    },
    "required": ["html", "css", "js"],
}


def build_generate_content(request: GenerationRequest) -> str:
    """User content block for a generation request"""
    # "empty" instead of "" so the model can tell a missing file from blank text
    files = "\n".join(
        f"- {buffer.display_name}: {buffer.content or 'empty'}"
        for buffer in request.buffers.buffers()
    )
    # Use string replacement to avoid issues with curly braces in HTML/CSS.
    # Files go last so their text is never scanned for slots.
    return (
        generate_content_template.replace("{MODE}", "ENABLED" if request.component_mode else "DISABLED")
        .replace("{INSTRUCTION}", request.instruction)
        .replace("{FILES}", files)
    )


def build_explain_system(language: str) -> str:
    return explain_system_template.replace("{LANGUAGE}", language)


def build_explain_content(kind: str, code: str, language: str) -> str:
    return (
        explain_content_template.replace("{KIND}", kind.upper())
        .replace("{LANGUAGE}", language)
        .replace("{CODE}", code)
    )
