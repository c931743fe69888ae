from aieditor.models import Snippet

SNIPPETS = [
    Snippet(
        label="Tailwind Card",
        kind="html",
        content=(
            '<div class="max-w-sm rounded overflow-hidden shadow-lg bg-white p-6 '
            'dark:bg-slate-800 border border-slate-200 dark:border-slate-700">\n'
            '  <h2 class="font-bold text-xl mb-2 text-slate-800 dark:text-white">Featured card</h2>\n'
            '  <p class="text-gray-700 dark:text-gray-300 text-base">'
            "An example card built with Tailwind CSS with dark mode support.</p>\n"
            "</div>"
        ),
    ),
    Snippet(
        label="Flex Center",
        kind="css",
        content=".flex-center {\n  display: flex;\n  justify-content: center;\n  align-items: center;\n}",
    ),
    Snippet(
        label="Fetch API",
        kind="js",
        content=(
            "async function fetchData() {\n"
            "  try {\n"
            '    const response = await fetch("https://jsonplaceholder.typicode.com/posts/1");\n'
            "    const data = await response.json();\n"
            '    console.log("Data loaded:", data);\n'
            "    return data;\n"
            "  } catch (err) {\n"
            '    console.error("Fetch error:", err);\n'
            "  }\n"
            "}"
        ),
    ),
    Snippet(
        label="React Hook",
        kind="js",
        content=(
            "const [data, setData] = React.useState(null);\n"
            "React.useEffect(() => {\n"
            '  console.log("Component mounted");\n'
            "}, []);"
        ),
    ),
    Snippet(
        label="Neon Glow",
        kind="css",
        content=(
            ".glow {\n"
            "  text-shadow: 0 0 10px rgba(99, 102, 241, 0.8), 0 0 20px rgba(99, 102, 241, 0.4);\n"
            "  color: #818cf8;\n"
            "}"
        ),
    ),
]


def get_snippet(index: int) -> Snippet:
    if index < 0 or index >= len(SNIPPETS):
        raise IndexError(f"No snippet at index {index}")
    return SNIPPETS[index]


def append_snippet(content: str, snippet: Snippet) -> str:
    """Buffer content with the snippet appended on a new line"""
    return content + "\n" + snippet.content
