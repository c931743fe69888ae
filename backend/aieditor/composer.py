"""
Document composer for the live preview.

Turns the three buffers plus the component-mode flag into one HTML document
for the sandboxed preview frame. The function is pure: the same workspace
and revision always give the same document, so it can be recomputed on
every refresh without side effects.

Three shapes are handled:
- component mode: a React page transpiled in the browser by Babel
- markup that is already a full document: style/script injected into it
- a markup fragment: wrapped in a minimal document
"""

import re

import config
from aieditor.models import ComposedDocument, WorkspaceState

PREVIEW_SANDBOX = "allow-scripts allow-modals allow-forms allow-same-origin"

TAILWIND_SRC = "https://cdn.tailwindcss.com"
BABEL_SRC = "https://unpkg.com/@babel/standalone/babel.min.js"

IMPORT_MAP = {
    "react": "https://esm.sh/react@18.2.0",
    "react-dom": "https://esm.sh/react-dom@18.2.0/client",
    "lucide-react": "https://esm.sh/lucide-react",
}

MOUNT_ID = "root"
MOUNT_MARKER = f'id="{MOUNT_ID}"'

_FULL_DOCUMENT = re.compile(r"<html", re.IGNORECASE)
_SLOT = re.compile(r"\{(LANG|DIR|CSS|MOUNT|JS|PLACEHOLDER)\}")

PLACEHOLDER_TEMPLATE = (
    '<html><body style="background:#020617;color:#94a3b8;display:flex;'
    "justify-content:center;align-items:center;height:100vh;margin:0;"
    'font-family:sans-serif;direction:{DIR};"><div>{PLACEHOLDER}</div></body></html>'
)

# Braces in the template belong to JS; only the {NAME} slots above are filled.
COMPONENT_TEMPLATE = """<!DOCTYPE html>
<html lang="{LANG}" dir="{DIR}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<script src="%(tailwind)s"></script>
<script src="%(babel)s"></script>
<script type="importmap">
{
  "imports": {
    "react": "%(react)s",
    "react-dom": "%(react_dom)s",
    "lucide-react": "%(lucide)s"
  }
}
</script>
<style>
body { margin: 0; min-height: 100vh; }
{CSS}
</style>
</head>
<body>
{MOUNT}
<script type="text/babel" data-type="module">
import React from 'react';
import { createRoot } from 'react-dom';
try {
{JS}
  if (typeof App !== 'undefined') {
    const root = createRoot(document.getElementById('%(mount)s'));
    root.render(<App />);
  }
} catch (err) {
  document.getElementById('%(mount)s').innerHTML = '<div style="color:red;padding:20px;font-family:monospace;direction:ltr;">React Error: ' + err.message + '</div>';
}
</script>
</body>
</html>""" % {
    "tailwind": TAILWIND_SRC,
    "babel": BABEL_SRC,
    "react": IMPORT_MAP["react"],
    "react_dom": IMPORT_MAP["react-dom"],
    "lucide": IMPORT_MAP["lucide-react"],
    "mount": MOUNT_ID,
}

FRAGMENT_TEMPLATE = (
    '<!DOCTYPE html><html lang="{LANG}" dir="{DIR}"><head><meta charset="UTF-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
    f'<script src="{TAILWIND_SRC}"></script>'
    "{CSS}</head><body>{MOUNT}{JS}</body></html>"
)


def _fill(template: str, **values: str) -> str:
    """Fill {NAME} slots in one pass so buffer text is never re-scanned"""
    return _SLOT.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def style_tag(css: str) -> str:
    return f"<style>{css}</style>" if css else ""


def script_tag(js: str) -> str:
    return f"<script>{js}</script>" if js else ""


def is_full_document(html: str) -> bool:
    return _FULL_DOCUMENT.search(html) is not None


def compose_placeholder(direction: str, placeholder: str) -> str:
    return _fill(PLACEHOLDER_TEMPLATE, DIR=direction, PLACEHOLDER=placeholder)


def compose_component(html: str, css: str, js: str, lang: str, direction: str) -> str:
    """React page: Babel transpiles the script buffer in the browser"""
    if MOUNT_MARKER in html:
        mount = html
    else:
        mount = f'<div id="{MOUNT_ID}"></div>'
    return _fill(COMPONENT_TEMPLATE, LANG=lang, DIR=direction, CSS=css, MOUNT=mount, JS=js)


def inject_into_document(html: str, css: str, js: str) -> str:
    """Insert style before </head> and script before </body> of an existing document.

    A buffer whose text already appears in the markup is not injected again,
    which keeps regenerated documents that embed their own style/script from
    growing duplicate blocks. This is a substring check, not HTML parsing.
    """
    combined = html
    if css and css not in combined:
        combined = combined.replace("</head>", f"{style_tag(css)}</head>", 1)
    if js and js not in combined:
        combined = combined.replace("</body>", f"{script_tag(js)}</body>", 1)
    return combined


def compose_fragment(html: str, css: str, js: str, lang: str, direction: str) -> str:
    return _fill(
        FRAGMENT_TEMPLATE,
        LANG=lang,
        DIR=direction,
        CSS=style_tag(css),
        MOUNT=html,
        JS=script_tag(js),
    )


def compose(
    state: WorkspaceState,
    force_reload: int = 0,
    *,
    lang: str = config.PREVIEW_LANG,
    direction: str = config.PREVIEW_DIR,
    placeholder: str = config.PREVIEW_PLACEHOLDER,
) -> ComposedDocument:
    """Build the preview document for a workspace snapshot.

    Args:
        state: Workspace to render
        force_reload: Revision counter; a new value makes the preview frame
            reload even when the document text is unchanged
        lang: Document language attribute
        direction: Document text direction (``rtl`` or ``ltr``)
        placeholder: Message shown while all three buffers are empty

    Returns:
        ComposedDocument with the HTML and the revision it was built for
    """
    html = state.html.content.strip()
    css = state.css.content.strip()
    js = state.js.content.strip()

    if not html and not css and not js:
        document = compose_placeholder(direction, placeholder)
    elif state.component_mode:
        document = compose_component(html, css, js, lang, direction)
    elif is_full_document(html):
        document = inject_into_document(html, css, js)
    else:
        document = compose_fragment(html, css, js, lang, direction)

    return ComposedDocument(html=document, revision=force_reload)
