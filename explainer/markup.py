"""
Markdown-like explanation text -> HTML fragment.

Input is trusted (completion API output or the fallback generator). The
substitutions only wrap existing text in tags; nothing is escaped, so this
is not a general HTML sanitizer.
"""
import re

BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.*?)\*")
BLOCK_PATTERN = re.compile(r"#(\d+)")
ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")

BOLD_TEMPLATE = r'<strong class="font-bold text-black">\1</strong>'
ITALIC_TEMPLATE = r'<em class="italic text-gray-700">\1</em>'
BLOCK_TEMPLATE = r'<span class="font-mono text-sm px-1 rounded bg-gray-100 text-black">#\1</span>'
ADDRESS_TEMPLATE = r'<code class="font-mono text-xs px-1 rounded break-all bg-gray-100 text-black">\g<0></code>'
PARAGRAPH_BREAK = '</p><p class="mt-4">'
LINE_BREAK = "<br>"


def render_explanation_html(prose: str) -> str:
    # Order matters: ** must be consumed before single *
    html = BOLD_PATTERN.sub(BOLD_TEMPLATE, prose)
    html = ITALIC_PATTERN.sub(ITALIC_TEMPLATE, html)
    html = BLOCK_PATTERN.sub(BLOCK_TEMPLATE, html)
    html = ADDRESS_PATTERN.sub(ADDRESS_TEMPLATE, html)
    html = html.replace("\n\n", PARAGRAPH_BREAK)
    html = html.replace("\n", LINE_BREAK)
    return f"<p>{html}</p>"
