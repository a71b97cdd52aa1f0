"""Browser clipboard bridge.

Python runs on the server, so copying happens in a tiny embedded component
that calls ``navigator.clipboard.writeText`` in the browser. When the browser
rejects the write (permissions, insecure origin) the component shows the
failure message instead of raising; the text is also offered in a code block
whose built-in copy button works as a manual fallback.
"""

import json
import logging
import uuid

import streamlit as st
import streamlit.components.v1 as components

logger = logging.getLogger(__name__)

COPY_OK_MESSAGE = "Presupuesto copiado al portapapeles"
COPY_FAILED_MESSAGE = "No se pudo copiar el presupuesto"


def _js_string(value: str) -> str:
    """JSON-encode for inline <script> use; "</" must not close the tag."""
    return json.dumps(value).replace("</", "<\\/")


def build_clipboard_html(text: str, nonce: str = None) -> str:
    """Build the component markup that writes ``text`` to the clipboard.

    ``nonce`` makes every request unique so the component re-runs even when
    the same text is copied twice.
    """
    nonce = nonce or uuid.uuid4().hex
    return f"""
<div id="clip-{nonce}" style="font-family: sans-serif; font-size: 0.85rem;"></div>
<script>
(function() {{
    const text = {_js_string(text)};
    const box = document.getElementById("clip-{nonce}");
    const clip = (window.parent && window.parent.navigator.clipboard) || navigator.clipboard;
    const report = (msg, color) => {{ box.textContent = msg; box.style.color = color; }};
    if (!clip) {{
        report({_js_string(COPY_FAILED_MESSAGE)}, "#b00020");
        return;
    }}
    clip.writeText(text)
        .then(() => report({_js_string(COPY_OK_MESSAGE)}, "#1b5e20"))
        .catch((err) => {{
            console.error("Clipboard write rejected:", err);
            report({_js_string(COPY_FAILED_MESSAGE)}, "#b00020");
        }});
}})();
</script>
"""


def copy_to_clipboard(text: str) -> None:
    """Copy ``text`` in the user's browser; failures end up as a notice."""
    try:
        components.html(build_clipboard_html(text), height=30)
    except Exception as e:
        logger.error(f"Clipboard component failed: {e}")
        st.toast(COPY_FAILED_MESSAGE)

    with st.expander("Texto del presupuesto"):
        st.code(text, language=None)
