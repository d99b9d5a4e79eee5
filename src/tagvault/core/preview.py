"""Removal of the rendered tag block from a note's HTML preview."""

import logging
import re

logger = logging.getLogger(__name__)

# Rendered forms of the "..." closing marker
_DOTS_MARKERS = ("\n...\n", "\n...</p>")

# With a "---" closer the renderer emits a horizontal rule for the opening
# marker and turns the tags line into a setext heading
_RULE_HEADING = re.compile(r"<hr\s*/?>.*?</h2>", re.DOTALL)


class PreviewStripper:
    """Strips the front-matter block from rendered HTML."""

    def strip(self, document: str, html: str) -> str:
        """
        Remove the rendered tag block from ``html``.

        Args:
            document: Note text the HTML was rendered from
            html: Rendered preview

        Returns:
            Filtered HTML, or ``html`` unchanged if the note has no block
            or no known rendering of it is found.
        """
        if not document.startswith("---\n"):
            return html

        for marker in _DOTS_MARKERS:
            pos = html.find(marker)
            if pos != -1:
                return html[pos + len(marker) :]

        match = _RULE_HEADING.search(html)
        if match:
            return html[: match.start()] + html[match.end() :]

        logger.debug("No rendered front matter found in preview")
        return html


def strip_preview(document: str, html: str) -> str:
    """Module level shortcut for PreviewStripper().strip()."""
    return PreviewStripper().strip(document, html)
