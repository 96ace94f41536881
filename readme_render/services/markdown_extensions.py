from __future__ import annotations

import re

from markdown import Markdown
from markdown.extensions import Extension
from markdown.postprocessors import Postprocessor


# Raw HTML tags that GitHub-flavored markdown refuses to emit live.
FILTERED_TAGS = (
    "title",
    "textarea",
    "style",
    "xmp",
    "iframe",
    "noembed",
    "noframes",
    "script",
    "plaintext",
)

_TAG_FILTER_RE = re.compile(
    r"<(/?(?:%s))(?=[\s/>]|$)" % "|".join(FILTERED_TAGS),
    re.IGNORECASE,
)


class TagFilterPostprocessor(Postprocessor):
    def run(self, text: str) -> str:
        return _TAG_FILTER_RE.sub(r"&lt;\1", text)


class TagFilterExtension(Extension):
    """Escape the opening `<` of dangerous raw tags such as script and iframe."""

    def extendMarkdown(self, md: Markdown) -> None:
        # After raw_html (30) has put stashed HTML back into the output.
        md.postprocessors.register(TagFilterPostprocessor(md), "tagfilter", 25)
