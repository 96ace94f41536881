from __future__ import annotations

import markdown as md

from readme_render.services.markdown_extensions import TagFilterExtension
from readme_render.services.policy import build_policy
from readme_render.services.sanitizer import sanitize


_EXTENSION_CONFIGS = {
    # `~x~` stays literal; only `~~x~~` is strikethrough.
    "pymdownx.tilde": {"subscript": False},
    "pymdownx.tasklist": {"custom_checkbox": False, "clickable_checkbox": False},
    # Bare http(s)/ftp URLs, `www.` hosts and e-mail addresses only.
    "pymdownx.magiclink": {
        "hide_protocol": False,
        "repo_url_shortener": False,
        "social_url_shortener": False,
        "repo_url_shorthand": False,
        "social_url_shorthand": False,
    },
}


def markdown_to_raw_html(markdown_text: str) -> str:
    """Convert markdown to unsanitized HTML."""
    return md.markdown(
        markdown_text,
        extensions=[
            "fenced_code",
            "tables",
            "pymdownx.tilde",
            "pymdownx.tasklist",
            "pymdownx.magiclink",
            TagFilterExtension(),
        ],
        extension_configs=_EXTENSION_CONFIGS,
        output_format="html",
    )


def render_markdown_safe(markdown_text: str | None, base_url: str | None = None) -> str:
    """
    Render a readme to HTML that is safe to embed.

    Relative links are rewritten against `base_url` when its host is
    github.com, gitlab.com or bitbucket.org, and removed otherwise. The base
    is treated as a directory whether or not the link starts with '/'.
    """
    if not markdown_text:
        return ""
    html = markdown_to_raw_html(markdown_text)
    return sanitize(html, build_policy(base_url))
