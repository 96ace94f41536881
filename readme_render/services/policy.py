from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from readme_render.services.url_policy import UrlPolicy, url_policy_for


_ALLOWED_TAGS = frozenset(
    {
        "a",
        "b",
        "blockquote",
        "br",
        "code",
        "dd",
        "del",
        "dl",
        "dt",
        "em",
        "h1",
        "h2",
        "h3",
        "hr",
        "i",
        "img",
        "input",
        "kbd",
        "li",
        "ol",
        "p",
        "pre",
        "s",
        "strike",
        "strong",
        "sub",
        "sup",
        "table",
        "tbody",
        "td",
        "th",
        "thead",
        "tr",
        "ul",
        "span",
    }
)

_ALLOWED_ATTRS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "a": frozenset({"href", "target"}),
        "img": frozenset({"width", "height", "src", "alt", "align"}),
        "input": frozenset({"checked", "disabled", "type"}),
    }
)

_GENERIC_ATTRS = frozenset({"lang", "title"})

_ALLOWED_CLASSES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "code": frozenset(
            {
                "language-bash",
                "language-clike",
                "language-glsl",
                "language-go",
                "language-ini",
                "language-javascript",
                "language-json",
                "language-markup",
                "language-protobuf",
                "language-ruby",
                "language-rust",
                "language-scss",
                "language-sql",
                "yaml",
            }
        ),
    }
)

_URL_SCHEMES = frozenset(
    {
        "bitcoin",
        "ftp",
        "ftps",
        "geo",
        "http",
        "https",
        "im",
        "irc",
        "ircs",
        "magnet",
        "mailto",
        "mms",
        "mx",
        "news",
        "nntp",
        "openpgp4fpr",
        "sip",
        "sms",
        "smsto",
        "ssh",
        "tel",
        "url",
        "webcal",
        "wtai",
        "xmpp",
    }
)

LINK_REL = "nofollow noopener noreferrer"


@dataclass(frozen=True)
class AllowlistPolicy:
    tags: frozenset[str]
    attributes: Mapping[str, frozenset[str]]
    generic_attributes: frozenset[str]
    allowed_classes: Mapping[str, frozenset[str]]
    url_schemes: frozenset[str]
    link_rel: str
    url_policy: UrlPolicy

    def allows_attribute(self, tag: str, name: str) -> bool:
        if name == "class":
            return tag in self.allowed_classes
        return name in self.generic_attributes or name in self.attributes.get(tag, ())

    def filter_classes(self, tag: str, value: str) -> str:
        allowed = self.allowed_classes.get(tag, frozenset())
        return " ".join(c for c in value.split() if c in allowed)


@lru_cache(maxsize=128)
def build_policy(base_url: str | None = None) -> AllowlistPolicy:
    """
    Build the fixed readme policy for one base location.

    Only the relative-link handling depends on `base_url`; an untrusted or
    malformed base falls back to removing relative links.
    """
    return AllowlistPolicy(
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRS,
        generic_attributes=_GENERIC_ATTRS,
        allowed_classes=_ALLOWED_CLASSES,
        url_schemes=_URL_SCHEMES,
        link_rel=LINK_REL,
        url_policy=url_policy_for(base_url),
    )
