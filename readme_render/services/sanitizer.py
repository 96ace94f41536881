from __future__ import annotations

from functools import partial
from typing import Any, Iterator

from bleach import html5lib_shim
from bleach.sanitizer import Cleaner

from readme_render.services.policy import AllowlistPolicy
from readme_render.services.url_policy import rewrite_url_value


_URL_ATTRS = ((None, "href"), (None, "src"))
_CLASS_ATTR = (None, "class")
_REL_ATTR = (None, "rel")


class PolicyFilter(html5lib_shim.Filter):
    """
    Token filter applied after bleach's allowlist pass.

    Trims class tokens, applies the relative-URL policy to href/src and forces
    the link relation onto every anchor.
    """

    def __init__(self, source, policy: AllowlistPolicy) -> None:
        super().__init__(source)
        self.policy = policy

    def __iter__(self) -> Iterator[dict[str, Any]]:
        for token in super().__iter__():
            if token["type"] in ("StartTag", "EmptyTag"):
                token = self.harden_tag(token)
            yield token

    def harden_tag(self, token: dict[str, Any]) -> dict[str, Any]:
        name = token["name"]
        attrs = dict(token.get("data") or {})

        for key in _URL_ATTRS:
            if key not in attrs:
                continue
            value = rewrite_url_value(
                attrs[key],
                self.policy.url_policy,
                self.policy.url_schemes,
                decoded=html5lib_shim.convert_entities(attrs[key]),
            )
            if value is None:
                del attrs[key]
            else:
                attrs[key] = value

        if _CLASS_ATTR in attrs:
            classes = self.policy.filter_classes(name, attrs[_CLASS_ATTR])
            if classes:
                attrs[_CLASS_ATTR] = classes
            else:
                del attrs[_CLASS_ATTR]

        if name == "a":
            attrs.pop(_REL_ATTR, None)
            attrs[_REL_ATTR] = self.policy.link_rel

        token["data"] = attrs
        return token


def _cleaner(policy: AllowlistPolicy) -> Cleaner:
    def allow_attribute(tag: str, name: str, value: str) -> bool:
        return policy.allows_attribute(tag, name)

    return Cleaner(
        tags=policy.tags,
        attributes=allow_attribute,
        protocols=policy.url_schemes,
        strip=True,
        strip_comments=True,
        filters=[partial(PolicyFilter, policy=policy)],
    )


def sanitize(raw_html: str, policy: AllowlistPolicy) -> str:
    """
    Clean `raw_html` with `policy` and return the hardened HTML.

    Disallowed tags are unwrapped (their text is kept, escaped); disallowed
    attributes and classes are removed. Never raises on malformed markup.
    """
    if not raw_html:
        return ""
    # Cleaner holds a parser instance, so each call gets its own.
    return _cleaner(policy).clean(raw_html)
