from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass


logger = logging.getLogger(__name__)

TRUSTED_HOSTS = frozenset({"github.com", "gitlab.com", "bitbucket.org"})

# Relative links in a readme point at files in the repository tree.
_BROWSE_PATH = "blob/master"


def is_trusted_base_url(base_url: str | None) -> bool:
    """
    True when `base_url` is an absolute URL whose host is one of TRUSTED_HOSTS.

    Anything that fails to parse, lacks a scheme or lacks a host is untrusted.
    """
    if not base_url:
        return False
    try:
        parts = urllib.parse.urlsplit(base_url)
        host = parts.hostname
    except ValueError:
        return False
    if not parts.scheme or not host:
        return False
    return host in TRUSTED_HOSTS


@dataclass(frozen=True)
class RelativeUrlResolver:
    base_url: str

    def resolve(self, relative: str) -> str:
        # Plain concatenation: no `..` collapsing, no percent-decoding.
        new_url = self.base_url
        if not new_url.endswith("/"):
            new_url += "/"
        new_url += _BROWSE_PATH
        if not relative.startswith("/"):
            new_url += "/"
        return new_url + relative


@dataclass(frozen=True)
class DenyRelative:
    name = "deny"

    def apply(self, value: str) -> str | None:
        return None


@dataclass(frozen=True)
class RewriteRelative:
    resolver: RelativeUrlResolver
    name = "rewrite"

    def apply(self, value: str) -> str | None:
        return self.resolver.resolve(value)


UrlPolicy = DenyRelative | RewriteRelative


def url_policy_for(base_url: str | None) -> UrlPolicy:
    if is_trusted_base_url(base_url):
        logger.debug("Rewriting relative links against trusted base %s", base_url)
        return RewriteRelative(RelativeUrlResolver(base_url))
    if base_url:
        logger.debug("Base URL %r is not trusted; relative links will be removed", base_url)
    return DenyRelative()


def rewrite_url_value(
    value: str,
    policy: UrlPolicy,
    schemes: frozenset[str],
    decoded: str | None = None,
) -> str | None:
    """
    Apply `policy` to a URL attribute value.

    Returns the value to keep, or None when the attribute must be dropped.
    Absolute URLs with an allowed scheme pass through unchanged. `decoded` is
    the entity-decoded form of `value`, used only to find the scheme.
    """
    try:
        scheme = urllib.parse.urlsplit(value if decoded is None else decoded).scheme
    except ValueError:
        return None
    if scheme:
        return value if scheme in schemes else None
    return policy.apply(value)
