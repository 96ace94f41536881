import html
import re

from readme_render.services.policy import build_policy
from readme_render.services.sanitizer import sanitize

REL = 'rel="nofollow noopener noreferrer"'
GITHUB = "https://github.com/org/repo"


def test_empty_input():
    assert sanitize("", build_policy()) == ""


def test_forbidden_class_is_removed_but_tag_kept():
    assert sanitize('<p class="bad-class">text</p>', build_policy()) == "<p>text</p>"


def test_only_allowlisted_classes_survive():
    result = sanitize('<code class="bogus language-rust yaml">x</code>', build_policy())
    assert result == '<code class="language-rust yaml">x</code>'


def test_class_attribute_dropped_when_no_token_survives():
    assert sanitize('<code class="evil">x</code>', build_policy()) == "<code>x</code>"


def test_disallowed_tags_are_unwrapped():
    result = sanitize("<div><h4>Title</h4><unknown>body &amp; soul</unknown></div>", build_policy())
    assert "<div" not in result
    assert "<h4" not in result
    assert "<unknown" not in result
    assert "Title" in result
    assert "body &amp; soul" in result


def test_event_handlers_are_removed():
    result = sanitize('<img src="https://example.com/a.png" alt="a" onerror="alert(1)">', build_policy())
    assert "onerror" not in result
    assert 'src="https://example.com/a.png"' in result
    assert 'alt="a"' in result


def test_rel_is_forced_on_anchors():
    result = sanitize('<a href="https://example.com/" rel="opener">x</a>', build_policy())
    assert result == f'<a href="https://example.com/" {REL}>x</a>'


def test_rel_is_set_on_anchor_without_href():
    assert sanitize("<a>x</a>", build_policy()) == f"<a {REL}>x</a>"


def test_relative_links_removed_without_trusted_base():
    result = sanitize('<a href="/hi" onclick="alert(1)">hi</a>', build_policy())
    assert result == f"<a {REL}>hi</a>"


def test_relative_links_rewritten_with_trusted_base():
    result = sanitize('<a href="docs/a.md">docs</a>', build_policy(GITHUB))
    assert result == f'<a href="{GITHUB}/blob/master/docs/a.md" {REL}>docs</a>'


def test_relative_image_src_rewritten():
    result = sanitize('<img src="logo.png" alt="logo">', build_policy(GITHUB))
    assert f'src="{GITHUB}/blob/master/logo.png"' in result


def test_relative_image_src_removed_without_base():
    result = sanitize('<img src="logo.png" alt="logo">', build_policy())
    assert "src=" not in result
    assert 'alt="logo"' in result


def test_absolute_urls_unchanged_with_trusted_base():
    result = sanitize('<a href="https://crates.io/crates/x">x</a>', build_policy(GITHUB))
    assert 'href="https://crates.io/crates/x"' in result


def test_javascript_urls_are_removed():
    for base in (None, GITHUB):
        result = sanitize('<a href="javascript:alert(1)">x</a>', build_policy(base))
        assert "javascript" not in result
        assert result == f"<a {REL}>x</a>"


def test_comments_are_removed():
    assert sanitize("<p>a<!-- secret -->b</p>", build_policy()) == "<p>ab</p>"


def test_sanitizer_does_not_create_links():
    result = sanitize("<p>see https://example.com/docs and lib.rs</p>", build_policy(GITHUB))
    assert "<a" not in result


def test_entity_encoded_mailto_is_kept_as_absolute():
    mailto = "".join(f"&#{ord(c)};" for c in "mailto:me@example.com")
    for base in (None, GITHUB):
        result = sanitize(f'<a href="{mailto}">me</a>', build_policy(base))
        assert 'href="mailto:me@example.com"' in html.unescape(result)
        assert "blob/master" not in result


def test_sanitize_is_idempotent():
    raw = (
        '<h1 class="x">Title</h1>\n'
        '<p>See <a href="/hi" target="_blank">hi</a> and https://example.com &amp; more.</p>\n'
        '<pre><code class="language-rust evil">fn main() {}</code></pre>\n'
        '<table><thead><tr><th>a</th></tr></thead><tbody><tr><td>1</td></tr></tbody></table>\n'
        "<p>&lt;script&gt;alert(1)&lt;/script&gt;</p>"
    )
    for base in (None, GITHUB, "https://example.com/org/repo"):
        policy = build_policy(base)
        once = sanitize(raw, policy)
        assert sanitize(once, policy) == once


def test_no_live_anchor_lacks_rel():
    raw = '<p><a href="a">1</a> <a href="https://x.org">2</a> <a>3</a></p>'
    result = sanitize(raw, build_policy(GITHUB))
    anchors = re.findall(r"<a\b[^>]*>", result)
    assert len(anchors) == 3
    assert all(REL in a for a in anchors)
