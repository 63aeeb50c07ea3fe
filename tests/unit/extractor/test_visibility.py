"""
Tests for rendered-text helpers.
"""

from bs4 import BeautifulSoup

from articlelens.extractor.visibility import hide, is_hidden, visible_text


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_block_elements_start_new_lines():
    soup = soup_of("<div><h2>Heading</h2><p>First  paragraph</p><p>Second\n\n paragraph</p></div>")

    assert visible_text(soup.div) == "Heading\nFirst paragraph\nSecond paragraph"


def test_inline_elements_stay_on_one_line():
    soup = soup_of("<p>Some <b>bold</b> and <a href='#'>linked</a> text</p>")

    assert visible_text(soup.p) == "Some bold and linked text"


def test_non_rendered_tags_are_skipped():
    soup = soup_of(
        "<div>Visible<script>var a = 1;</script><style>p {}</style><noscript>enable js</noscript></div>"
    )

    assert visible_text(soup.div) == "Visible"


def test_comments_are_skipped():
    soup = soup_of("<p>Before<!-- hidden note -->After</p>")

    assert visible_text(soup.p) == "BeforeAfter"


def test_hidden_attribute_and_inline_style():
    soup = soup_of(
        "<div><p hidden>secret</p><p style='DISPLAY : none'>gone</p><p style='color: red'>shown</p></div>"
    )

    assert visible_text(soup.div) == "shown"


def test_root_inside_hidden_ancestor_keeps_its_text():
    soup = soup_of("<div style='display:none'><section><p>deep</p><p hidden>draft</p></section></div>")

    assert visible_text(soup.section) == "deep"


def test_hidden_root_yields_its_descendants():
    soup = soup_of("<article style='display: none'><h1>Title</h1><aside hidden>skip</aside><p>Body</p></article>")

    assert visible_text(soup.article) == "Title\nBody"


def test_include_hidden_ignores_hidden_markers_but_not_scripts():
    soup = soup_of(
        "<div><p style='display:none'>styled away</p><p hidden>flagged</p><script>var a;</script></div>"
    )

    assert visible_text(soup.div) == ""
    assert visible_text(soup.div, include_hidden=True) == "styled away\nflagged"


def test_is_hidden():
    soup = soup_of("<div><script></script><span hidden></span><em>x</em></div>")

    assert is_hidden(soup.script)
    assert is_hidden(soup.span)
    assert not is_hidden(soup.em)


def test_hide_sets_inline_style_once():
    soup = soup_of("<div class='menu'>links</div>")
    div = soup.div

    assert hide(div) is True
    assert div["style"] == "display: none"
    assert hide(div) is False
    assert div["style"] == "display: none"
    assert soup.find("div", class_="menu") is div


def test_deep_nesting_does_not_recurse():
    html = "<div>" * 1500 + "bottom" + "</div>" * 1500
    soup = soup_of(html)

    assert visible_text(soup) == "bottom"
