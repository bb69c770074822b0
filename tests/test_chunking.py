"""
Tests for structure-preserving chunking of long HTML bodies.
"""

import random
import re

import pytest

from articlelingo.i18n.chunking import count_words, split_fragments, split_into_chunks, strip_tags

ENDS_AT_BOUNDARY = re.compile(r"</(?:h[23]|p|div|li)\s*>$", re.IGNORECASE)

WORDS = ["visa", "travail", "contrat", "passeport", "délai", "banque", "impôts", "logement"]


def paragraphs(count: int, words_each: int) -> str:
    return "".join(f"<p>{' '.join(['mot'] * words_each)}</p>" for _ in range(count))


def random_html(rng: random.Random, depth: int = 0) -> str:
    """Nested block and inline elements with random text."""
    parts = []
    for _ in range(rng.randint(1, 6)):
        kind = rng.choice(["p", "div", "li", "h2", "h3", "span", "text"])
        text = " ".join(rng.choice(WORDS) for _ in range(rng.randint(0, 40)))
        if kind == "text":
            parts.append(text + rng.choice(["", " ", "\n"]))
        elif kind in ("div", "li") and depth < 3:
            attrs = rng.choice(["", ' class="box"', ' data-x="1"'])
            parts.append(f"<{kind}{attrs}>{text}{random_html(rng, depth + 1)}</{kind}>")
        else:
            closing = rng.choice([f"</{kind}>", f"</{kind.upper()}>", f"</{kind} >"])
            parts.append(f"<{kind}>{text}{closing}")
        if rng.random() < 0.3:
            parts.append("\n")
    return "".join(parts)


class TestHelpers:
    def test_strip_tags_separates_words(self):
        assert count_words("<p>alpha</p><p>beta</p>") == 2
        assert strip_tags("<b>x</b>") == " x "

    def test_fragments_end_at_boundaries(self):
        html = "<h2>T</h2><p>a</p>tail"
        assert split_fragments(html) == ["<h2>T</h2>", "<p>a</p>", "tail"]

    def test_no_boundary_single_fragment(self):
        assert split_fragments("<span>a b c</span>") == ["<span>a b c</span>"]


class TestSplitIntoChunks:
    def test_long_body_three_chunks(self):
        html = paragraphs(45, 100)
        chunks = split_into_chunks(html, max_words=1500)

        assert len(chunks) == 3
        assert [count_words(c) for c in chunks] == [1500, 1500, 1500]
        assert "".join(chunks) == html

    def test_short_body_single_chunk(self):
        html = paragraphs(3, 10)
        assert split_into_chunks(html, max_words=1500) == [html]

    def test_empty(self):
        assert split_into_chunks("", max_words=10) == []

    def test_case_insensitive_boundary(self):
        html = "<P>one two</P><P>three four</P>"
        assert split_into_chunks(html, max_words=2) == ["<P>one two</P>", "<P>three four</P>"]

    def test_oversized_fragment_alone(self):
        html = "<p>a b</p><p>" + " ".join(["w"] * 20) + "</p><p>c</p>"
        chunks = split_into_chunks(html, max_words=5)
        assert chunks == ["<p>a b</p>", "<p>" + " ".join(["w"] * 20) + "</p>", "<p>c</p>"]

    def test_whitespace_preserved(self):
        html = "<p>a</p>\n\n  <p>b</p>\n"
        chunks = split_into_chunks(html, max_words=1)
        assert "".join(chunks) == html

    def test_invalid_ceiling(self):
        with pytest.raises(ValueError):
            split_into_chunks("<p>a</p>", max_words=0)


class TestChunkProperties:
    @pytest.mark.parametrize("seed", range(25))
    def test_random_documents(self, seed):
        rng = random.Random(seed)
        html = "".join(random_html(rng) for _ in range(rng.randint(1, 8)))
        max_words = rng.choice([1, 5, 20, 60, 200])

        chunks = split_into_chunks(html, max_words=max_words)

        # Round trip
        assert "".join(chunks) == html

        for index, chunk in enumerate(chunks):
            # Never cut inside a tag
            assert chunk.count("<") == chunk.count(">")
            if index < len(chunks) - 1:
                assert ENDS_AT_BOUNDARY.search(chunk)

            # Ceiling honoured unless a single fragment exceeds it
            if len(split_fragments(chunk)) > 1:
                assert count_words(chunk) <= max_words

        # Maximal: the next chunk's first fragment would not have fit
        for current, following in zip(chunks, chunks[1:]):
            first = split_fragments(following)[0]
            assert count_words(current) + count_words(first) > max_words

    def test_boundary_inside_attribute_ignored(self):
        html = '<p>a b</p><p><a title="x</p>y">c d</a></p>'
        chunks = split_into_chunks(html, max_words=2)

        assert chunks == ["<p>a b</p>", '<p><a title="x</p>y">c d</a></p>']
        assert count_words(chunks[1]) == 2

    def test_boundary_inside_comment_ignored(self):
        html = "<p>a</p><!-- </p> --><p>b</p>"
        chunks = split_into_chunks(html, max_words=1)

        assert chunks == ["<p>a</p>", "<!-- </p> --><p>b</p>"]
        assert strip_tags("<!-- a </p> b -->") == " "
