"""Text normalization for extracted and fetched document text.

Two cleaning concerns live here:

1. **Document text normalization** -- ``normalize_text`` removes control
   characters, unifies line endings, collapses whitespace runs and caps
   blank-line runs at one empty line.  It is applied to every extractor
   output before the text is stored or sent to an AI provider.

2. **Wiki markup cleanup** -- ``clean_markup`` flattens Confluence storage
   format (XHTML) into a single line of plain text: tags become spaces,
   the six common entities are decoded, whitespace is collapsed.

Both functions are pure and never raise.  ``normalize_text`` is idempotent:
``normalize_text(normalize_text(x)) == normalize_text(x)``.
"""

from __future__ import annotations

import re

# C0 controls except \t (0x09), \n (0x0A) and \r (0x0D), plus DEL and the
# C1 block.  \r is kept here and folded into \n afterwards.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_LINE_ENDINGS = re.compile(r"\r\n?")

# Any whitespace except a newline.
_HORIZONTAL_WS = re.compile(r"[^\S\n]+")

_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")

_EXCESS_NEWLINES = re.compile(r"\n{3,}")

_TAG = re.compile(r"<[^>]+>")

_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))

_ANY_WS = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize extracted document text.

    Steps, in order:

    - drop control characters other than newline and tab
    - convert ``\\r\\n`` and lone ``\\r`` to ``\\n``
    - collapse every run of non-newline whitespace (tabs included) to one space
    - remove the space left on either side of a newline
    - collapse three or more newlines to exactly two
    - trim the ends

    Args:
        text: Raw text from an extractor or a remote page.

    Returns:
        Cleaned text; possibly empty.
    """
    if not text:
        return ""

    cleaned = _CONTROL_CHARS.sub("", text)
    cleaned = _LINE_ENDINGS.sub("\n", cleaned)
    cleaned = _HORIZONTAL_WS.sub(" ", cleaned)
    cleaned = _SPACE_AROUND_NEWLINE.sub("\n", cleaned)
    cleaned = _EXCESS_NEWLINES.sub("\n\n", cleaned)
    return cleaned.strip()


def clean_markup(html: str) -> str:
    """Strip tags from wiki storage-format markup and flatten whitespace.

    Entities are decoded in a single pass, so ``&amp;lt;`` becomes the
    literal ``&lt;`` rather than ``<``.

    Args:
        html: Confluence ``body.storage.value`` or any HTML fragment.

    Returns:
        Plain single-line text; empty when the markup holds no text.
    """
    if not html or not html.strip():
        return ""

    text = _TAG.sub(" ", html)
    text = _ENTITY.sub(lambda match: _ENTITIES[match.group(0)], text)
    text = _ANY_WS.sub(" ", text)
    return text.strip()
