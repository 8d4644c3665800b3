"""Markup extraction helpers.

Feeds arrive in many shapes, so fields are pulled out of item fragments with a
small set of tolerant patterns instead of a full XML parser. A field wrapped in
a CDATA block wins over a plain tagged field of the same name.
"""

import re
from functools import lru_cache
from typing import Dict, Iterator, Optional, Pattern, Tuple


# A tag opens with a name, a closing slash, "!" or "?"; a bare "<" is text.
_TAG_RE = re.compile(r"<[A-Za-z/!?][^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_ENTITY_RE = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|amp|lt|gt|quot|apos|nbsp);")
_ATTRIBUTE_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
}

_SURROGATES = (0xD800, 0xDFFF)


@lru_cache(maxsize=128)
def _field_patterns(name: str) -> Tuple[Pattern, Pattern]:
    tag = re.escape(name)
    # The opening tag may carry attributes but must not be self-closing.
    opening = rf"<{tag}(?:\s[^>]*)?(?<!/)>"
    cdata = re.compile(
        rf"{opening}\s*<!\[CDATA\[(.*?)\]\]>",
        re.IGNORECASE | re.DOTALL,
    )
    plain = re.compile(
        rf"{opening}(.*?)</{tag}\s*>",
        re.IGNORECASE | re.DOTALL,
    )
    return cdata, plain


@lru_cache(maxsize=128)
def _tag_pattern(name: str) -> Pattern:
    return re.compile(rf"<{re.escape(name)}(?=[\s/>])[^>]*>", re.IGNORECASE)


def _replace_entity(match: "re.Match") -> str:
    entity = match.group(1)
    if not entity.startswith("#"):
        return _NAMED_ENTITIES[entity]

    if entity[1] in "xX":
        code = int(entity[2:], 16)
    else:
        code = int(entity[1:])

    # NUL and surrogates cannot be encoded as UTF-8 text
    if code == 0 or _SURROGATES[0] <= code <= _SURROGATES[1]:
        return match.group(0)
    try:
        return chr(code)
    except (ValueError, OverflowError):
        # Beyond the Unicode range
        return match.group(0)


def decode_entities(text: str) -> str:
    """Decode the supported character entities in one pass.

    Handles &amp; &lt; &gt; &quot; &apos; &nbsp; and decimal or hexadecimal
    numeric references. Anything else is left as written, including numeric
    references to NUL, surrogates or code points beyond the Unicode range.
    """
    if "&" not in text:
        return text
    return _ENTITY_RE.sub(_replace_entity, text)


def strip_tags(text: str) -> str:
    """Replace every tag in the text with a space."""
    return _TAG_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """Turn a markup fragment into plain text.

    Tags are stripped first, then entities are decoded once, so escaped
    characters such as &lt; come back as literal text.
    """
    return collapse_whitespace(decode_entities(strip_tags(text)))


def extract_raw_field(fragment: str, name: str) -> str:
    """Return the untouched inner content of the first `name` element.

    A CDATA-wrapped element is preferred over a plain one.

    Args:
        fragment: Markup to search
        name: Tag name, optionally namespaced (e.g. "dc:date")

    Returns:
        The inner content, or "" when the field is absent
    """
    cdata, plain = _field_patterns(name)
    match = cdata.search(fragment) or plain.search(fragment)
    if not match:
        return ""
    return match.group(1)


def extract_field(fragment: str, name: str) -> str:
    """Return the plain text of the first `name` element, or "" if absent."""
    raw = extract_raw_field(fragment, name)
    if not raw:
        return ""
    return clean_text(raw)


def first_field(fragment: str, *names: str) -> str:
    """Return the first non-empty field among `names`."""
    for name in names:
        value = extract_field(fragment, name)
        if value:
            return value
    return ""


def parse_attributes(tag_text: str) -> Dict[str, str]:
    """Parse the attributes of a single opening tag.

    Attribute names are lower-cased; values are entity-decoded.
    """
    attributes = {}
    for match in _ATTRIBUTE_RE.finditer(tag_text):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes.setdefault(match.group(1).lower(), decode_entities(value).strip())
    return attributes


def iter_tags(fragment: str, name: str) -> Iterator[Dict[str, str]]:
    """Yield the attributes of every `name` tag in the fragment, in order."""
    for match in _tag_pattern(name).finditer(fragment):
        yield parse_attributes(match.group(0))


def find_attribute(fragment: str, tag: str, attribute: str) -> str:
    """Return `attribute` from the first `tag` that carries a non-empty one."""
    attribute = attribute.lower()
    for attributes in iter_tags(fragment, tag):
        value: Optional[str] = attributes.get(attribute)
        if value:
            return value
    return ""
