"""
Word Classification
===================
Thin wrappers over inflect (noun inflection) and lemminflect (part-of-speech
lemmas) tuned for API path segments.

inflect only ever inflects nouns, so words such as "order" or "download"
are classified as nouns without any sentence context.  lemminflect reports
every universal POS tag a word can take; a word carrying both NOUN and VERB
is treated as a noun.
"""
import re
from functools import lru_cache

import inflect
from lemminflect import getAllLemmas

SINGULAR = "singular"
PLURAL = "plural"

# Words whose bare form is already a valid collection name.
UNCOUNTABLES: frozenset[str] = frozenset({
    "data", "metadata", "auth", "config", "settings", "api", "graphql",
    "oauth", "jwt", "cors", "software", "hardware", "firmware", "middleware",
    "status", "health", "info", "information", "news", "media", "series",
    "analytics", "feedback", "equipment",
})

NOUN_TAGS = frozenset({"NOUN", "PROPN"})
# Base forms a plural noun can inflect from
DUAL_TAGS = frozenset({"NOUN", "PROPN", "VERB"})

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")

_engine = inflect.engine()


def split_words(segment: str) -> list[str]:
    """Split a path segment on '-', '_' and camelCase boundaries."""
    words: list[str] = []
    for part in re.split(r"[-_]+", segment):
        words.extend(_WORD_RE.findall(part))
    return words


def head_word(segment: str) -> str:
    """Last word of a compound segment ("orderItems" -> "Items")."""
    words = split_words(segment)
    return words[-1] if words else segment


def is_uncountable(word: str) -> bool:
    lower = word.lower()
    return lower in UNCOUNTABLES or head_word(word).lower() in UNCOUNTABLES


@lru_cache(maxsize=4096)
def _lemmas(word: str) -> dict:
    if not word:
        return {}
    return getAllLemmas(word.lower())


def is_noun(word: str) -> bool:
    """
    True for nouns, including plurals of noun/verb words.

    The lemma dictionary lists some plurals ("logs", "invites") only as
    verb forms.  A word inflect can singularise to a known noun or verb base
    reads as a plural noun, so noun/verb duality always resolves to noun.
    """
    lower = word.lower()
    if lower in UNCOUNTABLES:
        return True
    tags = _lemmas(lower)
    if NOUN_TAGS & set(tags):
        return True
    singular = _engine.singular_noun(lower) if lower.isalpha() else False
    return bool(singular) and bool(DUAL_TAGS & set(_lemmas(singular)))


def is_verb(word: str) -> bool:
    tags = _lemmas(word)
    return "VERB" in tags and not is_noun(word)


def classify_plurality(word: str) -> str:
    """Return "singular" or "plural" for a segment, judged on its head word."""
    if not word or is_uncountable(word):
        return PLURAL
    head = head_word(word).lower()
    if not head.isalpha():
        return SINGULAR
    return PLURAL if _engine.singular_noun(head) else SINGULAR


def is_singular(word: str) -> bool:
    return classify_plurality(word) == SINGULAR


def is_plural(word: str) -> bool:
    return classify_plurality(word) == PLURAL


def pluralize(word: str) -> str:
    if not word or is_uncountable(word) or is_plural(word):
        return word
    return _engine.plural_noun(word) or word


def singularize(word: str) -> str:
    if not word or is_uncountable(word):
        return word
    return _engine.singular_noun(word) or word
