import re

_NBSP = "\u00a0"
_THIN = "\u2009"
_NNBSP = "\u202f"

_RE_SOFT_HYPHEN = re.compile("\u00ad")
_RE_SPECIAL_SPACES = re.compile("[{}]".format(re.escape(_NBSP + _THIN + _NNBSP)))
_RE_ANY_SPACE = re.compile(r"\s+", flags=re.UNICODE)


def _clean(text: str) -> str:
    s = _RE_SOFT_HYPHEN.sub("", text)
    return _RE_SPECIAL_SPACES.sub(" ", s)


def heading_key(text: str) -> str:
    """
    Normalized form used to compare heading labels:
    "Application  No" -> "applicationno"
    """
    if not text:
        return ""
    return _RE_ANY_SPACE.sub("", _clean(text)).lower()


def collapse_whitespace(text: str) -> str:
    if not text:
        return ""
    return _RE_ANY_SPACE.sub(" ", _clean(text)).strip()


def strip_all_whitespace(text: str) -> str:
    if not text:
        return ""
    return _RE_ANY_SPACE.sub("", _clean(text))
