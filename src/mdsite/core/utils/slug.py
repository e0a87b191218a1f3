"""URL path segments for tag names"""


PUNCTUATION_NAMES = {
    '!': 'exclamation-mark',
    '"': 'double-quote',
    '#': 'number-sign',
    '$': 'dollar',
    '%': 'percent-sign',
    '&': 'ampersand',
    "'": 'single-quote',
    '(': 'open-parenthesis',
    ')': 'close-parenthesis',
    '*': 'asterisk',
    '+': 'plus',
    ',': 'comma',
    '-': 'hyphen-minus',
    '.': 'full-stop',
    '/': 'forward-slash',
    ':': 'colon',
    ';': 'semi-colon',
    '<': 'less-than',
    '=': 'equals',
    '>': 'greater-than',
    '?': 'question-mark',
    '@': 'at-sign',
    '[': 'opening-bracket',
    '\\': 'back-slash',
    ']': 'closing-bracket',
    '^': 'caret',
    '`': 'backtick',
}


def topath(text: str) -> str:
    """Name a lone punctuation tag, otherwise lowercase with spaces as underscores."""
    if text in PUNCTUATION_NAMES:
        return PUNCTUATION_NAMES[text]
    return text.replace(' ', '_').lower()


def keywords(words: list[str]) -> list[str]:
    """Keep only words made of letters, digits and spaces (for the meta keywords tag)."""
    return [w for w in words if all(c.isalnum() or c == ' ' for c in w)]
