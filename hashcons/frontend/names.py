"""Name classification for the expression grammar."""

# Ordered range of name-constituent characters. 'A'..'z' also covers
# the punctuation between 'Z' and 'a': [ \ ] ^ _ `
LETTER_MIN = 'A'
LETTER_MAX = 'z'


def is_letter(ch: str) -> bool:
    """Return True if ``ch`` may appear in a name."""
    return LETTER_MIN <= ch <= LETTER_MAX
