"""Word segmentation utilities."""

from scriptshift.models import Word


ENDING_LENGTH = 2


def segment_word(word: str) -> Word:
    """
    Split a word into stem and ending.

    Args:
        word: Input word

    Returns:
        Word whose ending is the last two characters when the word is longer
        than two characters; otherwise the whole word is the stem and the
        ending is empty
    """
    if len(word) > ENDING_LENGTH:
        return Word(stem=word[:-ENDING_LENGTH], ending=word[-ENDING_LENGTH:])
    return Word(stem=word, ending="")
