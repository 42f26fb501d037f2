"""Field normalizers — reshape raw keystrokes into a field's canonical form.

Normalizers are pure and idempotent, so the same function serves live typing,
blur handling and values pasted or supplied programmatically. They never
decide validity; that is the validation engine's job.
"""

import re

PLATE_MAX_LENGTH = 6
PLATE_LETTERS = 3

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_LETTER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")


def normalize_plate(raw: str | None) -> str:
    """Canonicalise a vehicle plate code typed as ``ABC123``.

    Letters are prioritised while fewer than three have been typed; once three
    letters are present only digits are accepted after them.

    >>> normalize_plate("xyz-999 extra")
    'XYZ999'
    >>> normalize_plate("a1b")
    'AB1'
    """
    if not raw:
        return ""

    value = _NON_ALNUM.sub("", str(raw).upper())[:PLATE_MAX_LENGTH]

    letters = _LETTER.findall(value)
    digits = _DIGIT.findall(value)

    if len(letters) >= PLATE_LETTERS:
        letter_part = _DIGIT.sub("", value[:PLATE_LETTERS])
        digit_part = _LETTER.sub("", value[PLATE_LETTERS:])
        return letter_part + digit_part

    digit_part = "".join(digits)[: PLATE_MAX_LENGTH - len(letters)]
    return "".join(letters) + digit_part
