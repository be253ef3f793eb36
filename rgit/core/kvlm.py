"""Key-value list with message (KVLM) format used by commits and tags.

A KVLM payload is a block of header lines followed by a blank line and a
free-text message:

    tree 29ff16c9c14e2652b22f8b78bb08a5a07930c147
    parent 206941306e8a8af65b66eaaaea388a7ae24d49a0
    author Thibault Polge <thibault@thb.lt> 1527025023 +0200

    Create first draft

Header values may span several lines; continuation lines start with a
single space. Keys may repeat (merge commits carry several ``parent``
lines) and keep the order in which they first appeared.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import MalformedHeader

# Empty key holding the message
MESSAGE_KEY = ''

ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


def _decode(data: bytes) -> str:
    return data.decode(ENCODING, ERRORS)


def _encode(text: str) -> bytes:
    return text.encode(ENCODING, ERRORS)


class KVLM:
    """
    Ordered multi-map from header keys to lists of values.

    Keys are kept in first-insertion order and every key maps to the
    ordered list of its values. The message lives under the empty key and
    is exposed through the ``message`` property.
    """

    def __init__(self, items: Optional[List[Tuple[str, str]]] = None, message: str = ''):
        """
        Initialize the map.

        Args:
            items: (key, value) pairs added in order
            message: Free-text message
        """
        self._values: Dict[str, List[str]] = {}
        self.message = message
        for key, value in items or []:
            self.add(key, value)

    @staticmethod
    def _check_key(key: str) -> None:
        if not key or ' ' in key or '\n' in key:
            raise ValueError(f"Invalid header key: {key!r}")

    def add(self, key: str, value: str) -> None:
        """Append value to the list stored under key."""
        self._check_key(key)
        self._values.setdefault(key, []).append(value)

    def set(self, key: str, values: List[str]) -> None:
        """
        Replace all values of key.

        An existing key keeps its position; a new key is appended. An
        empty list removes the key.
        """
        self._check_key(key)
        if not values:
            self._values.pop(key, None)
            return
        self._values[key] = list(values)

    def get(self, key: str) -> List[str]:
        """Return a copy of the values stored under key (empty if absent)."""
        return list(self._values.get(key, []))

    def first(self, key: str, default: str = '') -> str:
        values = self._values.get(key)
        return values[0] if values else default

    def keys(self) -> List[str]:
        """Header keys in first-insertion order, message key excluded."""
        return list(self._values)

    def items(self) -> Iterator[Tuple[str, str]]:
        """Yield (key, value) pairs in serialization order."""
        for key, values in self._values.items():
            for value in values:
                yield key, value

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KVLM):
            return NotImplemented
        return (list(self._values.items()) == list(other._values.items())
                and self.message == other.message)

    def __repr__(self) -> str:
        return f"KVLM(keys={self.keys()}, message={self.message[:30]!r})"


def parse(raw: bytes) -> KVLM:
    """
    Parse a KVLM payload.

    Args:
        raw: Serialized headers and message

    Returns:
        KVLM: Parsed headers and message

    Raises:
        MalformedHeader: If the header block is not terminated by a
            blank line or a header line has no key
    """
    kvlm = KVLM()
    pos = 0

    while True:
        space = raw.find(b' ', pos)
        newline = raw.find(b'\n', pos)

        # No space before the next newline: this must be the blank line
        # separating headers from the message.
        if space < 0 or (0 <= newline < space):
            if newline != pos:
                raise MalformedHeader(f"Expected blank line at offset {pos}")
            kvlm.message = _decode(raw[pos + 1:])
            return kvlm

        if space == pos:
            raise MalformedHeader(f"Empty header key at offset {pos}")
        key = _decode(raw[pos:space])

        # The value ends at the first newline not followed by a space
        end = space
        while True:
            end = raw.find(b'\n', end + 1)
            if end < 0:
                raise MalformedHeader(f"Unterminated header {key!r}")
            if raw[end + 1:end + 2] != b' ':
                break

        value = raw[space + 1:end].replace(b'\n ', b'\n')
        kvlm.add(key, _decode(value))
        pos = end + 1


def serialize(kvlm: KVLM) -> bytes:
    """
    Serialize headers and message.

    Every value is written on its own ``<key> <value>`` line, embedded
    newlines escaped as a newline followed by a space. A blank line then
    separates the headers from the message.

    Args:
        kvlm: Headers and message

    Returns:
        bytes: KVLM payload
    """
    lines = []
    for key, value in kvlm.items():
        escaped = value.replace('\n', '\n ')
        lines.append(_encode(f"{key} {escaped}\n"))
    lines.append(b'\n')
    lines.append(_encode(kvlm.message))
    return b''.join(lines)
