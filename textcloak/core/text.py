"""Character range utilities and zero-copy text views.

Masking results are often made of pieces that already exist somewhere: a run
of mask characters, a window of the input, or two partial results placed one
after the other. The view types in this module describe such pieces without
copying them. They compare equal to the ``str`` they represent, and ``str()``
materializes them.

Range arguments follow ``0 <= start <= end <= len(text)``. Negative indices
are rejected instead of being counted from the end.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Sized, Tuple, Union

from .exceptions import (
    InvalidArgumentError,
    OutOfRangeError,
    create_missing_error,
    create_negative_error,
    create_range_error,
)


class TextView(ABC):
    """Read-only, str-like view over characters stored elsewhere."""

    __slots__ = ()

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def char_at(self, index: int) -> str:
        """Return the character at ``index``."""

    @abstractmethod
    def sub_view(self, start: int, end: int) -> "TextLike":
        """Return the characters in ``[start, end)`` without copying them."""

    def __str__(self) -> str:
        return "".join(self.char_at(i) for i in range(len(self)))

    def __getitem__(self, key: Union[int, slice]) -> "TextLike":
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise InvalidArgumentError("Text views only support contiguous slices", argument="step")
            return self.sub_view(start, max(start, stop))
        length = len(self)
        index = key + length if key < 0 else key
        return self.char_at(index)

    def __iter__(self) -> Iterator[str]:
        return iter(str(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, TextView)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


TextLike = Union[str, TextView]


class CharArrayView(TextView):
    """View over a window of a ``str`` or a list of characters.

    The window can be moved with the ``reset_*`` methods so one instance can
    be reused for consecutive chunks of a buffer.
    """

    __slots__ = ("_array", "_start", "_end")

    def __init__(self, array: Union[str, Sequence[str]], start: int = 0, end: Optional[int] = None):
        if array is None:
            raise create_missing_error("array")
        if end is None:
            end = len(array)
        check_start_and_end(array, start, end)
        self._array = array
        self._start = start
        self._end = end

    def reset_with_start_and_end(self, start: int, end: int) -> None:
        """Move the window to ``[start, end)`` of the current array."""
        check_start_and_end(self._array, start, end)
        self._start = start
        self._end = end

    def reset_with_offset_and_length(self, array: Union[str, Sequence[str]], offset: int, length: int) -> None:
        """Point the view at ``length`` characters of ``array`` starting at ``offset``."""
        check_offset_and_length(array, offset, length)
        self._array = array
        self._start = offset
        self._end = offset + length

    def __len__(self) -> int:
        return self._end - self._start

    def char_at(self, index: int) -> str:
        check_index(self, index)
        return self._array[self._start + index]

    def sub_view(self, start: int, end: int) -> TextLike:
        check_start_and_end(self, start, end)
        return CharArrayView(self._array, self._start + start, self._start + end)

    def __str__(self) -> str:
        window = self._array[self._start:self._end]
        return window if isinstance(window, str) else "".join(window)


class RepeatingChars(TextView):
    """A single character repeated ``count`` times."""

    __slots__ = ("_char", "_count", "_repeated")

    def __init__(self, char: str, count: int):
        check_mask_char(char)
        if count < 0:
            raise create_negative_error("count", count)
        self._char = char
        self._count = count
        self._repeated: Optional[str] = None

    @property
    def char(self) -> str:
        return self._char

    def __len__(self) -> int:
        return self._count

    def char_at(self, index: int) -> str:
        check_index(self, index)
        return self._char

    def sub_view(self, start: int, end: int) -> TextLike:
        check_start_and_end(self, start, end)
        count = end - start
        return self if count == self._count else RepeatingChars(self._char, count)

    def __str__(self) -> str:
        if self._repeated is None:
            self._repeated = self._char * self._count
        return self._repeated


class ConcatText(TextView):
    """Two texts presented as one, without copying either."""

    __slots__ = ("_first", "_second")

    def __init__(self, first: TextLike, second: TextLike):
        self._first = first
        self._second = second

    def __len__(self) -> int:
        return len(self._first) + len(self._second)

    def char_at(self, index: int) -> str:
        check_index(self, index)
        split_at = len(self._first)
        if index < split_at:
            return self._first[index]
        return self._second[index - split_at]

    def sub_view(self, start: int, end: int) -> TextLike:
        check_start_and_end(self, start, end)
        if start == end:
            return ""
        split_at = len(self._first)
        if end <= split_at:
            return sub_text(self._first, start, end)
        if start >= split_at:
            return sub_text(self._second, start - split_at, end - split_at)
        return ConcatText(sub_text(self._first, start, split_at), sub_text(self._second, 0, end - split_at))

    def __str__(self) -> str:
        return str(self._first) + str(self._second)


# index checking

def check_index(text: Sized, index: int) -> None:
    """Check that ``0 <= index < len(text)``."""
    length = len(text)
    if index < 0 or index >= length:
        raise OutOfRangeError(f"Invalid index {index} for text of length {length}", length=length, start=index)


def check_start_and_end(text: Sized, start: int, end: int) -> None:
    """Check that ``0 <= start <= end <= len(text)``."""
    length = len(text)
    if start < 0 or end > length or start > end:
        raise create_range_error(length, start, end)


def check_offset_and_length(text: Sized, offset: int, length: int) -> None:
    """Check that ``length`` characters starting at ``offset`` fit in ``text``."""
    if offset < 0 or length < 0 or offset + length > len(text):
        raise OutOfRangeError(
            f"Invalid offset {offset} or length {length} for text of length {len(text)}",
            length=len(text),
            start=offset,
            end=offset + length,
        )


def resolve_range(text: Optional[TextLike], start: int = 0, end: Optional[int] = None) -> Tuple[int, int]:
    """Validate a ``(text, start, end)`` triple, filling in a missing end.

    Returns:
        The validated ``(start, end)`` pair

    Raises:
        InvalidArgumentError: If text is None
        OutOfRangeError: If the range does not fit the text
    """
    if text is None:
        raise create_missing_error("text")
    if end is None:
        end = len(text)
    check_start_and_end(text, start, end)
    return start, end


def check_mask_char(mask_char: str) -> None:
    """Check that ``mask_char`` is a single character string."""
    if not isinstance(mask_char, str) or len(mask_char) != 1:
        raise InvalidArgumentError(
            "mask_char must be a single character string",
            argument="mask_char",
            actual_value=mask_char,
        )


# view factories

def sub_text(text: TextLike, start: int, end: int) -> TextLike:
    """Return ``text[start:end]`` without copying."""
    check_start_and_end(text, start, end)
    if start == 0 and end == len(text):
        return text
    if isinstance(text, TextView):
        return text.sub_view(start, end)
    return CharArrayView(text, start, end)


def substring(text: TextLike, start: int = 0, end: Optional[int] = None) -> str:
    """Return ``text[start:end]`` as a ``str``."""
    start, end = resolve_range(text, start, end)
    if isinstance(text, str):
        return text if start == 0 and end == len(text) else text[start:end]
    return str(text.sub_view(start, end))


def repeat_char(char: str, count: int) -> RepeatingChars:
    """Return a view of ``char`` repeated ``count`` times."""
    return RepeatingChars(char, count)


def concat(first: TextLike, second: TextLike) -> ConcatText:
    """Return a view of ``first`` followed by ``second``."""
    if first is None:
        raise create_missing_error("first")
    if second is None:
        raise create_missing_error("second")
    return ConcatText(first, second)


def wrap_array(array: List[str]) -> CharArrayView:
    """Return a view over a list of characters."""
    return CharArrayView(array)
