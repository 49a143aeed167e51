"""Raw character storage for a document."""


class RawStore:
    """Owns the full document text as one string.

    Offsets are character offsets. Every method clamps its offsets into
    ``[0, length()]`` so index math from the layers above can never read or
    write outside the document.
    """

    def __init__(self, text: str = ""):
        self._text = text

    def text(self) -> str:
        return self._text

    def length(self) -> int:
        return len(self._text)

    def _clamp_range(self, start: int, end: int) -> tuple[int, int]:
        if end < start:
            start, end = end, start
        size = len(self._text)
        return (min(max(start, 0), size), min(max(end, 0), size))

    def read(self, start: int, end: int) -> str:
        start, end = self._clamp_range(start, end)
        return self._text[start:end]

    def replace(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` with ``text``."""
        start, end = self._clamp_range(start, end)
        self._text = self._text[:start] + text + self._text[end:]
