"""In-memory response sink."""

from http import HTTPStatus
from io import BytesIO


class ResponseRecorder:
    """Response sink recording what a handler writes.

    The status code defaults to `200` when the handler never sets one.
    Only the first status code counts: once a status was written, or
    the body was started, later `write_header` calls are ignored.

    Attributes:
        code: Recorded HTTP status code.
        headers: Recorded response headers.
    """

    def __init__(self) -> None:
        """Initialize an empty recorder."""
        self.code: int = HTTPStatus.OK.value
        self.headers: dict[str, str] = {}

        self._buffer = BytesIO()
        self._wrote_header = False

    def __repr__(self) -> str:
        """String representation."""
        return f'<{type(self).__name__} {self.code} {len(self.body)} bytes>'

    @property
    def wrote_header(self) -> bool:
        """Whether the status code was written, explicitly or implicitly."""
        return self._wrote_header

    def write_header(self, code: int) -> None:
        """Record the response status code.

        Args:
            code: HTTP status code.
        """
        if self._wrote_header:
            return

        self.code = int(code)
        self._wrote_header = True

    def write(self, data: bytes | str) -> int:
        """Append data to the response body.

        Writing implies a `200` status if none was written yet.

        Args:
            data: Body chunk; text is encoded as UTF-8.

        Returns:
            Number of bytes written.
        """
        if isinstance(data, str):
            data = data.encode('utf-8')

        self.write_header(HTTPStatus.OK.value)

        return self._buffer.write(data)

    @property
    def body(self) -> bytes:
        """Full body written so far."""
        return self._buffer.getvalue()

    @property
    def text(self) -> str:
        """Full body decoded as UTF-8, undecodable bytes replaced."""
        return self.body.decode('utf-8', errors='replace')
