"""
Streaming multipart/form-data reader.

Every part keeps its own ``Content-Type`` header whether or not it carries a
filename. Parts are handed out one by one, in arrival order, as soon as their
closing boundary has been read.
"""
from collections import deque
from dataclasses import dataclass
from typing import AsyncIterator, Deque, List, Optional, Tuple

from python_multipart import MultipartParser
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header

from ..errors import MalformedRequest, RequestTooLarge


@dataclass(frozen=True)
class FormPart:
    name: str
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


class MultipartReader:
    def __init__(self, content_type: Optional[str], max_bytes: int):
        media_type, params = parse_options_header(content_type or "")
        if media_type != b"multipart/form-data":
            raise MalformedRequest("Expected a multipart/form-data body")
        boundary = params.get(b"boundary")
        if not boundary:
            raise MalformedRequest("Missing multipart boundary")

        self.max_bytes = max_bytes
        self._ready: Deque[FormPart] = deque()
        self._headers: List[Tuple[bytes, bytes]] = []
        self._header_field = b""
        self._header_value = b""
        self._data = bytearray()
        self._finished = False
        self._parser = MultipartParser(
            boundary,
            callbacks={
                "on_part_begin": self._on_part_begin,
                "on_part_data": self._on_part_data,
                "on_part_end": self._on_part_end,
                "on_header_field": self._on_header_field,
                "on_header_value": self._on_header_value,
                "on_header_end": self._on_header_end,
                "on_end": self._on_end,
            },
        )

    def _on_part_begin(self) -> None:
        self._headers = []
        self._data = bytearray()

    def _on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data.extend(data[start:end])

    def _on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def _on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def _on_header_end(self) -> None:
        self._headers.append((self._header_field.strip().lower(), self._header_value.strip()))
        self._header_field = b""
        self._header_value = b""

    def _on_part_end(self) -> None:
        headers = dict(self._headers)
        _, options = parse_options_header(headers.get(b"content-disposition", b""))
        if b"name" not in options:
            raise MalformedRequest("Multipart part without a field name")
        filename = options.get(b"filename")
        content_type = headers.get(b"content-type")
        self._ready.append(
            FormPart(
                name=options[b"name"].decode("utf-8", "replace"),
                filename=filename.decode("utf-8", "replace") if filename is not None else None,
                content_type=content_type.decode("latin-1") if content_type else None,
                data=bytes(self._data),
            )
        )

    def _on_end(self) -> None:
        self._finished = True

    async def parts(self, stream: AsyncIterator[bytes]) -> AsyncIterator[FormPart]:
        received = 0
        async for chunk in stream:
            received += len(chunk)
            if received > self.max_bytes:
                raise RequestTooLarge(f"Request body exceeds the {self.max_bytes} byte limit")
            try:
                self._parser.write(chunk)
            except MultipartParseError as e:
                raise MalformedRequest(f"Invalid multipart body: {e}")
            while self._ready:
                yield self._ready.popleft()

        self._parser.finalize()
        while self._ready:
            yield self._ready.popleft()
        if not self._finished:
            raise MalformedRequest("Multipart body ended before its closing boundary")
