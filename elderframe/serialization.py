"""Serialisation of data wrapped in a versioned JSON envelope."""

from __future__ import annotations

import json
import os
from typing import Any, BinaryIO

ENVELOPE_VERSION = "1.0.0"
ENVELOPE_TIMESTAMP = 1000


class ElderSerializer:
    """Writes and reads data inside a JSON envelope, indented ("json") or compact ("binary").

    Any other format name is treated as "json".
    """

    def __init__(self, format: str) -> None:
        self.format = format
        self.compression = False
        self.encryption = False
        self.metadata: dict[str, Any] = {}

    def _envelope(self, data: Any) -> dict[str, Any]:
        return {
            "type": type(data).__name__,
            "version": ENVELOPE_VERSION,
            "timestamp": ENVELOPE_TIMESTAMP,
            "metadata": self.metadata,
            "data": data,
        }

    def serialize(self, data: Any, stream: BinaryIO) -> None:
        """Write *data* in its envelope to a binary stream."""
        envelope = self._envelope(data)
        if self.format == "binary":
            text = json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)
        else:
            text = json.dumps(envelope, indent=2, ensure_ascii=False) + "\n"
        stream.write(text.encode("utf-8"))

    def deserialize(self, stream: BinaryIO) -> Any:
        """Read an envelope from a binary stream and return its data.

        Raises ValueError when the content is not a JSON object.
        """
        text = stream.read().decode("utf-8")
        if self.format == "binary":
            envelope = json.loads(text)
        else:
            envelope, _ = json.JSONDecoder().raw_decode(text.lstrip())
        if not isinstance(envelope, dict):
            raise ValueError("serialized content is not an envelope object")
        return envelope.get("data")

    def serialize_to_file(self, data: Any, path: str | os.PathLike[str]) -> None:
        """Write *data* to the file at *path*, replacing it."""
        with open(path, "wb") as stream:
            self.serialize(data, stream)

    def deserialize_from_file(self, path: str | os.PathLike[str]) -> Any:
        """Read the data stored in the file at *path*."""
        with open(path, "rb") as stream:
            return self.deserialize(stream)