"""Sending object detection results as binary UDP datagrams."""

from __future__ import annotations

import logging
import socket
import struct
from typing import Any, Iterable, Mapping, Optional

from .detection import Detection

logger = logging.getLogger(__name__)

NAME = "object_detect_udp"
START_DELIMITER = 0xDDCCBBAA
DEFAULT_IP = "127.0.0.1"
DEFAULT_PORT = 12347
NAME_FIELD_LENGTH = 255

_HEADER = struct.Struct("<Iiiii")
_CONFIDENCE = struct.Struct("<f")
MESSAGE_SIZE = _HEADER.size + 1 + NAME_FIELD_LENGTH + _CONFIDENCE.size


def encode_detection(detection: Detection) -> bytes:
    """Encode one detection as a datagram.

    Layout (little-endian): start delimiter, x, y, width, height as 32-bit
    integers, a length byte of 255, a zero-padded 255-byte name field holding
    at most 253 bytes of the name, and the confidence as a 32-bit float.
    """
    name = detection.name.encode("utf-8")[: NAME_FIELD_LENGTH - 2]
    box = detection.box
    return b"".join(
        (
            _HEADER.pack(START_DELIMITER, box.x, box.y, box.width, box.height),
            bytes([NAME_FIELD_LENGTH]),
            name.ljust(NAME_FIELD_LENGTH, b"\0"),
            _CONFIDENCE.pack(detection.confidence),
        )
    )


class DetectionSender:
    """Sends each detection of a frame as one UDP datagram."""

    def __init__(self, address: str = "127.0.0.1", port: int = 12345):
        self.address = address
        self.port = port
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def read(self, params: Mapping[str, Any]) -> None:
        """Take the destination from the "ip" and "port" parameters."""
        address = str(params.get("ip", DEFAULT_IP))
        port = int(params.get("port", DEFAULT_PORT))
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"port out of range: {port}")
        self.address = address
        self.port = port

    def configure(self) -> None:
        """Open the socket for the configured destination."""
        self.close()
        try:
            socket.inet_pton(socket.AF_INET, self.address)
        except OSError as exc:
            raise ValueError(f"invalid address or address not supported: {self.address}") from exc
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        logger.info("UDP socket initialized for IP: %s, Port: %d", self.address, self.port)

    def send(self, detections: Iterable[Detection]) -> int:
        """Send the detections; return how many datagrams went out."""
        if self._sock is None:
            return 0
        sent = 0
        for detection in detections:
            try:
                self._sock.sendto(encode_detection(detection), (self.address, self.port))
            except OSError as exc:
                logger.error("Failed to send UDP message: %s", exc)
            else:
                sent += 1
        return sent

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.info("UDP socket closed.")

    def __enter__(self) -> "DetectionSender":
        if self._sock is None:
            self.configure()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()