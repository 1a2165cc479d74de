"""Fixed-layout binary records for player statistics exchanged between workers."""

from __future__ import annotations

import queue
import struct
import sys
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

_STAT_RECORD = struct.Struct("<11if")
_PER_RECORD = struct.Struct("<idd")


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    try:
        return layout.unpack(bytes(data))
    except struct.error as exc:
        raise ValueError(f"malformed {what} record: {exc}") from exc


def _pack(layout: struct.Struct, what: str, *fields) -> bytes:
    try:
        return layout.pack(*fields)
    except struct.error as exc:
        raise ValueError(f"cannot encode {what} record: {exc}") from exc


@dataclass
class StatAggregate:
    """Season totals for one player.

    The wire record carries the eleven counts and the minutes as a 32-bit
    float; the player id is not part of it and reads back as zero.
    """

    fgm_agg: int = 0
    ftm_agg: int = 0
    oreb_agg: int = 0
    dreb_agg: int = 0
    ast_agg: int = 0
    stl_agg: int = 0
    blk_agg: int = 0
    fga_agg: int = 0
    fta_agg: int = 0
    to_agg: int = 0
    pf_agg: int = 0
    mins_agg: float = 0.0
    player_id: int = 0

    def pack(self) -> bytes:
        """Encode the record as little-endian bytes."""
        return _pack(
            _STAT_RECORD, "stat",
            self.fgm_agg, self.ftm_agg, self.oreb_agg, self.dreb_agg,
            self.ast_agg, self.stl_agg, self.blk_agg, self.fga_agg,
            self.fta_agg, self.to_agg, self.pf_agg, self.mins_agg,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "StatAggregate":
        """Decode a record produced by pack."""
        *counts, minutes = _unpack(_STAT_RECORD, data, "stat")
        return cls(*counts, minutes)


@dataclass
class PlayerPer:
    """A player's efficiency rating and its unadjusted value.

    On the wire the fields follow the order id, unadjusted rating, rating.
    """

    player_id: int = 0
    per: float = 0.0
    uper: float = 0.0

    def pack(self) -> bytes:
        """Encode the record as little-endian bytes."""
        return _pack(_PER_RECORD, "rating", self.player_id, self.uper, self.per)

    @classmethod
    def unpack(cls, data: bytes) -> "PlayerPer":
        """Decode a record produced by pack."""
        player_id, uper, per = _unpack(_PER_RECORD, data, "rating")
        return cls(player_id=player_id, per=per, uper=uper)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Send a sample of each record from one thread to another and print it."""
    channel: "queue.Queue[bytes]" = queue.Queue()

    def sender() -> None:
        channel.put(StatAggregate(ast_agg=42, mins_agg=3.14).pack())
        channel.put(PlayerPer(player_id=235, per=882.222).pack())

    thread = threading.Thread(target=sender)
    thread.start()
    data = StatAggregate.unpack(channel.get())
    per = PlayerPer.unpack(channel.get())
    thread.join()

    sys.stdout.write(
        "Received structure:\n"
        f"assist: {data.ast_agg}\n"
        f"mins_agg: {data.mins_agg:f}\n"
        f"Player id: {per.player_id}\n"
        f"Player per {per.per:f}\n"
    )
    return 0