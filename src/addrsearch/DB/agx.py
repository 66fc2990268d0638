from __future__ import annotations
import io
import os
import struct
from typing import Dict, Iterable, List, Tuple

from .index import InvertedIndex

_MAGIC = b"AGX1"
_U32 = struct.Struct("<I")  # little-endian uint32


class AGXWriter:
    """
    Write a gram index file.
    Layout:
      0..3   : 'AGX1'
      4..7   : N (uint32) gram width
      8..11  : K (uint32) number of keys
      Then K entries, sorted by key:
         [len:u1][key:len bytes][off:u32][cnt:u32]
      Then postings region:
         concatenated uint32 record IDs (little-endian)
    """
    def __init__(self, n: int) -> None:
        self.n = n

    def save(self, path: str, items: Iterable[Tuple[str, Iterable[int]]]) -> None:
        keys: List[bytes] = []
        offs: List[int] = []
        cnts: List[int] = []
        postings: List[int] = []

        off = 0
        for key, ids in sorted(items, key=lambda kv: kv[0]):
            kb = key.encode("utf-8")
            if len(kb) > 255:
                raise ValueError("gram key too long for AGX (max 255 bytes)")
            id_list = sorted(ids)
            keys.append(kb)
            offs.append(off)
            cnts.append(len(id_list))
            postings.extend(id_list)
            off += len(id_list)

        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        tmp = f"{path}.tmp"
        with open(tmp, "wb") as f:
            f.write(_MAGIC)
            f.write(_U32.pack(self.n))
            f.write(_U32.pack(len(keys)))
            for kb, off, cnt in zip(keys, offs, cnts):
                f.write(bytes([len(kb)]))
                f.write(kb)
                f.write(_U32.pack(off))
                f.write(_U32.pack(cnt))
            buf = io.BytesIO()
            for rid in postings:
                buf.write(_U32.pack(rid))
            f.write(buf.getvalue())
        os.replace(tmp, path)


class _Reader:
    def __init__(self, data: bytes, path: str) -> None:
        self.data = data
        self.pos = 0
        self.path = path

    def take(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.data):
            raise ValueError(f"Truncated AGX file: {self.path}")
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self.take(4))[0]


def read_agx(path: str, *, expect_n: int | None = None) -> InvertedIndex:
    """Load an AGX file fully into an InvertedIndex."""
    with open(path, "rb") as f:
        r = _Reader(f.read(), path)

    if r.take(4) != _MAGIC:
        raise ValueError(f"Invalid AGX file: {path}")
    n = r.u32()
    if expect_n is not None and n != expect_n:
        raise ValueError(f"AGX gram width {n} does not match expected {expect_n}: {path}")
    k = r.u32()

    entries: List[Tuple[str, int, int]] = []
    for _ in range(k):
        ln = r.take(1)[0]
        key = r.take(ln).decode("utf-8")
        entries.append((key, r.u32(), r.u32()))

    base = r.pos
    total = sum(cnt for _, _, cnt in entries)
    if base + total * 4 != len(r.data):
        raise ValueError(f"Corrupt AGX postings region: {path}")

    postings: Dict[str, List[int]] = {}
    mv = memoryview(r.data)
    for key, off, cnt in entries:
        start = base + off * 4
        end = start + cnt * 4
        if end > len(r.data):
            raise ValueError(f"Corrupt AGX postings region: {path}")
        postings[key] = [v for (v,) in _U32.iter_unpack(mv[start:end])]
    return InvertedIndex.from_serializable(postings)
