import typing
from construct import Int32ul, Int32sl

from pid_errors import OutOfBounds

class BytesSource():
    def __init__(self, data: typing.Union[bytes, bytearray, memoryview]):
        self.data = bytes(data)

    def __len__(self):
        return len(self.data)

    def read_u8(self, offset: int) -> int:
        return self.data[offset]

    def read_u32_le(self, offset: int) -> int:
        return Int32ul.parse(self.data[offset:offset+4])

    def read_i32_le(self, offset: int) -> int:
        return Int32sl.parse(self.data[offset:offset+4])

class HostSource():
    """Bytes owned by a host environment, reached through its read callbacks."""

    def __init__(self, length: int, read_u8: typing.Callable[[int], int], read_u32_le: typing.Callable[[int], int], read_i32_le: typing.Callable[[int], int]):
        self.length = length
        self.read_u8 = read_u8
        self.read_u32_le = read_u32_le
        self.read_i32_le = read_i32_le

    def __len__(self):
        return self.length

class PidDataCursor():
    def __init__(self, source, offset: int=0):
        self.source = source
        self.offset = offset

    def _check(self, width: int):
        if self.offset + width > len(self.source):
            raise OutOfBounds(self.offset, width, len(self.source))

    def next_u8(self) -> int:
        self._check(1)
        output = self.source.read_u8(self.offset)
        self.offset += 1
        return output

    def next_u32_le(self) -> int:
        self._check(4)
        output = self.source.read_u32_le(self.offset)
        self.offset += 4
        return output

    def next_i32_le(self) -> int:
        self._check(4)
        output = self.source.read_i32_le(self.offset)
        self.offset += 4
        return output

    def remaining(self) -> int:
        return max(0, len(self.source) - self.offset)
