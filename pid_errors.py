import typing

class PidError(Exception):
    pass

class OutOfBounds(PidError):
    def __init__(self, offset: int, width: int, length: int, message: typing.Optional[str]=None):
        super().__init__(message or f"read of {width} byte(s) at {hex(offset)} past end of data ({hex(length)})")
        self.offset = offset
        self.width = width
        self.length = length

class UnsupportedPaletteAbsent(PidError):
    def __init__(self):
        super().__init__("indexed pixel data has no palette")

class TooLarge(PidError):
    def __init__(self, pixels_count: int, max_pixels: int):
        super().__init__(f"{pixels_count} pixels exceeds the supported maximum of {max_pixels}")
        self.pixels_count = pixels_count
        self.max_pixels = max_pixels

class IoFailure(PidError):
    pass
