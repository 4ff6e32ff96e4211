"""Host-embedded target: the host owns both the PID bytes and the canvas backing store.

The host supplies the read callbacks and an allocator; the decoder never keeps
a reference to either past a single call.
"""

import typing
from construct import Int32ul

from pid_errors import OutOfBounds
from pid_source import HostSource
from pid_dec import PidImage, decode_pid, resolve_pid

MAX_PID_PIXELS = 65536
CANVAS_HEADER_SIZE = 8

class PidHost(typing.NamedTuple):
    data_len: int
    get_pid_data_u8: typing.Callable[[int], int]
    get_pid_data_u32_le: typing.Callable[[int], int]
    get_pid_data_i32_le: typing.Callable[[int], int]
    alloc_image: typing.Callable[[int, int], typing.Any]

    def source(self) -> HostSource:
        return HostSource(self.data_len, self.get_pid_data_u8, self.get_pid_data_u32_le, self.get_pid_data_i32_le)

class CanvasImage():
    def __init__(self, buffer):
        self.buffer = buffer

    @classmethod
    def from_canvas_with_dimensions(cls, host: PidHost, width: int, height: int) -> "CanvasImage":
        buffer = host.alloc_image(width, height)
        size = CANVAS_HEADER_SIZE + 4 * width * height
        if len(buffer) < size:
            raise OutOfBounds(0, size, len(buffer), f"canvas allocation of {hex(len(buffer))} byte(s) is smaller than the {hex(size)} needed for {width}x{height}")

        buffer[0:4] = Int32ul.build(width)
        buffer[4:8] = Int32ul.build(height)
        return cls(buffer)

    def set_pixel(self, px: int, r: int, g: int, b: int, a: int):
        i = CANVAS_HEADER_SIZE + px * 4
        self.buffer[i:i+4] = bytes((r, g, b, a))

def write_pid_to_canvas_image_data(host: PidHost):
    img: PidImage = decode_pid(host.source(), max_pixels=MAX_PID_PIXELS)
    image = CanvasImage.from_canvas_with_dimensions(host, img.header.width, img.header.height)
    resolve_pid(img, image)

    return image.buffer
