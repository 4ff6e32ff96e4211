import pytest

from conftest import build_pid
from pid_errors import OutOfBounds, TooLarge, UnsupportedPaletteAbsent
from pid_source import BytesSource
from pid_canvas import MAX_PID_PIXELS, CanvasImage, PidHost, write_pid_to_canvas_image_data

def make_host(data: bytes, allocations: list, extra: int=0) -> PidHost:
    backing = BytesSource(data)

    def alloc_image(width, height):
        buffer = bytearray(8 + 4 * width * height + extra)
        allocations.append((width, height, buffer))
        return buffer

    return PidHost(len(backing), backing.read_u8, backing.read_u32_le, backing.read_i32_le, alloc_image)

def test_canvas_layout(sample_palette):
    allocations = []
    host = make_host(build_pid(0x81, 2, 2, b"\x05\x00\xc2\x07", sample_palette), allocations)

    buffer = write_pid_to_canvas_image_data(host)

    assert len(allocations) == 1
    assert allocations[0][:2] == (2, 2)
    assert buffer is allocations[0][2]
    assert bytes(buffer[:8]) == b"\x02\x00\x00\x00\x02\x00\x00\x00"
    assert bytes(buffer[8:]) == bytes((10, 20, 30, 255, 0, 0, 0, 0, 40, 50, 60, 255, 40, 50, 60, 255))

def test_canvas_empty_image():
    allocations = []
    buffer = write_pid_to_canvas_image_data(make_host(build_pid(0, 0, 7, b""), allocations))
    assert bytes(buffer) == b"\x00\x00\x00\x00\x07\x00\x00\x00"

def test_canvas_capacity():
    allocations = []
    host = make_host(build_pid(0x20, 256, 257, b""), allocations)

    with pytest.raises(TooLarge) as e:
        write_pid_to_canvas_image_data(host)

    assert e.value.max_pixels == MAX_PID_PIXELS
    assert allocations == []

def test_canvas_missing_palette():
    with pytest.raises(UnsupportedPaletteAbsent):
        write_pid_to_canvas_image_data(make_host(build_pid(0, 1, 1, b"\x05"), []))

def test_canvas_short_allocation():
    host = make_host(b"", [], extra=-1)
    with pytest.raises(OutOfBounds) as e:
        CanvasImage.from_canvas_with_dimensions(host, 2, 2)

    assert "canvas allocation of 0x17 byte(s)" in str(e.value)
    assert "0x18 needed for 2x2" in str(e.value)

def test_canvas_short_data():
    with pytest.raises(OutOfBounds):
        write_pid_to_canvas_image_data(make_host(build_pid(0x80, 1, 1, b"\x05")[:-1], []))
