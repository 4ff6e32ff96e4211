import pytest

from pid_dec import pid_header_data

def build_pid(flags: int, width: int, height: int, pixel_data: bytes, palette=None, id: int=1, user_values=(0, 0, 0, 0)) -> bytes:
    data = pid_header_data.build(dict(id=id, flags=flags, width=width, height=height, user_values=list(user_values)))
    data += pixel_data

    if palette is not None:
        data += b"".join(bytes(c) for c in palette)

    return data

def make_palette(**entries):
    palette = [(0, 0, 0)] * 256
    for k, v in entries.items():
        palette[int(k.lstrip("i"))] = v
    return palette

@pytest.fixture
def sample_palette():
    palette = [(i, 255 - i, (i * 7) & 0xff) for i in range(256)]
    palette[5] = (10, 20, 30)
    palette[7] = (40, 50, 60)
    return palette
