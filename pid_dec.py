import sys
import typing
from construct import Struct, Int32ul, Int32sl, Array, Hex
from PIL import Image

from pid_errors import PidError, UnsupportedPaletteAbsent, TooLarge, IoFailure
from pid_source import BytesSource, PidDataCursor
from pid_rle import CompressionMethod, PidDecompress

FLAG_TRANSPARENCY = 0x01
FLAG_VIDEO_MEMORY = 0x02
FLAG_SYSTEM_MEMORY = 0x04
FLAG_FLIP_HORIZONTAL = 0x08
FLAG_FLIP_VERTICAL = 0x10
FLAG_RLE = 0x20
FLAG_LIGHTS = 0x40
FLAG_PALETTE = 0x80

PALETTE_SIZE = 256

pid_header_data = Struct(
    "id" / Int32sl,
    "flags" / Hex(Int32ul),
    "width" / Int32ul,
    "height" / Int32ul,
    "user_values" / Array(4, Int32sl),
)

Rgb = typing.Tuple[int, int, int]

class ImageFlags(typing.NamedTuple):
    flags: int

    @property
    def use_transparency(self) -> bool:
        return self.flags & FLAG_TRANSPARENCY != 0

    @property
    def use_video_memory(self) -> bool:
        return self.flags & FLAG_VIDEO_MEMORY != 0

    @property
    def use_system_memory(self) -> bool:
        return self.flags & FLAG_SYSTEM_MEMORY != 0

    @property
    def is_flipped_horizontally(self) -> bool:
        return self.flags & FLAG_FLIP_HORIZONTAL != 0

    @property
    def is_flipped_vertically(self) -> bool:
        return self.flags & FLAG_FLIP_VERTICAL != 0

    @property
    def compression_method(self) -> CompressionMethod:
        return CompressionMethod.RunLengthEncoding if self.flags & FLAG_RLE else CompressionMethod.Default

    @property
    def has_lights(self) -> bool:
        return self.flags & FLAG_LIGHTS != 0

    @property
    def has_palette(self) -> bool:
        return self.flags & FLAG_PALETTE != 0

    def names(self) -> typing.List[str]:
        facets = ["use_transparency", "use_video_memory", "use_system_memory", "is_flipped_horizontally",
                  "is_flipped_vertically", "has_lights", "has_palette"]
        return [f for f in facets if getattr(self, f)]

class PidHeader(typing.NamedTuple):
    id: int
    flags: ImageFlags
    width: int
    height: int
    user_values: typing.Tuple[int, int, int, int]

    @property
    def pixels_count(self) -> int:
        return self.width * self.height

class PidImage(typing.NamedTuple):
    header: PidHeader
    pixels: bytes
    palette: typing.Optional[typing.List[Rgb]]

def read_pid_header(cur: PidDataCursor) -> PidHeader:
    id = cur.next_i32_le()
    flags = ImageFlags(cur.next_u32_le())
    width = cur.next_u32_le()
    height = cur.next_u32_le()
    user_values = tuple(cur.next_i32_le() for _ in range(4))

    return PidHeader(id, flags, width, height, user_values)

def read_pid_palette(cur: PidDataCursor) -> typing.List[Rgb]:
    return [(cur.next_u8(), cur.next_u8(), cur.next_u8()) for _ in range(PALETTE_SIZE)]

def decode_pid_cursor(cur: PidDataCursor, max_pixels: typing.Optional[int]=None) -> PidImage:
    header = read_pid_header(cur)

    if max_pixels is not None and header.pixels_count > max_pixels:
        raise TooLarge(header.pixels_count, max_pixels)

    pixels = PidDecompress(header.flags.compression_method, cur, header.pixels_count)
    palette = read_pid_palette(cur) if header.flags.has_palette else None

    return PidImage(header, pixels, palette)

def decode_pid(data, max_pixels: typing.Optional[int]=None) -> PidImage:
    """Decode a whole PID image.

    ``data`` is either the raw file bytes or a byte source exposing
    ``read_u8``/``read_u32_le``/``read_i32_le`` by offset and ``len()``.
    ``max_pixels`` bounds ``width*height``; ``None`` means unbounded.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = BytesSource(data)

    return decode_pid_cursor(PidDataCursor(data), max_pixels)

def resolve_color(pixel: int, palette: typing.Sequence[Rgb], use_transparency: bool) -> typing.Tuple[int, int, int, int]:
    if use_transparency and pixel == 0:
        return (0, 0, 0, 0)

    r, g, b = palette[pixel]
    return (r, g, b, 255)

class RgbaBuffer():
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.data = bytearray(4 * width * height)

    def set_pixel(self, px: int, r: int, g: int, b: int, a: int):
        i = px * 4
        self.data[i:i+4] = bytes((r, g, b, a))

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), bytes(self.data))

def resolve_pid(img: PidImage, output):
    """Write every pixel of ``img`` as RGBA into ``output`` through its ``set_pixel``."""
    if img.palette is None:
        if len(img.pixels) > 0:
            raise UnsupportedPaletteAbsent()
        return output

    use_transparency = img.header.flags.use_transparency
    for px, pixel in enumerate(img.pixels):
        output.set_pixel(px, *resolve_color(pixel, img.palette, use_transparency))

    return output

def pid_to_image(img: PidImage) -> Image.Image:
    output = RgbaBuffer(img.header.width, img.header.height)
    return resolve_pid(img, output).to_image()

def save_pid_image(image: Image.Image, output_name: str):
    try:
        image.save(output_name)
    except (OSError, ValueError) as e:
        raise IoFailure(f"cannot write {output_name}: {e}") from e

def main(argv: typing.Optional[typing.List[str]]=None) -> int:
    argv = sys.argv if argv is None else argv

    if len(argv) < 3:
        print("Please provide 2 arguments: input file path and output file path.")
        return 0

    try:
        try:
            with open(argv[1], "rb") as f:
                data = f.read()
        except OSError as e:
            raise IoFailure(f"cannot read {argv[1]}: {e}") from e

        # decode fully before the output file is touched
        image = pid_to_image(decode_pid(data))
        save_pid_image(image, argv[2])

    except PidError as e:
        print(f"error: {e}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
