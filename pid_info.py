import sys
import typing
import hexdump

from pid_errors import PidError, IoFailure
from pid_source import BytesSource, PidDataCursor
from pid_dec import pid_header_data, decode_pid_cursor

def print_pid_info(data: bytes) -> int:
    cur = PidDataCursor(BytesSource(data))
    img = decode_pid_cursor(cur)
    header = img.header

    print(pid_header_data.parse(data))
    print("flags:", ", ".join(header.flags.names()) or "none")
    print("pixels:", header.pixels_count)
    print("compression:", header.flags.compression_method.name)
    print("palette:", "yes" if img.palette is not None else "no")
    print(f"consumed: {hex(cur.offset)} of {hex(len(data))}")

    if cur.remaining():
        print(f"{cur.remaining()} unconsumed byte(s) at {hex(cur.offset)}:")
        hexdump.hexdump(data[cur.offset:])

    return cur.remaining()

def main(argv: typing.Optional[typing.List[str]]=None) -> int:
    argv = sys.argv if argv is None else argv

    if len(argv) < 2:
        print("Usage: pidinfo <file.pid>")
        return 0

    try:
        try:
            with open(argv[1], "rb") as f:
                data = f.read()
        except OSError as e:
            raise IoFailure(f"cannot read {argv[1]}: {e}") from e

        print_pid_info(data)

    except PidError as e:
        print(f"error: {e}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
