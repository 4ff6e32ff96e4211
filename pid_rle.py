import enum

from pid_source import PidDataCursor

class CompressionMethod(enum.IntEnum):
    Default = 0
    RunLengthEncoding = 1

def PidDefault_Decompress(data: PidDataCursor, pixels_count: int) -> bytes:
    output = bytearray()

    while len(output)<pixels_count:
        a = data.next_u8()

        if a > 192:
            count = a - 192
            b = data.next_u8()
        else:
            count = 1
            b = a

        # a run past the end is cut short, its remaining length is dropped
        count = min(count, pixels_count - len(output))
        output += bytes((b,))*count

    return bytes(output)

def PidRLE_Decompress(data: PidDataCursor, pixels_count: int) -> bytes:
    output = bytearray()

    while len(output)<pixels_count:
        a = data.next_u8()

        if a > 128:
            output += b"\0"*min(a - 128, pixels_count - len(output))

        else:
            # literals beyond pixels_count stay in the stream
            for _ in range(min(a, pixels_count - len(output))):
                output.append(data.next_u8())

    return bytes(output)

def PidDecompress(method: CompressionMethod, data: PidDataCursor, pixels_count: int) -> bytes:
    if method == CompressionMethod.Default:
        return PidDefault_Decompress(data, pixels_count)
    elif method == CompressionMethod.RunLengthEncoding:
        return PidRLE_Decompress(data, pixels_count)
    else:
        raise ValueError(f"unknown compression method: {method}")
