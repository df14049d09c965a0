def copy_into(buffer: memoryview, data: bytes) -> tuple[int, bytes]:
    """Copy as much of data as fits into buffer - returns the count copied and the surplus."""
    count = min(len(buffer), len(data))
    buffer[:count] = data[:count]
    return count, data[count:]
