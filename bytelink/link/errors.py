class LinkError(Exception):
    pass


class ShortWriteError(LinkError):
    def __init__(self, requested: int, written: int):
        super().__init__(f"short write: {written} of {requested} bytes")
        self.requested = requested
        self.written = written


class CopyCancelledError(LinkError):
    def __init__(self):
        super().__init__("copy cancelled")
